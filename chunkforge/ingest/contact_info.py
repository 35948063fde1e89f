"""
Contact information extraction for resume text.

Pulls the candidate's name, first email address, first phone number and
the skills list out of raw (uncleaned) resume text. Runs alongside
chunking on the same input; its output is stored next to the chunks.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

_EMAIL = re.compile(r"[A-Za-z0-9_.-]+@[A-Za-z0-9_.-]+\.[A-Za-z0-9_]+")
_PHONE = re.compile(r"(?<![A-Za-z0-9_])[0-9]{3}[-.]?[0-9]{3}[-.]?[0-9]{4}(?![A-Za-z0-9_])")
_NAME = re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+")
# Label, then everything up to the next blank line or end of text
_SKILLS = re.compile(r"Skills?:?\s*\n?(.*?)(?=\n\n|\Z)", re.IGNORECASE | re.DOTALL)
_SKILL_SEPARATOR = re.compile(r"[,\n]+")
_MAX_SKILL_LENGTH = 50


@dataclass
class ContactInfo:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def extract_contact_info(text: str) -> ContactInfo:
    """Extract contact details from resume text.

    The name is only looked for on the first non-empty line, as a
    "Firstname Lastname" pair of capitalized words.

    Examples:
        >>> info = extract_contact_info("Jane Doe\\njane@example.com\\n555-123-4567")
        >>> info.name, info.email, info.phone
        ('Jane Doe', 'jane@example.com', '555-123-4567')
    """
    email = _EMAIL.search(text)
    phone = _PHONE.search(text)

    name = None
    first_line = next((line for line in text.split("\n") if line.strip()), None)
    if first_line is not None:
        name_match = _NAME.match(first_line)
        name = name_match.group(0) if name_match else None

    skills: List[str] = []
    skills_match = _SKILLS.search(text)
    if skills_match:
        skills = [
            item
            for item in (part.strip() for part in _SKILL_SEPARATOR.split(skills_match.group(1)))
            if 0 < len(item) < _MAX_SKILL_LENGTH
        ]

    return ContactInfo(
        name=name,
        email=email.group(0) if email else None,
        phone=phone.group(0) if phone else None,
        skills=skills,
    )
