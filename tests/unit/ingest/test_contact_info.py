"""Tests for resume contact information extraction."""

from chunkforge.ingest.contact_info import ContactInfo, extract_contact_info


class TestExtractContactInfo:
    """Tests for extract_contact_info."""

    def test_full_resume(self, resume_text):
        info = extract_contact_info(resume_text)

        assert info.name == "John Smith"
        assert info.email == "john.smith@example.com"
        assert info.phone == "555-123-4567"
        assert info.skills == ["Python", "SQL", "Kubernetes"]

    def test_name_only_from_first_line(self):
        info = extract_contact_info("resume\nJane Doe\njane@example.com")

        assert info.name is None
        assert info.email == "jane@example.com"

    def test_leading_blank_lines_skipped(self):
        assert extract_contact_info("\n\nJane Doe\n").name == "Jane Doe"

    def test_dotted_phone(self):
        assert extract_contact_info("call 555.123.4567").phone == "555.123.4567"

    def test_skills_across_lines_until_blank_line(self):
        text = "SKILLS\nPython\nGo, Rust\n\nEducation\nState University"

        assert extract_contact_info(text).skills == ["Python", "Go", "Rust"]

    def test_overlong_skills_dropped(self):
        long_item = "x" * 60
        info = extract_contact_info(f"Skills: Python, {long_item}, SQL")

        assert info.skills == ["Python", "SQL"]

    def test_empty_text(self):
        assert extract_contact_info("") == ContactInfo()

    def test_to_dict(self):
        info = ContactInfo(name="Jane Doe", email=None, phone=None, skills=["Go"])

        assert info.to_dict() == {
            "name": "Jane Doe",
            "email": None,
            "phone": None,
            "skills": ["Go"],
        }
