"""
Built-in Text Refiners for ChunkForge.

This package provides the cleanup and classification steps that run
before chunking:

- TextCleanerRefiner: Whitespace, PDF artifacts, page numbers, links,
  repeated boilerplate and list markers
- OCRCleanupRefiner: Confusable-character correction (lossy, opt-in)
- element_classifier: Heading/table/list detection and block segmentation

Usage
-----
    from chunkforge.ingest.refiners import (
        OCRCleanupRefiner,
        TextCleanerRefiner,
        segment_into_blocks,
    )
    from chunkforge.ingest.refinement import TextRefinementPipeline

    pipeline = TextRefinementPipeline([TextCleanerRefiner(), OCRCleanupRefiner()])
    result = pipeline.refine(extracted_text)
    blocks = segment_into_blocks(result.refined)
"""

from chunkforge.ingest.refiners.element_classifier import (
    CLASSIFIERS,
    BlockKind,
    ContentBlock,
    DetectionResult,
    analyze_content_block,
    detect_header_footer,
    detect_heading,
    detect_list,
    detect_table,
    segment_into_blocks,
)
from chunkforge.ingest.refiners.ocr_cleanup import OCRCleanupRefiner, fix_ocr_errors
from chunkforge.ingest.refiners.text_cleaners import (
    TextCleanerRefiner,
    normalize_lists,
    normalize_whitespace,
    preprocess_text,
    quick_clean,
    remove_page_numbers,
    remove_pdf_artifacts,
    remove_repeated_sections,
    remove_standalone_links,
)

__all__ = [
    # Refiners
    "TextCleanerRefiner",
    "OCRCleanupRefiner",
    # Preprocessing
    "preprocess_text",
    "quick_clean",
    "normalize_whitespace",
    "remove_pdf_artifacts",
    "remove_page_numbers",
    "remove_standalone_links",
    "remove_repeated_sections",
    "normalize_lists",
    "fix_ocr_errors",
    # Classification
    "BlockKind",
    "ContentBlock",
    "DetectionResult",
    "CLASSIFIERS",
    "detect_table",
    "detect_list",
    "detect_heading",
    "detect_header_footer",
    "analyze_content_block",
    "segment_into_blocks",
]
