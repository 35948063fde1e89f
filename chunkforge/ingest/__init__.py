"""
Ingestion layer: turn raw extracted text into clean, classified blocks.

Modules:
    refinement   IRefiner interface and TextRefinementPipeline
    refiners/    Preprocessing, OCR cleanup and block classification
    csv_text     Render CSV uploads as chunkable text
    contact_info Pull name, email, phone and skills out of resume text
"""
