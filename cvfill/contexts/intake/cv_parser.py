"""
Resume parsing orchestration for the Intake context.

Runs the segmenter once and hands the blocks to each category extractor.
Extractors are independent: one finding nothing never affects another.
"""

from pathlib import Path

from cvfill.contexts.intake.custom_fields import extract_custom_fields
from cvfill.contexts.intake.cv_data_structure import CVRecord
from cvfill.contexts.intake.extractors import (
    extract_education,
    extract_experience,
    extract_personal_info,
    extract_skills,
)
from cvfill.contexts.intake.logger import _log_info, log_extraction_summary
from cvfill.contexts.intake.segmenter import split_sections
from cvfill.contexts.intake.text_extractor import extract_text


def parse_cv_text(text: str, source: str = "<text>") -> CVRecord:
    """
    Extract a CVRecord from resume text.

    Total over its input: empty or unrecognizable text yields an empty
    record, never an exception.

    Args:
        text: Resume text
        source: Label used in log messages

    Returns:
        CVRecord (possibly empty)
    """
    text = text or ""
    blocks = split_sections(text)

    record = CVRecord(
        personal_info=extract_personal_info(text),
        education=extract_education(blocks),
        experience=extract_experience(blocks),
        skills=extract_skills(blocks),
        custom_fields=extract_custom_fields(blocks),
    )

    log_extraction_summary(source, record)
    return record


def parse_cv_file(path: Path) -> CVRecord:
    """
    Extract text from a resume document and parse it.

    Args:
        path: Path to a .pdf or .txt resume

    Returns:
        CVRecord

    Raises:
        CVParseError: If text cannot be extracted from the document
    """
    path = Path(path)
    _log_info(f"Parsing {path}")
    text = extract_text(path)
    return parse_cv_text(text, source=path.name)
