"""
Document-to-text extraction for resume files.

PDF text layers are read with pdfplumber, one page after another. Plain
text files are read as UTF-8. Layout analysis, OCR and rich-text formats
are not attempted: a document with no extractable text is an error.
"""

from pathlib import Path

import pdfplumber

from cvfill.contexts.intake.exceptions import CVParseError
from cvfill.contexts.intake.logger import _log_debug
from cvfill.contexts.intake.normalizer import preprocess_resume_text

SUPPORTED_SUFFIXES = (".pdf", ".txt")


def extract_pdf_text(pdf_path: Path) -> str:
    """Concatenate the text layer of every page, pages separated by a newline."""
    with pdfplumber.open(pdf_path) as pdf:
        page_texts = [page.extract_text() or "" for page in pdf.pages]
        _log_debug(f"Read {len(page_texts)} page(s) from {pdf_path.name}")
    return "\n".join(page_texts)


def extract_text(path: Path) -> str:
    """
    Extract normalized text from a resume document.

    Args:
        path: Path to a .pdf or .txt file

    Returns:
        Normalized text, ready for parse_cv_text()

    Raises:
        CVParseError: If the file is missing, unsupported, unreadable, or
            yields no text
    """
    path = Path(path)

    if not path.exists():
        raise CVParseError("Resume file not found", source_path=path)

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise CVParseError(
            f"Unsupported file type '{suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})",
            source_path=path,
        )

    try:
        if suffix == ".pdf":
            raw_text = extract_pdf_text(path)
        else:
            raw_text = path.read_text(encoding="utf-8")
    except Exception as e:
        raise CVParseError("Failed to read resume", source_path=path, original_error=e) from e

    text = preprocess_resume_text(raw_text)
    if not text.strip():
        raise CVParseError("No text could be extracted from resume", source_path=path)

    return text
