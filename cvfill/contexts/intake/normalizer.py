"""
Resume text normalizer for the Intake context.

Cleans text handed over by the document extractor before segmentation.
PDF text layers carry compatibility characters (ligatures, non-breaking
spaces, zero-width joiners) and Windows line endings that would otherwise
break line-anchored patterns and blank-line segmentation.

Dashes and bullets are left alone: the duration pattern accepts en dashes
and the skills splitter relies on bullet characters.
"""

import unicodedata

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
}


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def preprocess_resume_text(text: str) -> str:
    """
    Preprocess extracted resume text before segmentation.

    This is the main entry point for text normalization.

    Args:
        text: Raw text from the document extractor

    Returns:
        Normalized text ready for section segmentation
    """
    text = normalize_line_endings(text)
    return normalize_unicode(text)
