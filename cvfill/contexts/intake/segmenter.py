"""
Section segmentation for resume text.

Every extractor works on the same ordered list of text blocks: runs of
two or more newlines separate blocks, and each block is trimmed.
"""

import re
from typing import Optional

from cvfill.contexts.intake.patterns import BLOCK_SEPARATOR


def split_sections(text: str) -> list[str]:
    """
    Split text into ordered, non-empty, trimmed blocks.

    Args:
        text: Resume text (empty string allowed)

    Returns:
        Blocks in document order; empty list for empty or blank input

    Example:
        >>> split_sections("Jane Doe\\njane@x.io\\n\\n\\nSKILLS\\nGo")
        ['Jane Doe\\njane@x.io', 'SKILLS\\nGo']
    """
    blocks = []
    for raw_block in BLOCK_SEPARATOR.split(text or ""):
        block = raw_block.strip()
        if block:
            blocks.append(block)
    return blocks


def keyword_pattern(keywords: tuple) -> re.Pattern:
    """Build a case-insensitive alternation matching any keyword anywhere."""
    return re.compile("(" + "|".join(re.escape(k) for k in keywords) + ")", re.IGNORECASE)


def find_section(
    blocks: list[str], keywords: tuple, span: int, joiner: str = "\n"
) -> Optional[str]:
    """
    Locate a keyword-triggered section.

    The first block containing any keyword starts the section; it is joined
    with the blocks that follow it, up to `span` blocks in total.

    Args:
        blocks: Output of split_sections()
        keywords: Section keywords (matched case-insensitively as substrings)
        span: Number of blocks in the section, counting the keyword block
        joiner: String placed between joined blocks

    Returns:
        Section text, or None if no block matches
    """
    pattern = keyword_pattern(keywords)
    for i, block in enumerate(blocks):
        if pattern.search(block):
            return joiner.join(blocks[i : i + span])
    return None
