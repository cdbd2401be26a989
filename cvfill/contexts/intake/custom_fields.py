"""
Fallback heading/value harvesting for sections no category extractor claims.

A block whose first line looks like a heading (short, alphabetic, Title Case
or ALL CAPS) and does not mention a category keyword becomes a custom field:
the heading is the key, the remaining lines are the value. Keys keep their
original casing; the matching context normalizes them when comparing against
form fields.
"""

from typing import Optional

from cvfill.contexts.intake.patterns import (
    CLAIMED_SECTION_KEYWORDS,
    MAX_CUSTOM_VALUE_LENGTH,
    MAX_HEADING_LENGTH,
    MIN_HEADING_LENGTH,
    HeadingPatterns,
)


def is_custom_heading(line: str) -> bool:
    """
    Check whether a line qualifies as a custom section heading.

    Args:
        line: Candidate heading (already stripped)

    Returns:
        True if the line is 3-39 letters/spaces, mentions no claimed section
        keyword, and is Title Case or ALL CAPS
    """
    if not (MIN_HEADING_LENGTH < len(line) < MAX_HEADING_LENGTH):
        return False
    if not HeadingPatterns.ALPHABETIC.match(line):
        return False

    lowered = line.lower()
    if any(keyword in lowered for keyword in CLAIMED_SECTION_KEYWORDS):
        return False

    return bool(HeadingPatterns.TITLE_CASE.match(line) or HeadingPatterns.ALL_CAPS.match(line))


def extract_custom_field(block: str) -> Optional[tuple[str, str]]:
    """
    Harvest one (heading, value) pair from a block.

    Returns:
        (heading, value) or None if the block has no qualifying heading,
        no body, or a body of MAX_CUSTOM_VALUE_LENGTH characters or more
    """
    lines = block.strip().split("\n")
    heading = lines[0].strip()

    if len(lines) < 2 or not is_custom_heading(heading):
        return None

    value = "\n".join(lines[1:]).strip()
    if not (0 < len(value) < MAX_CUSTOM_VALUE_LENGTH):
        return None

    return heading, value


def extract_custom_fields(blocks: list[str]) -> dict[str, str]:
    """
    Harvest custom fields from every block.

    Args:
        blocks: Output of split_sections()

    Returns:
        Dict of original-cased heading → value, in document order. A
        repeated heading keeps its first position and its last value.
    """
    custom_fields = {}
    for block in blocks:
        pair = extract_custom_field(block)
        if pair:
            heading, value = pair
            custom_fields[heading] = value
    return custom_fields
