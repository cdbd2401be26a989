"""
Reusable patterns and keyword tables for resume text extraction.

Pattern classes follow the frozen-dataclass convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Extractor functions in extractors.py use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for personal and contact information.

    These literal patterns must stay as they are: stored records and
    downstream form matching depend on the exact strings they capture.
    """

    EMAIL: re.Pattern = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

    # Optional country code, optional parentheses, -/./space separators, 3-3-4 grouping
    PHONE: re.Pattern = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

    # Two or three capitalized words at the very start of the header lines
    NAME: re.Pattern = re.compile(r"^([A-Z][a-z]+\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")

    LINKEDIN: re.Pattern = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)

    GITHUB: re.Pattern = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)

    # Anything URL-like; candidates for the personal website
    URL: re.Pattern = re.compile(r"(https?://)?[\w-]+\.[\w.-]+", re.IGNORECASE)


# Substrings that disqualify a URL candidate from being the personal website
WEBSITE_EXCLUSIONS = ("linkedin", "github", "@")

# Number of non-empty header lines searched for the candidate name
NAME_SEARCH_LINES = 5


# =============================================================================
# DATE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DatePatterns:
    """Regex patterns for years and employment date ranges."""

    YEAR: re.Pattern = re.compile(r"\b(19|20)\d{2}\b")

    # "Jan 2020 - Mar 2023", "2019 – 2021", or a bare "present"
    DURATION: re.Pattern = re.compile(
        r"(\w+\s+)?(19|20)\d{2}\s*[-–]\s*(\w+\s+)?(19|20)\d{2}|present", re.IGNORECASE
    )


# =============================================================================
# SECTION KEYWORDS
# =============================================================================


@dataclass(frozen=True)
class SectionKeywords:
    """
    Keywords that locate a category section among the text blocks.

    A block belongs to a category when it contains any keyword
    (case-insensitive, anywhere in the block).
    """

    EDUCATION: tuple = ("education", "academic", "university", "college", "degree")

    EXPERIENCE: tuple = ("experience", "employment", "work history", "professional")

    SKILLS: tuple = (
        "skills",
        "technical skills",
        "expertise",
        "proficiencies",
        "technologies",
    )


# Blocks taken per section, counting the keyword block itself
EDUCATION_SECTION_SPAN = 2
EXPERIENCE_SECTION_SPAN = 5
SKILLS_SECTION_SPAN = 2

# All keywords claimed by the category extractors; custom headings may not contain any
CLAIMED_SECTION_KEYWORDS = (
    SectionKeywords.EDUCATION + SectionKeywords.EXPERIENCE + SectionKeywords.SKILLS
)


# =============================================================================
# ENTRY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class EducationPatterns:
    """Tokens that mark a line as naming a degree."""

    DEGREE_KEYWORDS: tuple = (
        "bachelor",
        "master",
        "phd",
        "doctorate",
        "associate",
        "b.s.",
        "m.s.",
        "b.a.",
        "m.a.",
    )


@dataclass(frozen=True)
class ExperiencePatterns:
    """
    Two-line job entry pattern: a title line, then a company line.

    The company suffix group is optional, so any line pair followed by a
    newline matches. Matches do not overlap.
    """

    COMPANY_SUFFIXES: tuple = ("inc", "llc", "ltd", "corp", "company", "organization")

    JOB_ENTRY: re.Pattern = re.compile(
        r"([^\n]+)\n([^\n]+(?:inc|llc|ltd|corp|company|organization)?[^\n]*)\n",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class SkillPatterns:
    """Patterns for cleaning and splitting the skills section."""

    # "Skills", "skill:", "SKILLS:" label tokens
    LABEL: re.Pattern = re.compile(r"skills?:?", re.IGNORECASE)

    SEPARATORS: re.Pattern = re.compile(r"[,•\n]")


# Candidates this long are descriptions, not skill tokens
MAX_SKILL_LENGTH = 50


# =============================================================================
# CUSTOM FIELD PATTERNS
# =============================================================================


@dataclass(frozen=True)
class HeadingPatterns:
    """Patterns that decide whether a block's first line is a section heading."""

    ALPHABETIC: re.Pattern = re.compile(r"^[a-zA-Z\s]+$")

    TITLE_CASE: re.Pattern = re.compile(r"^[A-Z][a-zA-Z]*(\s+[A-Z][a-zA-Z]*)*$")

    ALL_CAPS: re.Pattern = re.compile(r"^[A-Z\s]+$")


# Heading length bounds (exclusive)
MIN_HEADING_LENGTH = 2
MAX_HEADING_LENGTH = 40

# Custom field value length bound (exclusive)
MAX_CUSTOM_VALUE_LENGTH = 500


# =============================================================================
# SEGMENTATION
# =============================================================================

# Two or more consecutive newlines separate blocks
BLOCK_SEPARATOR = re.compile(r"\n\n+")
