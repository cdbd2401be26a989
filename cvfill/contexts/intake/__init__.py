"""
Intake Context

Responsibilities:
- Extracts text from resume documents (PDF, plain text)
- Segments text into blocks and runs the heuristic category extractors
- Produces the canonical CVRecord

Owns: Resume parsing logic and the CVRecord data structure
Never: Touches pages, profiles or form fields
"""

from cvfill.contexts.intake.cv_data_structure import (
    CVRecord,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
)
from cvfill.contexts.intake.cv_parser import parse_cv_file, parse_cv_text
from cvfill.contexts.intake.exceptions import CVParseError

__all__ = [
    "CVParseError",
    "CVRecord",
    "EducationEntry",
    "ExperienceEntry",
    "PersonalInfo",
    "parse_cv_file",
    "parse_cv_text",
]
