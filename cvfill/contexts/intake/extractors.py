"""
Heuristic field extraction from resume text.

Each extractor is a pure function over either the full text (personal info)
or the segmented blocks (category sections). Extraction is best-effort: a
missing match leaves the field unset or the list empty, never an error.
"""

from typing import Optional

from cvfill.contexts.intake.cv_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
)
from cvfill.contexts.intake.patterns import (
    EDUCATION_SECTION_SPAN,
    EXPERIENCE_SECTION_SPAN,
    MAX_SKILL_LENGTH,
    NAME_SEARCH_LINES,
    SKILLS_SECTION_SPAN,
    WEBSITE_EXCLUSIONS,
    ContactPatterns,
    DatePatterns,
    EducationPatterns,
    ExperiencePatterns,
    SectionKeywords,
    SkillPatterns,
)
from cvfill.contexts.intake.segmenter import find_section

# =============================================================================
# PERSONAL INFO
# =============================================================================


def extract_personal_info(text: str) -> PersonalInfo:
    """
    Extract name, contact and link fields from the full document text.

    Each field is matched independently; within a field the first match wins.

    Args:
        text: Full resume text

    Returns:
        PersonalInfo with matched fields set
    """
    info = PersonalInfo()

    email = ContactPatterns.EMAIL.search(text)
    if email:
        info.email = email.group(0)

    phone = ContactPatterns.PHONE.search(text)
    if phone:
        info.phone = phone.group(0).strip()

    name = _extract_name(text)
    if name:
        info.name = name
        tokens = name.split()
        info.first_name = tokens[0]
        info.last_name = " ".join(tokens[1:])

    linkedin = ContactPatterns.LINKEDIN.search(text)
    if linkedin:
        info.linkedin = "https://" + linkedin.group(0)

    github = ContactPatterns.GITHUB.search(text)
    if github:
        info.github = "https://" + github.group(0)

    info.website = _extract_website(text)

    return info


def _extract_name(text: str) -> Optional[str]:
    """Match the name pattern at the start of the first few non-empty lines."""
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return None

    header = " ".join(lines[:NAME_SEARCH_LINES])
    match = ContactPatterns.NAME.match(header)
    return match.group(1) if match else None


def _extract_website(text: str) -> Optional[str]:
    """First URL-like token not already claimed by email, LinkedIn or GitHub."""
    for match in ContactPatterns.URL.finditer(text):
        candidate = match.group(0)
        if not any(excluded in candidate for excluded in WEBSITE_EXCLUSIONS):
            return candidate
    return None


# =============================================================================
# DATE HELPERS
# =============================================================================


def extract_year(text: str) -> str:
    """First 19xx/20xx year in text, or empty string."""
    match = DatePatterns.YEAR.search(text)
    return match.group(0) if match else ""


def extract_duration(text: str) -> str:
    """First date range (or bare "present") in text, or empty string."""
    match = DatePatterns.DURATION.search(text)
    return match.group(0) if match else ""


# =============================================================================
# EDUCATION
# =============================================================================


def extract_education(blocks: list[str]) -> list[EducationEntry]:
    """
    Parse degree entries from the education section.

    The section is the first block containing an education keyword plus the
    block after it. A line naming a degree that is not the section's last
    line starts an entry; the next line is the institution.

    Args:
        blocks: Output of split_sections()

    Returns:
        Entries in document order (first = most recent)
    """
    section = find_section(blocks, SectionKeywords.EDUCATION, EDUCATION_SECTION_SPAN)
    if not section:
        return []

    lines = [line for line in section.split("\n") if line.strip()]
    entries = []

    for idx, line in enumerate(lines[:-1]):
        lowered = line.lower()
        if not any(degree in lowered for degree in EducationPatterns.DEGREE_KEYWORDS):
            continue

        institution = lines[idx + 1].strip()
        # Graduation year usually trails the degree; some layouts put it after the school
        year = extract_year(line) or extract_year(institution)

        entries.append(EducationEntry(degree=line.strip(), institution=institution, year=year))

    return entries


# =============================================================================
# EXPERIENCE
# =============================================================================


def extract_experience(blocks: list[str]) -> list[ExperienceEntry]:
    """
    Parse job entries from the experience section.

    The section is the first block containing an experience keyword plus
    the four blocks after it. Consecutive line pairs (title, company) that
    are followed by a newline form entries; the duration is the first date
    range found within the pair.

    Args:
        blocks: Output of split_sections()

    Returns:
        Entries in document order (first = most recent)
    """
    section = find_section(
        blocks, SectionKeywords.EXPERIENCE, EXPERIENCE_SECTION_SPAN, joiner="\n\n"
    )
    if not section:
        return []

    entries = []
    for match in ExperiencePatterns.JOB_ENTRY.finditer(section):
        entries.append(
            ExperienceEntry(
                title=match.group(1).strip(),
                company=match.group(2).strip(),
                duration=extract_duration(match.group(0)),
            )
        )

    return entries


# =============================================================================
# SKILLS
# =============================================================================


def extract_skills(blocks: list[str]) -> list[str]:
    """
    Parse skill tokens from the skills section.

    The section is the first block containing a skills keyword plus the block
    after it. Label tokens ("Skills:") are stripped, the rest is split on
    commas, bullets and newlines. Candidates of MAX_SKILL_LENGTH characters
    or more are treated as prose and dropped. Duplicates are kept.

    Args:
        blocks: Output of split_sections()

    Returns:
        Skills in extraction order
    """
    section = find_section(blocks, SectionKeywords.SKILLS, SKILLS_SECTION_SPAN)
    if not section:
        return []

    unlabelled = SkillPatterns.LABEL.sub("", section)

    skills = []
    for candidate in SkillPatterns.SEPARATORS.split(unlabelled):
        candidate = candidate.strip()
        if candidate and len(candidate) < MAX_SKILL_LENGTH:
            skills.append(candidate)

    return skills
