"""
Field-mapping keyword tables for form field classification.

The mapping table is an ordered tuple of (FieldType, keywords) pairs. Order
is precedence: the first entry with any matching keyword wins, so personal
info comes before address, links, education, experience and skills.

The default table can be replaced from a YAML file (CVFILL_FIELD_MAPPINGS):

    field_mappings:
      firstName: [first name, firstname, fname]
      email: [email, e-mail]
      ...

Entries keep the file's order. Types not listed are not detected.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from cvfill.contexts.matching.field_types import FieldType

load_dotenv()
_field_mappings_env = os.getenv("CVFILL_FIELD_MAPPINGS")
FIELD_MAPPINGS_PATH = Path(_field_mappings_env) if _field_mappings_env else None

FieldMappings = tuple[tuple[FieldType, tuple[str, ...]], ...]

DEFAULT_FIELD_MAPPINGS: FieldMappings = (
    # Personal info
    (
        FieldType.FIRST_NAME,
        (
            "first name",
            "firstname",
            "first_name",
            "first-name",
            "fname",
            "given name",
            "given-name",
            "givenname",
        ),
    ),
    (
        FieldType.LAST_NAME,
        (
            "last name",
            "lastname",
            "last_name",
            "last-name",
            "lname",
            "surname",
            "family name",
            "family-name",
            "familyname",
        ),
    ),
    (
        FieldType.FULL_NAME,
        ("full name", "fullname", "full_name", "full-name", "your name", "your-name", "name"),
    ),
    (FieldType.EMAIL, ("email", "e-mail", "emailaddress", "email-address", "mail")),
    (
        FieldType.PHONE,
        ("phone", "telephone", "mobile", "phonenumber", "phone-number", "tel", "contact"),
    ),
    # Address
    (FieldType.ADDRESS, ("address", "street", "location", "residence", "address line")),
    (FieldType.CITY, ("city", "town")),
    (FieldType.STATE, ("state", "province", "region")),
    (FieldType.ZIP, ("zip", "postal", "postcode")),
    (FieldType.COUNTRY, ("country", "nation")),
    # Links
    (FieldType.LINKEDIN, ("linkedin", "linkedin-url", "linkedin_url", "linkedinprofile")),
    (FieldType.GITHUB, ("github", "github-url", "github_url", "githubprofile")),
    (FieldType.WEBSITE, ("website", "portfolio", "url", "personal-website", "homepage")),
    # Education
    (FieldType.EDUCATION, ("education", "degree", "university", "school", "college")),
    # Experience
    (FieldType.COMPANY, ("company", "employer", "organization", "current-company")),
    (FieldType.POSITION, ("position", "title", "job-title", "role", "job-role")),
    # Skills
    (FieldType.SKILLS, ("skills", "technical-skills", "expertise", "competencies")),
)

# Short keywords that only count as whole words ("tel" must not hit "hotel")
WHOLE_WORD_KEYWORDS = frozenset({"tel", "url", "title", "role", "mail"})

# The bare "name" keyword is ignored when any of these qualify the field
NAME_KEYWORD = "name"
NAME_EXCLUSIONS = ("first", "last", "company")


def load_field_mappings(config_path: Optional[Path] = None) -> FieldMappings:
    """
    Load a field-mapping table from YAML.

    Args:
        config_path: YAML file with a top-level "field_mappings" mapping of
            field type → keyword list (defaults to CVFILL_FIELD_MAPPINGS;
            the built-in table is returned when neither is set)

    Returns:
        Ordered mapping table

    Raises:
        ValueError: If the file has no field_mappings section, names an
            unknown field type, or gives a type no keywords
    """
    if config_path is None:
        config_path = FIELD_MAPPINGS_PATH
    if config_path is None:
        return DEFAULT_FIELD_MAPPINGS

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    raw_mappings = (config or {}).get("field_mappings")
    if not isinstance(raw_mappings, dict) or not raw_mappings:
        raise ValueError(f"No field_mappings section in {config_path}")

    valid_types = ", ".join(t.value for t in FieldType)
    mappings = []
    for type_name, keywords in raw_mappings.items():
        try:
            field_type = FieldType(type_name)
        except ValueError:
            raise ValueError(
                f"Unknown field type '{type_name}' in {config_path} (valid: {valid_types})"
            ) from None

        if isinstance(keywords, str):
            keywords = [keywords]
        keywords = tuple(str(k).lower() for k in keywords or [] if str(k).strip())
        if not keywords:
            raise ValueError(f"Field type '{type_name}' has no keywords in {config_path}")

        mappings.append((field_type, keywords))

    return tuple(mappings)
