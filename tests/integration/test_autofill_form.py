"""
Integration test for filling a saved application form.

Parses the fixture resume, fills the fixture form through HtmlPageContext,
and checks values, event order, feedback and the skipped fields.
"""

from pathlib import Path

import pytest

from cvfill.contexts.autofill import AutofillExecutor, HtmlPageContext
from cvfill.contexts.autofill.page_context import HIGHLIGHT_CLASS, NOTIFICATION_ID
from cvfill.contexts.intake import CVRecord, parse_cv_file

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def record():
    return parse_cv_file(FIXTURES_PATH / "jane_doe_resume.txt")


@pytest.fixture
def page():
    html = (FIXTURES_PATH / "application_form.html").read_text(encoding="utf-8")
    return HtmlPageContext(html)


def _field(page, name):
    return page.soup.find(attrs={"name": name})


@pytest.mark.integration
def test_fill_application_form(record, page):
    """Test that every matchable visible field receives its record value."""
    result = AutofillExecutor(page).fill(record)

    assert result.success
    assert result.fields_count == 12
    assert [f.type for f in result.fields] == [
        "firstName",
        "lastName",
        "email",
        "phone",
        "company",
        "position",
        "linkedin",
        "github",
        "website",
        "education",
        "skills",
        "custom:CERTIFICATIONS",
    ]

    assert page.read_value(_field(page, "first_name")) == "Jane"
    assert page.read_value(_field(page, "last_name")) == "Doe"
    assert page.read_value(_field(page, "applicant_email")) == "jane.doe@example.com"
    assert page.read_value(_field(page, "contact_number")) == "+1 415-555-0134"
    assert page.read_value(_field(page, "job_title")) == "Senior Software Engineer"
    assert page.read_value(_field(page, "linkedin_url")) == "https://linkedin.com/in/janedoe"
    assert page.read_value(_field(page, "degree")) == "Master of Science in Computer Science"
    assert page.read_value(_field(page, "skills")) == "Python, Go, SQL, Docker, Kubernetes"
    assert page.read_value(_field(page, "certifications")) == (
        "AWS Certified Solutions Architect\nCertified Kubernetes Administrator"
    )


@pytest.mark.integration
def test_fill_skips_unfillable_and_unmatched(record, page):
    """Test hidden, disabled, read-only, non-text and valueless fields are untouched."""
    AutofillExecutor(page).fill(record)

    assert _field(page, "csrf_token")["value"] == "abc123"
    for name in ("referral_name", "full_name_backup", "full_name", "email_confirm", "city"):
        assert page.read_value(_field(page, name)) == "", name
    assert not _field(page, "subscribe_email").has_attr("value")


@pytest.mark.integration
def test_fill_dispatches_events_in_order(record, page):
    """Test input, change, blur follow every write and nothing else gets events."""
    result = AutofillExecutor(page).fill(record)

    assert len(page.dispatched_events) == 3 * result.fields_count
    for i in range(0, len(page.dispatched_events), 3):
        triple = page.dispatched_events[i : i + 3]
        assert [event for _, event in triple] == ["input", "change", "blur"]
        assert triple[0][0] is triple[1][0] is triple[2][0]


@pytest.mark.integration
def test_fill_feedback_lifecycle(record, page):
    """Test highlight and notification appear, then expire on the page clock."""
    AutofillExecutor(page, highlight_ms=2000, notification_ms=3000).fill(record)

    assert len(page.soup.find_all(class_=HIGHLIGHT_CLASS)) == 12
    assert page.notification().get_text() == "✓ Filled 12 fields from your CV"

    page.advance(2000)
    assert page.soup.find_all(class_=HIGHLIGHT_CLASS) == []
    assert page.notification() is not None

    page.advance(1300)
    assert page.soup.find(id=NOTIFICATION_ID) is None


@pytest.mark.integration
def test_fill_is_repeatable(record, page):
    """Test that a second pass writes the same values again."""
    executor = AutofillExecutor(page)
    first = executor.fill(record)
    page.flush_timers()
    second = executor.fill(record)

    assert second.to_dict() == first.to_dict()
    assert len(page.soup.find_all(id=NOTIFICATION_ID)) == 1


@pytest.mark.integration
def test_fill_empty_record_still_notifies(page):
    """Test that nothing is written but the zero-count notification shows."""
    result = AutofillExecutor(page).fill(CVRecord())

    assert result.success
    assert result.fields_count == 0
    assert page.dispatched_events == []
    assert page.notification().get_text() == "✓ Filled 0 fields from your CV"
