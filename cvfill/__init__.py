"""
CVFILL - Curriculum Vitae Field Inference and Live Loading

Extracts a structured record from resume text and uses it to populate
form fields on arbitrary web pages.

Architecture:
- Intake Context: Resume text extraction and structured record parsing
- Matching Context: Form field classification and value resolution
- Autofill Context: Page scanning, field writing, and visual feedback
- Profiles Context: Named record persistence and active profile tracking
"""

__version__ = "0.1.0"
