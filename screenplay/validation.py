"""Reserved extension points for format validation and repair.

No checks are implemented yet.  ``validate_format`` reports
``implemented=False`` so callers can tell "no issues found" apart from
"nothing was checked".
"""

import logging

from core.models import FormatIssue, ValidationResult

logger = logging.getLogger(__name__)


def validate_format(text: str) -> ValidationResult:
    """Validate screenplay formatting.

    Always returns ``valid=True`` with no issues.
    """
    logger.debug("Format validation requested for %d chars (no checks implemented)", len(text))
    return ValidationResult(valid=True, issues=[], implemented=False)


def fix_format_issues(text: str, issues: list[FormatIssue]) -> str:
    """Fix the given formatting *issues*.

    Returns *text* unchanged.
    """
    if issues:
        logger.debug("Ignoring %d format issues: automatic fixing is not implemented", len(issues))
    return text
