"""Hints attached to configuration validation errors.

The CLI prints a hint under each error. A hint keyed on the failing
field wins over one keyed on the Pydantic error type.
"""

from typing import Final


DEFAULT_HINT: Final = "See config/sentinel.yaml for an annotated example."

ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "Required key. Add it to sentinel.yaml.",
    "extra_forbidden": "Unknown key. Check its spelling and indentation level.",
    "int_type": "Expected a whole number.",
    "int_from_float": "Expected a whole number, not a fraction.",
    "float_type": "Expected a number.",
    "string_type": "Expected a text value. Quote it if YAML reads it as something else.",
    "list_type": "Expected a YAML list (one '- item' per line).",
    "greater_than_equal": "Value is below the allowed minimum.",
    "less_than_equal": "Value is above the allowed maximum.",
    "string_too_short": "Value must not be empty.",
    "string_pattern_mismatch": "Versions look like '1.0'.",
    "value_error": "Rejected by a cross-field check; see the message above.",
    "file_not_found": "No file at that path. Pass --config or set SENTINEL_CONFIG.",
    "yaml_parse_error": "YAML did not parse. Look for tabs or a missing colon.",
    "file_unreadable": "Path exists but is not a readable file. Check its permissions.",
    "unicode_decode_error": "Save the file as UTF-8.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "tag": "Rule tags are upper-case labels such as 'HARDCORE_ENGINEERING'.",
    "pattern": "Must be a valid regular expression (matched case-insensitively).",
    "languages": "Repository languages, compared case-insensitively.",
    "min_forks": "Must be a non-negative integer.",
    "force_keep_quality": "Must be greater than min_heuristic_quality.",
    "min_heuristic_quality": "Quality floor for keeper-rule inclusion (citations or stars).",
    "authoritative_impact": "Impact metric at or above which items are always kept.",
    "min_hint_level": "Category hints below this depth are not counted as topics.",
    "max_items": "Must be between 0 and 1000.",
    "max_top_tags": "Must be between 0 and 100.",
    "trusted_sources": "Must be a list of non-empty venue or label names.",
    "catch_all_tag": "Tag given to included items no keeper rule matched.",
    "uncategorized_tag": "Histogram bucket for items no rule matched; null disables it.",
}


def field_key(location: str) -> str:
    """Last named segment of a dotted error location.

    List indices are skipped, so 'strategies.keepers.0' maps to 'keepers'.
    """
    for segment in reversed(location.split(".")):
        if segment and not segment.isdigit():
            return segment
    return location


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-facing hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing').
        field_name: Optional dotted field path for field-specific hints.

    Returns:
        Hint text.
    """
    if field_name:
        hint = FIELD_HINTS.get(field_key(field_name))
        if hint is not None:
            return hint
    return ERROR_HINTS.get(error_type, DEFAULT_HINT)


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Render one validation error as CLI text.

    Args:
        location: Dotted error location.
        message: Pydantic's message.
        error_type: Pydantic's error type.
        include_hint: Append an indented hint line.

    Returns:
        Formatted error string.
    """
    line = f"{location}: {message}"
    if not include_hint:
        return line
    return f"{line}\n    Hint: {get_error_hint(error_type, location)}"
