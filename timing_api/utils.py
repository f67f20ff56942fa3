"""
Utility functions for the Timing API client.

Provides helpers for building request payloads (casing, compaction) and for
validating them before they are sent.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel

_UPPERCASE = re.compile(r'(?<!^)([A-Z])')
_PROJECT_REFERENCE = re.compile(r'^/projects/\d+$')
_CUSTOM_FIELD_KEY = re.compile(r'^[a-zA-Z0-9\-_]+$')


def compact_dict(**kwargs: Any) -> dict[str, Any]:
    """
    Build a dictionary excluding None values.

    Query parameters use this: None means "omit the parameter" rather than
    sending an empty value.

    Example:
        params = compact_dict(**{"title": "Work", "hide_archived": None})
        # {"title": "Work"}

    Args:
        **kwargs: Key-value pairs to include (None values are excluded)

    Returns:
        Dict with only non-None values
    """
    return {k: v for k, v in kwargs.items() if v is not None}


# =============================================================================
# Casing
# =============================================================================

def snake_case_key(key: str) -> str:
    """
    Convert a camelCase key to snake_case.

    An underscore goes before every uppercase letter except a leading one,
    then the whole key is lowercased. Keys without uppercase letters come
    back unchanged, so already snake_case keys are a no-op. Only ASCII A-Z
    gets an underscore, but lowercasing applies to every letter, so
    'fooÉtat' becomes 'fooétat'.

        >>> snake_case_key('replaceExisting')
        'replace_existing'
        >>> snake_case_key('start_date')
        'start_date'
    """
    return _UPPERCASE.sub(r'_\1', key).lower()


def to_snake_case(value: Any) -> Any:
    """
    Recursively convert mapping keys in `value` to snake_case.

    Lists and tuples come back as new lists, mappings as new dicts; every
    other value (strings included) is returned as-is. String values are
    never touched, only keys. The input is not mutated.

    Example:
        to_snake_case({'startDateMin': '2024-01-01', 'projects': ['/projects/1']})
        # {'start_date_min': '2024-01-01', 'projects': ['/projects/1']}
    """
    if isinstance(value, (list, tuple)):
        return [to_snake_case(item) for item in value]
    if isinstance(value, Mapping):
        return {snake_case_key(str(k)): to_snake_case(v) for k, v in value.items()}
    return value


def to_payload(options: BaseModel | Mapping[str, Any] | None) -> Any:
    """
    Turn caller options into a snake_case wire payload.

    None stays None so "no parameters" is distinguishable from an empty
    mapping. Models are dumped by alias without unset (None) fields.
    """
    if options is None:
        return None
    if isinstance(options, BaseModel):
        options = options.model_dump(by_alias=True, exclude_none=True)
    return to_snake_case(options)


# =============================================================================
# Validation
# =============================================================================

def validate_required_fields(obj: Mapping[str, Any], fields: Iterable[str]) -> None:
    """
    Check that every field in `fields` is present and non-empty.

    Raises:
        ValueError: If any field is missing, None or ""
    """
    missing = [f for f in fields if obj.get(f) is None or obj.get(f) == '']
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")


def is_valid_iso_date_string(value: Any) -> bool:
    """Check that `value` is an ISO 8601 date-time string (a date alone is not enough)."""
    if not isinstance(value, str) or 'T' not in value:
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_iso_date_string(value: Any, field_name: str) -> None:
    """Raise ValueError unless `value` is an ISO 8601 date-time string."""
    if not is_valid_iso_date_string(value):
        raise ValueError(
            f"{field_name} must be a valid ISO 8601 format (e.g., '2023-01-01T00:00:00+00:00')"
        )


def is_valid_project_reference(value: Any) -> bool:
    """Check that `value` looks like '/projects/{id}'."""
    return isinstance(value, str) and bool(_PROJECT_REFERENCE.match(value))


def validate_project_reference(value: Any) -> None:
    """Raise ValueError unless `value` is a project reference."""
    if not is_valid_project_reference(value):
        raise ValueError("Invalid project reference format. Correct format: '/projects/{id}'")


def validate_custom_fields(custom_fields: Mapping[str, Any] | None) -> None:
    """
    Check custom field names and values.

    Keys must be non-empty, use only alphanumerics, dash and underscore, not
    start with an underscore and not be all digits. Values must be None or a
    string.

    Raises:
        ValueError: On the first invalid field
    """
    if not custom_fields:
        return

    for key, value in custom_fields.items():
        if not key or not isinstance(key, str):
            raise ValueError("Custom field key must be a non-empty string")
        if not _CUSTOM_FIELD_KEY.match(key):
            raise ValueError(
                f"Custom field key '{key}' contains invalid characters "
                "(only alphanumeric, dash, underscore allowed)"
            )
        if key.startswith('_'):
            raise ValueError(f"Custom field key '{key}' cannot start with an underscore")
        if key.isdigit():
            raise ValueError(f"Custom field key '{key}' cannot contain only digits")
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Custom field '{key}' value must be null or a string")
