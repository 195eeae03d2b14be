"""
Response parsing: fence extraction, JSON repair and schema validation.
"""

from .json_parser import (
    extract_json,
    extract_largest_balanced_json,
    fix_json_escapes,
    is_likely_truncated_json,
    parse_json_payload,
)
from .validation import validate_artifact

__all__ = [
    "extract_json",
    "extract_largest_balanced_json",
    "fix_json_escapes",
    "is_likely_truncated_json",
    "parse_json_payload",
    "validate_artifact",
]
