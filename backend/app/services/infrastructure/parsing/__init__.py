"""
Parsing Module

Provides utilities for parsing JSON from LLM responses.

Usage:
    from app.services.infrastructure.parsing import parse_json_payload, strip_code_fences
"""

from .json_parser import (
    strip_code_fences,
    extract_largest_balanced_json,
    fix_json_escapes,
    parse_json_payload,
)

__all__ = [
    "strip_code_fences",
    "extract_largest_balanced_json",
    "fix_json_escapes",
    "parse_json_payload",
]
