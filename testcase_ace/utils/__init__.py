"""Utilities package"""
from .helpers import (
    sanitize_filename,
    file_timestamp,
    truncate_text,
    extract_json_body,
    extract_json_object,
)

__all__ = [
    "sanitize_filename",
    "file_timestamp",
    "truncate_text",
    "extract_json_body",
    "extract_json_object",
]
