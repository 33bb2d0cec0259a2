"""
Utility helper functions
"""
import json
import re
from datetime import datetime
from typing import Optional

_JSON_BODY_RE = re.compile(r"({.*})", re.DOTALL)
_UNSAFE_FILENAME_RE = re.compile(r'[<>:"/\\|?*]')


def sanitize_filename(name: str, max_length: int = 100) -> str:
    """Make a download basename safe for Content-Disposition and file systems."""
    cleaned = _UNSAFE_FILENAME_RE.sub("", name)
    return re.sub(r"\s+", "_", cleaned)[:max_length]


def file_timestamp(now: Optional[datetime] = None) -> str:
    """Timestamp used in download file names, e.g. ``20261019-142501``."""
    return (now or datetime.now()).strftime("%Y%m%d-%H%M%S")


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Shorten text for log lines, ending it with ``suffix`` when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def extract_json_body(text: str) -> Optional[str]:
    """
    Find a request body inside free-form test steps.

    Greedy: takes everything from the first ``{`` to the last ``}``, so
    steps that mention several objects produce one (possibly invalid) blob.

    Args:
        text: Steps to Reproduce text

    Returns:
        The brace-delimited substring, or None when there is none
    """
    if not text:
        return None
    match = _JSON_BODY_RE.search(text)
    return match.group(1) if match else None


def extract_json_object(text: str) -> dict:
    """
    Extract the outermost JSON object from a model response.

    Raises:
        ValueError: If no object is present or it does not decode
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        raise ValueError("No JSON object found in model response")
    parsed = json.loads(text[start:end + 1])
    if not isinstance(parsed, dict):
        raise ValueError("Model response JSON is not an object")
    return parsed
