"""
Markdown test-case text <-> TestCase records.

Models write test cases as repeated ``**Label:** value`` blocks, one block
per case starting at ``**Test Case ID:**``. The same text is produced for
copy-to-clipboard, so parsing what was serialized returns the same cases.
"""
import re
from typing import Iterable, List

from ..models.test_case import TestCase

ID_LABEL = "Test Case ID"
PRECONDITIONS_LABEL = "Preconditions"
STEPS_LABEL = "Steps to Reproduce"
EXPECTED_LABEL = "Expected Results"

FIELD_LABELS = (ID_LABEL, PRECONDITIONS_LABEL, STEPS_LABEL, EXPECTED_LABEL)


def _marker(label: str) -> str:
    return f"**{label}:**"


_ANY_MARKER = "|".join(re.escape(_marker(label)) for label in FIELD_LABELS)
_SEGMENT_SPLIT_RE = re.compile(rf"(?={re.escape(_marker(ID_LABEL))})")
_FIELD_RES = {
    label: re.compile(rf"{re.escape(_marker(label))}(.*?)(?={_ANY_MARKER}|\Z)", re.DOTALL)
    for label in FIELD_LABELS
}


def _extract_field(segment: str, label: str) -> str:
    match = _FIELD_RES[label].search(segment)
    return match.group(1).strip() if match else ""


def parse_test_cases(text: str) -> List[TestCase]:
    """
    Parse marker-delimited model output into test cases.

    Segments without a non-empty Test Case ID are dropped rather than
    reported; values containing marker-like text are split best-effort.

    Args:
        text: Free-form model response

    Returns:
        Test cases in input order
    """
    if not text:
        return []

    cases = []
    for segment in _SEGMENT_SPLIT_RE.split(text):
        test_case_id = _extract_field(segment, ID_LABEL)
        if not test_case_id:
            continue
        cases.append(TestCase(
            test_case_id=test_case_id,
            preconditions=_extract_field(segment, PRECONDITIONS_LABEL),
            steps_to_reproduce=_extract_field(segment, STEPS_LABEL),
            expected_results=_extract_field(segment, EXPECTED_LABEL),
        ))
    return cases


def serialize_test_case(case: TestCase) -> str:
    return (
        f"{_marker(ID_LABEL)} {case.test_case_id}\n"
        f"{_marker(PRECONDITIONS_LABEL)} {case.preconditions}\n"
        f"{_marker(STEPS_LABEL)}\n{case.steps_to_reproduce}\n"
        f"{_marker(EXPECTED_LABEL)} {case.expected_results}"
    )


def serialize_test_cases(cases: Iterable[TestCase]) -> str:
    """Render test cases back to marker text, one blank line between cases."""
    return "\n\n".join(serialize_test_case(case) for case in cases)
