"""
Execution Result Data Model
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .test_case import TestCase


class TestStatus(str, Enum):
    """Outcome of one executed API test."""

    __test__ = False

    PASSED = "PASSED"
    FAILED = "FAILED"
    ERROR = "ERROR"


class Verdict(BaseModel):
    """Model judgement of an API response against a test case."""

    passed: bool = Field(..., description="Whether the test case passed based on the response.")
    reasoning: str = Field(..., description="A brief explanation for why the test passed or failed.")


class TestResult(BaseModel):
    """Result of executing a single test case."""

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    test_case: TestCase = Field(..., alias="testCase")
    status: TestStatus
    actual_response: str = Field(..., alias="actualResponse")
    reasoning: str
