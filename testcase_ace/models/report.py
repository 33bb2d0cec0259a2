"""
Report Data Model
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .execution_result import TestResult, TestStatus


class Summary(BaseModel):
    """Report summary."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_tests: int = Field(..., alias="totalTests")
    passed: int
    failed: int
    errors: int

    @classmethod
    def from_results(cls, results: List[TestResult]) -> "Summary":
        return cls(
            total_tests=len(results),
            passed=sum(1 for r in results if r.status == TestStatus.PASSED),
            failed=sum(1 for r in results if r.status == TestStatus.FAILED),
            errors=sum(1 for r in results if r.status == TestStatus.ERROR),
        )


class TestReport(BaseModel):
    """Complete API test execution report."""

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_endpoint: str = Field(..., alias="apiEndpoint")
    api_method: str = Field(..., alias="apiMethod")
    generated_at: datetime = Field(..., alias="generatedAt")
    summary: Summary
    results: List[TestResult] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_summary(self) -> "TestReport":
        s = self.summary
        if s.passed + s.failed + s.errors != s.total_tests or s.total_tests != len(self.results):
            raise ValueError(
                f"Summary counts {s.passed}+{s.failed}+{s.errors} do not match "
                f"{s.total_tests} total tests and {len(self.results)} results"
            )
        return self
