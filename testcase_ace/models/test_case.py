"""
Test Case Data Model
"""
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class TestCase(BaseModel):
    """A single generated test case.

    Field aliases are the labels the model writes and the column headers
    of every export, so ``model_dump(by_alias=True)`` yields an export row.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    test_case_id: str = Field(..., alias="Test Case ID", description="Test case identifier")
    preconditions: str = Field(default="", alias="Preconditions")
    steps_to_reproduce: str = Field(default="", alias="Steps to Reproduce")
    expected_results: str = Field(default="", alias="Expected Results")

    def to_row(self) -> Dict[str, str]:
        """Return the case keyed by its export column headers."""
        return self.model_dump(by_alias=True)


class BilingualCases(BaseModel):
    """English test cases with their Japanese counterparts."""

    model_config = ConfigDict(frozen=True)

    english: List[TestCase] = Field(default_factory=list)
    japanese: List[TestCase] = Field(default_factory=list)
