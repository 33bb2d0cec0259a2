"""Models package"""
from .test_case import TestCase, BilingualCases
from .execution_result import TestStatus, Verdict, TestResult
from .report import Summary, TestReport

__all__ = [
    "TestCase",
    "BilingualCases",
    "TestStatus",
    "Verdict",
    "TestResult",
    "Summary",
    "TestReport",
]
