"""
Shared fixtures for the Test Case Ace tests.
"""
from datetime import datetime, timezone

import pytest

from testcase_ace.models import BilingualCases, Summary, TestCase, TestReport, TestResult, TestStatus


@pytest.fixture
def sample_cases():
    return [
        TestCase(
            test_case_id="TC-001",
            preconditions="The user is authenticated.",
            steps_to_reproduce='1. Send a POST request with body {"name": "Jane"}\n2. Read the response.',
            expected_results="The API returns 201 Created.",
        ),
        TestCase(
            test_case_id="TC-002",
            preconditions="None",
            steps_to_reproduce="1. Send a POST request without a body.",
            expected_results="The API returns 400 Bad Request.",
        ),
    ]


@pytest.fixture
def japanese_cases():
    return [
        TestCase(
            test_case_id="TC-001",
            preconditions="ユーザーは認証済みです。",
            steps_to_reproduce='1. {"name": "Jane"} を含む POST リクエストを送信する。',
            expected_results="API は 201 Created を返す。",
        ),
    ]


@pytest.fixture
def bilingual(sample_cases, japanese_cases):
    return BilingualCases(english=sample_cases, japanese=japanese_cases)


@pytest.fixture
def generated_at():
    return datetime(2026, 10, 19, 14, 25, 1, tzinfo=timezone.utc)


@pytest.fixture
def sample_report(sample_cases, generated_at):
    results = [
        TestResult(
            test_case=sample_cases[0],
            status=TestStatus.PASSED,
            actual_response='{"status": 201}',
            reasoning="Resource was created.",
        ),
        TestResult(
            test_case=sample_cases[1],
            status=TestStatus.ERROR,
            actual_response="Failed to execute test. Error: connection refused",
            reasoning="An exception occurred while trying to run this test case, so it could not be completed.",
        ),
    ]
    return TestReport(
        api_endpoint="https://api.example.com/users",
        api_method="POST",
        generated_at=generated_at,
        summary=Summary.from_results(results),
        results=results,
    )
