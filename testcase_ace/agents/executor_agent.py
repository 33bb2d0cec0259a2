"""
Executor Agent - Executes a single API test case and has the model judge it
"""
import json
from typing import Dict, Any, Optional

import httpx

from .base_agent import BaseAgent
from ..llm.invoker import ModelInvoker
from ..llm.prompts import VERIFY_TEST_RESULT, VerificationInput
from ..models.execution_result import TestResult, TestStatus
from ..models.test_case import TestCase
from ..utils.helpers import extract_json_body

BODY_METHODS = {"POST", "PUT", "PATCH"}
JSON_HEADERS = {"Content-Type": "application/json"}


class ExecutorAgent(BaseAgent):
    """
    Executes individual test cases by:
    - Pulling a request body out of the test steps
    - Calling the endpoint under test
    - Asking the model whether the response meets the expected results
    """

    def __init__(self, invoker: Optional[ModelInvoker] = None):
        super().__init__(
            name="Executor",
            description="Executes API test cases",
            invoker=invoker
        )

    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a test case."""
        result = await self.execute_test(
            test_case=context["test_case"],
            api_endpoint=context["api_endpoint"],
            api_method=context["api_method"],
            client=context["client"]
        )
        return {"result": result}

    async def execute_test(
        self,
        test_case: TestCase,
        api_endpoint: str,
        api_method: str,
        client: httpx.AsyncClient
    ) -> TestResult:
        """
        Execute a single test case.

        Args:
            test_case: Test case to execute
            api_endpoint: Endpoint under test
            api_method: HTTP method
            client: HTTP client for the call

        Returns:
            PASSED or FAILED result

        Raises:
            Exception: Any request or verification failure; the caller
                records it as an ERROR result
        """
        self.log_info(f"Executing test {test_case.test_case_id}: {api_method} {api_endpoint}")

        actual_response = await self._call_endpoint(test_case, api_endpoint, api_method, client)
        verdict = await self.invoker.invoke(
            VERIFY_TEST_RESULT,
            VerificationInput(test_case=test_case, response=actual_response),
        )

        status = TestStatus.PASSED if verdict.passed else TestStatus.FAILED
        self.log_info(f"Test {test_case.test_case_id}: {status.value}")
        return TestResult(
            test_case=test_case,
            status=status,
            actual_response=actual_response,
            reasoning=verdict.reasoning,
        )

    async def _call_endpoint(
        self,
        test_case: TestCase,
        api_endpoint: str,
        api_method: str,
        client: httpx.AsyncClient
    ) -> str:
        """
        Call the endpoint and describe the response as pretty JSON text.

        Returns:
            JSON with status, statusText, headers and body
        """
        method = api_method.upper()
        body = None
        if method in BODY_METHODS:
            body = extract_json_body(test_case.steps_to_reproduce)
            if body is None:
                self.log_debug(f"No request body found in steps of {test_case.test_case_id}")

        response = await client.request(
            method,
            api_endpoint,
            headers=JSON_HEADERS,
            content=body,
        )

        response_data = {
            "status": response.status_code,
            "statusText": response.reason_phrase,
            "headers": dict(response.headers),
            "body": response.text,
        }
        return json.dumps(response_data, indent=2, ensure_ascii=False)
