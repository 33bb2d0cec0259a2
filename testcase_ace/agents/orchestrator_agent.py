"""
Orchestrator Agent - Runs a batch of API test cases one after another
"""
from typing import Dict, List, Any, Optional

import httpx

from .base_agent import BaseAgent
from .executor_agent import ExecutorAgent
from .analyzer_agent import AnalyzerAgent
from ..config import settings
from ..llm.invoker import ModelInvoker
from ..models.execution_result import TestResult, TestStatus
from ..models.report import TestReport
from ..models.test_case import TestCase

ERROR_REASONING = (
    "An exception occurred while trying to run this test case, so it could not be completed."
)


class OrchestratorAgent(BaseAgent):
    """
    Orchestrates the test execution workflow:
    - Executes test cases sequentially with one ExecutorAgent
    - Isolates failures: an exception marks only that test ERROR
    - Hands all results to the AnalyzerAgent for the report
    """

    def __init__(
        self,
        invoker: Optional[ModelInvoker] = None,
        executor: Optional[ExecutorAgent] = None,
        analyzer: Optional[AnalyzerAgent] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(
            name="Orchestrator",
            description="Coordinates API test execution",
            invoker=invoker
        )
        self.executor = executor or ExecutorAgent(invoker=self.invoker)
        self.analyzer = analyzer or AnalyzerAgent()
        self.transport = transport

    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Execute orchestration."""
        report = await self.execute_tests(
            api_endpoint=context.get("api_endpoint", ""),
            api_method=context.get("api_method", ""),
            test_cases=context.get("test_cases", [])
        )
        return {"report": report}

    async def execute_tests(
        self,
        api_endpoint: str,
        api_method: str,
        test_cases: List[TestCase]
    ) -> TestReport:
        """
        Execute all test cases and build the report.

        Args:
            api_endpoint: Endpoint under test
            api_method: HTTP method
            test_cases: Test cases to execute, in order

        Returns:
            TestReport with one result per test case
        """
        self.log_info(f"Starting execution of {len(test_cases)} tests against {api_method} {api_endpoint}")

        results = []
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, transport=self.transport) as client:
            for test_case in test_cases:
                results.append(
                    await self._execute_isolated(test_case, api_endpoint, api_method, client)
                )

        self.log_info(f"Completed execution of {len(results)} tests")
        return self.analyzer.generate_report(api_endpoint, api_method, results)

    async def _execute_isolated(
        self,
        test_case: TestCase,
        api_endpoint: str,
        api_method: str,
        client: httpx.AsyncClient
    ) -> TestResult:
        """Run one test; any exception becomes an ERROR result instead of stopping the batch."""
        try:
            return await self.executor.execute_test(
                test_case=test_case,
                api_endpoint=api_endpoint,
                api_method=api_method,
                client=client
            )
        except Exception as e:
            self.log_error(f"Error executing test case {test_case.test_case_id}: {e}")
            return TestResult(
                test_case=test_case,
                status=TestStatus.ERROR,
                actual_response=f"Failed to execute test. Error: {e}",
                reasoning=ERROR_REASONING,
            )
