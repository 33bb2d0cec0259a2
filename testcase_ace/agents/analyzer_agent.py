"""
Analyzer Agent - Aggregates execution results into a test report
"""
from typing import Dict, List, Any, Optional
from datetime import datetime, timezone

from .base_agent import BaseAgent
from ..models.execution_result import TestResult
from ..models.report import Summary, TestReport


class AnalyzerAgent(BaseAgent):
    """
    Turns per-test results into the immutable TestReport:
    - Request echo (endpoint, method)
    - Generation timestamp
    - Passed / failed / error counts
    """

    def __init__(self):
        super().__init__(
            name="Analyzer",
            description="Aggregates results into reports"
        )

    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Execute report generation."""
        report = self.generate_report(
            api_endpoint=context.get("api_endpoint", ""),
            api_method=context.get("api_method", ""),
            results=context.get("results", [])
        )
        return {"report": report}

    def generate_report(
        self,
        api_endpoint: str,
        api_method: str,
        results: List[TestResult],
        generated_at: Optional[datetime] = None
    ) -> TestReport:
        """
        Generate the test report.

        Args:
            api_endpoint: Endpoint that was tested
            api_method: HTTP method used
            results: Per-test results in execution order
            generated_at: Report timestamp, defaults to now (UTC)

        Returns:
            TestReport whose summary counts match its results
        """
        summary = Summary.from_results(results)
        self.log_info(
            f"Report for {api_method} {api_endpoint}: {summary.passed} passed, "
            f"{summary.failed} failed, {summary.errors} errors"
        )
        return TestReport(
            api_endpoint=api_endpoint,
            api_method=api_method,
            generated_at=generated_at or datetime.now(timezone.utc),
            summary=summary,
            results=list(results),
        )
