"""
Planner Agent - Generates API test cases in English and Japanese
"""
from typing import Dict, Any, Optional

from .base_agent import BaseAgent
from ..llm.invoker import ModelInvoker
from ..llm.prompts import (
    ApiTestCaseInput,
    GENERATE_API_TEST_CASES,
    GENERATE_API_TEST_CASES_FALLBACK,
)
from ..models.test_case import BilingualCases


class PlannerAgent(BaseAgent):
    """
    Generates API test cases from an endpoint, method and sample payload.
    Asks for structured JSON first and falls back to a simpler
    marker-text prompt when that answer is unusable.
    """

    def __init__(self, invoker: Optional[ModelInvoker] = None):
        super().__init__(
            name="Planner",
            description="Generates API test cases",
            invoker=invoker
        )

    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Execute test case generation."""
        cases = await self.generate_tests(
            api_endpoint=context.get("api_endpoint", ""),
            api_method=context.get("api_method", ""),
            payload=context.get("payload", "")
        )
        return {"test_cases": cases}

    async def generate_tests(
        self,
        api_endpoint: str,
        api_method: str,
        payload: str
    ) -> BilingualCases:
        """
        Generate API test cases.

        Args:
            api_endpoint: Endpoint under test
            api_method: HTTP method
            payload: Sample request payload

        Returns:
            English test cases and their Japanese translation

        Raises:
            GenerationError: If both the primary and fallback prompts fail
        """
        self.log_info(f"Generating test cases for {api_method} {api_endpoint}")

        output = await self.invoker.invoke_with_fallback(
            GENERATE_API_TEST_CASES,
            ApiTestCaseInput(api_endpoint=api_endpoint, api_method=api_method, payload=payload),
            fallback=GENERATE_API_TEST_CASES_FALLBACK,
        )
        cases = BilingualCases(
            english=output.english_test_cases,
            japanese=output.japanese_test_cases,
        )

        self.log_info(
            f"Generated {len(cases.english)} English and {len(cases.japanese)} Japanese test cases"
        )
        return cases
