"""
Scenario Agent - Uses a vision model to write UI test scenarios from a screenshot
"""
from typing import Dict, Any, Optional

from .base_agent import BaseAgent
from ..llm.invoker import ModelInvoker
from ..llm.prompts import (
    GENERATE_UI_TEST_SCENARIOS,
    GENERATE_UI_TEST_SCENARIOS_FALLBACK,
    TRANSLATE_TO_JAPANESE,
    TranslationInput,
    UiScenarioInput,
)
from ..models.test_case import BilingualCases
from ..utils.case_text import parse_test_cases, serialize_test_cases


class ScenarioAgent(BaseAgent):
    """
    Generates UI test scenarios:
    - English scenarios from the screenshot and description (vision model)
    - Japanese scenarios through a follow-up translation call
    """

    def __init__(self, invoker: Optional[ModelInvoker] = None):
        super().__init__(
            name="ScenarioWriter",
            description="Writes UI test scenarios from screenshots",
            invoker=invoker
        )

    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Execute scenario generation."""
        scenarios = await self.generate_scenarios(
            photo_data_uri=context.get("photo_data_uri", ""),
            description=context.get("description", "")
        )
        return {"scenarios": scenarios}

    async def generate_scenarios(self, photo_data_uri: str, description: str) -> BilingualCases:
        """
        Generate UI test scenarios in English and Japanese.

        Args:
            photo_data_uri: Screenshot as a base64 data URI
            description: Description of the screen

        Returns:
            English scenarios and their Japanese translation

        Raises:
            GenerationError: If the scenarios or their translation cannot be produced
        """
        self.log_info(f"Generating UI scenarios for: {description[:80]}")

        output = await self.invoker.invoke_with_fallback(
            GENERATE_UI_TEST_SCENARIOS,
            UiScenarioInput(photo_data_uri=photo_data_uri, description=description),
            fallback=GENERATE_UI_TEST_SCENARIOS_FALLBACK,
        )
        english = output.english_test_scenarios

        translation = await self.invoker.invoke_with_fallback(
            TRANSLATE_TO_JAPANESE,
            TranslationInput(text=serialize_test_cases(english)),
        )
        japanese = parse_test_cases(translation.translated_text)
        if len(japanese) != len(english):
            self.log_warning(
                f"Translation returned {len(japanese)} scenarios for {len(english)} English ones"
            )

        self.log_info(f"Generated {len(english)} UI scenarios")
        return BilingualCases(english=english, japanese=japanese)
