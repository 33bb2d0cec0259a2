"""
Named prompt templates with their declared input and output schemas.
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field

from ..config import settings
from ..models.execution_result import Verdict
from ..models.test_case import TestCase
from ..utils.case_text import parse_test_cases


class PromptInput(BaseModel):
    """Base for prompt inputs; subclasses may reshape the template variables."""

    def prompt_variables(self) -> Dict[str, Any]:
        return self.model_dump()


class ApiTestCaseInput(PromptInput):
    api_endpoint: str
    api_method: str
    payload: str


class ApiTestCaseOutput(BaseModel):
    english_test_cases: List[TestCase] = Field(..., min_length=1)
    japanese_test_cases: List[TestCase] = Field(default_factory=list)


class UiScenarioInput(PromptInput):
    photo_data_uri: str
    description: str

    def prompt_variables(self) -> Dict[str, Any]:
        # the screenshot travels as an image attachment, not as prompt text
        return {"description": self.description}


class UiScenarioOutput(BaseModel):
    english_test_scenarios: List[TestCase] = Field(..., min_length=1)


class TranslationInput(PromptInput):
    text: str


class TranslationOutput(BaseModel):
    translated_text: str = Field(..., min_length=1)


class VerificationInput(PromptInput):
    test_case: TestCase
    response: str

    def prompt_variables(self) -> Dict[str, Any]:
        return {
            "test_case_id": self.test_case.test_case_id,
            "steps": self.test_case.steps_to_reproduce,
            "expected_results": self.test_case.expected_results,
            "response": self.response,
        }


@dataclass(frozen=True)
class PromptSpec:
    """
    A named prompt.

    Attributes:
        name: Name used in logs and errors
        template: Chat messages with ``{variable}`` placeholders
        input_model: Schema the caller's payload must satisfy
        output_model: Schema the model's answer is validated against
        temperature: Sampling temperature for this prompt
        image_field: Input field holding a data URI sent as an image
        parse_text: Converts free text into output_model data; JSON is
            extracted from the response when unset
    """

    name: str
    template: ChatPromptTemplate
    input_model: Type[PromptInput]
    output_model: Type[BaseModel]
    temperature: float = settings.GENERATION_TEMPERATURE
    image_field: Optional[str] = None
    parse_text: Optional[Callable[[str], Dict[str, Any]]] = None


TEST_CASE_FORMAT = """**Test Case ID:** TC-001
**Preconditions:** The user is authenticated.
**Steps to Reproduce:**
1. Send a request with a valid payload.
**Expected Results:** The API should return a 200 OK status code and the created resource."""

_JAPANESE_HEADING_RE = re.compile(r"^#+\s*Japanese\b.*$", re.IGNORECASE | re.MULTILINE)


def _cases_as_dicts(text: str) -> List[Dict[str, str]]:
    return [case.to_row() for case in parse_test_cases(text)]


def parse_bilingual_text(text: str) -> Dict[str, Any]:
    """Split a ``### English`` / ``### Japanese`` answer and parse both halves."""
    parts = _JAPANESE_HEADING_RE.split(text, maxsplit=1)
    english = parts[0]
    japanese = parts[1] if len(parts) > 1 else ""
    return {
        "english_test_cases": _cases_as_dicts(english),
        "japanese_test_cases": _cases_as_dicts(japanese),
    }


def parse_scenario_text(text: str) -> Dict[str, Any]:
    return {"english_test_scenarios": _cases_as_dicts(text)}


def parse_translation_text(text: str) -> Dict[str, Any]:
    return {"translated_text": text.strip()}


GENERATE_API_TEST_CASES = PromptSpec(
    name="generateApiTestCasesPrompt",
    input_model=ApiTestCaseInput,
    output_model=ApiTestCaseOutput,
    template=ChatPromptTemplate.from_messages([
        ("system", """You are an expert test case generator. Given an API endpoint, its HTTP method, and a sample payload, you generate a comprehensive set of test cases, including normal cases, edge cases, and boundary conditions. The test cases must be detailed and cover all aspects of the API functionality. Generate the test cases in both English and Japanese.

Output ONLY a valid JSON object. No explanation text, no markdown fences."""),
        ("human", """API Endpoint: {api_endpoint}
API Method: {api_method}
Payload: {payload}

Each test case has the keys "Test Case ID", "Preconditions", "Steps to Reproduce" and "Expected Results", all strings.
When a step sends a request body, include the full JSON body in "Steps to Reproduce".
The Japanese test cases translate the English ones; keep the same Test Case IDs.

Output format:
{{
  "english_test_cases": [
    {{
      "Test Case ID": "TC-001",
      "Preconditions": "The user is authenticated.",
      "Steps to Reproduce": "1. Send a {api_method} request to {api_endpoint} with a valid payload.",
      "Expected Results": "The API should return a 200 OK status code and the created resource."
    }}
  ],
  "japanese_test_cases": [ ... same structure ... ]
}}"""),
    ]),
)

GENERATE_API_TEST_CASES_FALLBACK = PromptSpec(
    name="generateApiTestCasesFallbackPrompt",
    input_model=ApiTestCaseInput,
    output_model=ApiTestCaseOutput,
    parse_text=parse_bilingual_text,
    template=ChatPromptTemplate.from_messages([
        ("human", """Write test cases for this API, covering normal cases, edge cases and boundary conditions.

API Endpoint: {api_endpoint}
API Method: {api_method}
Payload: {payload}

Write a line "### English" followed by the English test cases, then a line "### Japanese" followed by the same test cases translated to Japanese.
Keep the English labels (e.g. "**Test Case ID:**") in both languages and only translate the content.
Use exactly this format for every test case:

""" + TEST_CASE_FORMAT),
    ]),
)

GENERATE_UI_TEST_SCENARIOS = PromptSpec(
    name="generateUITestScenariosPrompt",
    input_model=UiScenarioInput,
    output_model=UiScenarioOutput,
    image_field="photo_data_uri",
    template=ChatPromptTemplate.from_messages([
        ("system", """You are an expert UI test case generator. Given a screenshot of a UI and a description of the UI, you generate comprehensive UI test scenarios covering layout, interaction, validation and edge cases.

Output ONLY a valid JSON object. No explanation text, no markdown fences."""),
        ("human", """Description: {description}

The screenshot is attached.

Each scenario has the keys "Test Case ID", "Preconditions", "Steps to Reproduce" and "Expected Results", all strings.

Output format:
{{
  "english_test_scenarios": [
    {{
      "Test Case ID": "UI-001",
      "Preconditions": "The screen is loaded.",
      "Steps to Reproduce": "1. Click the submit button with all fields empty.",
      "Expected Results": "Validation messages appear under each required field."
    }}
  ]
}}"""),
    ]),
)

GENERATE_UI_TEST_SCENARIOS_FALLBACK = PromptSpec(
    name="generateUITestScenariosFallbackPrompt",
    input_model=UiScenarioInput,
    output_model=UiScenarioOutput,
    image_field="photo_data_uri",
    parse_text=parse_scenario_text,
    template=ChatPromptTemplate.from_messages([
        ("human", """Write UI test scenarios for the attached screenshot.

Description: {description}

Use exactly this format for every scenario:

""" + TEST_CASE_FORMAT.replace("TC-001", "UI-001")),
    ]),
)

TRANSLATE_TO_JAPANESE = PromptSpec(
    name="translateToJapanesePrompt",
    input_model=TranslationInput,
    output_model=TranslationOutput,
    parse_text=parse_translation_text,
    template=ChatPromptTemplate.from_messages([
        ("human", """Translate the following English text to Japanese.
Keep every bold label such as "**Test Case ID:**" exactly as written and translate only the content.
Output only the translation.

{text}"""),
    ]),
)

VERIFY_TEST_RESULT = PromptSpec(
    name="verifyTestResultPrompt",
    input_model=VerificationInput,
    output_model=Verdict,
    temperature=settings.VERIFICATION_TEMPERATURE,
    template=ChatPromptTemplate.from_messages([
        ("system", """You are a test result verification agent.
Given a test case with expected results and the actual response from an API, determine if the test case passed or failed.

Output ONLY a valid JSON object: {{"passed": true or false, "reasoning": "brief explanation"}}"""),
        ("human", """Test Case:
- ID: {test_case_id}
- Steps: {steps}
- Expected Results: {expected_results}

Actual API Response:
```json
{response}
```

Did the test pass? Provide your reasoning."""),
    ]),
)
