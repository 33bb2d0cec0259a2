"""
Exception classes used across Test Case Ace.
"""


class TestCaseAceError(Exception):
    """Base class for application errors."""
    pass


class ModelOutputError(TestCaseAceError):
    """Raised when a model call fails or returns output that does not match its schema."""

    def __init__(self, prompt_name: str, message: str):
        super().__init__(f"{prompt_name}: {message}")
        self.prompt_name = prompt_name


class GenerationError(TestCaseAceError):
    """Raised when a generation action fails after its fallback attempt."""
    pass


class ExportError(TestCaseAceError):
    """Raised when an artifact cannot be exported."""
    pass
