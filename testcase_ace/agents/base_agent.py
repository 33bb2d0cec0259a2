"""
Base Agent - Common base for the generation and execution agents
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

from ..llm.invoker import ModelInvoker


class BaseAgent(ABC):
    """
    Base class for agents.

    Every agent talks to the model through one ModelInvoker and logs
    under ``agent.<name>`` with a ``[name]`` prefix.
    """

    def __init__(self, name: str, description: str = "", invoker: Optional[ModelInvoker] = None):
        """
        Args:
            name: Agent name, used for the logger and message prefix
            description: What the agent does
            invoker: Model invocation boundary; a default one is created when omitted
        """
        self.name = name
        self.description = description
        self.invoker = invoker or ModelInvoker()
        self.logger = logging.getLogger(f"agent.{name}")

    @abstractmethod
    async def execute(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Run the agent's task with keyword inputs taken from ``context``."""
        pass

    def _log(self, level: int, message: str):
        self.logger.log(level, f"[{self.name}] {message}")

    def log_info(self, message: str):
        self._log(logging.INFO, message)

    def log_warning(self, message: str):
        self._log(logging.WARNING, message)

    def log_error(self, message: str):
        self._log(logging.ERROR, message)

    def log_debug(self, message: str):
        self._log(logging.DEBUG, message)

    def __repr__(self):
        return f"<{self.__class__.__name__}(name='{self.name}', invoker={self.invoker!r})>"
