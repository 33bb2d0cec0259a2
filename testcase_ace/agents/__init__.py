"""Agents package"""
from .base_agent import BaseAgent
from .planner_agent import PlannerAgent
from .scenario_agent import ScenarioAgent
from .executor_agent import ExecutorAgent
from .orchestrator_agent import OrchestratorAgent
from .analyzer_agent import AnalyzerAgent

__all__ = [
    "BaseAgent",
    "PlannerAgent",
    "ScenarioAgent",
    "ExecutorAgent",
    "OrchestratorAgent",
    "AnalyzerAgent"
]
