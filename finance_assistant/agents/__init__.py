"""AI Agents package."""

from finance_assistant.agents.finance_agent import (
    AgentError,
    EmptyCompletionError,
    FinanceAgent,
    build_system_prompt,
)

__all__ = [
    "AgentError",
    "EmptyCompletionError",
    "FinanceAgent",
    "build_system_prompt",
]
