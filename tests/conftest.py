"""
Shared fixtures for Finance Assistant tests.

No real API calls: the completion client is a scripted fake that returns
real openai ChatCompletion objects in the order they were queued.
"""

import copy
import json
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from openai.types.chat import ChatCompletion

from finance_assistant.agents import FinanceAgent
from finance_assistant.config import AppSettings, GroqSettings
from finance_assistant.services import InMemoryLedgerStorage, LedgerService
from finance_assistant.tools import ToolExecutor


def make_completion(
    content: Optional[str] = None,
    tool_calls: Optional[list[tuple[str, str, Any]]] = None,
) -> ChatCompletion:
    """
    Build a ChatCompletion with one choice.

    tool_calls: (call_id, tool_name, arguments) - arguments may be a dict
    (JSON-encoded here) or a raw string sent as-is.
    """
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = [
            {
                "id": call_id,
                "type": "function",
                "function": {
                    "name": name,
                    "arguments": args if isinstance(args, str) else json.dumps(args),
                },
            }
            for call_id, name, args in tool_calls
        ]

    return ChatCompletion.model_validate({
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama-3.3-70b-versatile",
        "choices": [
            {
                "index": 0,
                "finish_reason": "tool_calls" if tool_calls else "stop",
                "logprobs": None,
                "message": message,
            }
        ],
    })


class FakeCompletions:
    """Stands in for client.chat.completions."""

    def __init__(self, responses: list):
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(copy.deepcopy(kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeClient:
    """Minimal AsyncOpenAI replacement."""

    def __init__(self, responses: list):
        self.chat = SimpleNamespace(completions=FakeCompletions(responses))

    @property
    def calls(self) -> list[dict[str, Any]]:
        return self.chat.completions.calls


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def groq_settings() -> GroqSettings:
    return GroqSettings(api_key="test-key")


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage()


@pytest.fixture
def ledger(storage, app_settings) -> LedgerService:
    return LedgerService(storage=storage, settings=app_settings)


@pytest.fixture
def executor(ledger) -> ToolExecutor:
    return ToolExecutor(ledger=ledger)


@pytest.fixture
def completion():
    """Factory fixture for ChatCompletion objects."""
    return make_completion


@pytest.fixture
def build_agent(executor, groq_settings, app_settings):
    """Factory: an agent wired to a fake client scripted with responses."""

    def _build(
        responses: list,
        tool_executor: Optional[ToolExecutor] = None,
        settings: Optional[GroqSettings] = None,
    ):
        client = FakeClient(responses)
        agent = FinanceAgent(
            executor=tool_executor or executor,
            client=client,
            settings=settings or groq_settings,
            app_settings=app_settings,
        )
        return agent, client

    return _build
