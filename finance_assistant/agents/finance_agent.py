"""
Finance Agent

DESIGN DECISION: We drive the tool-calling loop ourselves on top of the
OpenAI-compatible chat-completions API (served by Groq) instead of using
an agent framework, because:
1. The loop is small and fully visible
2. The exact message order sent to the service is under our control
3. Tool execution stays deterministic and testable

CRITICAL BOUNDARIES:
- The LLM CAN: decide which ledger tool to call, phrase the answer
- The LLM CANNOT: touch the ledger directly or do the arithmetic
- Every assistant message and every tool result is kept in the history,
  in order, and resubmitted verbatim on the next request

The LLM is a TRANSLATOR, not an ACCOUNTANT.
"""

from typing import Optional
from uuid import UUID

from openai import (
    APIConnectionError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_assistant.audit import AuditLogger, create_correlation_id
from finance_assistant.config import AppSettings, GroqSettings, get_settings
from finance_assistant.models.conversation import Message
from finance_assistant.tools import TOOL_DEFINITIONS, ToolExecutor


SYSTEM_PROMPT = """You are {name}, a personal finance assistant. Your task is to assist user with their expenses, balances and financial goals in {code} ({label}). You have access to following tools between ###.

###
1. getTotalExpenses({{from: YYYY-MM-DD, to: YYYY-MM-DD}}):string // get total expense for a time period.
2. addExpanse({{name, amount}}):string // add new expense to the db.
3. addIncome({{name, amount}}):string // add new income to same db.
4. getMoneyBalance():string // Get current money balance.
###"""


RETRYABLE_ERRORS = (APIConnectionError, InternalServerError, RateLimitError)


class AgentError(Exception):
    """Base exception for the agent loop."""
    pass


class EmptyCompletionError(AgentError):
    """The completion service returned no candidate."""
    pass


def build_system_prompt(settings: AppSettings) -> str:
    """Render the persona prompt for the configured name and currency."""
    return SYSTEM_PROMPT.format(
        name=settings.assistant_name,
        code=settings.currency_code,
        label=settings.currency_label,
    )


class FinanceAgent:
    """
    Owns the conversation history and runs the inner loop.

    FLOW (one user turn):
    1. Append the user message
    2. Send the whole history + tool declarations, one candidate
    3. Append the assistant message, whatever it contains
    4. No tool calls -> its content is the answer, stop
    5. Tool calls -> execute each in order, append one tool message per
       call, go back to 2
    """

    def __init__(
        self,
        executor: ToolExecutor,
        client: Optional[AsyncOpenAI] = None,
        settings: Optional[GroqSettings] = None,
        app_settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._executor = executor
        self._client = client
        self._settings = settings
        self._audit_logger = audit_logger

        app_settings = app_settings or get_settings().app
        self._history: list[Message] = [
            Message.system(build_system_prompt(app_settings))
        ]

    @property
    def history(self) -> list[Message]:
        """Snapshot of the conversation so far (system prompt first)."""
        return list(self._history)

    def _get_settings(self) -> GroqSettings:
        """Load Groq settings on first use (a missing API key fails here)."""
        if self._settings is None:
            self._settings = get_settings().groq
        return self._settings

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the completion client."""
        if self._client is None:
            settings = self._get_settings()
            self._client = AsyncOpenAI(
                api_key=settings.api_key,
                base_url=settings.base_url,
                timeout=settings.request_timeout_seconds,
                # Retries are governed by max_attempts below
                max_retries=0,
            )
        return self._client

    async def respond(
        self,
        user_text: str,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Run one user turn to completion and return the final answer.

        Any error (transport, malformed response, fatal tool error)
        propagates to the caller. There is no partial-state recovery.
        """
        correlation_id = correlation_id or create_correlation_id()
        self._history.append(Message.user(user_text))

        while True:
            message = await self._complete(correlation_id)
            self._history.append(message)

            if not message.has_tool_calls:
                return message.content or ""

            for tool_call in message.tool_calls:
                result = await self._executor.execute(tool_call, correlation_id)
                self._history.append(
                    Message.tool_result(tool_call_id=tool_call.id, content=result)
                )

    async def _complete(self, correlation_id: UUID) -> Message:
        """Send the history to the completion service; return its message."""
        settings = self._get_settings()
        client = self._get_client()

        request = {
            "model": settings.model_name,
            "messages": [message.to_api_dict() for message in self._history],
            "tools": TOOL_DEFINITIONS,
            "n": 1,
        }
        if settings.temperature is not None:
            request["temperature"] = settings.temperature

        if self._audit_logger:
            await self._audit_logger.log_completion_requested(
                model_name=settings.model_name,
                history_length=len(self._history),
                correlation_id=correlation_id,
            )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(settings.max_attempts),
                wait=wait_exponential(
                    multiplier=1,
                    min=settings.retry_min_wait_seconds,
                    max=settings.retry_max_wait_seconds,
                ),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                reraise=True,
            ):
                with attempt:
                    response = await client.chat.completions.create(**request)
        except Exception as e:
            if self._audit_logger:
                await self._audit_logger.log_external_service_error(
                    service="groq",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if not response.choices:
            raise EmptyCompletionError("Completion service returned no choices")

        choice = response.choices[0]
        message = Message.from_completion_message(choice.message)

        if self._audit_logger:
            await self._audit_logger.log_completion_received(
                tool_call_count=len(message.tool_calls or []),
                finish_reason=choice.finish_reason,
                correlation_id=correlation_id,
            )

        return message
