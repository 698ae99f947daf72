"""
Tool Execution Engine

DESIGN DECISION: Tool execution is DETERMINISTIC.
The LLM decides WHICH tool to call and with what arguments.
This engine parses those arguments and runs the matching ledger operation.
The LLM then phrases the result for the user.

The model never computes a total itself - it only sees what this
engine returns.

Failure policy (see AppSettings.report_tool_errors):
- Unknown tool name: empty result by default, always logged as a warning
- Arguments that are not valid JSON: raises ToolArgumentsError by default
  (fatal). Valid JSON never fails: a non-object payload is read as no
  arguments and the argument models coerce bad values
- With report_errors=True both become error text fed back to the model
"""

import json
from typing import Any, Awaitable, Callable, Optional
from uuid import UUID

import structlog
from pydantic import BaseModel

from finance_assistant.audit import AuditLogger, create_correlation_id
from finance_assistant.models.conversation import ToolCall
from finance_assistant.services.ledger import LedgerService
from finance_assistant.tools.definitions import (
    ARGUMENT_MODELS,
    DateRangeArguments,
    EntryArguments,
    LedgerTool,
)


class ToolError(Exception):
    """Base exception for tool execution."""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(message)


class UnknownToolError(ToolError):
    """The model asked for a tool that is not declared."""

    def __init__(self, tool_name: str):
        super().__init__(tool_name, f"Unknown tool: {tool_name}")


class ToolArgumentsError(ToolError):
    """The argument payload is not valid JSON or does not fit the tool."""
    pass


Handler = Callable[[BaseModel, Optional[UUID]], Awaitable[str]]


class ToolExecutor:
    """
    Executes tool calls requested by the model against the ledger.

    GUARANTEES:
    - Every declared tool maps to exactly one ledger operation
    - Unknown tools never pass silently (they are always logged)
    - Calls run in the order given; each returns its own result string
    """

    def __init__(
        self,
        ledger: LedgerService,
        audit_logger: Optional[AuditLogger] = None,
        report_errors: bool = False,
    ):
        self._ledger = ledger
        self._audit_logger = audit_logger
        self._report_errors = report_errors
        self._logger = structlog.get_logger(__name__)
        self._handlers: dict[LedgerTool, Handler] = {
            LedgerTool.GET_TOTAL_EXPENSES: self._get_total_expenses,
            LedgerTool.ADD_EXPENSE: self._add_expense,
            LedgerTool.ADD_INCOME: self._add_income,
            LedgerTool.GET_MONEY_BALANCE: self._get_money_balance,
        }

    async def execute(
        self,
        tool_call: ToolCall,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Run one tool call and return the content for its tool message.

        Raises:
            ToolArgumentsError: bad arguments and report_errors is off
        """
        correlation_id = correlation_id or create_correlation_id()
        tool_name = tool_call.function.name

        try:
            tool = LedgerTool.from_name(tool_name)
            if tool is None:
                raise UnknownToolError(tool_name)

            arguments = self._parse_arguments(tool, tool_call.function.arguments)

            if self._audit_logger:
                await self._audit_logger.log_tool_call_dispatched(
                    tool_name=tool_name,
                    tool_call_id=tool_call.id,
                    correlation_id=correlation_id,
                )

            return await self._handlers[tool](arguments, correlation_id)

        except UnknownToolError as e:
            if self._audit_logger:
                await self._audit_logger.log_unknown_tool(
                    tool_name=tool_name,
                    tool_call_id=tool_call.id,
                    correlation_id=correlation_id,
                )
            if self._report_errors:
                return f"Error: {e}"
            return ""

        except ToolArgumentsError as e:
            if not self._report_errors:
                raise
            if self._audit_logger:
                await self._audit_logger.log_tool_call_failed(
                    tool_name=tool_name,
                    tool_call_id=tool_call.id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return f"Error: {e}"

    def _parse_arguments(self, tool: LedgerTool, raw: str) -> BaseModel:
        """Decode the JSON payload and validate it against the tool's model."""
        model = ARGUMENT_MODELS[tool]

        # getMoneyBalance takes no arguments; its payload is never read
        if tool is LedgerTool.GET_MONEY_BALANCE:
            return model()

        try:
            payload: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ToolArgumentsError(
                tool.value,
                f"Arguments for {tool.value} are not valid JSON: {e.msg}",
            ) from e

        if not isinstance(payload, dict):
            self._logger.warning(
                "tool_arguments_not_object",
                tool_name=tool.value,
                payload_type=type(payload).__name__,
            )
            payload = {}

        return model.model_validate(payload)

    async def _get_total_expenses(
        self,
        arguments: DateRangeArguments,
        correlation_id: Optional[UUID],
    ) -> str:
        return await self._ledger.total_expenses(
            date_from=arguments.date_from,
            date_to=arguments.date_to,
        )

    async def _add_expense(
        self,
        arguments: EntryArguments,
        correlation_id: Optional[UUID],
    ) -> str:
        return await self._ledger.record_expense(
            label=arguments.name,
            amount=arguments.amount,
            correlation_id=correlation_id,
        )

    async def _add_income(
        self,
        arguments: EntryArguments,
        correlation_id: Optional[UUID],
    ) -> str:
        return await self._ledger.record_income(
            label=arguments.name,
            amount=arguments.amount,
            correlation_id=correlation_id,
        )

    async def _get_money_balance(
        self,
        arguments: BaseModel,
        correlation_id: Optional[UUID],
    ) -> str:
        return await self._ledger.current_balance()
