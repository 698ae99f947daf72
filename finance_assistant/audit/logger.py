"""
Audit Logger

DESIGN DECISION: Every significant step of a chat session is logged.
This provides:
1. Complete traceability of tool calls and ledger changes
2. Debugging capability
3. A trail to reconstruct what happened before a crash

The audit logger:
- Is async to match the rest of the chat loop
- Writes to stderr only, so stdout stays a clean conversation
- Supports correlation IDs to trace all events of one user turn
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_assistant.models.audit import AuditEvent, AuditEventBuilder


SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


# Configure structlog for local logging
structlog.configure(
    processors=SHARED_PROCESSORS + [structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO", log_format: str = "json") -> None:
    """
    Route all log output to stderr at the given level.

    Called once by the entry point; stdout belongs to the conversation.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=SHARED_PROCESSORS + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Every event goes to the structured local log at the level
    matching its severity.
    """

    def __init__(self):
        self._logger = structlog.get_logger("finance_assistant.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True once the event has been handed to the logger.
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return True

    async def log_session_started(self, exit_command: str) -> None:
        """Log session start."""
        await self.log(AuditEventBuilder.session_started(exit_command=exit_command))

    async def log_session_ended(self, turns: int, reason: str) -> None:
        """Log session end."""
        await self.log(AuditEventBuilder.session_ended(turns=turns, reason=reason))

    async def log_user_message(
        self,
        text: str,
        correlation_id: UUID,
    ) -> None:
        """Log an incoming user line."""
        event = AuditEventBuilder.user_message_received(
            text=text,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_completion_requested(
        self,
        model_name: str,
        history_length: int,
        correlation_id: UUID,
    ) -> None:
        """Log a request to the completion service."""
        event = AuditEventBuilder.completion_requested(
            model_name=model_name,
            history_length=history_length,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_completion_received(
        self,
        tool_call_count: int,
        finish_reason: Optional[str],
        correlation_id: UUID,
    ) -> None:
        """Log a response from the completion service."""
        event = AuditEventBuilder.completion_received(
            tool_call_count=tool_call_count,
            finish_reason=finish_reason,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_response_displayed(
        self,
        length: int,
        correlation_id: UUID,
    ) -> None:
        """Log the final answer of a turn."""
        event = AuditEventBuilder.response_displayed(
            length=length,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_tool_call_dispatched(
        self,
        tool_name: str,
        tool_call_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log a tool call routed to a ledger operation."""
        event = AuditEventBuilder.tool_call_dispatched(
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_unknown_tool(
        self,
        tool_name: str,
        tool_call_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log a tool call naming a tool we do not have."""
        event = AuditEventBuilder.unknown_tool_requested(
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_tool_call_failed(
        self,
        tool_name: str,
        tool_call_id: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a tool call whose failure is reported back to the model."""
        event = AuditEventBuilder.tool_call_failed(
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_expense_recorded(
        self,
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an expense append."""
        event = AuditEventBuilder.expense_recorded(
            label=label,
            amount=amount,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_income_recorded(
        self,
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an income append."""
        event = AuditEventBuilder.income_recorded(
            label=label,
            amount=amount,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        event = AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of each user turn.
    Pass it through all subsequent operations.
    """
    return uuid4()
