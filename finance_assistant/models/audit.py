"""
Audit Models for Finance Assistant

Every significant step of a chat session is logged as an audit event.
This provides:
1. Complete traceability of what the model asked for
2. Debugging information when things go wrong
3. A record of every ledger change

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of the chat loop has its own event type.
    """
    # Session lifecycle
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"
    USER_MESSAGE_RECEIVED = "user_message_received"

    # Completion service
    COMPLETION_REQUESTED = "completion_requested"
    COMPLETION_RECEIVED = "completion_received"
    RESPONSE_DISPLAYED = "response_displayed"

    # Tool dispatch
    TOOL_CALL_DISPATCHED = "tool_call_dispatched"
    UNKNOWN_TOOL_REQUESTED = "unknown_tool_requested"
    TOOL_CALL_FAILED = "tool_call_failed"

    # Ledger changes
    EXPENSE_RECORDED = "expense_recorded"
    INCOME_RECORDED = "income_recorded"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one user turn share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one user turn)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.user_message_received(text, correlation_id)
        event = AuditEventBuilder.expense_recorded(label, amount, correlation_id)
    """

    @staticmethod
    def session_started(exit_command: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            description="Chat session started",
            details={"exit_command": exit_command},
        )

    @staticmethod
    def session_ended(turns: int, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            description=f"Chat session ended after {turns} turns ({reason})",
            details={"turns": turns, "reason": reason},
            is_user_action=reason == "exit_command",
        )

    @staticmethod
    def user_message_received(
        text: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_MESSAGE_RECEIVED,
            correlation_id=correlation_id,
            description="User message received",
            details={"length": len(text)},
            is_user_action=True,
        )

    @staticmethod
    def completion_requested(
        model_name: str,
        history_length: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPLETION_REQUESTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Completion requested with {history_length} messages",
            details={
                "model": model_name,
                "history_length": history_length,
            },
        )

    @staticmethod
    def completion_received(
        tool_call_count: int,
        finish_reason: Optional[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPLETION_RECEIVED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Completion received with {tool_call_count} tool calls",
            details={
                "tool_call_count": tool_call_count,
                "finish_reason": finish_reason,
            },
        )

    @staticmethod
    def response_displayed(
        length: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESPONSE_DISPLAYED,
            correlation_id=correlation_id,
            description="Final answer shown to user",
            details={"length": length},
        )

    @staticmethod
    def tool_call_dispatched(
        tool_name: str,
        tool_call_id: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOOL_CALL_DISPATCHED,
            correlation_id=correlation_id,
            description=f"Tool call dispatched: {tool_name}",
            details={
                "tool_name": tool_name,
                "tool_call_id": tool_call_id,
            },
        )

    @staticmethod
    def unknown_tool_requested(
        tool_name: str,
        tool_call_id: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNKNOWN_TOOL_REQUESTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Model requested unknown tool: {tool_name}",
            details={
                "tool_name": tool_name,
                "tool_call_id": tool_call_id,
            },
        )

    @staticmethod
    def tool_call_failed(
        tool_name: str,
        tool_call_id: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOOL_CALL_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Tool call failed: {tool_name}",
            error_message=error_message,
            details={
                "tool_name": tool_name,
                "tool_call_id": tool_call_id,
            },
        )

    @staticmethod
    def expense_recorded(
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_RECORDED,
            correlation_id=correlation_id,
            description=f"Expense recorded: {label}",
            details={
                "label": label,
                "amount": amount,
            },
        )

    @staticmethod
    def income_recorded(
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_RECORDED,
            correlation_id=correlation_id,
            description=f"Income recorded: {label}",
            details={
                "label": label,
                "amount": amount,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
