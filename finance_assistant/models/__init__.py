"""
Data Models Package

This package contains all Pydantic models used in the Finance Assistant.
All data flowing through the system must conform to these schemas.
"""

from finance_assistant.models.ledger import (
    LedgerEntry,
    LedgerKind,
    format_amount,
)
from finance_assistant.models.conversation import (
    FunctionCall,
    Message,
    MessageRole,
    ToolCall,
)
from finance_assistant.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "LedgerEntry",
    "LedgerKind",
    "format_amount",
    # Conversation models
    "FunctionCall",
    "Message",
    "MessageRole",
    "ToolCall",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
