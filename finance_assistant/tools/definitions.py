"""
Tool Declarations

The four tools the completion service may call, declared in the
OpenAI-compatible function-calling format. Names are part of the
contract with the model and must not change (including "addExpanse").

Each tool also has a pydantic model for its arguments. The models coerce
rather than reject: once the payload is valid JSON, no argument value can
stop the session. A missing or non-numeric amount is recorded as 0, and
the unused date range is kept as text.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LedgerTool(str, Enum):
    """Every tool the model is allowed to call."""
    GET_TOTAL_EXPENSES = "getTotalExpenses"
    ADD_EXPENSE = "addExpanse"
    ADD_INCOME = "addIncome"
    GET_MONEY_BALANCE = "getMoneyBalance"

    @classmethod
    def from_name(cls, name: str) -> Optional["LedgerTool"]:
        """Look up a tool by its wire name; None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


# =============================================================================
# ARGUMENT MODELS
# =============================================================================

class DateRangeArguments(BaseModel):
    """
    Arguments of getTotalExpenses, normally YYYY-MM-DD strings.

    The range is never applied, so any JSON value is accepted and kept as text.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def as_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return v if isinstance(v, str) else str(v)


class EntryArguments(BaseModel):
    """Arguments of addExpanse and addIncome."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    amount: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_or_zero(cls, v: Any) -> float:
        """Anything that is not a finite number counts as 0."""
        if v is None or isinstance(v, bool):
            return 0.0
        try:
            amount = float(v)
        except (TypeError, ValueError):
            return 0.0
        return amount if math.isfinite(amount) else 0.0


class NoArguments(BaseModel):
    """getMoneyBalance takes nothing; anything sent is ignored."""
    model_config = ConfigDict(extra="ignore")


ARGUMENT_MODELS: dict[LedgerTool, type[BaseModel]] = {
    LedgerTool.GET_TOTAL_EXPENSES: DateRangeArguments,
    LedgerTool.ADD_EXPENSE: EntryArguments,
    LedgerTool.ADD_INCOME: EntryArguments,
    LedgerTool.GET_MONEY_BALANCE: NoArguments,
}


# =============================================================================
# WIRE DECLARATIONS
# =============================================================================

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": LedgerTool.GET_TOTAL_EXPENSES.value,
            "description": "Get total expenses from date to date",
            "parameters": {
                "type": "object",
                "properties": {
                    "from": {
                        "type": "string",
                        "description": "From date to get the expenses, format: YYYY-MM-DD",
                    },
                    "to": {
                        "type": "string",
                        "description": "To date to get the expenses, format: YYYY-MM-DD",
                    },
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": LedgerTool.ADD_EXPENSE.value,
            "description": "Add new expense entry to the expense database.",
            "parameters": {
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": (
                            "Name of the expense. e.g. Bought iPhone 16 Pro Max "
                            "for 150k BDT (Bangladeshi Taka)"
                        ),
                    },
                    "amount": {
                        "type": "number",
                        "description": "Amount of the expense.",
                    },
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": LedgerTool.ADD_INCOME.value,
            "description": "Add new income to the database",
            "parameters": {
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "Name of the income. e.g. Get salary 10000BDT",
                    },
                    "amount": {
                        "type": "number",
                        "description": "How much your income",
                    },
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": LedgerTool.GET_MONEY_BALANCE.value,
            "description": "Get current balance",
        },
    },
]
