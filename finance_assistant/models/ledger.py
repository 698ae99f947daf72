"""
Ledger Models for Finance Assistant

A ledger entry is deliberately minimal: a label and an amount.
No ID, no timestamp, no category beyond the label.

DESIGN DECISION: Amounts are plain floats, not Decimal.
The assistant reports whatever the model sends and sums it in
insertion order. Negative amounts pass through unchecked.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LedgerKind(str, Enum):
    """The two disjoint ledgers."""
    EXPENSE = "expense"
    INCOME = "income"


class LedgerEntry(BaseModel):
    """
    One recorded expense or income.

    Entries are immutable once appended - there is no update or delete.
    """
    model_config = ConfigDict(frozen=True)

    label: str = Field(
        ...,
        description="Human-readable description, e.g. 'Coffee'"
    )
    amount: float = Field(
        ...,
        description="Signed amount in the configured currency"
    )


def format_amount(value: float) -> str:
    """
    Render an amount the way users expect to read it.

    Integral values drop the fractional part (4850, not 4850.0);
    everything else uses the shortest round-trip representation.
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
