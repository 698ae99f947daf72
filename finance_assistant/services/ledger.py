"""
Ledger Service

The four money operations the model can call:
1. record_expense - append to the expense ledger
2. record_income - append to the income ledger
3. total_expenses - sum of all expenses
4. current_balance - incomes minus expenses

Every operation returns a plain string because that string becomes the
content of a tool-result message.

DESIGN DECISION: total_expenses accepts a date range but does NOT apply it.
Entries carry no date, so there is nothing to filter on. The range is
logged and otherwise ignored.
"""

from typing import Optional
from uuid import UUID

import structlog

from finance_assistant.audit import AuditLogger
from finance_assistant.config import AppSettings, get_settings
from finance_assistant.models.ledger import LedgerEntry, LedgerKind, format_amount
from finance_assistant.services.storage import LedgerStorageInterface


class LedgerService:
    """
    Owns the two ledgers of a session.

    Nothing here can fail under valid input: no validation of sign or
    magnitude is performed.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().app
        self._logger = structlog.get_logger(__name__)

    async def record_expense(
        self,
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """Append an expense and return a confirmation."""
        entry = LedgerEntry(label=label, amount=amount)
        await self._storage.append(LedgerKind.EXPENSE, entry)

        if self._audit_logger:
            await self._audit_logger.log_expense_recorded(
                label=entry.label,
                amount=entry.amount,
                correlation_id=correlation_id,
            )

        return f"Expense added. Name: {entry.label} & Amount: {format_amount(entry.amount)}"

    async def record_income(
        self,
        label: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """Append an income and return a confirmation."""
        entry = LedgerEntry(label=label, amount=amount)
        await self._storage.append(LedgerKind.INCOME, entry)

        if self._audit_logger:
            await self._audit_logger.log_income_recorded(
                label=entry.label,
                amount=entry.amount,
                correlation_id=correlation_id,
            )

        return f"New Income added. Name: {entry.label} & Amount: {format_amount(entry.amount)}"

    async def total_expenses(
        self,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> str:
        """
        Sum every expense, e.g. "350BDT (Bangladeshi Tk)".

        The range arguments are accepted for the tool contract only.
        """
        if date_from or date_to:
            self._logger.debug(
                "expense_range_ignored",
                date_from=date_from,
                date_to=date_to,
            )

        total = await self._sum(LedgerKind.EXPENSE)
        return (
            f"{format_amount(total)}{self._settings.currency_code} "
            f"({self._settings.currency_label})"
        )

    async def current_balance(self) -> str:
        """Incomes minus expenses, e.g. "Total Balance: 4850BDT"."""
        income = await self._sum(LedgerKind.INCOME)
        expense = await self._sum(LedgerKind.EXPENSE)
        return f"Total Balance: {format_amount(income - expense)}{self._settings.currency_code}"

    async def _sum(self, kind: LedgerKind) -> float:
        """Insertion-order sum; an empty ledger sums to zero."""
        total = 0.0
        for entry in await self._storage.list_entries(kind):
            total += entry.amount
        return total
