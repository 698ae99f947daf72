"""Tests for tool declarations and the tool executor."""

from unittest.mock import AsyncMock, patch

import pytest

from finance_assistant.audit import AuditLogger
from finance_assistant.models.conversation import FunctionCall, ToolCall
from finance_assistant.models.ledger import LedgerKind
from finance_assistant.tools import (
    TOOL_DEFINITIONS,
    LedgerTool,
    ToolArgumentsError,
    ToolExecutor,
    UnknownToolError,
)


def tool_call(name: str, arguments: str = "{}", call_id: str = "call_1") -> ToolCall:
    return ToolCall(id=call_id, function=FunctionCall(name=name, arguments=arguments))


class TestToolDefinitions:
    """Tests for the static tool declarations."""

    def test_declares_exactly_four_tools(self):
        names = [tool["function"]["name"] for tool in TOOL_DEFINITIONS]
        assert names == ["getTotalExpenses", "addExpanse", "addIncome", "getMoneyBalance"]

    def test_every_declaration_matches_enum(self):
        names = {tool["function"]["name"] for tool in TOOL_DEFINITIONS}
        assert names == {tool.value for tool in LedgerTool}

    def test_entry_tools_take_name_and_amount(self):
        by_name = {tool["function"]["name"]: tool["function"] for tool in TOOL_DEFINITIONS}
        for name in ("addExpanse", "addIncome"):
            properties = by_name[name]["parameters"]["properties"]
            assert properties["name"]["type"] == "string"
            assert properties["amount"]["type"] == "number"

    def test_balance_tool_has_no_parameters(self):
        by_name = {tool["function"]["name"]: tool["function"] for tool in TOOL_DEFINITIONS}
        assert "parameters" not in by_name["getMoneyBalance"]

    def test_from_name(self):
        assert LedgerTool.from_name("addIncome") is LedgerTool.ADD_INCOME
        assert LedgerTool.from_name("addExpense") is None


class TestToolExecutor:
    """Tests for argument parsing and dispatch."""

    @pytest.mark.asyncio
    async def test_add_expense(self, executor, storage):
        result = await executor.execute(tool_call("addExpanse", '{"name": "Coffee", "amount": 150}'))
        assert result == "Expense added. Name: Coffee & Amount: 150"
        assert await storage.count(LedgerKind.EXPENSE) == 1

    @pytest.mark.asyncio
    async def test_add_income(self, executor, storage):
        result = await executor.execute(tool_call("addIncome", '{"amount": 5000, "name": "Salary"}'))
        assert result == "New Income added. Name: Salary & Amount: 5000"
        assert await storage.count(LedgerKind.INCOME) == 1

    @pytest.mark.asyncio
    async def test_get_total_expenses(self, executor):
        await executor.execute(tool_call("addExpanse", '{"name": "a", "amount": 100}'))
        await executor.execute(tool_call("addExpanse", '{"name": "b", "amount": 250}'))
        result = await executor.execute(
            tool_call("getTotalExpenses", '{"from": "2024-01-01", "to": "2024-12-31"}')
        )
        assert result == "350BDT (Bangladeshi Tk)"

    @pytest.mark.asyncio
    async def test_get_total_expenses_without_range(self, executor):
        assert await executor.execute(tool_call("getTotalExpenses", "{}")) == "0BDT (Bangladeshi Tk)"

    @pytest.mark.asyncio
    async def test_get_money_balance(self, executor):
        await executor.execute(tool_call("addExpanse", '{"name": "Coffee", "amount": 150}'))
        await executor.execute(tool_call("addIncome", '{"name": "Salary", "amount": 5000}'))
        assert await executor.execute(tool_call("getMoneyBalance")) == "Total Balance: 4850BDT"

    @pytest.mark.asyncio
    async def test_get_money_balance_ignores_payload(self, executor):
        """The balance tool never reads its arguments."""
        assert await executor.execute(tool_call("getMoneyBalance", "")) == "Total Balance: 0BDT"

    @pytest.mark.asyncio
    async def test_unknown_tool_returns_empty_result(self, executor, storage):
        result = await executor.execute(tool_call("transferMoney", '{"amount": 1}'))
        assert result == ""
        assert await storage.count(LedgerKind.EXPENSE) == 0

    @pytest.mark.asyncio
    async def test_unknown_tool_is_logged(self, ledger):
        audit_logger = AuditLogger()
        executor = ToolExecutor(ledger=ledger, audit_logger=audit_logger)

        with patch.object(audit_logger, "log_unknown_tool", new_callable=AsyncMock) as logged:
            await executor.execute(tool_call("transferMoney", call_id="call_7"))

        logged.assert_awaited_once()
        assert logged.await_args.kwargs["tool_name"] == "transferMoney"
        assert logged.await_args.kwargs["tool_call_id"] == "call_7"

    @pytest.mark.asyncio
    async def test_unknown_tool_reported_when_enabled(self, ledger):
        executor = ToolExecutor(ledger=ledger, report_errors=True)
        result = await executor.execute(tool_call("transferMoney"))
        assert result == "Error: Unknown tool: transferMoney"

    @pytest.mark.asyncio
    async def test_invalid_json_is_fatal(self, executor):
        with pytest.raises(ToolArgumentsError) as exc_info:
            await executor.execute(tool_call("addExpanse", '{"name": "Coffee", '))
        assert exc_info.value.tool_name == "addExpanse"

    @pytest.mark.asyncio
    async def test_non_object_arguments_read_as_empty(self, executor, storage):
        """Valid JSON that is not an object records a nameless zero entry."""
        result = await executor.execute(tool_call("addIncome", "[1, 2]"))
        assert result == "New Income added. Name:  & Amount: 0"
        assert await storage.count(LedgerKind.INCOME) == 1

    @pytest.mark.asyncio
    async def test_missing_amount_counts_as_zero(self, executor):
        result = await executor.execute(tool_call("addExpanse", '{"name": "Coffee"}'))
        assert result == "Expense added. Name: Coffee & Amount: 0"

        await executor.execute(tool_call("addExpanse", '{"name": "Tea", "amount": 20}'))
        assert await executor.execute(tool_call("getTotalExpenses", "{}")) == "20BDT (Bangladeshi Tk)"

    @pytest.mark.asyncio
    async def test_non_numeric_amount_counts_as_zero(self, executor):
        for amount in ('"lots"', "true", "null", '{"value": 5}'):
            await executor.execute(tool_call("addIncome", f'{{"name": "x", "amount": {amount}}}'))
        assert await executor.execute(tool_call("getMoneyBalance")) == "Total Balance: 0BDT"

    @pytest.mark.asyncio
    async def test_non_text_name_is_stringified(self, executor):
        result = await executor.execute(tool_call("addExpanse", '{"name": 42, "amount": 1}'))
        assert result == "Expense added. Name: 42 & Amount: 1"

    @pytest.mark.asyncio
    async def test_numeric_date_range_is_accepted(self, executor):
        """The range is never applied, so its type does not matter."""
        await executor.execute(tool_call("addExpanse", '{"name": "a", "amount": 100}'))
        result = await executor.execute(
            tool_call("getTotalExpenses", '{"from": 20240101, "to": 20241231}')
        )
        assert result == "100BDT (Bangladeshi Tk)"

    @pytest.mark.asyncio
    async def test_structured_date_range_is_accepted(self, executor):
        result = await executor.execute(
            tool_call("getTotalExpenses", '{"from": {"year": 2024}, "to": [2024, 12]}')
        )
        assert result == "0BDT (Bangladeshi Tk)"

    @pytest.mark.asyncio
    async def test_invalid_json_reported_when_enabled(self, ledger, storage):
        executor = ToolExecutor(ledger=ledger, report_errors=True)
        result = await executor.execute(tool_call("addExpanse", "not json"))
        assert result.startswith("Error: Arguments for addExpanse are not valid JSON")
        assert await storage.count(LedgerKind.EXPENSE) == 0

    @pytest.mark.asyncio
    async def test_numeric_string_amount_is_coerced(self, executor):
        result = await executor.execute(tool_call("addExpanse", '{"name": "Tea", "amount": "20"}'))
        assert result == "Expense added. Name: Tea & Amount: 20"

    def test_unknown_tool_error_message(self):
        error = UnknownToolError("transferMoney")
        assert error.tool_name == "transferMoney"
        assert str(error) == "Unknown tool: transferMoney"
