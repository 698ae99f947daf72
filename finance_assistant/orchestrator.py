"""
Main Orchestrator for Finance Assistant

This module ties together all the components and defines the
interactive chat session:

    read line -> "bye"? stop : agent.respond(line) -> print answer -> repeat

DESIGN DECISION: The orchestrator owns only the outer loop.
The inner request/dispatch loop lives in FinanceAgent, the ledger in
LedgerService. Input and output are injected so the whole session can
run in tests without a terminal.

Lines are read synchronously on the main thread, between turns, while no
event loop is running. One asyncio.Runner keeps the same loop (and so the
same HTTP client) for every turn. Ctrl-C at the prompt therefore raises
KeyboardInterrupt straight out of input(), and Ctrl-C during a request
cancels the running turn.
"""

import asyncio
from typing import Callable, Optional

from finance_assistant.agents import FinanceAgent
from finance_assistant.audit import AuditLogger, create_correlation_id
from finance_assistant.config import Settings, get_settings
from finance_assistant.services import InMemoryLedgerStorage, LedgerService
from finance_assistant.tools import ToolExecutor


USER_PROMPT = "USER: "
ASSISTANT_PREFIX = "Assistant: "

LineReader = Callable[[str], str]
LineWriter = Callable[[str], None]


class ChatSession:
    """
    Orchestrates the outer input loop.

    Flow per line:
    1. Exit command -> end the session, print nothing, add nothing to history
    2. Anything else -> run one agent turn, print "Assistant: <answer>"

    End of input behaves like the exit command. Errors from the agent
    are not handled here; they end the session at the entry point.
    """

    def __init__(
        self,
        agent: FinanceAgent,
        audit_logger: Optional[AuditLogger] = None,
        exit_command: str = "bye",
        read_line: Optional[LineReader] = None,
        write: Optional[LineWriter] = None,
    ):
        self._agent = agent
        self._audit_logger = audit_logger
        self._exit_command = exit_command
        self._read_line = read_line or input
        self._write = write or print
        self._turns = 0

    @property
    def agent(self) -> FinanceAgent:
        return self._agent

    def run(self) -> int:
        """
        Run until the exit command or end of input.

        Returns:
            Number of completed user turns
        """
        with asyncio.Runner() as runner:
            runner.run(self._started())

            while True:
                try:
                    line = self._read_line(USER_PROMPT)
                except EOFError:
                    reason = "end_of_input"
                    break

                if line == self._exit_command:
                    reason = "exit_command"
                    break

                runner.run(self.handle_line(line))

            runner.run(self._ended(reason))

        return self._turns

    async def handle_line(self, line: str) -> str:
        """Run one agent turn for a user line and print the answer."""
        correlation_id = create_correlation_id()
        if self._audit_logger:
            await self._audit_logger.log_user_message(
                text=line,
                correlation_id=correlation_id,
            )

        answer = await self._agent.respond(line, correlation_id)
        self._write(f"{ASSISTANT_PREFIX}{answer}")
        self._turns += 1

        if self._audit_logger:
            await self._audit_logger.log_response_displayed(
                length=len(answer),
                correlation_id=correlation_id,
            )
        return answer

    async def _started(self) -> None:
        if self._audit_logger:
            await self._audit_logger.log_session_started(
                exit_command=self._exit_command,
            )

    async def _ended(self, reason: str) -> None:
        if self._audit_logger:
            await self._audit_logger.log_session_ended(
                turns=self._turns,
                reason=reason,
            )


def create_app_components(
    settings: Optional[Settings] = None,
    read_line: Optional[LineReader] = None,
    write: Optional[LineWriter] = None,
) -> ChatSession:
    """
    Factory function to create a fully wired chat session.

    Every call returns fresh, empty ledgers and a fresh history.
    The completion client is created on first use, so a missing
    API key only fails when the first question is sent.
    """
    settings = settings or get_settings()
    app_settings = settings.app

    audit_logger = AuditLogger()
    storage = InMemoryLedgerStorage()
    ledger = LedgerService(
        storage=storage,
        audit_logger=audit_logger,
        settings=app_settings,
    )
    executor = ToolExecutor(
        ledger=ledger,
        audit_logger=audit_logger,
        report_errors=app_settings.report_tool_errors,
    )
    agent = FinanceAgent(
        executor=executor,
        app_settings=app_settings,
        audit_logger=audit_logger,
    )

    return ChatSession(
        agent=agent,
        audit_logger=audit_logger,
        exit_command=app_settings.exit_command,
        read_line=read_line,
        write=write,
    )
