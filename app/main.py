"""
Command-Line Frontend for Finance Assistant

This is the interface the user talks to:

    USER: I bought coffee for 150 taka
    Assistant: Done! I've added your coffee expense of 150 BDT.
    USER: bye

DESIGN PRINCIPLES:
1. stdout carries the conversation and nothing else
2. Logs and errors go to stderr
3. Any unhandled error ends the session: it is logged once, here,
   and the process exits with a non-zero status
"""

import asyncio
import sys

import structlog

from finance_assistant.audit import AuditLogger, configure_logging
from finance_assistant.config import get_settings
from finance_assistant.orchestrator import create_app_components


logger = structlog.get_logger("finance_assistant.app")


def run_session() -> int:
    """Build the components and run one interactive session."""
    session = create_app_components()
    return session.run()


def main() -> int:
    """Main application entry point."""
    try:
        app_settings = get_settings().app
        configure_logging(level=app_settings.log_level, log_format=app_settings.log_format)
        run_session()
    except KeyboardInterrupt:
        logger.info("session_interrupted")
        return 130
    except Exception as e:
        logger.exception("session_failed", error_type=type(e).__name__)
        asyncio.run(
            AuditLogger().log_error(
                error_type=type(e).__name__,
                error_message=str(e),
            )
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
