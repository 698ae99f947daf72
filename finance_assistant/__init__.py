"""
Finance Assistant - Source Package

A conversational personal finance assistant that runs in the terminal.
The user talks to a hosted LLM; the LLM records expenses and incomes
and answers balance questions by calling a small set of local tools.

DESIGN PRINCIPLES:
1. The LLM never does arithmetic - the ledger does
2. Conversation history is resubmitted verbatim
3. Every step is logged
4. Ledger storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Assistant Team"
