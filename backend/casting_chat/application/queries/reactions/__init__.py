"""Reaction queries."""

from .get_message_reactions import GetMessageReactionsQuery, GetMessageReactionsHandler

__all__ = ["GetMessageReactionsQuery", "GetMessageReactionsHandler"]
