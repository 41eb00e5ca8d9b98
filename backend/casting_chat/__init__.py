"""
casting_chat - messaging core of the casting marketplace.

Dialogs, participants, messages, reactions and read receipts, with
post-commit notification fan-out.
"""
