"""
DOMAIN LAYER - Chat entities and rules

This layer contains:
- Entities: Dialog, Participant, Message, MessageReaction, ReadReceipt
- Value Objects: DialogId, MessageId, UserId, enums, query criteria
- Ports: Interfaces that infrastructure implements
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no Prisma, Pydantic, dishka)
2. NO I/O operations
3. Only depends on Python stdlib
"""
