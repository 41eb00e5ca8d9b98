"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and surface to
whatever layer consumes the chat core, which maps them to its own error codes.
"""

from casting_chat.domain.exceptions.entity_not_found import EntityNotFoundError
from casting_chat.domain.exceptions.access_denied import AccessDeniedError
from casting_chat.domain.exceptions.validation_error import DomainValidationError
from casting_chat.domain.exceptions.persistence_error import PersistenceError

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "PersistenceError",
]
