"""Dependency injection setup."""

from casting_chat.setup.ioc.container import create_container

__all__ = ["create_container"]
