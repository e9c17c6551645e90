"""Core domain layer - entities, interfaces, services and exceptions."""

from billwise.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
