# core/exceptions.py
from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CyclicDependencyError(BusinessRuleError):
    """Raised when a task set cannot be ordered because its dependencies loop."""
    def __init__(self, cycle: Sequence[str], *, code: str = "SCHEDULE_CYCLE"):
        self.cycle: list[str] = list(cycle)
        chain = " -> ".join(self.cycle + self.cycle[:1]) if self.cycle else "?"
        super().__init__(
            f"Cannot compute critical path: circular dependency detected ({chain}).",
            code=code,
        )
