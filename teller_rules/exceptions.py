"""Custom exception hierarchy for teller-rules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from teller_rules.models.base import RuleViolation


class TellerRulesError(Exception):
    """Base exception for all teller-rules errors."""


class ValidationError(TellerRulesError):
    """Raised when a request breaks one or more business rules.

    Carries every violation found so callers can render a field-keyed
    error map.
    """

    def __init__(self, violations: Iterable[RuleViolation]) -> None:
        self.violations = list(violations)
        message = "; ".join(v.message for v in self.violations) or "Validation failed"
        super().__init__(message)

    @property
    def errors(self) -> dict[str, str]:
        """First message per field."""
        errors: dict[str, str] = {}
        for violation in self.violations:
            errors.setdefault(violation.field, violation.message)
        return errors


class EntityNotFoundError(TellerRulesError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class ConflictError(TellerRulesError):
    """Raised when a commit loses a race against a concurrent change."""


class InvariantViolation(TellerRulesError):
    """Raised when stored data breaks a structural invariant."""


class ConfigurationError(TellerRulesError):
    """Raised when configuration is invalid or missing."""
