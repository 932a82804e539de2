"""Domain models for the teller rules engine."""

from teller_rules.models.base import Decision, RuleViolation

__all__ = ["Decision", "RuleViolation"]
