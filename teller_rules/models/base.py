"""Decision values shared across rule modules."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from teller_rules.exceptions import ValidationError

ApprovalT = TypeVar("ApprovalT")


@dataclass(frozen=True)
class RuleViolation:
    """A single broken business rule.

    ``field`` is the machine-readable key of the input at fault (for
    example ``customer_id`` or ``principal_amount``); ``rule`` is a stable
    code for the rule itself; ``details`` carries the numbers behind the
    message (required and actual age, maximum allowed amount, ...).
    """

    field: str
    message: str
    rule: str = ""
    details: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass
class Decision(Generic[ApprovalT]):
    """Outcome of a validation call: an approval or the violations found."""

    approval: ApprovalT | None = None
    violations: list[RuleViolation] = field(default_factory=list)

    @classmethod
    def approve(cls, approval: ApprovalT) -> "Decision[ApprovalT]":
        return cls(approval=approval)

    @classmethod
    def reject(cls, violations: list[RuleViolation]) -> "Decision[ApprovalT]":
        return cls(violations=list(violations))

    @property
    def approved(self) -> bool:
        return self.approval is not None and not self.violations

    @property
    def errors(self) -> dict[str, str]:
        """Field-keyed error map holding the first message per field."""
        errors: dict[str, str] = {}
        for violation in self.violations:
            errors.setdefault(violation.field, violation.message)
        return errors

    @property
    def fields(self) -> set[str]:
        return {v.field for v in self.violations}

    @property
    def rules(self) -> set[str]:
        return {v.rule for v in self.violations}

    def unwrap(self) -> ApprovalT:
        """Return the approval or raise ``ValidationError``."""
        if not self.approved:
            raise ValidationError(self.violations)
        return self.approval  # type: ignore[return-value]
