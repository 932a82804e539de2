"""Plan change request value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanChangeRequest:
    """Operator request to move an account onto another savings plan.

    Never persisted; lives for one validate-and-apply cycle.
    """

    account_id: int
    new_plan_id: int
    reason: str
    new_nic: str | None = None
