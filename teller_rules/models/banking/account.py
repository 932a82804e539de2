"""Savings account model for banking domain."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from teller_rules.models.banking.enums import AccountStatus, PlanType
from teller_rules.models.banking.plan import SavingsPlan


@dataclass
class Account:
    """Savings account entity.

    ``holder_ids`` is ordered: index 0 is the primary holder. Non-Joint
    accounts have exactly one holder, Joint accounts two or more.
    """

    account_id: int
    holder_ids: list[int]
    plan: SavingsPlan
    balance: Decimal
    status: AccountStatus
    open_date: date
    fd_id: int | None = None
    branch_id: int | None = None
    closed_date: date | None = None
    plan_history: list[int] = field(default_factory=list)  # previous plan ids

    @property
    def holder_count(self) -> int:
        return len(self.holder_ids)

    @property
    def primary_holder_id(self) -> int | None:
        return self.holder_ids[0] if self.holder_ids else None

    @property
    def is_joint(self) -> bool:
        return self.plan.plan_type == PlanType.JOINT

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE
