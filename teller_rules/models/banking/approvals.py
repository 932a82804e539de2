"""Approval values produced by the rules engine.

Each approval carries everything the caller needs to persist the change.
Approval and application are separate steps: the engine only decides.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from teller_rules.models.banking.customer import Customer
from teller_rules.models.banking.enums import AccountStatus, FdTerm
from teller_rules.models.banking.plan import FdPlan, SavingsPlan


@dataclass(frozen=True)
class AccountApproval:
    """Approved savings account opening."""

    plan: SavingsPlan
    holders: tuple[Customer, ...]
    initial_deposit: Decimal
    open_date: date
    status: AccountStatus = AccountStatus.ACTIVE

    @property
    def plan_id(self) -> int:
        return self.plan.plan_id

    @property
    def holder_ids(self) -> list[int]:
        return [c.customer_id for c in self.holders]


@dataclass(frozen=True)
class PlanChangeApproval:
    """Approved plan change.

    When ``requires_new_nic`` is set, the plan update and the NIC update
    must be applied together or not at all.
    """

    account_id: int
    customer_id: int
    previous_plan_id: int
    new_plan: SavingsPlan
    reason: str
    requires_new_nic: bool = False
    new_nic: str | None = None

    @property
    def new_plan_id(self) -> int:
        return self.new_plan.plan_id


@dataclass(frozen=True)
class FixedDepositApproval:
    """Approved fixed deposit with its derived figures."""

    customer_id: int
    account_id: int
    plan: FdPlan
    principal: Decimal
    open_date: date
    maturity_date: date
    maturity_amount: Decimal
    remaining_balance: Decimal
    auto_renewal: bool = False

    @property
    def term(self) -> FdTerm:
        return self.plan.term

    @property
    def interest_rate(self) -> Decimal:
        return self.plan.interest_rate


@dataclass(frozen=True)
class AccountClosureApproval:
    """Approved account deactivation. ``payout`` is the balance handed back."""

    account_id: int
    payout: Decimal
    closed_date: date


@dataclass(frozen=True)
class FixedDepositClosureApproval:
    """Approved FD deactivation. ``refund`` returns to the savings account."""

    fd_id: int
    account_id: int
    refund: Decimal
    closed_date: date
