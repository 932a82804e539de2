"""Banking domain models."""

from teller_rules.models.banking.account import Account
from teller_rules.models.banking.approvals import (
    AccountApproval,
    AccountClosureApproval,
    FixedDepositApproval,
    FixedDepositClosureApproval,
    PlanChangeApproval,
)
from teller_rules.models.banking.customer import Customer
from teller_rules.models.banking.enums import (
    AccountStatus,
    FdStatus,
    FdTerm,
    Gender,
    PlanType,
)
from teller_rules.models.banking.fixed_deposit import FixedDeposit
from teller_rules.models.banking.plan import FdPlan, SavingsPlan
from teller_rules.models.banking.plan_change import PlanChangeRequest

__all__ = [
    "Account",
    "AccountApproval",
    "AccountClosureApproval",
    "AccountStatus",
    "Customer",
    "FdPlan",
    "FdStatus",
    "FdTerm",
    "FixedDeposit",
    "FixedDepositApproval",
    "FixedDepositClosureApproval",
    "Gender",
    "PlanChangeApproval",
    "PlanChangeRequest",
    "PlanType",
    "SavingsPlan",
]
