"""Savings and fixed-deposit plan catalog models."""

from dataclasses import dataclass
from decimal import Decimal

from teller_rules.models.banking.enums import FdTerm, PlanType


@dataclass(frozen=True)
class SavingsPlan:
    """Savings plan reference data. Read-only to the rules engine."""

    plan_id: int
    plan_type: PlanType
    interest_rate: Decimal  # annual, percent
    min_balance: Decimal


@dataclass(frozen=True)
class FdPlan:
    """Fixed-deposit plan reference data."""

    fd_plan_id: int
    term: FdTerm
    interest_rate: Decimal  # annual, percent
