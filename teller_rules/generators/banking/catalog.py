"""Default savings and fixed-deposit plan catalogs."""

from decimal import Decimal

from teller_rules.models.banking import FdPlan, FdTerm, PlanType, SavingsPlan

# plan_type: (interest %, minimum balance LKR)
SAVINGS_PLAN_TERMS = {
    PlanType.CHILDREN: (Decimal("12"), Decimal("0")),
    PlanType.TEEN: (Decimal("11"), Decimal("500")),
    PlanType.ADULT: (Decimal("10"), Decimal("1000")),
    PlanType.SENIOR: (Decimal("13"), Decimal("1000")),
    PlanType.JOINT: (Decimal("7"), Decimal("5000")),
}

FD_PLAN_RATES = {
    FdTerm.SIX_MONTHS: Decimal("13"),
    FdTerm.ONE_YEAR: Decimal("14"),
    FdTerm.THREE_YEARS: Decimal("15"),
}


def default_savings_catalog() -> list[SavingsPlan]:
    """One plan per type, ids in declaration order starting at 1."""
    return [
        SavingsPlan(plan_id=i, plan_type=plan_type, interest_rate=rate, min_balance=min_balance)
        for i, (plan_type, (rate, min_balance)) in enumerate(SAVINGS_PLAN_TERMS.items(), start=1)
    ]


def default_fd_catalog() -> list[FdPlan]:
    return [
        FdPlan(fd_plan_id=i, term=term, interest_rate=rate)
        for i, (term, rate) in enumerate(FD_PLAN_RATES.items(), start=1)
    ]
