"""Fixed deposit eligibility and maturity projection.

Maturity uses simple interest over the plan's fixed term::

    maturity_amount = principal * (1 + rate / 100 * years)

with ``years`` of 0.5, 1 or 3. Unknown terms fall back to the six month
rule for both the date and the amount.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from dateutil.relativedelta import relativedelta

from teller_rules.models.banking import (
    Account,
    Customer,
    FdPlan,
    FdTerm,
    FixedDepositApproval,
    PlanType,
)
from teller_rules.models.base import Decision, RuleViolation
from teller_rules.rules.age import ADULT_AGE, age, to_date
from teller_rules.rules.lifecycle import check_account_invariants
from teller_rules.rules.money import CENT, as_decimal, format_amount, quantize

logger = logging.getLogger(__name__)

FD_MINIMUM_AGE = ADULT_AGE

# Under-18 and shared plans never host a fixed deposit
INELIGIBLE_PLAN_TYPES = frozenset({PlanType.CHILDREN, PlanType.TEEN, PlanType.JOINT})

_TERM_DELTAS = {
    FdTerm.SIX_MONTHS: relativedelta(months=6),
    FdTerm.ONE_YEAR: relativedelta(years=1),
    FdTerm.THREE_YEARS: relativedelta(years=3),
}

_TERM_YEARS = {
    FdTerm.SIX_MONTHS: Decimal("0.5"),
    FdTerm.ONE_YEAR: Decimal("1"),
    FdTerm.THREE_YEARS: Decimal("3"),
}


def _coerce_term(term: FdTerm | str) -> FdTerm:
    try:
        return FdTerm(term)
    except ValueError:
        logger.debug("Unknown FD term %r, using %s", term, FdTerm.SIX_MONTHS.value)
        return FdTerm.SIX_MONTHS


def term_years(term: FdTerm | str) -> Decimal:
    """Duration of a term in years (0.5, 1 or 3)."""
    return _TERM_YEARS[_coerce_term(term)]


def maturity_date(open_date: date | str, term: FdTerm | str) -> date:
    """Add the term in calendar months/years to ``open_date``.

    Month ends clamp, so 2024-08-31 plus six months is 2025-02-28.
    """
    return to_date(open_date) + _TERM_DELTAS[_coerce_term(term)]


def maturity_amount(
    principal: Decimal | int | float | str,
    annual_rate_percent: Decimal | int | float | str,
    term: FdTerm | str,
    quantum: Decimal = CENT,
) -> Decimal:
    """Principal plus simple interest for the term, rounded to ``quantum``."""
    amount = as_decimal(principal) * (1 + as_decimal(annual_rate_percent) / 100 * term_years(term))
    return quantize(amount, quantum)


def max_fd_principal(account: Account) -> Decimal:
    """Largest principal that leaves the savings plan's minimum balance behind."""
    return account.balance - account.plan.min_balance


def _host_violations(customer: Customer, account: Account) -> list[RuleViolation]:
    """Reasons ``account`` cannot host a new FD for ``customer``."""
    violations: list[RuleViolation] = []

    def reject(message: str, rule: str, **details: object) -> None:
        violations.append(RuleViolation(field="account_id", message=message, rule=rule, details=details))

    if customer.customer_id not in account.holder_ids:
        reject(
            f"Account {account.account_id} does not belong to customer {customer.customer_id}",
            "account_not_owned",
        )
    if not account.is_active:
        reject(f"Account {account.account_id} is {account.status.value}", "account_not_active")
    if account.fd_id is not None:
        reject(
            "This savings account already has a fixed deposit. One FD per savings account is allowed.",
            "account_has_fd",
            fd_id=account.fd_id,
        )
    if account.plan.plan_type == PlanType.JOINT:
        reject("Joint accounts are not eligible for fixed deposits.", "joint_account")
    elif account.plan.plan_type in INELIGIBLE_PLAN_TYPES:
        reject(
            f"{account.plan.plan_type.value} accounts are not eligible for fixed deposits.",
            "minor_plan",
        )
    if account.holder_count > 1:
        reject("Accounts with multiple holders are not eligible for fixed deposits.", "multiple_holders")
    if account.balance <= 0:
        reject("Account has insufficient balance", "no_balance")
    return violations


def is_eligible_fd_host(customer: Customer, account: Account) -> bool:
    return not _host_violations(customer, account)


def eligible_accounts_for_fd(customer: Customer, all_accounts: Iterable[Account]) -> list[Account]:
    """Accounts of ``customer`` that may host a new fixed deposit.

    Ownership is decided by customer id through the holder relation,
    never by display name.
    """
    eligible = []
    for account in all_accounts:
        if customer.customer_id not in account.holder_ids:
            continue
        check_account_invariants(account)
        if is_eligible_fd_host(customer, account):
            eligible.append(account)
    return eligible


def validate_new_fd(
    customer: Customer,
    account: Account,
    plan: FdPlan | None,
    principal: Decimal | int | float | str,
    *,
    as_of: date | str | None = None,
    auto_renewal: bool = False,
    currency: str = "LKR",
    quantum: Decimal = CENT,
) -> Decision[FixedDepositApproval]:
    """Decide whether an FD of ``principal`` may be opened against ``account``.

    Parameters
    ----------
    customer : Customer
        Depositor; must be at least 18.
    account : Account
        Savings account funding the deposit.
    plan : FdPlan | None
        Requested FD plan (term and rate).
    principal : Decimal | int | float | str
        Amount moved from the savings account into the FD.
    as_of : date | str | None
        Open date and age reference (default: today).
    auto_renewal : bool
        Renew automatically on maturity.
    currency : str
        Currency label used in messages.
    quantum : Decimal
        Rounding step for the maturity amount.

    Returns
    -------
    Decision[FixedDepositApproval]
        Approval with maturity figures, or every violated rule.
    """
    check_account_invariants(account)
    open_date = to_date(as_of) if as_of is not None else date.today()
    amount = as_decimal(principal)
    violations: list[RuleViolation] = []

    customer_age = age(customer.date_of_birth, open_date)
    if customer_age < FD_MINIMUM_AGE:
        violations.append(RuleViolation(
            field="customer_id",
            message=f"Customer must be at least {FD_MINIMUM_AGE} years old for Fixed Deposit",
            rule="fd_min_age",
            details={"required_age": FD_MINIMUM_AGE, "actual_age": customer_age},
        ))

    violations.extend(_host_violations(customer, account))

    if plan is None:
        violations.append(RuleViolation(
            field="fd_plan_id",
            message="Please select a FD plan",
            rule="fd_plan_required",
        ))

    available = max_fd_principal(account)
    if amount <= 0:
        violations.append(RuleViolation(
            field="principal_amount",
            message="Principal amount must be greater than 0",
            rule="principal_not_positive",
        ))
    elif amount > available:
        violations.append(RuleViolation(
            field="principal_amount",
            message=(
                f"Insufficient balance. Maximum FD amount: {format_amount(max(available, Decimal(0)), currency)} "
                f"(Minimum balance of {format_amount(account.plan.min_balance, currency)} must remain "
                f"in savings account for {account.plan.plan_type.value} plan)"
            ),
            rule="principal_exceeds_available",
            details={"max_amount": available, "min_balance": account.plan.min_balance},
        ))

    if violations:
        logger.debug("FD on account %s rejected: %s", account.account_id, [v.rule for v in violations])
        return Decision.reject(violations)

    return Decision.approve(FixedDepositApproval(
        customer_id=customer.customer_id,
        account_id=account.account_id,
        plan=plan,  # type: ignore[arg-type]
        principal=amount,
        open_date=open_date,
        maturity_date=maturity_date(open_date, plan.term),  # type: ignore[union-attr]
        maturity_amount=maturity_amount(amount, plan.interest_rate, plan.term, quantum),  # type: ignore[union-attr]
        remaining_balance=account.balance - amount,
        auto_renewal=auto_renewal,
    ))
