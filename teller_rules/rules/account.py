"""Savings account eligibility and plan-change rules.

Every validator evaluates all of its rules independently and returns the
full set of violations, never stopping at the first one.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from teller_rules.models.banking import (
    Account,
    AccountApproval,
    Customer,
    PlanChangeApproval,
    PlanType,
    SavingsPlan,
)
from teller_rules.models.base import Decision, RuleViolation
from teller_rules.rules.age import ADULT_AGE, age, eligible_plans_for_age, minimum_age_for_plan, to_date
from teller_rules.rules.lifecycle import check_account_invariants
from teller_rules.rules.money import as_decimal, format_amount
from teller_rules.rules.nic import normalize_nic

logger = logging.getLogger(__name__)


def validate_new_account(
    customers: Sequence[Customer],
    plan: SavingsPlan | None,
    initial_deposit: Decimal | int | float | str,
    *,
    as_of: date | str | None = None,
    currency: str = "LKR",
) -> Decision[AccountApproval]:
    """Decide whether a savings account may be opened.

    Parameters
    ----------
    customers : Sequence[Customer]
        Holders in order; index 0 is the primary holder, the rest are
        joint holders.
    plan : SavingsPlan | None
        Requested plan.
    initial_deposit : Decimal | int | float | str
        Opening balance.
    as_of : date | str | None
        Reference date for ages and the open date (default: today).
    currency : str
        Currency label used in messages.

    Returns
    -------
    Decision[AccountApproval]
        Approval carrying the plan and holders, or every violated rule.
    """
    open_date = to_date(as_of) if as_of is not None else date.today()
    deposit = as_decimal(initial_deposit)
    violations: list[RuleViolation] = []

    if not customers:
        violations.append(RuleViolation(
            field="customer_id",
            message="Please select a customer",
            rule="customer_required",
        ))
    elif plan is not None:
        primary_age = age(customers[0].date_of_birth, open_date)
        required = minimum_age_for_plan(plan.plan_type)
        if primary_age < required:
            violations.append(RuleViolation(
                field="customer_id",
                message=(
                    f"{plan.plan_type.value} account requires account holder to be at least "
                    f"{required} years old. Current age: {primary_age}"
                ),
                rule="primary_min_age",
                details={
                    "customer_id": customers[0].customer_id,
                    "plan_type": plan.plan_type.value,
                    "required_age": required,
                    "actual_age": primary_age,
                },
            ))

    if plan is None:
        violations.append(RuleViolation(
            field="saving_plan_id",
            message="Please select a saving plan",
            rule="plan_required",
        ))

    if deposit < 0:
        violations.append(RuleViolation(
            field="initial_deposit",
            message="Initial deposit cannot be negative",
            rule="deposit_negative",
        ))
    elif plan is not None and deposit < plan.min_balance:
        violations.append(RuleViolation(
            field="initial_deposit",
            message=(
                f"Minimum balance for {plan.plan_type.value} plan is "
                f"{format_amount(plan.min_balance, currency)}"
            ),
            rule="deposit_below_min_balance",
            details={"min_balance": plan.min_balance, "initial_deposit": deposit},
        ))

    if plan is not None and plan.plan_type == PlanType.JOINT:
        violations.extend(_joint_holder_violations(customers, open_date))
    elif plan is not None and len(customers) > 1:
        violations.append(RuleViolation(
            field="joint_holders",
            message=f"{plan.plan_type.value} accounts cannot have joint holders",
            rule="joint_holders_not_allowed",
            details={"holder_count": len(customers)},
        ))

    if violations:
        logger.debug("Account opening rejected: %s", [v.rule for v in violations])
        return Decision.reject(violations)

    return Decision.approve(AccountApproval(
        plan=plan,  # type: ignore[arg-type]
        holders=tuple(customers),
        initial_deposit=deposit,
        open_date=open_date,
    ))


def _joint_holder_violations(customers: Sequence[Customer], as_of: date) -> list[RuleViolation]:
    violations: list[RuleViolation] = []
    joint_holders = list(customers[1:])

    if not joint_holders:
        violations.append(RuleViolation(
            field="joint_holders",
            message="Joint account requires at least one joint holder",
            rule="joint_holder_required",
        ))
        return violations

    seen = {customers[0].customer_id}
    for holder in joint_holders:
        if holder.customer_id in seen:
            violations.append(RuleViolation(
                field="joint_holders",
                message=f"Customer {holder.full_name} is already a holder of this account",
                rule="joint_holder_duplicate",
                details={"customer_id": holder.customer_id},
            ))
            break
        seen.add(holder.customer_id)

    for holder in joint_holders:
        holder_age = age(holder.date_of_birth, as_of)
        if holder_age < ADULT_AGE:
            violations.append(RuleViolation(
                field="joint_holders",
                message=(
                    f"Joint holder {holder.full_name} must be at least {ADULT_AGE} years old. "
                    f"Current age: {holder_age}"
                ),
                rule="joint_holder_min_age",
                details={
                    "customer_id": holder.customer_id,
                    "required_age": ADULT_AGE,
                    "actual_age": holder_age,
                },
            ))
            break

    return violations


def plans_for_customer(
    customer: Customer,
    catalog: Iterable[SavingsPlan],
    *,
    as_of: date | str | None = None,
) -> list[SavingsPlan]:
    """Catalog plans a single customer may open, their bracket first then Joint."""
    allowed = eligible_plans_for_age(age(customer.date_of_birth, as_of))
    plans = [p for p in catalog if p.plan_type in allowed]
    return sorted(plans, key=lambda p: p.plan_type == PlanType.JOINT)


def default_plan_for_customer(
    customer: Customer,
    catalog: Iterable[SavingsPlan],
    *,
    as_of: date | str | None = None,
) -> SavingsPlan | None:
    """The single-holder plan matching the customer's age bracket, if offered."""
    for plan in plans_for_customer(customer, catalog, as_of=as_of):
        if plan.plan_type != PlanType.JOINT:
            return plan
    return None


def eligible_target_plans(account: Account, catalog: Iterable[SavingsPlan]) -> list[SavingsPlan]:
    """Plans an existing account may switch to: any non-Joint plan but its own.

    The new plan's age floor is not checked against the holder.
    """
    return [
        p for p in catalog
        if p.plan_type != PlanType.JOINT and p.plan_id != account.plan.plan_id
    ]


def requires_nic_replacement(current_plan: SavingsPlan, new_plan: SavingsPlan) -> bool:
    """Teen to Adult moves replace the birth certificate number with a NIC."""
    return current_plan.plan_type == PlanType.TEEN and new_plan.plan_type == PlanType.ADULT


def validate_plan_change(
    account: Account,
    new_plan: SavingsPlan | None,
    reason: str | None,
    catalog: Iterable[SavingsPlan],
    new_nic: str | None = None,
) -> Decision[PlanChangeApproval]:
    """Decide whether ``account`` may move onto ``new_plan``.

    Parameters
    ----------
    account : Account
        Account to change. Joint accounts are never eligible.
    new_plan : SavingsPlan | None
        Requested plan.
    reason : str | None
        Operator's free-text reason; must be non-blank.
    catalog : Iterable[SavingsPlan]
        Savings plan catalog.
    new_nic : str | None
        Replacement NIC, required for Teen to Adult moves.

    Returns
    -------
    Decision[PlanChangeApproval]
        Approval with the new plan and ``requires_new_nic`` flag, or every
        violated rule.
    """
    check_account_invariants(account)
    violations: list[RuleViolation] = []

    if account.is_joint:
        violations.append(RuleViolation(
            field="account_id",
            message="Joint accounts cannot change plan",
            rule="joint_plan_change",
        ))
    if not account.is_active:
        violations.append(RuleViolation(
            field="account_id",
            message=f"Account {account.account_id} is {account.status.value}",
            rule="account_not_active",
        ))

    targets = {p.plan_id for p in eligible_target_plans(account, catalog)}
    if new_plan is None:
        violations.append(RuleViolation(
            field="new_saving_plan_id",
            message="Please select a new plan",
            rule="plan_required",
        ))
    elif new_plan.plan_id not in targets:
        violations.append(RuleViolation(
            field="new_saving_plan_id",
            message=f"{new_plan.plan_type.value} plan is not an eligible target for this account",
            rule="plan_not_eligible",
            details={"plan_id": new_plan.plan_id},
        ))

    cleaned_reason = (reason or "").strip()
    if not cleaned_reason:
        violations.append(RuleViolation(
            field="reason",
            message="Please provide a reason",
            rule="reason_required",
        ))

    needs_nic = new_plan is not None and requires_nic_replacement(account.plan, new_plan)
    cleaned_nic = normalize_nic(new_nic) if new_nic else ""
    if needs_nic and not cleaned_nic:
        violations.append(RuleViolation(
            field="new_nic",
            message="A new NIC number is required when moving from a Teen to an Adult plan",
            rule="nic_replacement_required",
        ))

    if violations:
        logger.debug("Plan change on account %s rejected: %s",
                     account.account_id, [v.rule for v in violations])
        return Decision.reject(violations)

    return Decision.approve(PlanChangeApproval(
        account_id=account.account_id,
        customer_id=account.primary_holder_id,  # type: ignore[arg-type]
        previous_plan_id=account.plan.plan_id,
        new_plan=new_plan,  # type: ignore[arg-type]
        reason=cleaned_reason,
        requires_new_nic=needs_nic,
        new_nic=cleaned_nic if needs_nic else None,
    ))
