"""Account and fixed-deposit status transitions.

Both state machines are tiny and terminal::

    Account:  Active -> Closed
    FD:       Active -> Matured | Closed

Any other transition is a programming or data error and raises
``InvariantViolation``. Operator requests that would need one are
rejected earlier by ``validate_account_closure`` / ``validate_fd_closure``.
"""

import logging
from datetime import date

from teller_rules.exceptions import InvariantViolation
from teller_rules.models.banking import (
    Account,
    AccountClosureApproval,
    AccountStatus,
    FdStatus,
    FixedDeposit,
    FixedDepositClosureApproval,
)
from teller_rules.models.base import Decision, RuleViolation

logger = logging.getLogger(__name__)

ACCOUNT_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.ACTIVE: frozenset({AccountStatus.CLOSED}),
    AccountStatus.CLOSED: frozenset(),
}

FD_TRANSITIONS: dict[FdStatus, frozenset[FdStatus]] = {
    FdStatus.ACTIVE: frozenset({FdStatus.MATURED, FdStatus.CLOSED}),
    FdStatus.MATURED: frozenset(),
    FdStatus.CLOSED: frozenset(),
}


def can_transition_account(current: AccountStatus, target: AccountStatus) -> bool:
    return target in ACCOUNT_TRANSITIONS.get(current, frozenset())


def can_transition_fd(current: FdStatus, target: FdStatus) -> bool:
    return target in FD_TRANSITIONS.get(current, frozenset())


def transition_account_status(account: Account, target: AccountStatus) -> AccountStatus:
    """Check ``account.status -> target`` against the transition table."""
    if not can_transition_account(account.status, target):
        logger.error(
            "Illegal account transition %s -> %s on account %s",
            account.status.value, target.value, account.account_id,
        )
        raise InvariantViolation(
            f"Account {account.account_id} cannot move from {account.status.value} to {target.value}"
        )
    return target


def transition_fd_status(fd: FixedDeposit, target: FdStatus) -> FdStatus:
    """Check ``fd.status -> target`` against the transition table."""
    if not can_transition_fd(fd.status, target):
        logger.error(
            "Illegal FD transition %s -> %s on FD %s",
            fd.status.value, target.value, fd.fd_id,
        )
        raise InvariantViolation(
            f"Fixed deposit {fd.fd_id} cannot move from {fd.status.value} to {target.value}"
        )
    return target


def check_account_invariants(account: Account) -> None:
    """Raise ``InvariantViolation`` if the holder structure is malformed.

    A Joint account needs two or more holders; any other plan exactly one.
    Nothing is corrected here.
    """
    if account.is_joint and account.holder_count < 2:
        problem = f"Joint account {account.account_id} has {account.holder_count} holder(s)"
    elif not account.is_joint and account.holder_count != 1:
        problem = (
            f"{account.plan.plan_type.value} account {account.account_id} "
            f"has {account.holder_count} holders"
        )
    elif account.balance < 0 and account.is_active:
        problem = f"Active account {account.account_id} has negative balance {account.balance}"
    else:
        return
    logger.error("Invariant violated: %s", problem)
    raise InvariantViolation(problem)


def validate_account_closure(
    account: Account,
    as_of: date | None = None,
) -> Decision[AccountClosureApproval]:
    """Decide whether an account may be deactivated.

    An account with a linked FD must have the FD closed first.
    """
    violations: list[RuleViolation] = []
    if not account.is_active:
        violations.append(RuleViolation(
            field="account_id",
            message=f"Account {account.account_id} is already {account.status.value}",
            rule="account_not_active",
        ))
    if account.fd_id is not None:
        violations.append(RuleViolation(
            field="account_id",
            message=(
                f"Account {account.account_id} has an active fixed deposit "
                f"(FD {account.fd_id}); close the fixed deposit first"
            ),
            rule="account_has_fd",
            details={"fd_id": account.fd_id},
        ))
    if violations:
        return Decision.reject(violations)
    return Decision.approve(AccountClosureApproval(
        account_id=account.account_id,
        payout=account.balance,
        closed_date=as_of or date.today(),
    ))


def validate_fd_closure(
    fd: FixedDeposit,
    account: Account,
    as_of: date | None = None,
) -> Decision[FixedDepositClosureApproval]:
    """Decide whether an FD may be deactivated, refunding its principal."""
    violations: list[RuleViolation] = []
    if not fd.is_active:
        violations.append(RuleViolation(
            field="fd_id",
            message=f"Fixed deposit {fd.fd_id} is already {fd.status.value}",
            rule="fd_not_active",
        ))
    if fd.account_id != account.account_id:
        violations.append(RuleViolation(
            field="account_id",
            message=f"Fixed deposit {fd.fd_id} is not linked to account {account.account_id}",
            rule="fd_account_mismatch",
        ))
    elif not account.is_active:
        violations.append(RuleViolation(
            field="account_id",
            message=f"Linked account {account.account_id} is {account.status.value}",
            rule="account_not_active",
        ))
    if violations:
        return Decision.reject(violations)
    return Decision.approve(FixedDepositClosureApproval(
        fd_id=fd.fd_id,
        account_id=account.account_id,
        refund=fd.principal,
        closed_date=as_of or date.today(),
    ))
