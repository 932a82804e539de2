"""Teller workflows: look entities up, run the rules, apply approvals."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Sequence

from teller_rules.config import RulesConfig
from teller_rules.exceptions import ValidationError
from teller_rules.models.banking import (
    Account,
    Customer,
    FixedDeposit,
    PlanChangeRequest,
    SavingsPlan,
)
from teller_rules.models.base import RuleViolation
from teller_rules.rules.account import (
    eligible_target_plans,
    plans_for_customer,
    validate_new_account,
    validate_plan_change,
)
from teller_rules.rules.fixed_deposit import eligible_accounts_for_fd, validate_new_fd
from teller_rules.rules.lifecycle import validate_account_closure, validate_fd_closure
from teller_rules.rules.money import as_decimal
from teller_rules.rules.nic import is_valid_nic
from teller_rules.store.banking import BankDataStore

logger = logging.getLogger(__name__)


class TellerService:
    """Request-level operations behind the teller console.

    Missing entities raise ``EntityNotFoundError``, broken business rules
    raise ``ValidationError`` carrying every violation, and commit races
    raise ``ConflictError`` from the store. Nothing is written unless the
    whole approval is applied.
    """

    def __init__(self, store: BankDataStore, config: RulesConfig | None = None) -> None:
        self.store = store
        self.config = config or RulesConfig()

    def lookup_customer(self, nic: str) -> Customer:
        """Exact NIC / birth certificate lookup."""
        if not is_valid_nic(nic):
            raise ValidationError([RuleViolation(
                field="nic",
                message="Enter a valid NIC/Birth Certificate number: 12 digits or 9 digits followed by V",
                rule="nic_format",
            )])
        return self.store.find_customer_by_nic(nic)

    def eligible_plans(self, customer_id: int, as_of: date | None = None) -> list[SavingsPlan]:
        customer = self.store.get_customer(customer_id)
        return plans_for_customer(customer, self.store.savings_catalog(), as_of=as_of)

    def open_account(
        self,
        customer_ids: Sequence[int],
        plan_id: int,
        initial_deposit: Decimal | int | float | str,
        branch_id: int | None = None,
        as_of: date | None = None,
    ) -> Account:
        """Open a savings account; ``customer_ids[0]`` is the primary holder."""
        customers = [self.store.get_customer(cid) for cid in customer_ids]
        plan = self.store.get_savings_plan(plan_id)
        deposit = _parse_amount(initial_deposit, "initial_deposit")
        decision = validate_new_account(
            customers, plan, deposit, as_of=as_of, currency=self.config.currency
        )
        if not decision.approved:
            logger.info("Account opening for %s rejected: %s", list(customer_ids), decision.errors)
        return self.store.open_account(decision.unwrap(), branch_id=branch_id)

    def plan_change_targets(self, account_id: int) -> list[SavingsPlan]:
        account = self.store.get_account(account_id)
        return eligible_target_plans(account, self.store.savings_catalog())

    def change_plan(self, request: PlanChangeRequest) -> Account:
        """Validate and apply a plan change, replacing the NIC when required."""
        account = self.store.get_account(request.account_id)
        new_plan = self.store.get_savings_plan(request.new_plan_id)
        decision = validate_plan_change(
            account, new_plan, request.reason, self.store.savings_catalog(), new_nic=request.new_nic
        )
        violations = list(decision.violations)
        approval = decision.approval
        if approval is not None and approval.requires_new_nic and not is_valid_nic(approval.new_nic):
            violations.append(RuleViolation(
                field="new_nic",
                message="Enter a valid NIC number: 12 digits or 9 digits followed by V",
                rule="nic_format",
            ))
        if violations:
            logger.info("Plan change on account %d rejected: %s", request.account_id, decision.errors)
            raise ValidationError(violations)
        return self.store.apply_plan_change(approval)  # type: ignore[arg-type]

    def eligible_fd_accounts(self, customer_id: int) -> list[Account]:
        """Accounts of a customer that can host a new FD, matched by id."""
        customer = self.store.get_customer(customer_id)
        return eligible_accounts_for_fd(customer, self.store.get_customer_accounts(customer_id))

    def create_fixed_deposit(
        self,
        customer_id: int,
        account_id: int,
        fd_plan_id: int,
        principal: Decimal | int | float | str,
        auto_renewal: bool = False,
        as_of: date | None = None,
    ) -> FixedDeposit:
        customer = self.store.get_customer(customer_id)
        account = self.store.get_account(account_id)
        plan = self.store.get_fd_plan(fd_plan_id)
        decision = validate_new_fd(
            customer,
            account,
            plan,
            _parse_amount(principal, "principal_amount"),
            as_of=as_of,
            auto_renewal=auto_renewal,
            currency=self.config.currency,
            quantum=self.config.money_quantum,
        )
        if not decision.approved:
            logger.info("FD on account %d rejected: %s", account_id, decision.errors)
        return self.store.open_fixed_deposit(decision.unwrap())

    def deactivate_account(self, account_id: int, as_of: date | None = None) -> Decimal:
        """Close an account with no linked FD; returns the balance paid out."""
        account = self.store.get_account(account_id)
        approval = validate_account_closure(account, as_of=as_of).unwrap()
        self.store.close_account(approval)
        return approval.payout

    def deactivate_fixed_deposit(self, fd_id: int, as_of: date | None = None) -> Account:
        """Close an active FD and return its principal to the savings account."""
        fd = self.store.get_fixed_deposit(fd_id)
        account = self.store.get_account(fd.account_id)
        approval = validate_fd_closure(fd, account, as_of=as_of).unwrap()
        self.store.close_fixed_deposit(approval)
        return account


def _parse_amount(value: Decimal | int | float | str, field: str) -> Decimal:
    """Turn form input into a finite Decimal or raise a field-keyed ``ValidationError``."""
    try:
        amount = as_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        amount = None
    if amount is None or not amount.is_finite():
        raise ValidationError([RuleViolation(
            field=field,
            message="Please enter a valid amount",
            rule="amount_invalid",
            details={"value": value},
        )])
    return amount
