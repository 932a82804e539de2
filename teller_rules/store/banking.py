"""Banking data store with referential integrity and atomic commits."""

import logging
import threading
from dataclasses import dataclass, field, replace

from teller_rules.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ReferentialIntegrityError,
)
from teller_rules.models.banking import (
    Account,
    AccountApproval,
    AccountClosureApproval,
    AccountStatus,
    Customer,
    FdPlan,
    FdStatus,
    FixedDeposit,
    FixedDepositApproval,
    FixedDepositClosureApproval,
    PlanChangeApproval,
    SavingsPlan,
)
from teller_rules.rules.fixed_deposit import max_fd_principal
from teller_rules.rules.lifecycle import (
    check_account_invariants,
    transition_account_status,
    transition_fd_status,
)
from teller_rules.rules.nic import normalize_nic

logger = logging.getLogger(__name__)


@dataclass
class BankDataStore:
    """In-memory store for customers, plans, accounts and fixed deposits.

    Account ownership lives in an explicit account-holder relation table
    keyed by customer id. Commit methods run under a single lock so that
    re-checks at commit time and the writes they guard happen together.
    """

    # Reference data
    customers: dict[int, Customer] = field(default_factory=dict)
    savings_plans: dict[int, SavingsPlan] = field(default_factory=dict)
    fd_plans: dict[int, FdPlan] = field(default_factory=dict)

    # Products
    accounts: dict[int, Account] = field(default_factory=dict)
    fixed_deposits: dict[int, FixedDeposit] = field(default_factory=dict)

    # Relationship indexes
    _account_holders: dict[int, list[int]] = field(default_factory=dict)
    _customer_accounts: dict[int, list[int]] = field(default_factory=dict)
    _nic_index: dict[str, int] = field(default_factory=dict)

    _next_account_id: int = 1
    _next_fd_id: int = 1
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        nic = normalize_nic(customer.nic)
        owner = self._nic_index.get(nic)
        if owner is not None and owner != customer.customer_id:
            raise ConflictError(f"NIC {nic} is already registered to customer {owner}")
        self.customers[customer.customer_id] = replace(customer, nic=nic)
        self._nic_index[nic] = customer.customer_id
        self._customer_accounts.setdefault(customer.customer_id, [])

    def add_savings_plan(self, plan: SavingsPlan) -> None:
        """Add a savings plan to the catalog."""
        self.savings_plans[plan.plan_id] = plan

    def add_fd_plan(self, plan: FdPlan) -> None:
        """Add a fixed-deposit plan to the catalog."""
        self.fd_plans[plan.fd_plan_id] = plan

    def add_account(self, account: Account) -> None:
        """Add an existing account to the store."""
        for customer_id in account.holder_ids:
            if customer_id not in self.customers:
                raise ReferentialIntegrityError(f"Customer {customer_id} not found")
        if account.plan.plan_id not in self.savings_plans:
            raise ReferentialIntegrityError(f"Savings plan {account.plan.plan_id} not found")
        check_account_invariants(account)

        self.accounts[account.account_id] = account
        self._account_holders[account.account_id] = list(account.holder_ids)
        for customer_id in account.holder_ids:
            self._customer_accounts[customer_id].append(account.account_id)
        self._next_account_id = max(self._next_account_id, account.account_id + 1)

    def add_fixed_deposit(self, fd: FixedDeposit) -> None:
        """Add an existing fixed deposit to the store."""
        if fd.account_id not in self.accounts:
            raise ReferentialIntegrityError(f"Account {fd.account_id} not found")
        if fd.fd_plan_id not in self.fd_plans:
            raise ReferentialIntegrityError(f"FD plan {fd.fd_plan_id} not found")

        account = self.accounts[fd.account_id]
        if fd.is_active:
            if account.fd_id is not None and account.fd_id != fd.fd_id:
                raise ConflictError(f"Account {account.account_id} already has FD {account.fd_id}")
            account.fd_id = fd.fd_id
        self.fixed_deposits[fd.fd_id] = fd
        self._next_fd_id = max(self._next_fd_id, fd.fd_id + 1)

    # Lookups
    def get_customer(self, customer_id: int) -> Customer:
        try:
            return self.customers[customer_id]
        except KeyError:
            raise EntityNotFoundError(f"Customer {customer_id} not found") from None

    def find_customer_by_nic(self, nic: str) -> Customer:
        """Exact NIC lookup, case-insensitive."""
        customer_id = self._nic_index.get(normalize_nic(nic))
        if customer_id is None:
            raise EntityNotFoundError(f"Customer with NIC {normalize_nic(nic)} not found")
        return self.customers[customer_id]

    def get_savings_plan(self, plan_id: int) -> SavingsPlan:
        try:
            return self.savings_plans[plan_id]
        except KeyError:
            raise EntityNotFoundError(f"Savings plan {plan_id} not found") from None

    def get_fd_plan(self, fd_plan_id: int) -> FdPlan:
        try:
            return self.fd_plans[fd_plan_id]
        except KeyError:
            raise EntityNotFoundError(f"FD plan {fd_plan_id} not found") from None

    def get_account(self, account_id: int) -> Account:
        try:
            return self.accounts[account_id]
        except KeyError:
            raise EntityNotFoundError(f"Account {account_id} not found") from None

    def get_fixed_deposit(self, fd_id: int) -> FixedDeposit:
        try:
            return self.fixed_deposits[fd_id]
        except KeyError:
            raise EntityNotFoundError(f"Fixed deposit {fd_id} not found") from None

    def get_customer_accounts(self, customer_id: int) -> list[Account]:
        """Get all accounts a customer holds, joint or single."""
        account_ids = self._customer_accounts.get(customer_id, [])
        return [self.accounts[aid] for aid in account_ids]

    def get_account_holders(self, account_id: int) -> list[Customer]:
        """Get the holders of an account, primary first."""
        customer_ids = self._account_holders.get(account_id, [])
        return [self.customers[cid] for cid in customer_ids]

    def savings_catalog(self) -> list[SavingsPlan]:
        return sorted(self.savings_plans.values(), key=lambda p: p.plan_id)

    def fd_catalog(self) -> list[FdPlan]:
        return sorted(self.fd_plans.values(), key=lambda p: p.fd_plan_id)

    # Commits
    def open_account(self, approval: AccountApproval, branch_id: int | None = None) -> Account:
        """Create the account an ``AccountApproval`` describes."""
        with self._lock:
            account = Account(
                account_id=self._next_account_id,
                holder_ids=approval.holder_ids,
                plan=approval.plan,
                balance=approval.initial_deposit,
                status=approval.status,
                open_date=approval.open_date,
                branch_id=branch_id,
            )
            self.add_account(account)
        logger.info(
            "Opened %s account %d for customers %s",
            account.plan.plan_type.value, account.account_id, account.holder_ids,
        )
        return account

    def apply_plan_change(self, approval: PlanChangeApproval) -> Account:
        """Move the account onto its new plan and, if required, replace the NIC.

        Both writes land or neither does.
        """
        with self._lock:
            account = self.get_account(approval.account_id)
            self._require_active(account)
            if account.plan.plan_id != approval.previous_plan_id:
                raise ConflictError(
                    f"Account {account.account_id} plan changed since validation "
                    f"({approval.previous_plan_id} -> {account.plan.plan_id})"
                )
            customer = self.get_customer(approval.customer_id)

            previous_plan = account.plan
            previous_history = list(account.plan_history)
            account.plan = approval.new_plan
            account.plan_history.append(previous_plan.plan_id)
            try:
                if approval.requires_new_nic:
                    self._replace_nic(customer, approval.new_nic or "")
            except Exception:
                account.plan = previous_plan
                account.plan_history = previous_history
                logger.warning("Rolled back plan change on account %d", account.account_id)
                raise

        logger.info(
            "Account %d moved from plan %d to %d (nic replaced: %s)",
            account.account_id, previous_plan.plan_id, approval.new_plan_id, approval.requires_new_nic,
        )
        return account

    def _require_active(self, account: Account) -> None:
        if not account.is_active:
            raise ConflictError(
                f"Account {account.account_id} was {account.status.value.lower()} after validation"
            )

    def _replace_nic(self, customer: Customer, new_nic: str) -> None:
        nic = normalize_nic(new_nic)
        if not nic:
            raise ConflictError(f"No replacement NIC supplied for customer {customer.customer_id}")
        owner = self._nic_index.get(nic)
        if owner is not None and owner != customer.customer_id:
            raise ConflictError(f"NIC {nic} is already registered to customer {owner}")
        updated = replace(customer, nic=nic)
        self._nic_index.pop(customer.nic, None)
        self._nic_index[nic] = customer.customer_id
        self.customers[customer.customer_id] = updated

    def open_fixed_deposit(self, approval: FixedDepositApproval) -> FixedDeposit:
        """Debit the savings account and create the approved FD.

        The account status, the one-FD-per-account rule and the available
        funds are checked again here; losing any of them to a concurrent commit raises
        ``ConflictError`` and writes nothing.
        """
        with self._lock:
            account = self.get_account(approval.account_id)
            self._require_active(account)
            if account.fd_id is not None:
                raise ConflictError(f"Account {account.account_id} already has FD {account.fd_id}")
            if approval.principal > max_fd_principal(account):
                raise ConflictError(
                    f"Account {account.account_id} balance changed; "
                    f"{approval.principal} exceeds available {max_fd_principal(account)}"
                )

            fd = FixedDeposit(
                fd_id=self._next_fd_id,
                account_id=account.account_id,
                fd_plan_id=approval.plan.fd_plan_id,
                principal=approval.principal,
                interest_rate=approval.interest_rate,
                term=approval.term,
                open_date=approval.open_date,
                maturity_date=approval.maturity_date,
                maturity_amount=approval.maturity_amount,
                auto_renewal=approval.auto_renewal,
            )
            account.balance -= approval.principal
            self.add_fixed_deposit(fd)

        logger.info(
            "Opened FD %d on account %d: principal=%s term=%s matures %s",
            fd.fd_id, account.account_id, fd.principal, fd.term.value, fd.maturity_date,
        )
        return fd

    def close_account(self, approval: AccountClosureApproval) -> Account:
        """Deactivate an account."""
        with self._lock:
            account = self.get_account(approval.account_id)
            self._require_active(account)
            if account.fd_id is not None:
                raise ConflictError(f"Account {account.account_id} gained FD {account.fd_id}")
            account.status = transition_account_status(account, AccountStatus.CLOSED)
            account.closed_date = approval.closed_date
        logger.info("Closed account %d, payout %s", account.account_id, approval.payout)
        return account

    def close_fixed_deposit(self, approval: FixedDepositClosureApproval) -> FixedDeposit:
        """Deactivate an FD and return its principal to the savings account."""
        with self._lock:
            fd = self.get_fixed_deposit(approval.fd_id)
            account = self.get_account(approval.account_id)
            fd.status = transition_fd_status(fd, FdStatus.CLOSED)
            fd.closed_date = approval.closed_date
            account.balance += approval.refund
            account.fd_id = None
        logger.info(
            "Closed FD %d, returned %s to account %d", fd.fd_id, approval.refund, account.account_id
        )
        return fd

    def mature_fixed_deposit(self, fd_id: int) -> FixedDeposit:
        """Mark an FD matured and unlink it. Crediting the proceeds is handled elsewhere."""
        with self._lock:
            fd = self.get_fixed_deposit(fd_id)
            fd.status = transition_fd_status(fd, FdStatus.MATURED)
            account = self.accounts.get(fd.account_id)
            if account is not None and account.fd_id == fd.fd_id:
                account.fd_id = None
        logger.info("FD %d matured", fd.fd_id)
        return fd

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "savings_plans": len(self.savings_plans),
            "fd_plans": len(self.fd_plans),
            "accounts": len(self.accounts),
            "active_accounts": sum(1 for a in self.accounts.values() if a.is_active),
            "fixed_deposits": len(self.fixed_deposits),
            "active_fixed_deposits": sum(1 for f in self.fixed_deposits.values() if f.is_active),
        }
