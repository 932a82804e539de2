"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from teller_rules.generators.banking import default_fd_catalog, default_savings_catalog
from teller_rules.models.banking import (
    Account,
    AccountStatus,
    Customer,
    FdPlan,
    FdTerm,
    PlanType,
    SavingsPlan,
)
from teller_rules.store import BankDataStore

AS_OF = date(2024, 6, 1)


def born_aged(years: int, as_of: date = AS_OF) -> date:
    """Birth date making someone exactly ``years`` old on ``as_of``."""
    return as_of.replace(year=as_of.year - years)


def make_customer(customer_id: int, years: int, first_name: str = "Test", nic: str | None = None) -> Customer:
    return Customer(
        customer_id=customer_id,
        first_name=first_name,
        last_name=f"Customer{customer_id}",
        nic=nic or f"{200000000000 + customer_id}",
        date_of_birth=born_aged(years),
    )


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> date:
    """Fixed reference date for age-dependent rules."""
    return AS_OF


@pytest.fixture
def catalog() -> list[SavingsPlan]:
    """Default savings catalog: Children 1, Teen 2, Adult 3, Senior 4, Joint 5."""
    return default_savings_catalog()


@pytest.fixture
def plans(catalog: list[SavingsPlan]) -> dict[PlanType, SavingsPlan]:
    return {p.plan_type: p for p in catalog}


@pytest.fixture
def fd_plans() -> dict[FdTerm, FdPlan]:
    return {p.term: p for p in default_fd_catalog()}


@pytest.fixture
def adult() -> Customer:
    return make_customer(1, 30, first_name="Nimal")


@pytest.fixture
def teen() -> Customer:
    return make_customer(2, 15, first_name="Kasun", nic="200912345678")


@pytest.fixture
def adult_account(adult: Customer, plans: dict[PlanType, SavingsPlan]) -> Account:
    """Adult plan account with LKR 50,000 (min balance 1,000)."""
    return Account(
        account_id=100,
        holder_ids=[adult.customer_id],
        plan=plans[PlanType.ADULT],
        balance=Decimal("50000.00"),
        status=AccountStatus.ACTIVE,
        open_date=date(2020, 1, 1),
    )


@pytest.fixture
def teen_account(teen: Customer, plans: dict[PlanType, SavingsPlan]) -> Account:
    return Account(
        account_id=200,
        holder_ids=[teen.customer_id],
        plan=plans[PlanType.TEEN],
        balance=Decimal("2500.00"),
        status=AccountStatus.ACTIVE,
        open_date=date(2022, 1, 1),
    )


@pytest.fixture
def store(
    catalog: list[SavingsPlan],
    fd_plans: dict[FdTerm, FdPlan],
    adult: Customer,
    teen: Customer,
    adult_account: Account,
    teen_account: Account,
) -> BankDataStore:
    """Store with the default catalogs, two customers and their accounts."""
    store = BankDataStore()
    for plan in catalog:
        store.add_savings_plan(plan)
    for fd_plan in fd_plans.values():
        store.add_fd_plan(fd_plan)
    store.add_customer(adult)
    store.add_customer(teen)
    store.add_account(adult_account)
    store.add_account(teen_account)
    return store


@pytest.fixture
def customer_factory():
    """Build a customer of an exact age on the reference date."""
    return make_customer
