"""Tests for the synthetic customer and account generators."""

from decimal import Decimal

import pytest

from teller_rules.generators.banking import (
    AccountGenerator,
    CustomerGenerator,
    default_fd_catalog,
    default_savings_catalog,
)
from teller_rules.models.banking import FdTerm, Gender, PlanType
from teller_rules.rules.age import age, bracket_for_age
from teller_rules.rules.lifecycle import check_account_invariants
from teller_rules.rules.nic import is_valid_nic


class TestCatalog:
    """Tests for the default plan catalogs."""

    def test_savings_catalog(self) -> None:
        catalog = default_savings_catalog()

        assert [(p.plan_id, p.plan_type) for p in catalog] == [
            (1, PlanType.CHILDREN),
            (2, PlanType.TEEN),
            (3, PlanType.ADULT),
            (4, PlanType.SENIOR),
            (5, PlanType.JOINT),
        ]
        assert {p.plan_type: p.min_balance for p in catalog}[PlanType.JOINT] == Decimal("5000")

    def test_fd_catalog(self) -> None:
        assert {p.term: p.interest_rate for p in default_fd_catalog()} == {
            FdTerm.SIX_MONTHS: Decimal("13"),
            FdTerm.ONE_YEAR: Decimal("14"),
            FdTerm.THREE_YEARS: Decimal("15"),
        }


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_reproducible(self, seed, as_of) -> None:
        first = list(CustomerGenerator(seed=seed, as_of=as_of).generate_batch(10))
        second = list(CustomerGenerator(seed=seed, as_of=as_of).generate_batch(10))
        assert first == second

    @pytest.mark.parametrize("years", [0, 11, 12, 17, 18, 59, 60, 85])
    def test_exact_age(self, seed, as_of, years) -> None:
        gen = CustomerGenerator(seed=seed, as_of=as_of)
        for _ in range(20):
            assert age(gen.generate(years).date_of_birth, as_of) == years

    def test_sequential_ids(self, seed, as_of) -> None:
        customers = list(CustomerGenerator(seed=seed, start_id=10, as_of=as_of).generate_batch(3))
        assert [c.customer_id for c in customers] == [10, 11, 12]

    def test_nic_format(self, seed, as_of) -> None:
        for customer in CustomerGenerator(seed=seed, as_of=as_of).generate_batch(100):
            assert is_valid_nic(customer.nic)
            if customer.date_of_birth.year >= 2000:
                assert customer.nic.startswith(str(customer.date_of_birth.year))
            else:
                assert customer.nic.endswith("V")

    def test_nic_encodes_gender(self, seed, as_of) -> None:
        for customer in CustomerGenerator(seed=seed, as_of=as_of).generate_batch(50, age_range=(30, 40)):
            day_field = int(customer.nic[2:5])
            assert (day_field > 500) == (customer.gender == Gender.FEMALE)

    def test_age_range(self, seed, as_of) -> None:
        for customer in CustomerGenerator(seed=seed, as_of=as_of).generate_batch(50, age_range=(18, 30)):
            assert 18 <= age(customer.date_of_birth, as_of) <= 30


class TestAccountGenerator:
    """Tests for AccountGenerator."""

    def test_plan_follows_bracket(self, seed, as_of, catalog) -> None:
        customers = CustomerGenerator(seed=seed, as_of=as_of).generate_batch(50)
        gen = AccountGenerator(catalog, seed=seed, as_of=as_of)

        for customer in customers:
            account = gen.generate(customer)
            assert account.plan.plan_type == bracket_for_age(age(customer.date_of_birth, as_of))
            assert account.balance >= account.plan.min_balance
            assert account.holder_ids == [customer.customer_id]
            check_account_invariants(account)

    def test_missing_plan_yields_none(self, seed, as_of, catalog, teen) -> None:
        without_teen = [p for p in catalog if p.plan_type != PlanType.TEEN]
        assert AccountGenerator(without_teen, seed=seed, as_of=as_of).generate(teen) is None

    def test_joint(self, seed, as_of, catalog, customer_factory) -> None:
        holders = [customer_factory(3, 30), customer_factory(4, 40)]
        account = AccountGenerator(catalog, seed=seed, start_id=500, as_of=as_of).generate_joint(holders)

        assert account.account_id == 500
        assert account.is_joint
        assert account.holder_ids == [3, 4]
        assert account.balance >= Decimal("5000")
        check_account_invariants(account)
