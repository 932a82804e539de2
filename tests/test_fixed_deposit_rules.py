"""Tests for fixed deposit eligibility and maturity projection."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from teller_rules.exceptions import InvariantViolation
from teller_rules.models.banking import AccountStatus, FdTerm, PlanType
from teller_rules.rules.fixed_deposit import (
    eligible_accounts_for_fd,
    max_fd_principal,
    maturity_amount,
    maturity_date,
    term_years,
    validate_new_fd,
)


class TestMaturityDate:
    """Tests for maturity_date."""

    def test_three_years_from_month_end(self) -> None:
        assert maturity_date("2024-01-31", "3 years") == date(2027, 1, 31)

    def test_six_months(self) -> None:
        assert maturity_date(date(2024, 1, 15), FdTerm.SIX_MONTHS) == date(2024, 7, 15)

    def test_one_year_from_leap_day(self) -> None:
        assert maturity_date(date(2024, 2, 29), FdTerm.ONE_YEAR) == date(2025, 2, 28)

    def test_six_months_clamps_month_end(self) -> None:
        assert maturity_date(date(2024, 8, 31), FdTerm.SIX_MONTHS) == date(2025, 2, 28)

    def test_unknown_term_uses_six_months(self) -> None:
        assert maturity_date(date(2024, 1, 15), "18 months") == date(2024, 7, 15)


class TestMaturityAmount:
    """Tests for simple-interest maturity amounts."""

    def test_one_year(self) -> None:
        assert maturity_amount(100000, 10, "1 year") == Decimal("110000")

    def test_six_months(self) -> None:
        assert maturity_amount(100000, 12, "6 months") == Decimal("106000")

    def test_three_years_is_not_compounded(self) -> None:
        assert maturity_amount(Decimal("50000"), Decimal("15"), FdTerm.THREE_YEARS) == Decimal("72500.00")

    def test_unknown_term_uses_half_year(self) -> None:
        assert maturity_amount(1000, 10, "weird") == Decimal("1050.00")

    def test_rounds_to_cents(self) -> None:
        assert maturity_amount("333.33", "13", "6 months") == Decimal("355.00")

    def test_custom_rounding_step(self) -> None:
        assert maturity_amount("333.33", "13", "6 months", Decimal("1")) == Decimal("355")

    def test_term_years(self) -> None:
        assert term_years("6 months") == Decimal("0.5")
        assert term_years(FdTerm.ONE_YEAR) == Decimal("1")
        assert term_years("3 years") == Decimal("3")


class TestEligibleAccountsForFd:
    """Tests for host account filtering."""

    def test_single_adult_account_is_eligible(self, adult, adult_account) -> None:
        assert eligible_accounts_for_fd(adult, [adult_account]) == [adult_account]

    def test_matches_by_customer_id_not_name(self, adult, customer_factory, adult_account) -> None:
        """Test a namesake never sees another customer's account."""
        namesake = replace(customer_factory(9, 30), first_name=adult.first_name, last_name=adult.last_name)
        assert eligible_accounts_for_fd(namesake, [adult_account]) == []

    def test_excludes_account_with_fd(self, adult, adult_account) -> None:
        adult_account.fd_id = 7
        assert eligible_accounts_for_fd(adult, [adult_account]) == []

    def test_excludes_minor_plans(self, adult, adult_account, plans) -> None:
        children = replace(adult_account, account_id=101, plan=plans[PlanType.CHILDREN])
        teen = replace(adult_account, account_id=102, plan=plans[PlanType.TEEN])
        assert eligible_accounts_for_fd(adult, [children, teen]) == []

    def test_excludes_joint(self, adult, adult_account, plans) -> None:
        joint = replace(adult_account, plan=plans[PlanType.JOINT], holder_ids=[adult.customer_id, 8])
        assert eligible_accounts_for_fd(adult, [joint]) == []

    def test_excludes_empty_and_closed(self, adult, adult_account) -> None:
        empty = replace(adult_account, account_id=101, balance=Decimal("0"))
        closed = replace(adult_account, account_id=102, status=AccountStatus.CLOSED)
        assert eligible_accounts_for_fd(adult, [empty, closed]) == []

    def test_keeps_order(self, adult, adult_account, plans) -> None:
        senior = replace(adult_account, account_id=101, plan=plans[PlanType.SENIOR])
        result = eligible_accounts_for_fd(adult, [senior, adult_account])
        assert [a.account_id for a in result] == [101, 100]

    def test_malformed_owned_account_raises(self, adult, adult_account) -> None:
        broken = replace(adult_account, holder_ids=[adult.customer_id, 8])
        with pytest.raises(InvariantViolation):
            eligible_accounts_for_fd(adult, [broken])


class TestValidateNewFd:
    """Tests for validate_new_fd."""

    def test_approval_carries_projection(self, adult, adult_account, fd_plans, as_of) -> None:
        plan = fd_plans[FdTerm.ONE_YEAR]
        decision = validate_new_fd(adult, adult_account, plan, Decimal("20000"), as_of=as_of, auto_renewal=True)

        assert decision.approved
        approval = decision.approval
        assert approval.principal == Decimal("20000")
        assert approval.open_date == as_of
        assert approval.maturity_date == date(2025, 6, 1)
        assert approval.maturity_amount == Decimal("22800.00")
        assert approval.remaining_balance == Decimal("30000.00")
        assert approval.term == FdTerm.ONE_YEAR
        assert approval.interest_rate == Decimal("14")
        assert approval.auto_renewal is True

    def test_accepts_exactly_available(self, adult, adult_account, fd_plans, as_of) -> None:
        principal = max_fd_principal(adult_account)
        assert principal == Decimal("49000.00")

        decision = validate_new_fd(adult, adult_account, fd_plans[FdTerm.SIX_MONTHS], principal, as_of=as_of)

        assert decision.approved
        assert decision.approval.remaining_balance == adult_account.plan.min_balance

    def test_rejects_breaking_min_balance(self, adult, adult_account, fd_plans, as_of) -> None:
        decision = validate_new_fd(adult, adult_account, fd_plans[FdTerm.SIX_MONTHS], "49000.01", as_of=as_of)

        assert decision.fields == {"principal_amount"}
        message = decision.errors["principal_amount"]
        assert "Maximum FD amount: LKR 49,000.00" in message
        assert "LKR 1,000.00 must remain" in message
        assert decision.violations[0].details["max_amount"] == Decimal("49000.00")

    def test_rejects_non_positive_principal(self, adult, adult_account, fd_plans, as_of) -> None:
        decision = validate_new_fd(adult, adult_account, fd_plans[FdTerm.SIX_MONTHS], 0, as_of=as_of)
        assert decision.errors == {"principal_amount": "Principal amount must be greater than 0"}

    def test_rejects_existing_fd(self, adult, adult_account, fd_plans, as_of) -> None:
        adult_account.fd_id = 5
        decision = validate_new_fd(adult, adult_account, fd_plans[FdTerm.ONE_YEAR], 1000, as_of=as_of)

        assert decision.rules == {"account_has_fd"}
        assert "One FD per savings account" in decision.errors["account_id"]

    def test_rejects_joint_account(self, adult, adult_account, plans, fd_plans, as_of) -> None:
        joint = replace(adult_account, plan=plans[PlanType.JOINT], holder_ids=[adult.customer_id, 8])
        decision = validate_new_fd(adult, joint, fd_plans[FdTerm.ONE_YEAR], 1000, as_of=as_of)

        assert not decision.approved
        assert {"joint_account", "multiple_holders"} <= decision.rules
        assert decision.errors["account_id"] == "Joint accounts are not eligible for fixed deposits."

    def test_rejects_underage_customer(self, teen, teen_account, fd_plans, as_of) -> None:
        decision = validate_new_fd(teen, teen_account, fd_plans[FdTerm.ONE_YEAR], 100, as_of=as_of)

        assert decision.fields == {"customer_id", "account_id"}
        assert decision.errors["customer_id"] == "Customer must be at least 18 years old for Fixed Deposit"
        assert "minor_plan" in decision.rules

    def test_rejects_foreign_account(self, teen, adult_account, fd_plans, as_of) -> None:
        decision = validate_new_fd(teen, adult_account, fd_plans[FdTerm.ONE_YEAR], 100, as_of=as_of)
        assert "account_not_owned" in decision.rules

    def test_rounding_step_applies_to_maturity(self, adult, adult_account, fd_plans, as_of) -> None:
        decision = validate_new_fd(
            adult, adult_account, fd_plans[FdTerm.ONE_YEAR], "10000.50", as_of=as_of, quantum=Decimal("1")
        )
        assert decision.approval.maturity_amount == Decimal("11401")

    def test_missing_plan(self, adult, adult_account, as_of) -> None:
        decision = validate_new_fd(adult, adult_account, None, 100, as_of=as_of)
        assert decision.errors == {"fd_plan_id": "Please select a FD plan"}

    def test_accumulates_all_violations(self, teen, adult_account, as_of) -> None:
        adult_account.fd_id = 3
        decision = validate_new_fd(teen, adult_account, None, -5, as_of=as_of)

        assert decision.fields == {"customer_id", "account_id", "fd_plan_id", "principal_amount"}
