"""Savings account generator for banking domain."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence

from teller_rules.generators.base import BaseGenerator
from teller_rules.models.banking import (
    Account,
    AccountStatus,
    Customer,
    PlanType,
    SavingsPlan,
)
from teller_rules.rules.account import default_plan_for_customer


class AccountGenerator(BaseGenerator):
    """Generate synthetic savings accounts that respect the opening rules.

    Single-holder accounts get the plan of the holder's age bracket;
    balances sit between the plan minimum and a bracket-dependent ceiling.
    """

    # Upper bound on opening balance per plan type (LKR)
    BALANCE_CEILINGS = {
        PlanType.CHILDREN: 50_000,
        PlanType.TEEN: 100_000,
        PlanType.ADULT: 2_000_000,
        PlanType.SENIOR: 3_000_000,
        PlanType.JOINT: 5_000_000,
    }

    def __init__(
        self,
        catalog: Sequence[SavingsPlan],
        seed: int | None = None,
        start_id: int = 1,
        as_of: date | None = None,
    ) -> None:
        super().__init__(seed)
        self.catalog = list(catalog)
        self._next_id = start_id
        self.as_of = as_of or date.today()

    def generate(self, customer: Customer) -> Account | None:
        """Generate a single-holder account for a customer.

        Returns
        -------
        Account | None
            Generated account, or None when the catalog offers no plan for
            the customer's bracket.
        """
        plan = default_plan_for_customer(customer, self.catalog, as_of=self.as_of)
        if plan is None:
            return None
        return self._generate_one([customer.customer_id], plan)

    def generate_joint(self, holders: Sequence[Customer]) -> Account:
        """Generate a Joint account for two or more adult holders."""
        plan = next(p for p in self.catalog if p.plan_type == PlanType.JOINT)
        return self._generate_one([c.customer_id for c in holders], plan)

    def _generate_one(self, holder_ids: list[int], plan: SavingsPlan) -> Account:
        ceiling = self.BALANCE_CEILINGS[plan.plan_type]
        floor = int(plan.min_balance)
        balance = Decimal(self.rng.randint(floor, max(floor, ceiling))).quantize(Decimal("0.01"))

        account = Account(
            account_id=self._next_id,
            holder_ids=holder_ids,
            plan=plan,
            balance=balance,
            status=AccountStatus.ACTIVE,
            open_date=self.as_of - timedelta(days=self.rng.randint(0, 5 * 365)),
            branch_id=self.rng.randint(1, 20),
        )
        self._next_id += 1
        return account
