"""Customer generator for banking domain."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

from teller_rules.generators.base import BaseGenerator
from teller_rules.models.banking import Customer, Gender


class CustomerGenerator(BaseGenerator):
    """Generate synthetic customers with Sri Lankan style NIC numbers.

    Customers born in or after 2000 get the 12 digit form
    (``YYYY`` + day-of-year + serial + check digit); older customers get
    the 9 digit ``V`` form (``YY`` + day-of-year + serial). Women add 500
    to the day-of-year, as on real cards.
    """

    GENDERS = [Gender.MALE, Gender.FEMALE]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        start_id: int = 1,
        as_of: date | None = None,
    ) -> None:
        super().__init__(seed, locale)
        self._next_id = start_id
        self.as_of = as_of or date.today()

    def generate(self, age: int | None = None) -> Customer:
        """Generate a single customer.

        Parameters
        ----------
        age : int | None
            Exact age in whole years at ``as_of``; random (0-85) if omitted.

        Returns
        -------
        Customer
            Generated customer.
        """
        if age is None:
            age = self.rng.randint(0, 85)
        return self._generate_one(self._birth_date_for_age(age))

    def generate_batch(self, count: int, age_range: tuple[int, int] = (0, 85)) -> Iterator[Customer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.
        age_range : tuple[int, int]
            Inclusive bounds for ages.

        Yields
        ------
        Customer
            Generated customers.
        """
        for _ in range(count):
            yield self.generate(self.rng.randint(*age_range))

    def _birth_date_for_age(self, age: int) -> date:
        # Any day strictly inside (as_of - (age+1) years, as_of - age years]
        latest = _years_before(self.as_of, age)
        earliest = _years_before(self.as_of, age + 1) + timedelta(days=1)
        span = (latest - earliest).days
        return earliest + timedelta(days=self.rng.randint(0, span))

    def _generate_one(self, date_of_birth: date) -> Customer:
        gender = self.rng.choice(self.GENDERS)
        if gender == Gender.MALE:
            first_name = self.fake.first_name_male()
        else:
            first_name = self.fake.first_name_female()

        customer = Customer(
            customer_id=self._next_id,
            first_name=first_name,
            last_name=self.fake.last_name(),
            nic=self._nic_for(date_of_birth, gender),
            date_of_birth=date_of_birth,
            gender=gender,
        )
        self._next_id += 1
        return customer

    def _nic_for(self, date_of_birth: date, gender: Gender) -> str:
        day_of_year = date_of_birth.timetuple().tm_yday + (500 if gender == Gender.FEMALE else 0)
        if date_of_birth.year >= 2000:
            serial = self.rng.randint(0, 9999)
            check = self.rng.randint(0, 9)
            return f"{date_of_birth.year}{day_of_year:03d}{serial:04d}{check}"
        serial = self.rng.randint(0, 9999)
        return f"{date_of_birth.year % 100:02d}{day_of_year:03d}{serial:04d}V"


def _years_before(ref: date, years: int) -> date:
    try:
        return ref.replace(year=ref.year - years)
    except ValueError:  # Feb 29 in a non-leap year
        return ref.replace(year=ref.year - years, day=28)
