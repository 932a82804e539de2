"""Customer model for banking domain."""

from dataclasses import dataclass
from datetime import date

from teller_rules.models.banking.enums import Gender


@dataclass
class Customer:
    """Registered bank customer.

    Age is never stored; it is derived from ``date_of_birth`` by
    ``teller_rules.rules.age.age``.
    """

    customer_id: int
    first_name: str
    last_name: str
    nic: str  # NIC or birth certificate number, uppercase
    date_of_birth: date
    gender: Gender | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
