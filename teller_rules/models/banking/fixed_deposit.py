"""Fixed deposit model for banking domain."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from teller_rules.models.banking.enums import FdStatus, FdTerm


@dataclass
class FixedDeposit:
    """Term deposit funded from, and linked one-to-one with, a savings account.

    Maturity date and amount are computed once when the deposit is opened.
    """

    fd_id: int
    account_id: int
    fd_plan_id: int
    principal: Decimal
    interest_rate: Decimal
    term: FdTerm
    open_date: date
    maturity_date: date
    maturity_amount: Decimal
    auto_renewal: bool = False
    status: FdStatus = FdStatus.ACTIVE
    closed_date: date | None = None

    @property
    def is_active(self) -> bool:
        return self.status == FdStatus.ACTIVE
