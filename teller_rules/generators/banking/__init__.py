"""Banking domain generators."""

from teller_rules.generators.banking.account import AccountGenerator
from teller_rules.generators.banking.catalog import default_fd_catalog, default_savings_catalog
from teller_rules.generators.banking.customer import CustomerGenerator

__all__ = [
    "AccountGenerator",
    "CustomerGenerator",
    "default_fd_catalog",
    "default_savings_catalog",
]
