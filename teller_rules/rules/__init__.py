"""Pure eligibility and lifecycle rules for savings accounts and fixed deposits."""

from teller_rules.rules.account import (
    default_plan_for_customer,
    eligible_target_plans,
    plans_for_customer,
    requires_nic_replacement,
    validate_new_account,
    validate_plan_change,
)
from teller_rules.rules.age import (
    age,
    bracket_for_age,
    eligible_plans_for_age,
    meets_minimum_age,
    minimum_age_for_plan,
)
from teller_rules.rules.fixed_deposit import (
    eligible_accounts_for_fd,
    max_fd_principal,
    maturity_amount,
    maturity_date,
    term_years,
    validate_new_fd,
)
from teller_rules.rules.lifecycle import (
    check_account_invariants,
    transition_account_status,
    transition_fd_status,
    validate_account_closure,
    validate_fd_closure,
)
from teller_rules.rules.nic import is_valid_nic, normalize_nic

__all__ = [
    "age",
    "bracket_for_age",
    "check_account_invariants",
    "default_plan_for_customer",
    "eligible_accounts_for_fd",
    "eligible_plans_for_age",
    "eligible_target_plans",
    "is_valid_nic",
    "max_fd_principal",
    "maturity_amount",
    "maturity_date",
    "meets_minimum_age",
    "minimum_age_for_plan",
    "normalize_nic",
    "plans_for_customer",
    "requires_nic_replacement",
    "term_years",
    "transition_account_status",
    "transition_fd_status",
    "validate_account_closure",
    "validate_fd_closure",
    "validate_new_account",
    "validate_new_fd",
    "validate_plan_change",
]
