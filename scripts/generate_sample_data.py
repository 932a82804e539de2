#!/usr/bin/env python3
"""Generate a sample teller portfolio and run the eligibility rules over it.

Writes customers, accounts, fixed deposits and the FD eligibility report
as JSON files to the output folder for manual inspection.
"""

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from teller_rules.config import TellerConfig
from teller_rules.exceptions import ConflictError, ValidationError
from teller_rules.generators.banking import (
    AccountGenerator,
    CustomerGenerator,
    default_fd_catalog,
    default_savings_catalog,
)
from teller_rules.logging import setup_logging
from teller_rules.models.banking import PlanType
from teller_rules.rules.fixed_deposit import max_fd_principal
from teller_rules.serialization import serialize_value
from teller_rules.services import TellerService
from teller_rules.store import BankDataStore

logger = logging.getLogger("generate_sample_data")


def save_json(data: list, filename: str, output_dir: Path, pretty: bool) -> None:
    """Save data to JSON file."""
    filepath = output_dir / filename
    serialized = [serialize_value(item) for item in data]
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(serialized, f, indent=2 if pretty else None, ensure_ascii=False)
    logger.info("Saved %d records to %s", len(data), filepath)


def build_portfolio(
    store: BankDataStore,
    num_customers: int,
    seed: int | None,
    as_of: date,
    locale: str = "en_US",
) -> None:
    """Populate the store with customers, catalogs and accounts."""
    for plan in default_savings_catalog():
        store.add_savings_plan(plan)
    for fd_plan in default_fd_catalog():
        store.add_fd_plan(fd_plan)

    customer_gen = CustomerGenerator(seed=seed, locale=locale, as_of=as_of)
    account_gen = AccountGenerator(store.savings_catalog(), seed=seed, as_of=as_of)

    adults = []
    for customer in customer_gen.generate_batch(num_customers):
        try:
            store.add_customer(customer)
        except ConflictError as exc:
            logger.warning("Skipping generated customer %d: %s", customer.customer_id, exc)
            continue
        account = account_gen.generate(customer)
        if account is None:
            continue
        store.add_account(account)
        if account.plan.plan_type in (PlanType.ADULT, PlanType.SENIOR):
            adults.append(customer)

    # Pair up some adults into joint accounts
    for first, second in zip(adults[::4], adults[1::4]):
        store.add_account(account_gen.generate_joint([first, second]))


def open_sample_deposits(service: TellerService, as_of: date) -> list[dict]:
    """Try a half-of-available FD for every customer; report the outcome."""
    store = service.store
    fd_plans = store.fd_catalog()
    report = []
    for customer in list(store.customers.values()):
        eligible = service.eligible_fd_accounts(customer.customer_id)
        if not eligible:
            report.append({"customer_id": customer.customer_id, "eligible_accounts": []})
            continue
        account = eligible[0]
        principal = (max_fd_principal(account) / 2).quantize(Decimal("0.01"))
        plan = fd_plans[customer.customer_id % len(fd_plans)]
        entry = {
            "customer_id": customer.customer_id,
            "eligible_accounts": [a.account_id for a in eligible],
            "account_id": account.account_id,
            "principal": principal,
        }
        try:
            fd = service.create_fixed_deposit(
                customer.customer_id, account.account_id, plan.fd_plan_id, principal, as_of=as_of
            )
            entry["fd_id"] = fd.fd_id
            entry["maturity_amount"] = fd.maturity_amount
        except ValidationError as exc:
            entry["errors"] = exc.errors
        report.append(entry)
    return report


def main() -> None:
    """Generate the sample portfolio."""
    config = TellerConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate sample teller data")
    parser.add_argument("--customers", type=int, default=config.sample_data.num_customers)
    parser.add_argument("--seed", type=int, default=config.seed if config.seed is not None else 42)
    parser.add_argument("--output", type=Path, default=config.sample_data.output_dir)
    parser.add_argument("--pretty", action="store_true", default=config.sample_data.pretty_json)
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    output_dir: Path = args.output
    output_dir.mkdir(parents=True, exist_ok=True)
    as_of = date.today()

    store = BankDataStore()
    build_portfolio(store, args.customers, args.seed, as_of, config.sample_data.locale)
    service = TellerService(store, config.rules)
    report = open_sample_deposits(service, as_of)

    save_json(list(store.customers.values()), "customers.json", output_dir, args.pretty)
    save_json(list(store.accounts.values()), "accounts.json", output_dir, args.pretty)
    save_json(list(store.fixed_deposits.values()), "fixed_deposits.json", output_dir, args.pretty)
    save_json(report, "fd_eligibility.json", output_dir, args.pretty)

    logger.info("Summary: %s", store.summary())


if __name__ == "__main__":
    main()
