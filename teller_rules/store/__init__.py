"""In-memory data store for maintaining entity relationships."""

from teller_rules.store.banking import BankDataStore

__all__ = ["BankDataStore"]
