"""Service layer wiring the rules engine to the data store."""

from teller_rules.services.teller import TellerService

__all__ = ["TellerService"]
