"""NIC / birth certificate number helpers.

Accepted forms are 12 digits, or 9 digits followed by ``V``. Input is
case-insensitive and normalised to uppercase. Syntax checks are a caller
precondition; the eligibility rules never reject on NIC format.
"""

import re

NIC_PATTERN = re.compile(r"^(?:[0-9]{12}|[0-9]{9}V)$")


def normalize_nic(value: str) -> str:
    return value.strip().upper()


def is_valid_nic(value: str | None) -> bool:
    if not value:
        return False
    return NIC_PATTERN.match(normalize_nic(value)) is not None
