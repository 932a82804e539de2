"""Enumeration types for banking entities."""

from enum import Enum


class PlanType(str, Enum):
    CHILDREN = "Children"
    TEEN = "Teen"
    ADULT = "Adult"
    SENIOR = "Senior"
    JOINT = "Joint"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class AccountStatus(str, Enum):
    ACTIVE = "Active"
    CLOSED = "Closed"


class FdStatus(str, Enum):
    ACTIVE = "Active"
    MATURED = "Matured"
    CLOSED = "Closed"


class FdTerm(str, Enum):
    SIX_MONTHS = "6 months"
    ONE_YEAR = "1 year"
    THREE_YEARS = "3 years"
