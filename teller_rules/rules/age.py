"""Age and plan-bracket classification.

Leaf policy module: maps a birth date to whole years of age and an age to
the savings plan types a single customer may hold.
"""

from datetime import date, datetime

from teller_rules.models.banking.enums import PlanType

SENIOR_AGE = 60
ADULT_AGE = 18
TEEN_AGE = 12

_MINIMUM_AGES = {
    PlanType.SENIOR: SENIOR_AGE,
    PlanType.JOINT: ADULT_AGE,
    PlanType.CHILDREN: 0,
    PlanType.TEEN: TEEN_AGE,
}


def to_date(value: date | str) -> date:
    """Coerce a ``date``, ``datetime`` or ISO ``YYYY-MM-DD`` string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def age(date_of_birth: date | str, as_of: date | str | None = None) -> int:
    """Whole years elapsed between ``date_of_birth`` and ``as_of``.

    The birthday counts as reached on the same month and day, so someone
    born on 2006-03-15 turns 18 on 2024-03-15.

    Parameters
    ----------
    date_of_birth : date | str
        Birth date.
    as_of : date | str | None
        Reference date (default: today).

    Returns
    -------
    int
        Age in whole years.
    """
    born = to_date(date_of_birth)
    ref = to_date(as_of) if as_of is not None else date.today()
    years = ref.year - born.year
    if (ref.month, ref.day) < (born.month, born.day):
        years -= 1
    return years


def bracket_for_age(years: int) -> PlanType:
    """Single-holder plan type implied by an age. Never returns Joint."""
    if years >= SENIOR_AGE:
        return PlanType.SENIOR
    if years >= ADULT_AGE:
        return PlanType.ADULT
    if years >= TEEN_AGE:
        return PlanType.TEEN
    return PlanType.CHILDREN


def _coerce_plan_type(plan_type: PlanType | str) -> PlanType | None:
    if isinstance(plan_type, PlanType):
        return plan_type
    wanted = str(plan_type).strip().lower()
    for candidate in PlanType:
        if candidate.value.lower() == wanted:
            return candidate
    return None


def minimum_age_for_plan(plan_type: PlanType | str) -> int:
    """Minimum holder age for a plan type.

    Strings are matched case-insensitively; Adult and anything
    unrecognised fall back to 18.
    """
    resolved = _coerce_plan_type(plan_type)
    return _MINIMUM_AGES.get(resolved, ADULT_AGE) if resolved else ADULT_AGE


def meets_minimum_age(years: int, plan_type: PlanType | str) -> bool:
    return years >= minimum_age_for_plan(plan_type)


def eligible_plans_for_age(years: int) -> set[PlanType]:
    """Plan types a customer of this age may open: their bracket, plus Joint from 18."""
    plans = {bracket_for_age(years)}
    if years >= ADULT_AGE:
        plans.add(PlanType.JOINT)
    return plans
