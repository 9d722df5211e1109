"""
Transition guards
-----------------
Pure predicates deciding whether a forward step is allowed for the current
form data. The UI disables the matching control pre-emptively, so a failed
guard is never surfaced as an error; the wizard simply does not move.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional


def _filled(value: Optional[str]) -> bool:
    return bool((value or "").strip())


def is_positive_amount(amount: Optional[str]) -> bool:
    """True when `amount` parses as a finite decimal greater than zero."""
    s = (amount or "").strip()
    if not s:
        return False
    try:
        d = Decimal(s)
    except InvalidOperation:
        return False
    return d.is_finite() and d > 0


def can_advance_from_form(payer_name: Optional[str], amount: Optional[str], strict_amount: bool = False) -> bool:
    """
    Gate for FORM -> PAYMENT.

    Both name and amount must be non-blank. With `strict_amount` the amount
    must additionally be a positive number (the default only checks presence).
    """
    if not (_filled(payer_name) and _filled(amount)):
        return False
    if strict_amount:
        return is_positive_amount(amount)
    return True
