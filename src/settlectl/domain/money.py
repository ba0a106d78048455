"""Fixed-point currency helpers.

Balances and prices are stored as integer minor units (cents). Amounts
cross the service boundary as ``Decimal`` with two decimal places.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

CENTS_PER_UNIT = 100
DEPOSIT_QUOTA_DIVISOR = 4

_TWO_PLACES = Decimal("0.01")


def to_cents(amount: Decimal | int | float | str) -> int:
    """Convert a currency amount to integer cents.

    Floats go through ``str()`` first so ``25.01`` stays ``2501``.

    Raises:
        ValueError: If *amount* is not numeric, not finite, too large to
            hold in cents, or carries more precision than one cent.
    """
    if isinstance(amount, bool):
        msg = f"Not a currency amount: {amount!r}"
        raise ValueError(msg)
    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as exc:
        msg = f"Not a currency amount: {amount!r}"
        raise ValueError(msg) from exc

    if not value.is_finite():
        msg = f"Not a finite currency amount: {amount!r}"
        raise ValueError(msg)
    try:
        whole_cents = value.quantize(_TWO_PLACES, rounding=ROUND_DOWN)
    except InvalidOperation as exc:
        msg = f"Amount is too large: {amount!r}"
        raise ValueError(msg) from exc
    if value != whole_cents:
        msg = f"Amount has sub-cent precision: {amount!r}"
        raise ValueError(msg)
    return int(value * CENTS_PER_UNIT)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place ``Decimal``."""
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(_TWO_PLACES)


def deposit_cap(total_unpaid_cents: int) -> Decimal:
    """Largest single deposit allowed against *total_unpaid_cents*.

    Reported to callers for diagnostics only; the policy check itself
    compares in cents via :func:`exceeds_deposit_cap`.
    """
    return (Decimal(total_unpaid_cents) / (CENTS_PER_UNIT * DEPOSIT_QUOTA_DIVISOR)).quantize(
        _TWO_PLACES, rounding=ROUND_DOWN
    )


def exceeds_deposit_cap(amount_cents: int, total_unpaid_cents: int) -> bool:
    """True when *amount_cents* is more than a quarter of the unpaid total."""
    return amount_cents * DEPOSIT_QUOTA_DIVISOR > total_unpaid_cents
