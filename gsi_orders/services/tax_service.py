# gsi_orders/services/tax_service.py
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

from gsi_orders.domain.errors import InvalidInput
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
DEFAULT_STATE = "FL"
DEFAULT_RATE = Decimal("0.07")

# simple per state rates, no county / zip level tax
STATE_RATES = {
    "FL": Decimal("0.07"),
    "CA": Decimal("0.085"),
    "NY": Decimal("0.08"),
    "TX": Decimal("0.0625"),
}


def calculate_tax(subtotal: Any, state: str | None = None) -> Dict[str, Any]:
    if (
        isinstance(subtotal, bool)
        or not isinstance(subtotal, (int, float))
        or (isinstance(subtotal, float) and not math.isfinite(subtotal))
        or subtotal <= 0
    ):
        raise InvalidInput("Invalid subtotal. Must be a positive number.")

    state = (state or DEFAULT_STATE).upper()
    rate = STATE_RATES.get(state, DEFAULT_RATE)

    amount = Decimal(str(subtotal))
    tax = (amount * rate).quantize(CENT, rounding=ROUND_HALF_UP)
    total = (amount + tax).quantize(CENT, rounding=ROUND_HALF_UP)

    logger.info(f"Tax for {amount} in {state}: {tax} at {rate}")

    return {
        "subtotal": float(subtotal),
        "tax_amount": float(tax),
        "total": float(total),
        "tax_rate": float(rate),
        "state": state,
    }
