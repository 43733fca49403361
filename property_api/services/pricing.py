"""Price-per-square-foot derivation."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from property_api.models import Property

PRICE_INPUTS = frozenset({"price", "square_feet"})
CENT = Decimal("0.01")


def compute_price_per_sqft(price: Optional[float], square_feet: Optional[int]) -> Optional[float]:
    """
    Price divided by area, rounded half up to cents.

    Returns None when either input is missing or the area is not positive.
    """
    if price is None or not square_feet or square_feet <= 0:
        return None
    ratio = Decimal(str(price)) / Decimal(str(square_feet))
    return float(ratio.quantize(CENT, rounding=ROUND_HALF_UP))


def apply_price_per_sqft(property_obj: Property, changed_fields: Optional[Iterable[str]] = None) -> bool:
    """
    Recompute ``price_per_sqft`` from the property's current price and area.

    Args:
        property_obj: Property with the new values already applied
        changed_fields: Fields touched by an update; None means a create,
            which always derives

    Returns:
        True if the derived value was set
    """
    if changed_fields is not None and not PRICE_INPUTS.intersection(changed_fields):
        return False

    value = compute_price_per_sqft(property_obj.price, property_obj.square_feet)
    if value is None:
        return False

    property_obj.price_per_sqft = value
    return True
