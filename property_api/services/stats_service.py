"""Collection-wide property statistics."""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from property_api.models import Property
from property_api.schemas import PropertyStatus

# Response key -> stored status value
STATUS_BUCKETS = {
    "available_properties": PropertyStatus.DISPONIBLE.value,
    "pending_properties": PropertyStatus.PENDIENTE.value,
    "sold_properties": PropertyStatus.VENDIDA.value,
    "rented_properties": PropertyStatus.RENTADA.value,
}


def _average(db: Session, column) -> Optional[float]:
    """Mean over non-null values, or None for an empty set."""
    value = db.query(func.avg(column)).filter(column.isnot(None)).scalar()
    return round(float(value), 2) if value is not None else None


def get_property_stats(db: Session) -> dict:
    """
    Get statistics about all properties.

    Recomputed from the table on every call; listing filters do not apply.
    """
    total_properties = db.query(func.count(Property.id)).scalar() or 0

    status_counts = dict(
        db.query(Property.status, func.count(Property.id))
        .group_by(Property.status)
        .all()
    )

    type_counts = (
        db.query(Property.property_type, func.count(Property.id))
        .filter(Property.property_type.isnot(None))
        .group_by(Property.property_type)
        .all()
    )

    stats = {
        "total_properties": total_properties,
        "average_price": _average(db, Property.price),
        "average_price_per_sqft": _average(db, Property.price_per_sqft),
        "average_square_feet": _average(db, Property.square_feet),
        "property_types": {property_type: count for property_type, count in type_counts},
    }
    for key, status in STATUS_BUCKETS.items():
        stats[key] = status_counts.get(status, 0)

    return stats
