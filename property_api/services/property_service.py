"""Property persistence services: create, read, update, delete, list and search."""
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from property_api.errors import FieldValidationError, PropertyNotFoundError
from property_api.logging_config import get_logger
from property_api.models import Property, User
from property_api.schemas import PropertyCreate, PropertyFilters, PropertyUpdate, SearchCriteria
from property_api.services.pricing import apply_price_per_sqft
from property_api.services.query_builder import Page, PropertyQueryBuilder

logger = get_logger(__name__)

BOOLEAN_FIELDS = ("has_basement", "has_pool", "has_garden")


def _column_values(data: dict) -> dict:
    """
    Map validated request fields onto model attributes.

    Enum members become their stored strings, nullable booleans collapse to
    False and ``metadata`` lands on its mapped attribute.
    """
    values = {}
    for field, value in data.items():
        if hasattr(value, "value"):
            value = value.value
        if field in BOOLEAN_FIELDS and value is None:
            value = False
        if field == "metadata":
            field = "extra_metadata"
        values[field] = value
    return values


def _ensure_owner_exists(db: Session, user_id: Optional[int]) -> None:
    if user_id is None:
        return
    if db.get(User, user_id) is None:
        raise FieldValidationError("user_id", "The selected user id is invalid.")


def get_property(db: Session, property_id: int) -> Property:
    """
    Fetch one property with its owner loaded.

    Raises:
        PropertyNotFoundError: if no row has this id
    """
    property_obj = (
        db.query(Property)
        .options(joinedload(Property.user))
        .populate_existing()
        .filter(Property.id == property_id)
        .first()
    )
    if property_obj is None:
        raise PropertyNotFoundError(property_id)
    return property_obj


def create_property(db: Session, data: PropertyCreate) -> Property:
    """
    Create a new property.

    Defaults status to ``disponible`` and derives price per square foot
    when both price and area are given.
    """
    values = _column_values(data.model_dump())
    _ensure_owner_exists(db, values.get("user_id"))

    if values.get("status") is None:
        values.pop("status", None)
    if values.get("features") is None:
        values["features"] = []
    if values.get("extra_metadata") is None:
        values["extra_metadata"] = {}

    property_obj = Property(**values)
    apply_price_per_sqft(property_obj)

    db.add(property_obj)
    db.commit()

    logger.info("property_created", property_id=property_obj.id, price_per_sqft=property_obj.price_per_sqft)
    return get_property(db, property_obj.id)


def update_property(db: Session, property_id: int, data: PropertyUpdate) -> Property:
    """
    Apply the fields present in ``data`` to an existing property.

    Price per square foot is recomputed only when price or area was part of
    the update.
    """
    property_obj = get_property(db, property_id)

    values = _column_values(data.model_dump(exclude_unset=True))
    if "user_id" in values:
        _ensure_owner_exists(db, values["user_id"])
    if "status" in values and values["status"] is None:
        # status is not nullable; a null leaves it unchanged
        values.pop("status")
    if "features" in values and values["features"] is None:
        values["features"] = []
    if "extra_metadata" in values and values["extra_metadata"] is None:
        values["extra_metadata"] = {}

    for field, value in values.items():
        setattr(property_obj, field, value)
    apply_price_per_sqft(property_obj, changed_fields=values.keys())

    db.commit()

    logger.info("property_updated", property_id=property_id, fields=sorted(values))
    return get_property(db, property_id)


def delete_property(db: Session, property_id: int) -> None:
    """Delete a property unconditionally."""
    property_obj = get_property(db, property_id)
    db.delete(property_obj)
    db.commit()

    logger.info("property_deleted", property_id=property_id)


def add_property_feature(db: Session, property_id: int, feature: str) -> Property:
    """Add a feature; a feature already present is left as is."""
    property_obj = get_property(db, property_id)
    if property_obj.add_feature(feature):
        db.commit()
        logger.info("property_feature_added", property_id=property_id, feature=feature)
    return get_property(db, property_id)


def remove_property_feature(db: Session, property_id: int, feature: str) -> Property:
    """Remove a feature; a missing feature is ignored."""
    property_obj = get_property(db, property_id)
    if property_obj.remove_feature(feature):
        db.commit()
        logger.info("property_feature_removed", property_id=property_id, feature=feature)
    return get_property(db, property_id)


def list_properties(db: Session, filters: PropertyFilters) -> Page:
    """List properties matching the filters, one page at a time."""
    return PropertyQueryBuilder.from_filters(filters).paginate(db, filters.page, filters.per_page)


def search_properties(db: Session, criteria: SearchCriteria) -> Page:
    """
    Search properties by text and/or location.

    The location filter is a bounding box, so matches near the corners may
    lie slightly outside the radius.
    """
    page = PropertyQueryBuilder.from_search(criteria).paginate(db, criteria.page, criteria.per_page)
    logger.info("property_search", criteria=criteria.supplied(), total=page.total)
    return page
