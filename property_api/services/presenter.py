"""Mapping of stored properties onto the public response shape."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import inspect

from property_api.models import Property
from property_api.schemas import (
    AddressResponse,
    AmenitiesResponse,
    CollectionMeta,
    CoordinatesResponse,
    FinancialResponse,
    OwnerResponse,
    PaginationMeta,
    PropertyCollectionResponse,
    PropertyDetailsResponse,
    PropertyResponse,
)
from property_api.services.query_builder import Page

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    Render a timestamp as UTC with microseconds and a ``Z`` suffix.

    Naive values (SQLite drops the offset) are taken to be UTC already.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def owner_loaded(property_obj: Property) -> bool:
    """True when the ``user`` relationship was loaded with the property."""
    return "user" not in inspect(property_obj).unloaded


def present_property(property_obj: Property, include_owner: Optional[bool] = None) -> PropertyResponse:
    """
    Build the nested representation of one property.

    Args:
        property_obj: Stored property
        include_owner: Force the owner in or out; by default it is included
            only if the relationship is already loaded

    Returns:
        Response model; ``owner`` stays unset when not included
    """
    fields = dict(
        id=property_obj.id,
        title=property_obj.title,
        description=property_obj.description,
        address=AddressResponse(
            street=property_obj.address,
            city=property_obj.city,
            state=property_obj.state,
            zip_code=property_obj.zip_code,
            full_address=property_obj.full_address,
        ),
        coordinates=CoordinatesResponse(
            latitude=property_obj.latitude,
            longitude=property_obj.longitude,
        ),
        property_details=PropertyDetailsResponse(
            square_feet=property_obj.square_feet,
            bedrooms=property_obj.bedrooms,
            bathrooms=property_obj.bathrooms,
            floors=property_obj.floors,
            property_type=property_obj.property_type,
            year_built=property_obj.year_built,
            lot_size=property_obj.lot_size,
            garage_spaces=property_obj.garage_spaces,
        ),
        amenities=AmenitiesResponse(
            has_basement=bool(property_obj.has_basement),
            has_pool=bool(property_obj.has_pool),
            has_garden=bool(property_obj.has_garden),
            features=list(property_obj.features or []),
        ),
        financial=FinancialResponse(
            price=property_obj.price,
            price_per_sqft=property_obj.price_per_sqft,
            monthly_rent=property_obj.monthly_rent,
            property_taxes=property_obj.property_taxes,
        ),
        status=property_obj.status,
        metadata=dict(property_obj.extra_metadata or {}),
        created_at=format_timestamp(property_obj.created_at),
        updated_at=format_timestamp(property_obj.updated_at),
    )

    if include_owner is None:
        include_owner = owner_loaded(property_obj)
    if include_owner:
        owner = property_obj.user
        fields["owner"] = OwnerResponse.model_validate(owner) if owner is not None else None

    return PropertyResponse(**fields)


def present_collection(page: Page, filters: dict, self_link: str) -> PropertyCollectionResponse:
    """Build the paginated collection representation."""
    items = [present_property(prop) for prop in page.items]
    return PropertyCollectionResponse(
        data=items,
        meta=CollectionMeta(
            total=len(items),
            filters=filters,
            pagination=PaginationMeta(
                current_page=page.page,
                per_page=page.per_page,
                last_page=page.last_page,
                total=page.total,
            ),
        ),
        links={"self": self_link},
    )
