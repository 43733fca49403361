"""
Properties Router

CRUD, listing, search and statistics endpoints for property listings.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from property_api.config import settings
from property_api.database import get_db
from property_api.schemas import (
    FeatureRequest,
    PropertyCollectionResponse,
    PropertyCreate,
    PropertyEnvelope,
    PropertyFilters,
    PropertyStatsResponse,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    SearchCriteria,
)
from property_api.services import property_service
from property_api.services.presenter import present_collection, present_property
from property_api.services.stats_service import get_property_stats

router = APIRouter(prefix="/properties", tags=["properties"])


def _envelope(property_obj) -> PropertyEnvelope:
    return PropertyEnvelope(data=present_property(property_obj))


@router.get(
    "",
    name="list_properties",
    response_model=PropertyCollectionResponse,
    response_model_exclude_unset=True,
)
def list_properties(
    request: Request,
    city: Optional[str] = Query(None, description="Substring of the city name"),
    property_type: Optional[PropertyType] = Query(None),
    status_filter: Optional[PropertyStatus] = Query(None, alias="status"),
    bedrooms: Optional[int] = Query(None, ge=0, description="Minimum bedrooms"),
    bathrooms: Optional[int] = Query(None, ge=0, description="Minimum bathrooms"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    sort_by: Optional[str] = Query(None, description="created_at, updated_at, price, square_feet, bedrooms or bathrooms"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1),
    db: Session = Depends(get_db),
):
    """
    List properties with optional filtering, sorting and pagination.

    Bedroom and bathroom filters are minimums. An unknown ``sort_by`` falls
    back to newest first.
    """
    filters = PropertyFilters(
        city=city,
        property_type=property_type,
        status=status_filter,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        per_page=per_page,
    )
    result = property_service.list_properties(db, filters)
    return present_collection(result, filters.supplied(), str(request.url_for("list_properties")))


@router.post(
    "",
    response_model=PropertyEnvelope,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_property(property_data: PropertyCreate, db: Session = Depends(get_db)):
    """
    Create a new property.

    ``price_per_sqft`` is derived from price and square feet when both are given.
    """
    return _envelope(property_service.create_property(db, property_data))


@router.get(
    "/search",
    response_model=PropertyCollectionResponse,
    response_model_exclude_unset=True,
)
def search_properties(
    request: Request,
    q: Optional[str] = Query(None, max_length=255, description="Text to look for in title, description, address or city"),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, ge=0.1, le=100, description="Kilometers; needs latitude and longitude"),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1),
    db: Session = Depends(get_db),
):
    """
    Search properties by free text and/or location.

    The location filter needs latitude, longitude and radius together. It uses a bounding
    box rather than a true radius, so results near the box corners can fall
    slightly outside the requested distance.
    """
    criteria = SearchCriteria(
        q=q,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
        page=page,
        per_page=per_page,
    )
    result = property_service.search_properties(db, criteria)
    return present_collection(result, criteria.supplied(), str(request.url_for("list_properties")))


@router.get("/stats", response_model=PropertyStatsResponse)
def property_stats(db: Session = Depends(get_db)):
    """Counts by status and type plus price and size averages over all properties."""
    return {"data": get_property_stats(db)}


@router.get("/{property_id}", response_model=PropertyEnvelope, response_model_exclude_unset=True)
def show_property(property_id: int, db: Session = Depends(get_db)):
    return _envelope(property_service.get_property(db, property_id))


@router.put("/{property_id}", response_model=PropertyEnvelope, response_model_exclude_unset=True)
@router.patch("/{property_id}", response_model=PropertyEnvelope, response_model_exclude_unset=True)
def update_property(property_id: int, property_data: PropertyUpdate, db: Session = Depends(get_db)):
    """Update a property. Only the fields present in the body change."""
    return _envelope(property_service.update_property(db, property_id, property_data))


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(property_id: int, db: Session = Depends(get_db)):
    property_service.delete_property(db, property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{property_id}/features", response_model=PropertyEnvelope, response_model_exclude_unset=True)
def add_feature(property_id: int, payload: FeatureRequest, db: Session = Depends(get_db)):
    """Add a feature. Adding one that is already listed changes nothing."""
    return _envelope(property_service.add_property_feature(db, property_id, payload.feature))


@router.delete("/{property_id}/features/{feature}", response_model=PropertyEnvelope, response_model_exclude_unset=True)
def remove_feature(property_id: int, feature: str, db: Session = Depends(get_db)):
    """Remove a feature. Removing one that is not listed changes nothing."""
    return _envelope(property_service.remove_property_feature(db, property_id, feature))
