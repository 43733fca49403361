"""Composition of listing filters and search criteria into a single query.

Each recognized criterion maps to one predicate rule; the rules are collected
into a list and ANDed together when the query is built.
"""
import math
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session, joinedload

from property_api.config import settings
from property_api.models import Property
from property_api.schemas import SORTABLE_FIELDS, PropertyFilters, SearchCriteria


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle around a point, in decimal degrees."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


@dataclass
class Page:
    """One page of query results plus the counts needed to describe it."""
    items: list
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))


def bounding_box(latitude: float, longitude: float, radius_km: float) -> BoundingBox:
    """
    Approximate a circle of ``radius_km`` around a point with a rectangle.

    One degree of latitude is taken as 111 km; a degree of longitude shrinks
    with cos(latitude). The box over-includes points near its corners and the
    flat-earth scaling drifts at large radii, so results are approximate.

    Examples:
        bounding_box(0, 0, 111)  → lat [-1, 1], lng [-1, 1]
    """
    km_per_degree = settings.KM_PER_DEGREE
    lat_delta = radius_km / km_per_degree

    cos_lat = math.cos(math.radians(latitude))
    if abs(cos_lat) < 1e-12:
        # Every longitude is within range at the poles
        return BoundingBox(latitude - lat_delta, latitude + lat_delta, -180.0, 180.0)

    lng_delta = radius_km / (km_per_degree * cos_lat)
    return BoundingBox(
        min_lat=latitude - lat_delta,
        max_lat=latitude + lat_delta,
        min_lng=longitude - lng_delta,
        max_lng=longitude + lng_delta,
    )


class PropertyQueryBuilder:
    """Accumulates predicates over ``Property`` and renders one query."""

    def __init__(self):
        self.predicates = []
        self.order_by = []

    def where(self, predicate) -> "PropertyQueryBuilder":
        self.predicates.append(predicate)
        return self

    # ---------- filter rules ----------

    def in_city(self, city: Optional[str]) -> "PropertyQueryBuilder":
        if city:
            self.where(Property.city.ilike(f"%{city}%"))
        return self

    def of_type(self, property_type) -> "PropertyQueryBuilder":
        if property_type is not None:
            self.where(Property.property_type == _enum_value(property_type))
        return self

    def with_status(self, status) -> "PropertyQueryBuilder":
        if status is not None:
            self.where(Property.status == _enum_value(status))
        return self

    def with_min_bedrooms(self, bedrooms: Optional[int]) -> "PropertyQueryBuilder":
        if bedrooms is not None:
            self.where(Property.bedrooms >= bedrooms)
        return self

    def with_min_bathrooms(self, bathrooms: Optional[int]) -> "PropertyQueryBuilder":
        if bathrooms is not None:
            self.where(Property.bathrooms >= bathrooms)
        return self

    def in_price_range(self, min_price: Optional[float], max_price: Optional[float]) -> "PropertyQueryBuilder":
        if min_price is not None:
            self.where(Property.price >= min_price)
        if max_price is not None:
            self.where(Property.price <= max_price)
        return self

    def matching_text(self, term: Optional[str]) -> "PropertyQueryBuilder":
        """Case-insensitive substring match on any of the text columns."""
        if term:
            pattern = f"%{term}%"
            self.where(or_(
                Property.title.ilike(pattern),
                Property.description.ilike(pattern),
                Property.address.ilike(pattern),
                Property.city.ilike(pattern),
            ))
        return self

    def within_box(self, box: Optional[BoundingBox]) -> "PropertyQueryBuilder":
        if box is not None:
            self.where(Property.latitude.between(box.min_lat, box.max_lat))
            self.where(Property.longitude.between(box.min_lng, box.max_lng))
        return self

    # ---------- ordering ----------

    def sorted_by(self, sort_by: Optional[str], direction: str = "desc") -> "PropertyQueryBuilder":
        """
        Order by an allowed column. Unknown keys fall back to ``created_at``
        instead of raising.
        """
        if sort_by not in SORTABLE_FIELDS:
            sort_by = "created_at"
        descending = direction != "asc"

        sort_column = getattr(Property, sort_by)
        tie_breaker = Property.id
        if descending:
            self.order_by = [sort_column.desc(), tie_breaker.desc()]
        else:
            self.order_by = [sort_column.asc(), tie_breaker.asc()]
        return self

    # ---------- rendering ----------

    def build(self, db: Session, with_owner: bool = True) -> Query:
        query = db.query(Property)
        if with_owner:
            query = query.options(joinedload(Property.user))
        if self.predicates:
            query = query.filter(and_(*self.predicates))
        if not self.order_by:
            self.sorted_by(None)
        return query.order_by(*self.order_by)

    def paginate(self, db: Session, page: int = 1, per_page: Optional[int] = None) -> Page:
        per_page = per_page or settings.DEFAULT_PER_PAGE
        page = max(page, 1)

        count_query = db.query(Property)
        if self.predicates:
            count_query = count_query.filter(and_(*self.predicates))
        total = count_query.count()

        items = (
            self.build(db)
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return Page(items=items, total=total, page=page, per_page=per_page)

    # ---------- entry points ----------

    @classmethod
    def from_filters(cls, filters: PropertyFilters) -> "PropertyQueryBuilder":
        """Builder for the listing endpoint."""
        return (
            cls()
            .in_city(filters.city)
            .of_type(filters.property_type)
            .with_status(filters.status)
            .with_min_bedrooms(filters.bedrooms)
            .with_min_bathrooms(filters.bathrooms)
            .in_price_range(filters.min_price, filters.max_price)
            .sorted_by(filters.sort_by, filters.sort_direction)
        )

    @classmethod
    def from_search(cls, criteria: SearchCriteria) -> "PropertyQueryBuilder":
        """
        Builder for the search endpoint.

        The geographic filter applies only when latitude, longitude and
        radius are all given; any subset of them is ignored.
        """
        builder = cls().matching_text(criteria.q)
        geo = (criteria.latitude, criteria.longitude, criteria.radius)
        if all(value is not None for value in geo):
            builder.within_box(bounding_box(*geo))
        return builder.sorted_by(None)


def _enum_value(value) -> str:
    return getattr(value, "value", value)
