"""Pydantic schemas for request/response validation."""
from datetime import date
from enum import Enum
from typing import Annotated, Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class PropertyType(str, Enum):
    CASA = "casa"
    CONDOMINIO = "condominio"
    DEPARTAMENTO = "departamento"
    TOWNHOUSE = "townhouse"
    DUPLEX = "duplex"


class PropertyStatus(str, Enum):
    DISPONIBLE = "disponible"
    PENDIENTE = "pendiente"
    VENDIDA = "vendida"
    RENTADA = "rentada"


SORTABLE_FIELDS = ("created_at", "updated_at", "price", "square_feet", "bedrooms", "bathrooms")

FeatureName = Annotated[str, Field(max_length=100)]


# ============== Property Request Schemas ==============

class PropertyBase(BaseModel):
    """Writable property attributes. Every field is optional and nullable."""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    square_feet: Optional[int] = Field(None, ge=1)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    floors: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    monthly_rent: Optional[float] = Field(None, ge=0)
    property_taxes: Optional[float] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    year_built: Optional[int] = Field(None, ge=1800)
    lot_size: Optional[float] = Field(None, ge=0)
    garage_spaces: Optional[int] = Field(None, ge=0)
    has_basement: Optional[bool] = None
    has_pool: Optional[bool] = None
    has_garden: Optional[bool] = None
    features: Optional[list[FeatureName]] = None
    metadata: Optional[dict[str, Any]] = None
    user_id: Optional[int] = None

    @field_validator("year_built")
    @classmethod
    def year_not_in_future(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value > date.today().year:
            raise ValueError("Year built cannot be in the future.")
        return value

    @field_validator("features")
    @classmethod
    def unique_features(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value
        return list(dict.fromkeys(value))


class PropertyCreate(PropertyBase):
    """Schema for creating a property."""


class PropertyUpdate(PropertyBase):
    """Schema for updating a property. Only fields present in the body are applied."""


class FeatureRequest(BaseModel):
    """Schema for adding a single feature."""
    feature: str = Field(..., min_length=1, max_length=100)


# ============== Query Criteria ==============

class PropertyFilters(BaseModel):
    """Listing criteria. Absent fields do not constrain the result."""
    city: Optional[str] = None
    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: Optional[str] = None
    sort_direction: str = "desc"
    page: int = 1
    per_page: int = 15

    def supplied(self) -> dict:
        """Filter criteria that were given, for echoing back to clients."""
        return self.model_dump(
            mode="json",
            exclude_none=True,
            include={"city", "property_type", "status", "min_price", "max_price", "bedrooms", "bathrooms"},
        )


class SearchCriteria(BaseModel):
    """Free-text and bounding-box search parameters."""
    q: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None
    page: int = 1
    per_page: int = 15

    def supplied(self) -> dict:
        return self.model_dump(
            exclude_none=True,
            include={"q", "latitude", "longitude", "radius"},
        )


# ============== Property Response Schemas ==============

class AddressResponse(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    full_address: str = ""


class CoordinatesResponse(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class PropertyDetailsResponse(BaseModel):
    square_feet: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    floors: Optional[int] = None
    property_type: Optional[str] = None
    year_built: Optional[int] = None
    lot_size: Optional[float] = None
    garage_spaces: Optional[int] = None


class AmenitiesResponse(BaseModel):
    has_basement: bool = False
    has_pool: bool = False
    has_garden: bool = False
    features: list[str] = []


class FinancialResponse(BaseModel):
    price: Optional[float] = None
    price_per_sqft: Optional[float] = None
    monthly_rent: Optional[float] = None
    property_taxes: Optional[float] = None


class OwnerResponse(BaseModel):
    """Schema for the owning user."""
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class PropertyResponse(BaseModel):
    """Public property representation.

    ``owner`` is only set when the owner was loaded with the property; the
    routes serialize with ``exclude_unset`` so it is otherwise left out.
    """
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    address: AddressResponse
    coordinates: CoordinatesResponse
    property_details: PropertyDetailsResponse
    amenities: AmenitiesResponse
    financial: FinancialResponse
    status: str
    metadata: dict[str, Any] = {}
    owner: Optional[OwnerResponse] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PropertyEnvelope(BaseModel):
    """Single property wrapped under ``data``."""
    data: PropertyResponse


class PaginationMeta(BaseModel):
    current_page: int
    per_page: int
    last_page: int
    total: int


class CollectionMeta(BaseModel):
    total: int
    filters: dict[str, Any] = {}
    pagination: PaginationMeta


class PropertyCollectionResponse(BaseModel):
    """Schema for a page of properties."""
    data: list[PropertyResponse]
    meta: CollectionMeta
    links: dict[str, str]


# ============== Stats Schemas ==============

class PropertyStats(BaseModel):
    """Schema for collection statistics."""
    total_properties: int
    available_properties: int
    pending_properties: int
    sold_properties: int
    rented_properties: int
    average_price: Optional[float] = None
    average_price_per_sqft: Optional[float] = None
    average_square_feet: Optional[float] = None
    property_types: dict[str, int]


class PropertyStatsResponse(BaseModel):
    data: PropertyStats
