"""SQLAlchemy models for property listings and their owners.

Decimal columns are read back as floats so they serialize as JSON numbers.
"""
from datetime import datetime, timezone
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from property_api.config import settings
from property_api.database import Base


def get_current_time():
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(Base):
    """Owner of zero or more properties."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=get_current_time)
    updated_at = Column(DateTime(timezone=True), default=get_current_time, onupdate=get_current_time)

    # Deleting a user nulls properties.user_id at the database level
    properties = relationship("Property", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"


class Property(Base):
    """Property listing model."""

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)

    square_feet = Column(Integer, nullable=True)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    floors = Column(Integer, nullable=True)

    price = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    price_per_sqft = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    monthly_rent = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    property_taxes = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    property_type = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False, default="disponible")
    year_built = Column(Integer, nullable=True)
    lot_size = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    garage_spaces = Column(Integer, nullable=True)
    has_basement = Column(Boolean, nullable=False, default=False)
    has_pool = Column(Boolean, nullable=False, default=False)
    has_garden = Column(Boolean, nullable=False, default=False)

    # Free-form attributes kept as JSON blobs
    features = Column(JSON, default=list)
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSON, default=dict)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=get_current_time, index=True)
    updated_at = Column(DateTime(timezone=True), default=get_current_time, onupdate=get_current_time)

    user = relationship("User", back_populates="properties")

    __table_args__ = (
        Index("ix_properties_city_state", "city", "state"),
        Index("ix_properties_type_status", "property_type", "status"),
        Index("ix_properties_price_square_feet", "price", "square_feet"),
        Index("ix_properties_bedrooms_bathrooms", "bedrooms", "bathrooms"),
    )

    @property
    def full_address(self) -> str:
        """Street, city, state and zip joined with commas, skipping blanks."""
        parts = [self.address, self.city, self.state, self.zip_code]
        return ", ".join(part for part in parts if part)

    @property
    def formatted_zip_code(self) -> str:
        """
        Zip code with the country prefix.

        Examples:
            "44100"     → "MX-44100"
            "MX-44100"  → "MX-44100"
            None        → ""
        """
        if not self.zip_code:
            return ""
        if "-" in self.zip_code:
            return self.zip_code
        return f"{settings.POSTAL_CODE_PREFIX}{self.zip_code}"

    def has_feature(self, feature: str) -> bool:
        """Check whether the feature is listed."""
        return feature in (self.features or [])

    def add_feature(self, feature: str) -> bool:
        """
        Append a feature unless it is already present.

        Returns:
            True if the feature list changed
        """
        current_features = self.features if self.features else []
        if feature in current_features:
            return False
        # Assign a new list so the JSON column is flagged as dirty
        self.features = list(current_features) + [feature]
        return True

    def remove_feature(self, feature: str) -> bool:
        """
        Drop a feature if present.

        Returns:
            True if the feature list changed
        """
        current_features = self.features if self.features else []
        if feature not in current_features:
            return False
        self.features = [f for f in current_features if f != feature]
        return True

    def __repr__(self):
        return f"<Property {self.id}: {self.title}>"
