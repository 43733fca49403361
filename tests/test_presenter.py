"""
Tests for the public response shape.

Run tests with: python -m pytest tests/ -v
"""
from datetime import datetime, timezone

from sqlalchemy.orm import joinedload

from property_api.models import Property
from property_api.services.presenter import format_timestamp, present_collection, present_property
from property_api.services.query_builder import Page


class TestPresentProperty:
    """Tests for single property shaping."""

    def test_nested_groups(self):
        property_obj = Property(
            id=7,
            title="Casa en Zapopan",
            address="Avenida Patria #100",
            city="Zapopan",
            state="Jalisco",
            zip_code="45110",
            latitude=20.7,
            longitude=-103.4,
            square_feet=1200,
            bedrooms=3,
            price=2400000,
            price_per_sqft=2000.0,
            property_type="casa",
            status="disponible",
            has_pool=True,
        )

        result = present_property(property_obj).model_dump()

        assert result["address"] == {
            "street": "Avenida Patria #100",
            "city": "Zapopan",
            "state": "Jalisco",
            "zip_code": "45110",
            "full_address": "Avenida Patria #100, Zapopan, Jalisco, 45110",
        }
        assert result["coordinates"] == {"latitude": 20.7, "longitude": -103.4}
        assert result["property_details"]["property_type"] == "casa"
        assert result["financial"]["price_per_sqft"] == 2000.0
        assert result["amenities"]["has_pool"] is True
        assert result["amenities"]["has_garden"] is False

    def test_null_collections_become_empty(self):
        property_obj = Property(id=1, status="disponible", features=None, extra_metadata=None)

        result = present_property(property_obj)

        assert result.amenities.features == []
        assert result.metadata == {}

    def test_full_address_skips_blanks(self):
        property_obj = Property(id=1, status="disponible", address="", city="Mérida", zip_code="97000")

        assert present_property(property_obj).address.full_address == "Mérida, 97000"

    def test_owner_omitted_when_not_loaded(self, db, make_property, make_user):
        user = make_user()
        created = make_property(user_id=user.id)
        db.expire_all()
        property_obj = db.query(Property).filter(Property.id == created.id).one()

        result = present_property(property_obj).model_dump(exclude_unset=True)

        assert "owner" not in result

    def test_owner_included_when_loaded(self, db, make_property, make_user):
        user = make_user(name="Luis", email="luis@example.com")
        created = make_property(user_id=user.id)
        db.expire_all()
        property_obj = (
            db.query(Property)
            .options(joinedload(Property.user))
            .filter(Property.id == created.id)
            .one()
        )

        result = present_property(property_obj).model_dump(exclude_unset=True)

        assert result["owner"] == {"id": user.id, "name": "Luis", "email": "luis@example.com"}

    def test_owner_can_be_forced_out(self, db, make_property, make_user):
        user = make_user()
        created = make_property(user_id=user.id)

        result = present_property(created, include_owner=False).model_dump(exclude_unset=True)

        assert "owner" not in result


class TestFormatTimestamp:

    def test_aware_timestamp(self):
        value = datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2025-03-04T05:06:07.890000Z"

    def test_naive_timestamp_is_utc(self):
        assert format_timestamp(datetime(2025, 3, 4, 5, 6, 7)) == "2025-03-04T05:06:07.000000Z"

    def test_none(self):
        assert format_timestamp(None) is None


class TestPresentCollection:

    def test_meta_and_links(self):
        items = [Property(id=i, status="disponible") for i in (1, 2)]
        page = Page(items=items, total=17, page=2, per_page=2)

        result = present_collection(page, {"city": "León"}, "http://testserver/properties")

        assert [item.id for item in result.data] == [1, 2]
        assert result.meta.total == 2
        assert result.meta.filters == {"city": "León"}
        assert result.meta.pagination.last_page == 9
        assert result.links == {"self": "http://testserver/properties"}
