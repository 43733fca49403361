"""
Tests for listing filters, sorting, pagination and search.

Run tests with: python -m pytest tests/ -v
"""


def _ids(response):
    return [item["id"] for item in response.json()["data"]]


# =====================================================
# INTEGRATION TESTS: Listing Filters
# =====================================================

class TestListFilters:
    """Tests for GET /properties filter criteria."""

    def test_list_structure(self, client, make_property):
        for _ in range(3):
            make_property(square_feet=1000, bedrooms=2, bathrooms=1, floors=1, price=100000)

        response = client.get("/properties")

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 3
        item = body["data"][0]
        for key in ("id", "title", "address", "property_details", "financial", "status"):
            assert key in item
        assert set(item["property_details"]) >= {"square_feet", "bedrooms", "bathrooms", "floors"}
        assert body["meta"]["total"] == 3
        assert body["links"]["self"] == "http://testserver/properties"

    def test_bedrooms_is_a_minimum(self, client, make_property):
        """Test bedrooms=3 matches 3, 4 and 5 bedrooms."""
        for bedrooms in (1, 2, 3, 4, 5):
            make_property(bedrooms=bedrooms)

        response = client.get("/properties?bedrooms=3")

        data = response.json()["data"]
        assert len(data) == 3
        assert sorted(item["property_details"]["bedrooms"] for item in data) == [3, 4, 5]

    def test_bedrooms_and_bathrooms_combined(self, client, make_property):
        make_property(bedrooms=3, bathrooms=2)
        make_property(bedrooms=4, bathrooms=1)
        make_property(bedrooms=2, bathrooms=3)
        make_property(bedrooms=5, bathrooms=3)

        response = client.get("/properties?bedrooms=3&bathrooms=2")

        details = [item["property_details"] for item in response.json()["data"]]
        assert len(details) == 2
        assert all(d["bedrooms"] >= 3 and d["bathrooms"] >= 2 for d in details)

    def test_city_bedrooms_and_status(self, client, make_property):
        make_property(city="Chicago", bedrooms=3, status="disponible")
        make_property(city="Chicago", bedrooms=2, status="vendida")
        make_property(city="New York", bedrooms=3, status="disponible")
        make_property(city="Chicago", bedrooms=3, status="disponible")

        response = client.get("/properties?city=Chicago&bedrooms=3&status=disponible")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    def test_city_is_case_insensitive_substring(self, client, make_property):
        make_property(city="Guadalajara")
        make_property(city="Zapopan")

        response = client.get("/properties?city=GUADAL")

        assert [item["address"]["city"] for item in response.json()["data"]] == ["Guadalajara"]

    def test_empty_city_is_ignored(self, client, make_property):
        make_property(city="Guadalajara")
        make_property(city="Zapopan")

        response = client.get("/properties?city=")

        assert len(response.json()["data"]) == 2

    def test_price_range(self, client, make_property):
        for price in (100000, 250000, 500000):
            make_property(price=price)

        response = client.get("/properties?min_price=200000&max_price=300000")

        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["financial"]["price"] == 250000

    def test_min_price_only(self, client, make_property):
        for price in (100000, 250000, 500000):
            make_property(price=price)

        response = client.get("/properties?min_price=200000")

        assert len(response.json()["data"]) == 2

    def test_property_type(self, client, make_property):
        make_property(property_type="casa")
        make_property(property_type="duplex")

        response = client.get("/properties?property_type=duplex")

        data = response.json()["data"]
        assert [item["property_details"]["property_type"] for item in data] == ["duplex"]

    def test_invalid_status_filter(self, client):
        response = client.get("/properties?status=sold")

        assert response.status_code == 422
        assert "status" in response.json()["errors"]

    def test_filters_are_echoed(self, client, make_property):
        make_property(city="Chicago", bedrooms=3)

        response = client.get("/properties?city=Chicago&bedrooms=3&sort_by=price")

        assert response.json()["meta"]["filters"] == {"city": "Chicago", "bedrooms": 3}


# =====================================================
# INTEGRATION TESTS: Sorting and Pagination
# =====================================================

class TestSortingAndPagination:

    def test_default_order_is_newest_first(self, client, make_property):
        oldest = make_property(age_minutes=30)
        newest = make_property(age_minutes=10)
        middle = make_property(age_minutes=20)

        response = client.get("/properties")

        assert _ids(response) == [newest.id, middle.id, oldest.id]

    def test_unknown_sort_by_falls_back_to_default(self, client, make_property):
        """Test an unrecognized sort key is not an error."""
        oldest = make_property(age_minutes=30, price=900000)
        newest = make_property(age_minutes=10, price=100000)
        middle = make_property(age_minutes=20, price=500000)

        response = client.get("/properties?sort_by=drop_table&sort_direction=asc")

        assert response.status_code == 200
        assert _ids(response) == [oldest.id, middle.id, newest.id]

        response = client.get("/properties?sort_by=drop_table")
        assert _ids(response) == [newest.id, middle.id, oldest.id]

    def test_sort_by_price_ascending(self, client, make_property):
        expensive = make_property(price=900000)
        cheap = make_property(price=100000)
        mid = make_property(price=500000)

        response = client.get("/properties?sort_by=price&sort_direction=asc")

        assert _ids(response) == [cheap.id, mid.id, expensive.id]

    def test_invalid_sort_direction(self, client):
        response = client.get("/properties?sort_direction=sideways")

        assert response.status_code == 422
        assert "sort_direction" in response.json()["errors"]

    def test_default_page_size(self, client, make_property):
        for _ in range(20):
            make_property()

        response = client.get("/properties")

        body = response.json()
        assert len(body["data"]) == 15
        assert body["meta"]["pagination"] == {
            "current_page": 1,
            "per_page": 15,
            "last_page": 2,
            "total": 20,
        }

    def test_second_page(self, client, make_property):
        for _ in range(12):
            make_property()

        response = client.get("/properties?per_page=5&page=3")

        body = response.json()
        assert len(body["data"]) == 2
        assert body["meta"]["total"] == 2
        assert body["meta"]["pagination"]["last_page"] == 3
        assert body["meta"]["pagination"]["total"] == 12

    def test_per_page_must_be_positive(self, client):
        assert client.get("/properties?per_page=0").status_code == 422

    def test_large_per_page_is_accepted(self, client, make_property):
        for _ in range(20):
            make_property()

        response = client.get("/properties?per_page=200")

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 20
        assert body["meta"]["pagination"]["per_page"] == 200
        assert body["meta"]["pagination"]["last_page"] == 1


# =====================================================
# INTEGRATION TESTS: Search
# =====================================================

class TestSearch:
    """Tests for GET /properties/search."""

    def test_text_search(self, client, make_property):
        make_property(title="Beautiful Ocean View")
        make_property(title="Mountain Cabin")
        make_property(title="Lake House", description="Located near the beautiful lake")

        response = client.get("/properties/search?q=beautiful")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    def test_text_search_matches_address_and_city(self, client, make_property):
        make_property(address="Avenida Reforma #12")
        make_property(city="Reforma")
        make_property(city="Monterrey")

        response = client.get("/properties/search?q=reforma")

        assert len(response.json()["data"]) == 2

    def test_geo_search(self, client, make_property):
        """Test only properties inside the bounding box are returned."""
        inside = make_property(latitude=20.05, longitude=-103.05)
        make_property(latitude=20.5, longitude=-103.0)
        make_property(latitude=20.0, longitude=-102.5)

        response = client.get("/properties/search?latitude=20.0&longitude=-103.0&radius=10")

        assert _ids(response) == [inside.id]

    def test_coordinates_without_radius_do_not_filter(self, client, make_property):
        make_property(latitude=20.05, longitude=-103.05)
        make_property(latitude=-30.0, longitude=150.0)

        response = client.get("/properties/search?latitude=20.0&longitude=-103.0")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    def test_latitude_alone_does_not_filter(self, client, make_property):
        make_property(latitude=20.05, longitude=-103.05)
        make_property(latitude=-30.0, longitude=150.0)

        response = client.get("/properties/search?latitude=20.0&radius=5")

        assert len(response.json()["data"]) == 2

    def test_text_and_geo_combined(self, client, make_property):
        match = make_property(title="Casa bonita", latitude=20.01, longitude=-103.01)
        make_property(title="Casa fea", latitude=20.01, longitude=-103.01)
        make_property(title="Casa bonita lejos", latitude=25.0, longitude=-100.0)

        response = client.get("/properties/search?q=bonita&latitude=20&longitude=-103&radius=5")

        assert _ids(response) == [match.id]

    def test_search_echoes_criteria(self, client):
        response = client.get("/properties/search?q=casa&latitude=20&longitude=-103")

        assert response.json()["meta"]["filters"] == {"q": "casa", "latitude": 20.0, "longitude": -103.0}

    def test_search_validates_radius(self, client):
        response = client.get("/properties/search?latitude=20&longitude=-103&radius=500")

        assert response.status_code == 422
        assert "radius" in response.json()["errors"]

    def test_search_validates_latitude(self, client):
        response = client.get("/properties/search?latitude=95&longitude=-103")

        assert response.json()["errors"]["latitude"] == ["Latitude must be between -90 and 90 degrees."]
