"""Tests for restaurants on lists and visits to them."""

from notebook.models.list import ListRestaurant
from notebook.models.restaurant import Restaurant, Visit
from notebook.services.realtime import ListEventType


class TestAddRestaurant:
    """Tests for POST /api/v1/restaurants."""

    def test_new_restaurants_are_appended(self, client, auth_headers, create_list, add_restaurant):
        data = create_list(auth_headers, "Noodles")

        first = add_restaurant(auth_headers, data["id"], "p1")
        second = add_restaurant(auth_headers, data["id"], "p2", name="Udon Shin")

        assert first["order"] == 0
        assert second["order"] == 1
        assert second["list_id"] == data["id"]
        assert second["restaurant"]["name"] == "Udon Shin"

    def test_append_goes_after_the_highest_position(
        self, client, auth_headers, create_list, add_restaurant
    ):
        data = create_list(auth_headers, "Noodles")
        first = add_restaurant(auth_headers, data["id"], "p1")
        client.patch(
            f"/api/v1/lists/{data['id']}/reorder",
            headers=auth_headers,
            json={"items": [{"id": first["id"], "order": 10}]},
        )

        second = add_restaurant(auth_headers, data["id"], "p2")

        assert second["order"] == 11

    def test_place_is_shared_across_lists(
        self, client, auth_headers, create_list, add_restaurant, db
    ):
        one = create_list(auth_headers, "One")
        two = create_list(auth_headers, "Two")

        a = add_restaurant(auth_headers, one["id"], "shared-place")
        b = add_restaurant(auth_headers, two["id"], "shared-place")

        assert a["restaurant_id"] == b["restaurant_id"]
        assert db.query(Restaurant).count() == 1

    def test_re_adding_returns_existing_entry(
        self, client, auth_headers, create_list, add_restaurant, db
    ):
        data = create_list(auth_headers, "Noodles")
        first = add_restaurant(auth_headers, data["id"], "p1")
        again = add_restaurant(auth_headers, data["id"], "p1")

        assert again["id"] == first["id"]
        assert db.query(ListRestaurant).count() == 1

    def test_optional_fields_are_stored(self, client, auth_headers, create_list, add_restaurant):
        data = create_list(auth_headers, "Fancy")
        entry = add_restaurant(
            auth_headers,
            data["id"],
            "p1",
            phone="+81 3-1234-5678",
            website="https://sushi.example.com/",
            photos=["https://img.example.com/1.jpg"],
            price_level=4,
            rating=4.6,
            tags=["sushi", "omakase", "sushi"],
        )

        restaurant = entry["restaurant"]
        assert restaurant["phone"] == "+81 3-1234-5678"
        assert restaurant["website"] == "https://sushi.example.com/"
        assert restaurant["photos"] == ["https://img.example.com/1.jpg"]
        assert restaurant["price_level"] == 4
        assert restaurant["tags"] == ["omakase", "sushi"]

    def test_absent_fields_are_omitted(self, client, auth_headers, create_list, add_restaurant):
        data = create_list(auth_headers, "Plain")
        restaurant = add_restaurant(auth_headers, data["id"], "p1")["restaurant"]

        for absent in ("phone", "website", "price_level", "rating"):
            assert absent not in restaurant

    def test_invalid_price_level_rejected(self, client, auth_headers, create_list):
        data = create_list(auth_headers, "Plain")
        response = client.post(
            "/api/v1/restaurants",
            headers=auth_headers,
            json={
                "list_id": data["id"],
                "place_id": "p1",
                "name": "Too pricey",
                "address": "Somewhere",
                "price_level": 5,
            },
        )
        assert response.status_code == 400

    def test_adding_to_foreign_list_is_not_found(self, client, make_user, create_list, db):
        owner = make_user("owner@example.com")
        stranger = make_user("stranger@example.com")
        data = create_list(owner, "Mine")

        response = client.post(
            "/api/v1/restaurants",
            headers=stranger,
            json={"list_id": data["id"], "place_id": "p1", "name": "Sneaky", "address": "x"},
        )

        assert response.status_code == 404
        assert db.query(Restaurant).count() == 0

    def test_add_publishes_event(
        self, client, auth_headers, create_list, add_restaurant, mock_publisher
    ):
        data = create_list(auth_headers, "Noodles")
        mock_publisher.reset_mock()

        add_restaurant(auth_headers, data["id"], "p1")

        channel, message = mock_publisher.publish.call_args[0]
        assert channel == f"list:{data['id']}"
        assert ListEventType.RESTAURANT_ADDED in message


class TestRemoveRestaurant:
    """Tests for DELETE /api/v1/lists/{list_id}/restaurants/{restaurant_id}."""

    def test_remove_keeps_restaurant_record(
        self, client, auth_headers, create_list, add_restaurant, db
    ):
        data = create_list(auth_headers, "Noodles")
        entry = add_restaurant(auth_headers, data["id"], "p1")

        response = client.delete(
            f"/api/v1/lists/{data['id']}/restaurants/{entry['restaurant_id']}",
            headers=auth_headers,
        )

        assert response.status_code == 204
        assert db.query(ListRestaurant).count() == 0
        assert db.query(Restaurant).count() == 1

    def test_remove_missing_entry_is_not_found(self, client, auth_headers, create_list):
        data = create_list(auth_headers, "Noodles")
        response = client.delete(
            f"/api/v1/lists/{data['id']}/restaurants/unknown", headers=auth_headers
        )
        assert response.status_code == 404

    def test_removed_restaurant_is_no_longer_reachable(
        self, client, auth_headers, create_list, add_restaurant
    ):
        data = create_list(auth_headers, "Noodles")
        entry = add_restaurant(auth_headers, data["id"], "p1")
        client.delete(
            f"/api/v1/lists/{data['id']}/restaurants/{entry['restaurant_id']}",
            headers=auth_headers,
        )

        response = client.get(f"/api/v1/restaurants/{entry['restaurant_id']}", headers=auth_headers)

        assert response.status_code == 404


class TestVisits:
    """Tests for visits and the restaurant detail view."""

    def test_create_visit_with_participants(
        self, client, make_user, create_list, add_restaurant
    ):
        alice = make_user("alice@example.com", "Alice")
        bob = make_user("bob@example.com", "Bob")
        data = create_list(alice, "Dinners", collaborators=["bob@example.com"])
        entry = add_restaurant(alice, data["id"], "p1")

        response = client.post(
            "/api/v1/visits",
            headers=bob,
            json={
                "restaurant_id": entry["restaurant_id"],
                "date": "2026-03-14T19:30:00Z",
                "notes": "Great tonkotsu",
                "rating": 5,
                "participants": [alice.user_id, bob.user_id, alice.user_id],
            },
        )

        assert response.status_code == 200
        visit = response.json()
        assert visit["notes"] == "Great tonkotsu"
        assert visit["rating"] == 5
        assert {p["id"] for p in visit["participants"]} == {alice.user_id, bob.user_id}
        assert len(visit["participants"]) == 2
        assert "password_hash" not in visit["participants"][0]

    def test_unknown_participant_is_rejected(
        self, client, auth_headers, create_list, add_restaurant, db
    ):
        data = create_list(auth_headers, "Dinners")
        entry = add_restaurant(auth_headers, data["id"], "p1")

        response = client.post(
            "/api/v1/visits",
            headers=auth_headers,
            json={
                "restaurant_id": entry["restaurant_id"],
                "date": "2026-03-14T19:30:00Z",
                "participants": [auth_headers.user_id, "ghost"],
            },
        )

        assert response.status_code == 400
        details = response.json()["details"]
        assert details["field"] == "participants"
        assert details["ids"] == ["ghost"]
        assert db.query(Visit).count() == 0

    def test_visit_on_unreachable_restaurant_is_not_found(
        self, client, make_user, create_list, add_restaurant
    ):
        owner = make_user("owner@example.com")
        stranger = make_user("stranger@example.com")
        data = create_list(owner, "Mine")
        entry = add_restaurant(owner, data["id"], "p1")

        response = client.post(
            "/api/v1/visits",
            headers=stranger,
            json={
                "restaurant_id": entry["restaurant_id"],
                "date": "2026-03-14T19:30:00Z",
                "participants": [stranger.user_id],
            },
        )

        assert response.status_code == 404

    def test_invalid_visit_rating_rejected(
        self, client, auth_headers, create_list, add_restaurant
    ):
        data = create_list(auth_headers, "Dinners")
        entry = add_restaurant(auth_headers, data["id"], "p1")
        response = client.post(
            "/api/v1/visits",
            headers=auth_headers,
            json={
                "restaurant_id": entry["restaurant_id"],
                "date": "2026-03-14T19:30:00Z",
                "rating": 0,
                "participants": [],
            },
        )
        assert response.status_code == 400

    def test_restaurant_detail_lists_visits_newest_first(
        self, client, auth_headers, create_list, add_restaurant
    ):
        data = create_list(auth_headers, "Dinners")
        entry = add_restaurant(auth_headers, data["id"], "p1")
        for date in ("2026-01-05T12:00:00Z", "2026-03-01T12:00:00Z", "2026-02-10T12:00:00Z"):
            client.post(
                "/api/v1/visits",
                headers=auth_headers,
                json={
                    "restaurant_id": entry["restaurant_id"],
                    "date": date,
                    "participants": [auth_headers.user_id],
                },
            )

        response = client.get(f"/api/v1/restaurants/{entry['restaurant_id']}", headers=auth_headers)

        assert response.status_code == 200
        detail = response.json()
        assert [visit["date"][:10] for visit in detail["visits"]] == [
            "2026-03-01",
            "2026-02-10",
            "2026-01-05",
        ]
        assert detail["visits"][0]["participants"][0]["email"] == auth_headers.email
        assert "rating" not in detail["visits"][0]
        assert detail["visits"][0]["notes"] == ""

    def test_restaurant_detail_for_stranger_is_not_found(
        self, client, make_user, create_list, add_restaurant
    ):
        owner = make_user("owner@example.com")
        stranger = make_user("stranger@example.com")
        data = create_list(owner, "Mine")
        entry = add_restaurant(owner, data["id"], "p1")

        forbidden = client.get(f"/api/v1/restaurants/{entry['restaurant_id']}", headers=stranger)
        missing = client.get("/api/v1/restaurants/nope", headers=stranger)

        assert forbidden.status_code == missing.status_code == 404
        assert forbidden.json() == missing.json()
