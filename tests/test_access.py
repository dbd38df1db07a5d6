"""Tests for the ownership checks shared by every list and restaurant operation."""

import pytest

from notebook.exceptions import NotFoundOrUnauthorized
from notebook.models.list import List, ListOwner, ListRestaurant
from notebook.models.restaurant import Restaurant
from notebook.models.user import User
from notebook.services.access import authorize_list, authorize_restaurant


@pytest.fixture
def users(db):
    alice = User(email="alice@example.com", password_hash="x", name="Alice")
    bob = User(email="bob@example.com", password_hash="x", name="Bob")
    db.add_all([alice, bob])
    db.commit()
    return alice, bob


@pytest.fixture
def alices_list(db, users):
    alice, _ = users
    lst = List(name="Alice's picks")
    lst.owners.append(ListOwner(user_id=alice.id))
    restaurant = Restaurant(place_id="place-1", name="Sushi Dai", address="Tsukiji")
    db.add_all([lst, restaurant])
    db.flush()
    db.add(ListRestaurant(list_id=lst.id, restaurant_id=restaurant.id, order=0))
    db.commit()
    return lst, restaurant


class TestAuthorizeList:
    def test_owner_gets_the_list(self, db, users, alices_list):
        alice, _ = users
        lst, _ = alices_list
        assert authorize_list(db, alice.id, lst.id).id == lst.id

    def test_non_owner_and_missing_list_raise_the_same_error(self, db, users, alices_list):
        _, bob = users
        lst, _ = alices_list

        with pytest.raises(NotFoundOrUnauthorized) as forbidden:
            authorize_list(db, bob.id, lst.id)
        with pytest.raises(NotFoundOrUnauthorized) as missing:
            authorize_list(db, bob.id, "no-such-list")

        assert forbidden.value.message == missing.value.message == "List not found"
        assert forbidden.value.context == missing.value.context

    def test_added_owner_gains_access(self, db, users, alices_list):
        _, bob = users
        lst, _ = alices_list
        db.add(ListOwner(list_id=lst.id, user_id=bob.id))
        db.commit()

        assert authorize_list(db, bob.id, lst.id).id == lst.id


class TestAuthorizeRestaurant:
    def test_reachable_through_owned_list(self, db, users, alices_list):
        alice, _ = users
        _, restaurant = alices_list
        assert authorize_restaurant(db, alice.id, restaurant.id).place_id == "place-1"

    def test_not_reachable_without_owned_list(self, db, users, alices_list):
        _, bob = users
        _, restaurant = alices_list

        with pytest.raises(NotFoundOrUnauthorized) as exc_info:
            authorize_restaurant(db, bob.id, restaurant.id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Restaurant not found"

    def test_restaurant_on_no_list_is_unreachable(self, db, users):
        alice, _ = users
        orphan = Restaurant(place_id="place-2", name="Orphan", address="Nowhere")
        db.add(orphan)
        db.commit()

        with pytest.raises(NotFoundOrUnauthorized):
            authorize_restaurant(db, alice.id, orphan.id)
