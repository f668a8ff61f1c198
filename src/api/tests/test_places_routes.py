"""Tests for /api/places routes, wired to in-memory fakes."""

import unittest

from fastapi.testclient import TestClient

from adapter.fake.document_store import FakeDocumentStore
from adapter.fake.geocoder import FakeGeocoder
from adapter.fake.image_store import FakeImageStore
from adapter.fake.place_repository import FakePlaceRepository
from adapter.fake.transaction import FakeTransactionManager
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import (
    get_geocoder,
    get_image_store,
    get_place_repo,
    get_token_service,
    get_transaction_manager,
    get_user_repo,
)
from api.main import app
from services.token_service import TokenService

PNG = ("eiffel.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 32, "image/png")
GIF = ("eiffel.gif", b"GIF89a", "image/gif")

VALID_FORM = {
    "title": "Eiffel Tower",
    "description": "A wrought-iron lattice tower",
    "address": "Champ de Mars, Paris",
}


class PlacesRouteTestCase(unittest.TestCase):

    def setUp(self):
        self.db = FakeDocumentStore()
        self.users = FakeUserRepository(self.db)
        self.places = FakePlaceRepository(self.db)
        self.transactions = FakeTransactionManager(self.db)
        self.geocoder = FakeGeocoder()
        self.images = FakeImageStore()
        self.tokens = TokenService("test-secret-key")

        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_place_repo] = lambda: self.places
        app.dependency_overrides[get_transaction_manager] = lambda: self.transactions
        app.dependency_overrides[get_geocoder] = lambda: self.geocoder
        app.dependency_overrides[get_image_store] = lambda: self.images
        app.dependency_overrides[get_token_service] = lambda: self.tokens

        self.client = TestClient(app)
        self.owner = self.users.create(name="Al", email="al@x.com", password_hash="h", image="al.png")
        self.other = self.users.create(name="Bo", email="bo@x.com", password_hash="h", image="bo.png")

    def tearDown(self):
        app.dependency_overrides.clear()

    def _auth(self, user):
        return {"Authorization": f"Bearer {self.tokens.issue(user.id, user.email)}"}

    def _create(self, user=None, data=None, image=PNG, headers=None):
        return self.client.post(
            "/api/places",
            data=data or VALID_FORM,
            files={"image": image},
            headers=headers if headers is not None else self._auth(user or self.owner),
        )


class TestCreatePlace(PlacesRouteTestCase):

    def test_create_returns_201_and_links_place(self):
        response = self._create()

        self.assertEqual(response.status_code, 201)
        place = response.json()["place"]
        self.assertEqual(place["title"], "Eiffel Tower")
        self.assertEqual(place["creator"], self.owner.id)
        self.assertEqual(place["location"], {"lat": 40.7484405, "lng": -73.9878584})
        self.assertIn(place["id"], self.users.get_by_id(self.owner.id).places)
        self.assertIn(place["image"], self.images.files)
        self.assertEqual(self.images.deleted, [])

    def test_created_place_is_readable(self):
        place_id = self._create().json()["place"]["id"]

        self.assertEqual(self.client.get(f"/api/places/{place_id}").status_code, 200)
        by_user = self.client.get(f"/api/places/user/{self.owner.id}").json()["places"]
        self.assertEqual([p["id"] for p in by_user], [place_id])

    def test_missing_token_is_403_and_nothing_stored(self):
        response = self._create(headers={})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"message": "Authentication failed!"})
        self.assertEqual(self.images.files, {})

    def test_invalid_token_is_403(self):
        response = self._create(headers={"Authorization": "Bearer not-a-token"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.places.store, {})

    def test_gif_is_rejected_before_handler(self):
        response = self._create(image=GIF)

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json(), {"message": "Invalid mime type!"})
        self.assertEqual(self.images.files, {})
        self.assertEqual(self.geocoder.calls, [])

    def test_invalid_form_is_422_and_upload_removed(self):
        response = self._create(data={**VALID_FORM, "description": "shrt"})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json(), {"message": "Invalid inputs passed, please check your data."})
        self.assertEqual(self.images.files, {})
        self.assertEqual(len(self.images.deleted), 1)

    def test_geocode_failure_removes_upload(self):
        self.geocoder.default = None

        response = self._create()

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json(), {"message": "Could not find location for the specified address."})
        self.assertEqual(self.images.files, {})

    def test_store_failure_is_500_with_nothing_committed(self):
        self.users.fail_writes = True

        response = self._create()

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Creating place failed, please try again."})
        self.assertEqual(self.places.store, {})
        self.assertEqual(self.users.get_by_id(self.owner.id).places, [])
        self.assertEqual(self.images.files, {})

    def test_token_for_deleted_user_is_404(self):
        ghost = self.users.create(name="Gh", email="gh@x.com", password_hash="h", image="gh.png")
        headers = self._auth(ghost)
        del self.users.store[ghost.id]

        response = self._create(headers=headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.images.files, {})


class TestReadPlaces(PlacesRouteTestCase):

    def test_unknown_place_is_404(self):
        response = self.client.get("/api/places/missing")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Could not find a place for the provided id!"})

    def test_user_without_places_is_404(self):
        response = self.client.get(f"/api/places/user/{self.owner.id}")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Could not find a place for the provided user id!"})


class TestUpdatePlace(PlacesRouteTestCase):

    def setUp(self):
        super().setUp()
        self.place_id = self._create().json()["place"]["id"]

    def test_creator_can_update(self):
        response = self.client.patch(
            f"/api/places/{self.place_id}",
            json={"title": "Tour Eiffel", "description": "La dame de fer"},
            headers=self._auth(self.owner),
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["place"]["title"], "Tour Eiffel")
        self.assertEqual(response.json()["place"]["address"], VALID_FORM["address"])

    def test_non_creator_is_401(self):
        response = self.client.patch(
            f"/api/places/{self.place_id}",
            json={"title": "Hijacked", "description": "Not mine to edit"},
            headers=self._auth(self.other),
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "You are not allowed to edit this place!"})
        self.assertEqual(self.places.get_by_id(self.place_id).title, "Eiffel Tower")

    def test_invalid_body_is_422(self):
        response = self.client.patch(
            f"/api/places/{self.place_id}",
            json={"title": "", "description": "x"},
            headers=self._auth(self.owner),
        )

        self.assertEqual(response.status_code, 422)

    def test_unknown_place_is_404(self):
        response = self.client.patch(
            "/api/places/missing",
            json={"title": "Title", "description": "Description"},
            headers=self._auth(self.owner),
        )

        self.assertEqual(response.status_code, 404)


class TestDeletePlace(PlacesRouteTestCase):

    def setUp(self):
        super().setUp()
        self.place = self._create().json()["place"]

    def test_creator_can_delete(self):
        response = self.client.delete(f"/api/places/{self.place['id']}", headers=self._auth(self.owner))

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.json(), {"message": "Place was deleted, successfully."})
        self.assertEqual(self.places.store, {})
        self.assertEqual(self.users.get_by_id(self.owner.id).places, [])
        self.assertEqual(self.images.deleted, [self.place["image"]])

    def test_non_creator_is_401_and_place_remains(self):
        response = self.client.delete(f"/api/places/{self.place['id']}", headers=self._auth(self.other))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "You are not allowed to delete this place!"})
        self.assertEqual(self.client.get(f"/api/places/{self.place['id']}").json()["place"], self.place)

    def test_requires_token(self):
        response = self.client.delete(f"/api/places/{self.place['id']}")

        self.assertEqual(response.status_code, 403)
        self.assertIn(self.place["id"], self.places.store)


class TestAppBoundary(PlacesRouteTestCase):

    def test_unknown_route_is_404_with_message(self):
        response = self.client.get("/api/nothing-here")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Could not found this route."})

    def test_cors_headers_on_responses(self):
        response = self.client.get("/api/places/missing", headers={"Origin": "http://localhost:3000"})

        self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_preflight_is_not_authenticated(self):
        response = self.client.options(
            "/api/places",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("POST", response.headers["access-control-allow-methods"])


if __name__ == '__main__':
    unittest.main()
