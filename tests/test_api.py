"""End-to-end checks of the REST surface against both storage backends."""

import pytest

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.storage import MemStorage, StorageError

API = "/api/v1"


def register(client, n: int = 1, **extra):
    body = {"name": f"User {n}", "email": f"user{n}@example.com", "password": "password123", "username": f"user{n}"}
    body.update(extra)
    r = client.post(f"{API}/auth/register", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def create_pet(client, owner_id: int, name: str = "Rex", **extra):
    body = {"owner_id": owner_id, "name": name, "breed": "Beagle", "age": 3, "gender": "Male", "species": "Dog"}
    body.update(extra)
    r = client.post(f"{API}/pets", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def create_post(client, pet: dict, caption: str = "hello"):
    r = client.post(
        f"{API}/posts",
        json={"pet_id": pet["id"], "user_id": pet["owner_id"], "image_url": "https://img.example/1.jpg", "caption": caption},
    )
    assert r.status_code == 200, r.text
    return r.json()


def test_health(client):
    assert client.get(f"{API}/health").json() == {"status": "ok"}


class TestAuth:
    def test_register_hides_password(self, client):
        user = register(client)
        assert user["id"] == 1
        assert "password" not in user

    def test_register_duplicate_email(self, client):
        register(client, 1)
        r = client.post(
            f"{API}/auth/register",
            json={"name": "Again", "email": "USER1@example.com", "password": "password123"},
        )
        assert r.status_code == 409

    def test_register_validates_payload(self, client):
        r = client.post(f"{API}/auth/register", json={"name": "X", "email": "not-an-email", "password": "123"})
        assert r.status_code == 422

    def test_login_and_me(self, client):
        user = register(client)

        r = client.post(f"{API}/auth/login", json={"email": "user1@example.com", "password": "password123"})
        assert r.status_code == 200
        token = r.json()["access_token"]
        assert r.json()["user"]["id"] == user["id"]

        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "user1@example.com"

    def test_login_wrong_password(self, client):
        register(client)
        r = client.post(f"{API}/auth/login", json={"email": "user1@example.com", "password": "wrong"})
        assert r.status_code == 401

    def test_me_requires_bearer_token(self, client):
        assert client.get(f"{API}/auth/me").status_code == 401
        assert client.get(f"{API}/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401


class TestUsers:
    def test_profile_edit(self, client):
        user = register(client)
        r = client.put(f"{API}/users/{user['id']}", json={"bio": "Loves dogs"})
        assert r.status_code == 200
        assert r.json()["bio"] == "Loves dogs"

    def test_username_conflict(self, client):
        register(client, 1)
        other = register(client, 2)
        r = client.put(f"{API}/users/{other['id']}", json={"username": "user1"})
        assert r.status_code == 409

    def test_missing_user(self, client):
        assert client.get(f"{API}/users/99").status_code == 404
        assert client.put(f"{API}/users/99", json={"bio": "x"}).status_code == 404

    def test_null_name_rejected(self, client):
        user = register(client)

        assert client.put(f"{API}/users/{user['id']}", json={"name": None}).status_code == 422
        assert client.get(f"{API}/users/{user['id']}").json()["name"] == "User 1"


class TestPets:
    def test_create_generates_recommendations(self, client, generator):
        owner = register(client)
        pet = create_pet(client, owner["id"])

        assert pet["user_id"] == owner["id"]
        assert len(pet["health_tips"]) == 5
        assert pet["ai_recommendations"]["breeding_advice"]["optimal_age"] == "call 1"
        assert len(generator.calls) == 1

    def test_create_accepts_user_id_alias(self, client):
        owner = register(client)
        pet = create_pet(client, None, user_id=owner["id"])
        assert pet["owner_id"] == owner["id"]

    def test_create_requires_existing_owner(self, client):
        r = client.post(f"{API}/pets", json={"owner_id": 42, "name": "Rex", "breed": "Beagle", "age": 3, "gender": "Male"})
        assert r.status_code == 404

        r = client.post(f"{API}/pets", json={"name": "Rex", "breed": "Beagle", "age": 3, "gender": "Male"})
        assert r.status_code == 400

    def test_recommendations_are_cached_until_regenerated(self, client, generator):
        owner = register(client)
        pet = create_pet(client, owner["id"])

        cached = client.get(f"{API}/pets/{pet['id']}/recommendations").json()
        assert cached["breeding_advice"]["optimal_age"] == "call 1"

        fresh = client.get(f"{API}/pets/{pet['id']}/recommendations", params={"regenerate": "true"}).json()
        assert fresh["breeding_advice"]["optimal_age"] == "call 2"
        assert len(generator.calls) == 2

    def test_recommendations_for_missing_pet(self, client):
        assert client.get(f"{API}/pets/99/recommendations").status_code == 404

    def test_listing_and_update(self, client):
        owner = register(client)
        pet = create_pet(client, owner["id"])
        create_pet(client, owner["id"], "Hidden", is_public=False)

        assert [p["name"] for p in client.get(f"{API}/pets/user/{owner['id']}").json()] == ["Rex", "Hidden"]
        assert [p["name"] for p in client.get(f"{API}/pets/public").json()] == ["Rex"]

        r = client.put(f"{API}/pets/{pet['id']}", json={"bio": "Good boy"})
        assert r.json()["bio"] == "Good boy"
        assert client.get(f"{API}/pets/99").status_code == 404

    def test_null_for_required_field_rejected(self, client):
        owner = register(client)
        pet = create_pet(client, owner["id"])

        for field in ("name", "breed", "age", "gender"):
            r = client.put(f"{API}/pets/{pet['id']}", json={field: None})
            assert r.status_code == 422, field

        stored = client.get(f"{API}/pets/{pet['id']}").json()
        assert (stored["name"], stored["breed"], stored["age"], stored["gender"]) == ("Rex", "Beagle", 3, "Male")

        r = client.put(f"{API}/pets/{pet['id']}", json={"bio": None})
        assert r.status_code == 200
        assert r.json()["bio"] is None


class TestSocial:
    @pytest.fixture
    def scene(self, client):
        alice = register(client, 1)
        bob = register(client, 2)
        rex = create_pet(client, alice["id"], "Rex")
        luna = create_pet(client, bob["id"], "Luna")
        return alice, bob, rex, luna

    def test_feed_follows_pets(self, client, scene):
        alice, _, rex, luna = scene
        own = create_post(client, rex, "mine")
        theirs = create_post(client, luna, "theirs")

        feed = client.get(f"{API}/posts/feed/{alice['id']}").json()
        assert [p["id"] for p in feed] == [own["id"]]
        assert feed[0]["pet"]["name"] == "Rex"
        assert "password" not in feed[0]["user"]

        assert client.post(f"{API}/follows", json={"follower_id": alice["id"], "followed_pet_id": luna["id"]}).status_code == 200
        feed = client.get(f"{API}/posts/feed/{alice['id']}").json()
        assert [p["id"] for p in feed] == [theirs["id"], own["id"]]

    def test_follow_errors(self, client, scene, hub):
        alice, bob, _, luna = scene
        received = []
        hub.connect(bob["id"], received.append)

        body = {"follower_id": alice["id"], "followed_pet_id": luna["id"]}
        assert client.post(f"{API}/follows", json=body).status_code == 200
        assert client.post(f"{API}/follows", json=body).status_code == 409
        assert client.post(f"{API}/follows", json={"follower_id": alice["id"], "followed_pet_id": 99}).status_code == 404
        assert received == [{"type": "follow", "sender_id": alice["id"], "pet_id": luna["id"]}]

        assert client.delete(f"{API}/follows/{alice['id']}/{luna['id']}").status_code == 200
        assert client.delete(f"{API}/follows/{alice['id']}/{luna['id']}").status_code == 404

    def test_likes_keep_counter_in_step(self, client, scene, hub):
        alice, bob, _, luna = scene
        post = create_post(client, luna)
        received = []
        hub.connect(bob["id"], received.append)

        body = {"user_id": alice["id"], "post_id": post["id"]}
        assert client.post(f"{API}/likes", json=body).status_code == 200
        assert client.post(f"{API}/likes", json=body).status_code == 409
        assert client.get(f"{API}/posts/{post['id']}").json()["likes_count"] == 1
        assert len(client.get(f"{API}/likes/post/{post['id']}").json()) == 1
        assert received[0]["type"] == "like"

        assert client.delete(f"{API}/likes/{alice['id']}/{post['id']}").status_code == 200
        assert client.delete(f"{API}/likes/{alice['id']}/{post['id']}").status_code == 404
        assert client.get(f"{API}/posts/{post['id']}").json()["likes_count"] == 0

    def test_like_missing_post(self, client, scene):
        alice = scene[0]
        assert client.post(f"{API}/likes", json={"user_id": alice["id"], "post_id": 99}).status_code == 404

    def test_comments(self, client, scene):
        alice, _, _, luna = scene
        post = create_post(client, luna)

        r = client.post(f"{API}/comments", json={"user_id": alice["id"], "post_id": post["id"], "content": "Cute!"})
        assert r.status_code == 200
        comment = r.json()

        listed = client.get(f"{API}/comments/post/{post['id']}").json()
        assert listed[0]["user"]["name"] == "User 1"
        assert client.get(f"{API}/posts/{post['id']}").json()["comments_count"] == 1

        assert client.post(f"{API}/comments", json={"user_id": alice["id"], "post_id": post["id"], "content": ""}).status_code == 422
        assert client.delete(f"{API}/comments/{comment['id']}").status_code == 200
        assert client.get(f"{API}/posts/{post['id']}").json()["comments_count"] == 0


class TestMatches:
    @pytest.fixture
    def scene(self, client):
        alice = register(client, 1)
        bob = register(client, 2)
        rex = create_pet(client, alice["id"], "Rex")
        luna = create_pet(client, bob["id"], "Luna")
        return alice, bob, rex, luna

    def swipe(self, client, user, own_pet, target, direction="right"):
        return client.post(
            f"{API}/matches",
            json={"user_id": user["id"], "pet_id_1": own_pet["id"], "pet_id_2": target["id"], "swipe_direction": direction},
        )

    def test_mutual_match_flow(self, client, scene):
        alice, bob, rex, luna = scene
        assert [p["id"] for p in client.get(f"{API}/matches/potential/{alice['id']}").json()] == [luna["id"]]

        first = self.swipe(client, alice, rex, luna)
        assert first.status_code == 200
        assert first.json()["is_match"] is False
        assert client.get(f"{API}/matches/potential/{alice['id']}").json() == []
        assert client.get(f"{API}/matches/user/{alice['id']}").json() == []

        second = self.swipe(client, bob, luna, rex)
        assert second.json()["is_match"] is True

        matches = client.get(f"{API}/matches/user/{alice['id']}").json()
        assert len(matches) == 1
        assert {matches[0]["pet1"]["name"], matches[0]["pet2"]["name"]} == {"Rex", "Luna"}

    def test_swipe_validation(self, client, scene):
        alice, bob, rex, luna = scene

        assert self.swipe(client, alice, rex, rex).status_code == 400
        assert self.swipe(client, alice, luna, rex).status_code == 400
        assert self.swipe(client, alice, rex, {"id": 99}).status_code == 404
        assert self.swipe(client, alice, rex, luna, "up").status_code == 422

        assert self.swipe(client, alice, rex, luna, "left").status_code == 200
        assert self.swipe(client, alice, rex, luna, "right").status_code == 409


class TestMedicalRecords:
    def test_crud(self, client):
        owner = register(client)
        pet = create_pet(client, owner["id"])

        r = client.post(
            f"{API}/medical-records",
            json={"pet_id": pet["id"], "title": "Annual checkup", "date": "2024-05-01T09:30:00", "record_type": "checkup"},
        )
        assert r.status_code == 200
        record = r.json()

        r = client.patch(f"{API}/medical-records/{record['id']}", json={"is_completed": True})
        assert r.json()["is_completed"] is True
        r = client.put(f"{API}/medical-records/{record['id']}", json={"notes": "Healthy"})
        assert r.json()["notes"] == "Healthy"
        assert r.json()["is_completed"] is True

        assert [x["id"] for x in client.get(f"{API}/medical-records/pet/{pet['id']}").json()] == [record["id"]]
        assert client.get(f"{API}/medical-records/99").status_code == 404

    def test_null_title_rejected(self, client):
        owner = register(client)
        pet = create_pet(client, owner["id"])
        record = client.post(
            f"{API}/medical-records",
            json={"pet_id": pet["id"], "title": "Annual checkup", "date": "2024-05-01T09:30:00", "record_type": "checkup"},
        ).json()

        r = client.patch(f"{API}/medical-records/{record['id']}", json={"title": None})
        assert r.status_code == 422
        assert client.get(f"{API}/medical-records/{record['id']}").json()["title"] == "Annual checkup"

    def test_requires_existing_pet(self, client):
        r = client.post(
            f"{API}/medical-records",
            json={"pet_id": 99, "title": "X", "date": "2024-05-01T09:30:00", "record_type": "checkup"},
        )
        assert r.status_code == 404


def test_notification_socket_greets_client(client):
    with client.websocket_connect(f"{API}/notifications/ws/1") as ws:
        assert ws.receive_json() == {"type": "connected", "message": "WebSocket connection established."}


def test_rejected_storage_write_is_unprocessable(client):
    class RejectingStorage(MemStorage):
        def update_user(self, user_id, updates):
            raise StorageError("user write violates a database constraint")

    client.app.dependency_overrides[get_storage] = RejectingStorage

    r = client.put(f"{API}/users/1", json={"bio": "x"})

    assert r.status_code == 422
    assert r.json() == {"detail": "user write violates a database constraint"}
