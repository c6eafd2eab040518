import pytest
from fastapi.testclient import TestClient

from planner.main import app

client = TestClient(app)

pytestmark = pytest.mark.usefixtures("repo")


class TestUsernames:
    def test_register_and_list(self):
        res = client.post("/api/v1/usernames/", json={"username": " ann "})
        assert res.status_code == 201
        assert res.json()["username"] == "ann"
        client.post("/api/v1/usernames/", json={"username": "bob"})

        data = client.get("/api/v1/usernames/").json()
        assert data["total"] == 2
        assert [u["username"] for u in data["items"]] == ["ann", "bob"]

    def test_duplicate_is_conflict(self):
        client.post("/api/v1/usernames/", json={"username": "ann"})
        res = client.post("/api/v1/usernames/", json={"username": "ann"})
        assert res.status_code == 409
        assert res.json()["detail"] == "Username already exists"

    def test_blank_username(self):
        assert client.post("/api/v1/usernames/", json={"username": "   "}).status_code == 422


class TestViewState:
    def test_defaults_when_nothing_stored(self):
        res = client.get("/api/v1/users/ann/view-state")
        assert res.status_code == 200
        assert res.json() == {
            "username": "ann",
            "projectIndex": -1,
            "dateIndex": "all",
            "selectedView": "list",
        }

    def test_put_then_get(self):
        state = {"projectIndex": 1, "dateIndex": "past", "selectedView": "calendar"}
        res = client.put("/api/v1/users/ann/view-state", json=state)
        assert res.status_code == 200
        assert res.json() == {"username": "ann", **state}
        assert client.get("/api/v1/users/ann/view-state").json() == {"username": "ann", **state}

    def test_states_are_per_user(self):
        client.put("/api/v1/users/ann/view-state", json={"projectIndex": 1})
        assert client.get("/api/v1/users/bob/view-state").json()["projectIndex"] == -1

    def test_put_twice_replaces(self, repo):
        client.put("/api/v1/users/ann/view-state", json={"dateIndex": "week"})
        client.put("/api/v1/users/ann/view-state", json={"dateIndex": "day"})
        assert client.get("/api/v1/users/ann/view-state").json()["dateIndex"] == "day"
        assert len(repo.list_all("view_states", username="ann")) == 1

    def test_delete_resets(self):
        client.put("/api/v1/users/ann/view-state", json={"projectIndex": 1, "selectedView": "calendar"})
        res = client.delete("/api/v1/users/ann/view-state")
        assert res.status_code == 200
        assert res.json()["projectIndex"] == -1
        assert res.json()["selectedView"] == "list"

    @pytest.mark.parametrize(
        "state",
        [
            {"dateIndex": "fortnight"},
            {"selectedView": "agenda"},
            {"projectIndex": -2},
        ],
    )
    def test_invalid_state(self, state):
        assert client.put("/api/v1/users/ann/view-state", json=state).status_code == 422
