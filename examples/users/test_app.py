"""Tests for the users example: CRUD over a table, stages, static fallback."""

from tern.testing import TestClient


class TestUserResource:
    """POST /user, GET/PUT/DELETE /user/:id."""

    async def test_create_and_read(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/user", json={"name": "John Doe", "dob": "1990-05-25"})
            assert created.status == 201
            assert int(created.text) > 0

            response = await client.get(f"/user/{created.text}")
            assert response.status == 200
            assert response.json()["name"] == "John Doe"

    async def test_missing_name(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/user", json={"dob": "1990-05-25"})
            assert response.status == 400

    async def test_update_then_delete(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/user", json={"name": "John Doe"})
            updated = await client.put(f"/user/{created.text}", json={"name": "Alice"})
            assert updated.status == 200
            assert (await client.get(f"/user/{created.text}")).json()["name"] == "Alice"

            assert (await client.delete(f"/user/{created.text}")).status == 200
            assert (await client.delete(f"/user/{created.text}")).status == 204

    async def test_fresh_state_per_test(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/user/1")
            assert response.status == 204


class TestPages:
    async def test_health(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/health")
            assert response.json() == {"status": "ok"}

    async def test_schema(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/schema?dialect=mysql")
            assert response.text.startswith("create table if not exists user (")
            assert "id int(11) unsigned primary key auto_increment" in response.text

    async def test_static_landing_page(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/index.html")
            assert response.status == 200
            assert response.content_type == "text/html"
            assert "<h1>Users</h1>" in response.text

    async def test_unknown_path(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/missing.png")
            assert response.status == 404

    async def test_schema_rejects_bad_dialect(self, example_app) -> None:
        async with TestClient(example_app) as client:
            unknown = await client.get("/schema?dialect=oracle")
            repeated = await client.get("/schema?dialect=mysql&dialect=sqlite")
            assert unknown.status == 400
            assert unknown.text.startswith("Unknown dialect")
            assert repeated.status == 400
