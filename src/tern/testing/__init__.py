"""Testing utilities for tern applications.

Usage::

    from tern.testing import TestClient

    async def test_index():
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
"""

from tern.testing.client import ClientResponse, TestClient

__all__ = ["ClientResponse", "TestClient"]
