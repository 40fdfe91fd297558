from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from access_core.services.resources import ResourceService


def test_baseline_resources_are_seeded_on_startup(client: TestClient) -> None:
    response = client.get("/resources")
    response.raise_for_status()
    slugs = {resource["slug"] for resource in response.json()["metadata"]}
    assert slugs == {"role", "resource"}


def test_ensure_baseline_resources_is_idempotent(db_session) -> None:
    service = ResourceService(db_session)
    service.ensure_baseline_resources(["role", "image", "role"])
    service.ensure_baseline_resources(["image", "case-service"])

    resources = service.list_resources()
    assert sorted(resource.slug for resource in resources) == ["case-service", "image", "role"]
    assert {resource.name for resource in resources} == {"Role", "Image", "Case Service"}


def test_resource_crud(client: TestClient) -> None:
    created = client.post(
        "/resources",
        json={"name": "Image", "slug": "image", "description": "Uploaded images"},
    )
    assert created.status_code == 201
    resource = created.json()["metadata"]
    assert resource["slug"] == "image"

    fetched = client.get(f"/resources/{resource['id']}")
    fetched.raise_for_status()
    assert fetched.json()["metadata"]["description"] == "Uploaded images"

    updated = client.put(f"/resources/{resource['id']}", json={"description": "Media library"})
    updated.raise_for_status()
    assert updated.json()["metadata"]["description"] == "Media library"
    assert updated.json()["metadata"]["name"] == "Image"

    deleted = client.delete(f"/resources/{resource['id']}")
    deleted.raise_for_status()
    assert deleted.json()["message"] == "Resource deleted successfully"
    assert client.get(f"/resources/{resource['id']}").status_code == 404


def test_resource_slug_is_unique(client: TestClient) -> None:
    client.post("/resources", json={"name": "Image", "slug": "image", "description": "x"}).raise_for_status()

    duplicate = client.post("/resources", json={"name": "Picture", "slug": "image", "description": "y"})
    assert duplicate.status_code == 409
    assert "already exists" in duplicate.json()["errors"]["message"]


def test_resource_search(client: TestClient) -> None:
    client.post("/resources", json={"name": "Image", "slug": "image", "description": "Media"}).raise_for_status()
    client.post("/resources", json={"name": "Page", "slug": "page", "description": "CMS pages"}).raise_for_status()

    found = client.get("/resources", params={"search": "cms"}).json()["metadata"]
    assert [resource["slug"] for resource in found] == ["page"]


def test_resource_validation_and_missing(client: TestClient) -> None:
    invalid = client.post("/resources", json={"name": "Image", "slug": "Not A Slug", "description": "x"})
    assert invalid.status_code == 400

    assert client.get(f"/resources/{uuid4()}").status_code == 404
    assert client.put(f"/resources/{uuid4()}", json={"name": "Ghost"}).status_code == 404
    assert client.get("/resources/not-a-uuid").status_code == 400
