"""Tests for the projects resource."""

import pytest

from timing_api.client import TimingAPIError
from timing_api.models import CreateProjectOptions, ListProjectsQuery, Project


async def test_list_unwraps_envelope(client, recorder):
    recorder.reply(json_body={"data": [{"self": "/projects/1", "title": "Work"}]})

    result = await client.projects.list()

    assert result == [{"self": "/projects/1", "title": "Work"}]
    assert recorder.last.method == "GET"
    assert recorder.last.url.query == b""


async def test_list_empty(client, recorder):
    recorder.reply(json_body={"data": []})
    assert await client.projects.list() == []


async def test_list_with_query_model(client, recorder):
    recorder.reply(json_body={"data": []})

    await client.projects.list(ListProjectsQuery(title="Work", hide_archived=True))

    params = recorder.last.url.params
    assert params["title"] == "Work"
    assert params["hide_archived"] == "true"


async def test_get_returns_payload_not_envelope(client, recorder):
    recorder.reply(json_body={"data": {"self": "/projects/1"}})

    result = await client.projects.get("1")

    assert result == {"self": "/projects/1"}
    assert recorder.last.url.path == "/api/v1/projects/1"


async def test_get_keeps_wire_field_names(client, recorder):
    wire = {
        "self": "/projects/1",
        "title": "Work",
        "productivity_score": 0.8,
        "is_archived": False,
        "custom_fields": {"clientId": "A-1"},
        "children": ["/projects/2"],
    }
    recorder.reply(json_body={"data": wire})

    result = await client.projects.get("/projects/1")

    assert result == wire
    project = Project.model_validate(result)
    assert project.ref == "/projects/1"
    assert project.children == ["/projects/2"]


async def test_get_malformed_envelope(client, recorder):
    recorder.reply(json_body={"project": {"self": "/projects/1"}})
    assert await client.projects.get("1") is None


async def test_create(client, recorder):
    created = {"self": "/projects/3", "title": "Client work", "color": "#FF0000", "productivity_score": 0.8}
    recorder.reply(201, json_body={"data": created})

    result = await client.projects.create(
        {
            "title": "Client work",
            "color": "#FF0000",
            "parent": "/projects/1",
            "productivityScore": 0.8,
            "customFields": {"clientCode": "ACME"},
        }
    )

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == "/api/v1/projects"
    assert recorder.last_json() == {
        "title": "Client work",
        "color": "#FF0000",
        "parent": "/projects/1",
        "productivity_score": 0.8,
        "custom_fields": {"client_code": "ACME"},
    }
    assert result == created


async def test_create_requires_title(client, recorder):
    with pytest.raises(ValueError, match="Missing required fields: title"):
        await client.projects.create(CreateProjectOptions(color="#00FF00"))
    assert recorder.requests == []


async def test_create_rejects_invalid_custom_field(client, recorder):
    with pytest.raises(ValueError, match="cannot contain only digits"):
        await client.projects.create({"title": "x", "customFields": {"123": "y"}})
    assert recorder.requests == []


async def test_update(client, recorder):
    recorder.reply(json_body={"data": {"self": "/projects/1", "title": "Renamed"}})

    result = await client.projects.update(1, CreateProjectOptions(title="Renamed"))

    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == "/api/v1/projects/1"
    assert recorder.last_json() == {"title": "Renamed"}
    assert result == {"self": "/projects/1", "title": "Renamed"}


async def test_update_rejects_bad_parent(client, recorder):
    with pytest.raises(ValueError, match="Invalid project reference format"):
        await client.projects.update("1", {"parent": "/projects/abc"})
    assert recorder.requests == []


async def test_delete(client, recorder):
    recorder.reply(204)

    assert await client.projects.delete("1") is None
    assert recorder.last.method == "DELETE"
    assert recorder.last.url.path == "/api/v1/projects/1"


async def test_delete_error(client, recorder):
    recorder.reply(403, json_body={"error": "Forbidden", "code": 403})

    with pytest.raises(TimingAPIError) as excinfo:
        await client.projects.delete("1")

    assert excinfo.value.status == 403
    assert excinfo.value.message == "Forbidden"
    assert excinfo.value.code == "403"
