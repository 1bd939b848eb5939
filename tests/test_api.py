"""HTTP API tests."""

from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio


async def _create(client: AsyncClient, content: str = "A", name: str = "system prompt") -> dict:
    resp = await client.post("/v1/documents", json={"name": name, "content": content})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _save(client: AsyncClient, doc_id: str, content: str, note: str = "") -> dict:
    resp = await client.put(
        f"/v1/documents/{doc_id}",
        json={"content": content, "saveVersion": True, "note": note},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


# ── Health ───────────────────────────────────────────────────────────────────


async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["service"] == "prompt-history"
    assert "database" in body["checks"]
    assert resp.headers["X-API-Version"] == "v1"


# ── Stateless diff endpoints ─────────────────────────────────────────────────


async def test_diff_endpoint(client: AsyncClient):
    resp = await client.post(
        "/v1/diff",
        json={"oldText": "line1\nline2\nline3", "newText": "line1\nlineX\nline3"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["diff"]["modified"] == [
        {"oldIndex": 1, "newIndex": 1, "oldContent": "line2", "newContent": "lineX"}
    ]
    assert body["diff"]["stats"]["totalChanges"] == 1
    assert body["report"].startswith("=== DIFF REPORT ===")


async def test_apply_and_revert_endpoints(client: AsyncClient):
    diff = (
        await client.post("/v1/diff", json={"oldText": "x\na", "newText": "a\ny"})
    ).json()["diff"]

    applied = await client.post("/v1/diff/apply", json={"text": "x\na", "diff": diff})
    reverted = await client.post("/v1/diff/revert", json={"text": "a\ny", "diff": diff})

    assert applied.json() == {"text": "a\ny"}
    assert reverted.json() == {"text": "x\na"}


async def test_apply_malformed_diff_is_422(client: AsyncClient):
    resp = await client.post(
        "/v1/diff/apply",
        json={"text": "a", "diff": {"added": "oops", "removed": [], "modified": []}},
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "invalid_argument"
    assert "request_id" in body


async def test_apply_out_of_range_is_422(client: AsyncClient):
    resp = await client.post(
        "/v1/diff/apply",
        json={
            "text": "a",
            "diff": {"added": [], "removed": [{"oldIndex": 4, "content": "z"}], "modified": []},
        },
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_argument"


# ── Documents ────────────────────────────────────────────────────────────────


async def test_create_and_get_document(client: AsyncClient):
    created = await _create(client, "Be brief.")
    doc = created["document"]

    assert created["version"]["note"] == "Initial version"
    assert created["version"]["diff"] is None
    assert "createdAt" in doc

    resp = await client.get(f"/v1/documents/{doc['id']}")
    assert resp.status_code == 200
    assert resp.json()["content"] == "Be brief."


async def test_document_name_is_stripped(client: AsyncClient):
    created = await _create(client, name="  system prompt  ")
    assert created["document"]["name"] == "system prompt"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
async def test_blank_document_name_is_rejected(client: AsyncClient, name: str):
    resp = await client.post("/v1/documents", json={"name": name, "content": "x"})
    assert resp.status_code == 422


async def test_blank_rename_is_rejected(client: AsyncClient):
    doc_id = (await _create(client))["document"]["id"]
    resp = await client.put(f"/v1/documents/{doc_id}", json={"name": "   "})
    assert resp.status_code == 422
    assert (await client.get(f"/v1/documents/{doc_id}")).json()["name"] == "system prompt"


async def test_get_unknown_document_is_404(client: AsyncClient):
    resp = await client.get(f"/v1/documents/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


async def test_update_records_version(client: AsyncClient):
    doc_id = (await _create(client, "a\nb"))["document"]["id"]

    body = await _save(client, doc_id, "a\nb\nc", note="add c")

    assert body["document"]["content"] == "a\nb\nc"
    assert body["version"]["note"] == "add c"
    assert body["version"]["diff"]["added"] == [{"newIndex": 2, "content": "c"}]


async def test_update_unchanged_returns_no_version(client: AsyncClient):
    doc_id = (await _create(client, "same"))["document"]["id"]
    body = await _save(client, doc_id, "same")
    assert body["version"] is None


async def test_delete_document(client: AsyncClient):
    doc_id = (await _create(client))["document"]["id"]

    resp = await client.delete(f"/v1/documents/{doc_id}")
    assert resp.status_code == 204

    resp = await client.get(f"/v1/documents/{doc_id}")
    assert resp.status_code == 404


# ── Versions ─────────────────────────────────────────────────────────────────


async def test_list_versions_newest_first(client: AsyncClient):
    doc_id = (await _create(client, "A"))["document"]["id"]
    v1 = (await _save(client, doc_id, "A\nB"))["version"]

    resp = await client.get(f"/v1/documents/{doc_id}/versions")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert body["maxVersions"] >= 1
    assert body["items"][0]["id"] == v1["id"]
    assert body["items"][1]["diff"] is None


async def test_list_versions_includes_diff_report(client: AsyncClient):
    doc_id = (await _create(client, "line1\nline2\nline3"))["document"]["id"]
    await _save(client, doc_id, "line1\nlineX\nline3")

    items = (await client.get(f"/v1/documents/{doc_id}/versions")).json()["items"]

    report = items[0]["report"]
    assert report.startswith("=== DIFF REPORT ===")
    assert "  Line 1:\n    - line2\n    + lineX" in report
    assert "  Total changes: 1" in report
    assert items[1]["report"] is None


async def test_version_content_preview(client: AsyncClient):
    created = await _create(client, "A")
    doc_id = created["document"]["id"]
    await _save(client, doc_id, "A\nB")

    resp = await client.get(
        f"/v1/documents/{doc_id}/versions/{created['version']['id']}/content"
    )
    assert resp.status_code == 200
    assert resp.json()["content"] == "A"


async def test_restore_version(client: AsyncClient):
    doc_id = (await _create(client, "A"))["document"]["id"]
    v1 = (await _save(client, doc_id, "A\nB"))["version"]
    await _save(client, doc_id, "A\nB\nC")

    resp = await client.post(f"/v1/documents/{doc_id}/versions/{v1['id']}/restore")

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["content"] == "A\nB"
    assert body["restoredFrom"] == v1["id"]
    assert body["version"]["note"].startswith("Restored from: ")

    doc = (await client.get(f"/v1/documents/{doc_id}")).json()
    assert doc["content"] == "A\nB"
    listed = (await client.get(f"/v1/documents/{doc_id}/versions")).json()
    assert listed["total"] == 4


async def test_restore_unknown_version_is_404(client: AsyncClient):
    doc_id = (await _create(client))["document"]["id"]
    resp = await client.post(f"/v1/documents/{doc_id}/versions/{uuid.uuid4()}/restore")
    assert resp.status_code == 404


async def test_delete_last_version_is_409(client: AsyncClient):
    created = await _create(client)
    doc_id = created["document"]["id"]

    resp = await client.delete(f"/v1/documents/{doc_id}/versions/{created['version']['id']}")

    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_operation"


async def test_delete_version(client: AsyncClient):
    doc_id = (await _create(client, "A"))["document"]["id"]
    v1 = (await _save(client, doc_id, "B"))["version"]

    resp = await client.delete(f"/v1/documents/{doc_id}/versions/{v1['id']}")
    assert resp.status_code == 204

    listed = (await client.get(f"/v1/documents/{doc_id}/versions")).json()
    assert listed["total"] == 1
