from httpx import AsyncClient

from app.services.scraper import PageFetchError
from app.services.seed_extraction import SeedExtractionError
from app.tasks import fix_images


async def _create(client: AsyncClient, **fields) -> dict:
    payload = {"variety_name": "Brandywine", "common_name": "Tomato"}
    payload.update(fields)
    res = await client.post("/api/v1/seeds", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_seed_defaults(client: AsyncClient):
    data = await _create(client, planting_method="start_indoors", weeks_before_last_frost=6)
    assert data["variety_name"] == "Brandywine"
    assert data["quantity_packets"] == 1
    assert data["is_favorite"] is False
    assert data["is_planted"] is False
    assert data["ai_extracted"] is False
    assert data["ai_extraction_date"] is None
    assert data["weeks_before_last_frost"] == 6
    assert "id" in data


async def test_create_ai_extracted_seed_stamps_date(client: AsyncClient):
    data = await _create(client, ai_extracted=True, product_url="https://example.com/brandywine")
    assert data["ai_extracted"] is True
    assert data["ai_extraction_date"] is not None


async def test_create_seed_requires_variety_name(client: AsyncClient):
    res = await client.post("/api/v1/seeds", json={"common_name": "Tomato"})
    assert res.status_code == 422

    res = await client.post("/api/v1/seeds", json={"variety_name": ""})
    assert res.status_code == 422


async def test_create_seed_rejects_negative_weeks(client: AsyncClient):
    res = await client.post("/api/v1/seeds", json={"variety_name": "X", "weeks_after_last_frost": -1})
    assert res.status_code == 422


async def test_create_seed_rejects_bad_enum(client: AsyncClient):
    res = await client.post("/api/v1/seeds", json={"variety_name": "X", "planting_method": "transplant"})
    assert res.status_code == 422


async def test_blank_urls_become_null(client: AsyncClient):
    data = await _create(client, product_url="  ", image_url="")
    assert data["product_url"] is None
    assert data["image_url"] is None


async def test_list_seeds_newest_first(client: AsyncClient):
    first = await _create(client, variety_name="First")
    second = await _create(client, variety_name="Second")
    res = await client.get("/api/v1/seeds")
    assert res.status_code == 200
    ids = [s["id"] for s in res.json()]
    assert ids == [second["id"], first["id"]]


async def test_list_seeds_search_is_case_insensitive(client: AsyncClient):
    await _create(client, variety_name="Cherokee Purple", common_name="Tomato")
    await _create(client, variety_name="Genovese", common_name="Basil")

    res = await client.get("/api/v1/seeds", params={"search": "cherokee"})
    assert [s["variety_name"] for s in res.json()] == ["Cherokee Purple"]

    res = await client.get("/api/v1/seeds", params={"search": "BASIL"})
    assert [s["variety_name"] for s in res.json()] == ["Genovese"]


async def test_list_seeds_filters(client: AsyncClient):
    await _create(client, variety_name="Genovese", common_name="Basil", is_favorite=True)
    await _create(client, variety_name="State Fair", common_name="Zinnia", is_planted=True)
    await _create(client, variety_name="Danvers", common_name="Carrot")

    res = await client.get("/api/v1/seeds", params={"category": "herb"})
    assert [s["variety_name"] for s in res.json()] == ["Genovese"]

    res = await client.get("/api/v1/seeds", params={"category": "vegetable"})
    assert [s["variety_name"] for s in res.json()] == ["Danvers"]

    res = await client.get("/api/v1/seeds", params={"favorites_only": True})
    assert [s["variety_name"] for s in res.json()] == ["Genovese"]

    res = await client.get("/api/v1/seeds", params={"hide_planted": True})
    assert {s["variety_name"] for s in res.json()} == {"Genovese", "Danvers"}


async def test_list_seeds_rejects_unknown_category(client: AsyncClient):
    res = await client.get("/api/v1/seeds", params={"category": "fruit"})
    assert res.status_code == 422


async def test_get_seed(client: AsyncClient):
    created = await _create(client)
    res = await client.get(f"/api/v1/seeds/{created['id']}")
    assert res.status_code == 200
    assert res.json()["variety_name"] == "Brandywine"


async def test_get_missing_seed_404(client: AsyncClient):
    res = await client.get("/api/v1/seeds/99999")
    assert res.status_code == 404
    assert res.json()["detail"] == "Seed not found"


async def test_update_seed_partial(client: AsyncClient):
    created = await _create(client, notes="keep me")
    res = await client.put(f"/api/v1/seeds/{created['id']}", json={"is_planted": True, "quantity_packets": 3})
    assert res.status_code == 200
    data = res.json()
    assert data["is_planted"] is True
    assert data["quantity_packets"] == 3
    assert data["notes"] == "keep me"
    assert data["variety_name"] == "Brandywine"


async def test_update_seed_null_on_required_field_is_ignored(client: AsyncClient):
    created = await _create(client)
    res = await client.put(f"/api/v1/seeds/{created['id']}", json={"variety_name": None, "notes": None})
    assert res.status_code == 200
    assert res.json()["variety_name"] == "Brandywine"


async def test_update_missing_seed_404(client: AsyncClient):
    res = await client.put("/api/v1/seeds/99999", json={"is_planted": True})
    assert res.status_code == 404


async def test_delete_seed(client: AsyncClient):
    created = await _create(client)
    res = await client.delete(f"/api/v1/seeds/{created['id']}")
    assert res.status_code == 204

    res = await client.get(f"/api/v1/seeds/{created['id']}")
    assert res.status_code == 404


async def test_fix_images_nothing_to_do(client: AsyncClient):
    await _create(client, product_url="https://example.com/a", image_url="https://example.com/a.jpg")
    await _create(client)
    res = await client.post("/api/v1/seeds/fix-images")
    assert res.status_code == 200
    assert res.json() == {"message": "No seeds need fixing", "fixed": 0, "total": 0, "results": []}


async def test_fix_images_reports_per_seed(client: AsyncClient, monkeypatch):
    ok = await _create(client, variety_name="Ok", product_url="https://example.com/ok")
    short = await _create(client, variety_name="Short", product_url="https://example.com/short")
    noimg = await _create(client, variety_name="NoImg", product_url="https://example.com/noimg")

    async def fake_fetch(url):
        if url.endswith("short"):
            return "tiny"
        return "x" * 200

    async def fake_extract(page_content, source_url, redis=None):
        if source_url.endswith("ok"):
            return {"is_seed_product_page": True, "image_url": "https://cdn.example.com/ok.jpg"}
        return {"is_seed_product_page": True}

    monkeypatch.setattr(fix_images, "fetch_page_content", fake_fetch)
    monkeypatch.setattr(fix_images, "extract_seed_data", fake_extract)

    res = await client.post("/api/v1/seeds/fix-images")
    assert res.status_code == 200
    report = res.json()
    assert report["fixed"] == 1
    assert report["total"] == 3
    assert report["message"] == "Fixed 1 of 3 seeds"
    statuses = {r["id"]: r["status"] for r in report["results"]}
    assert statuses == {
        ok["id"]: "fixed",
        short["id"]: "failed - page content too short",
        noimg["id"]: "failed - no image found on page",
    }

    res = await client.get(f"/api/v1/seeds/{ok['id']}")
    assert res.json()["image_url"] == "https://cdn.example.com/ok.jpg"


async def test_fix_images_continues_after_seed_errors(client: AsyncClient, monkeypatch):
    unreachable = await _create(client, variety_name="Unreachable", product_url="https://example.com/down")
    broken = await _create(client, variety_name="Broken", product_url="https://example.com/broken")
    ok = await _create(client, variety_name="Ok", product_url="https://example.com/ok")

    async def fake_fetch(url):
        if url.endswith("down"):
            raise PageFetchError("Failed to fetch page: HTTP 503")
        return "x" * 200

    async def fake_extract(page_content, source_url, redis=None):
        if source_url.endswith("broken"):
            raise SeedExtractionError("Failed to reach model API: connection reset")
        return {"is_seed_product_page": True, "image_url": "https://cdn.example.com/ok.jpg"}

    monkeypatch.setattr(fix_images, "fetch_page_content", fake_fetch)
    monkeypatch.setattr(fix_images, "extract_seed_data", fake_extract)

    res = await client.post("/api/v1/seeds/fix-images")
    assert res.status_code == 200
    report = res.json()
    assert report["fixed"] == 1
    assert report["total"] == 3
    statuses = {r["id"]: r["status"] for r in report["results"]}
    assert statuses == {
        unreachable["id"]: "error - Failed to fetch page: HTTP 503",
        broken["id"]: "error - Failed to reach model API: connection reset",
        ok["id"]: "fixed",
    }
