"""
API endpoint tests
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from api.main import app
from api.dependencies import get_db


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded_client(client, seeded_session):
    return client


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["datasets"] == "/datasets"


@pytest.mark.asyncio
async def test_health_endpoint_database_connected(seeded_client):
    response = await seeded_client.get("/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "healthy"
    assert data["database_connected"] is True
    assert data["total_datasets"] == 3
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_create_dataset(client, dataset_rows):
    response = await client.post("/datasets", json=dataset_rows[0])

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 1
    assert data["filename"] == "expx.myfile1.root"


@pytest.mark.asyncio
async def test_create_duplicate_returns_conflict(seeded_client, dataset_rows):
    response = await seeded_client.post("/datasets", json=dataset_rows[0])

    assert response.status_code == 409
    data = response.json()
    assert data["error_type"] == "DuplicateFilenameError"
    assert data["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_create_invalid_payload(client):
    response = await client.post("/datasets", json={"filename": "a.root", "run_number": 1})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_pagination(seeded_client):
    response = await seeded_client.get("/datasets?page=1&page_size=2")

    assert response.status_code == 200
    data = response.json()

    assert len(data["items"]) == 2
    assert data["pagination"]["total_items"] == 3
    assert data["pagination"]["total_pages"] == 2
    assert data["pagination"]["has_next"] is True
    assert data["pagination"]["has_previous"] is False


@pytest.mark.asyncio
async def test_list_filters(seeded_client):
    response = await seeded_client.get(
        "/datasets",
        params={"collision_type": "pp", "order_by": "run_number", "descending": "true"}
    )

    assert response.status_code == 200
    data = response.json()

    assert [item["filename"] for item in data["items"]] == ["expx.myfile3.root", "expx.myfile1.root"]
    assert data["filters_applied"] == {"collision_type": "pp"}


@pytest.mark.asyncio
async def test_list_bad_order_column(seeded_client):
    response = await seeded_client.get("/datasets?order_by=nope")

    assert response.status_code == 422
    assert response.json()["error_type"] == "DatasetValidationError"


@pytest.mark.asyncio
async def test_get_dataset(seeded_client):
    response = await seeded_client.get("/datasets/2")

    assert response.status_code == 200
    assert response.json()["filename"] == "expx.myfile2.root"


@pytest.mark.asyncio
async def test_get_missing_dataset(seeded_client):
    response = await seeded_client.get("/datasets/99")

    assert response.status_code == 404
    assert response.json()["context"]["dataset_id"] == 99


@pytest.mark.asyncio
async def test_get_by_filename(seeded_client):
    response = await seeded_client.get("/datasets/by-filename/expx.myfile3.root")

    assert response.status_code == 200
    assert response.json()["id"] == 3

    missing = await seeded_client.get("/datasets/by-filename/nope.root")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_dataset(seeded_client):
    response = await seeded_client.patch("/datasets/1", json={"total_event": 2224})

    assert response.status_code == 200
    assert response.json()["total_event"] == 2224
    assert response.json()["run_number"] == 100


@pytest.mark.asyncio
async def test_update_to_duplicate_filename(seeded_client):
    response = await seeded_client.patch("/datasets/1", json={"filename": "expx.myfile2.root"})

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_bulk_update(seeded_client):
    response = await seeded_client.patch(
        "/datasets",
        json={"criteria": {"collision_type": "pp"}, "changes": {"data_type": "mc"}}
    )

    assert response.status_code == 200
    assert response.json()["updated"] == 2

    listing = await seeded_client.get("/datasets", params={"data_type": "mc"})
    assert listing.json()["pagination"]["total_items"] == 3


@pytest.mark.asyncio
async def test_bulk_update_rejects_blank_criteria(seeded_client):
    response = await seeded_client.patch(
        "/datasets",
        json={"criteria": {"filename_contains": ""}, "changes": {"data_type": "mc"}}
    )

    assert response.status_code == 422
    assert response.json()["error_type"] == "DatasetValidationError"

    listing = await seeded_client.get("/datasets", params={"data_type": "mc"})
    assert listing.json()["pagination"]["total_items"] == 1


@pytest.mark.asyncio
async def test_delete_dataset(seeded_client):
    response = await seeded_client.delete("/datasets/2")

    assert response.status_code == 200
    assert response.json() == {"deleted": 1, "dataset_id": 2}

    assert (await seeded_client.get("/datasets/2")).status_code == 404


@pytest.mark.asyncio
async def test_import_endpoint(client, csv_file):
    response = await client.post("/datasets/import", json={"file_path": str(csv_file)})

    assert response.status_code == 200
    data = response.json()
    assert data["records_inserted"] == 3
    assert data["records_invalid"] == 1


@pytest.mark.asyncio
async def test_import_missing_file(client, tmp_path):
    response = await client.post("/datasets/import", json={"file_path": str(tmp_path / "none.csv")})

    assert response.status_code == 400
    assert response.json()["error_type"] == "DatasetImportError"
