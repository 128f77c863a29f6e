"""
RecordStore — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every fixture builds on a per-test temporary data file, so tests never
       touch a real store and never see each other's records.

Fixture Hierarchy (all function-scoped):
    ├── data_file: Path of a not-yet-created store file under tmp_path
    ├── store: RecordStore over data_file
    ├── service: RecordService over an initialized store
    ├── sample_records: Three stored records for read/update/delete tests
    ├── test_settings: Settings pointing at data_file and a static dir
    ├── test_app: FastAPI app from create_app(test_settings, store)
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import json
import os
import tempfile

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["DATA_FILE"] = os.path.join(
    tempfile.mkdtemp(prefix="recordstore_test_"), "veri.json"
)
os.environ["STATIC_DIR"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from recordstore.config import Settings  # noqa: E402
from recordstore.services.record_service import RecordService  # noqa: E402
from recordstore.services.record_store import RecordStore  # noqa: E402


@pytest.fixture
def data_file(tmp_path):
    """Location of the store file; not created until a test or fixture does."""
    return tmp_path / "data" / "veri.json"


@pytest.fixture
def store(data_file):
    return RecordStore(data_file)


@pytest_asyncio.fixture
async def service(store):
    """RecordService over a store whose file exists, as after startup."""
    await store.ensure_initialized()
    return RecordService(store)


@pytest.fixture
def sample_records():
    """
    Three documents as they would sit on disk.

    The second has a nested object so shallow-merge behavior is observable.
    """
    return [
        {"name": "Alice", "id": "record_1", "createdAt": "2024-01-15T12:00:00.000Z"},
        {
            "name": "Bob",
            "profile": {"age": 30, "city": "Izmir"},
            "tags": ["a", "b"],
            "id": "record_2",
            "createdAt": "2024-01-15T12:01:00.000Z",
        },
        {"name": "Carol", "id": "record_3", "createdAt": "2024-01-15T12:02:00.000Z"},
    ]


@pytest.fixture
def write_records(data_file):
    """Writes a list of documents straight to the store file."""
    def _write(documents):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text(json.dumps(documents, indent=2), encoding="utf-8")
    return _write


@pytest.fixture
def read_records(data_file):
    """Parses the store file as it currently sits on disk."""
    def _read():
        return json.loads(data_file.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def static_dir(tmp_path):
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "index.html").write_text("<h1>records</h1>", encoding="utf-8")
    return directory


@pytest.fixture
def test_settings(data_file, static_dir):
    return Settings(
        data_file=str(data_file),
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest.fixture
def test_app(test_settings, store):
    from recordstore.main import create_app
    return create_app(settings=test_settings, store=store)


@pytest_asyncio.fixture
async def test_client(test_app, store):
    """
    HTTPX AsyncClient routed straight into the app.

    ASGITransport does not run the lifespan, so the store file is initialized
    here the way startup would do it.
    """
    await store.ensure_initialized()
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

