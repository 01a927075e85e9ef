from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from app.adapters.index_whoosh import WhooshIndexAdapter
from app.main import create_app
from app.settings import Settings
from store.store_whoosh import WhooshStore


ARCHIVE: List[Dict[str, Any]] = [
    {
        "id": "d1",
        "Date": "1921",
        "title": "The harbour cat",
        "body": "A cat sleeps by the harbour wall every morning.",
        "source": {"box": 3},
    },
    {
        "id": "d2",
        "Date": "1921",
        "title": "Ship arrivals",
        "body": "Three ships and one cat arrived at the harbour.",
    },
    {
        "id": "d3",
        "Date": "1935",
        "title": "Catalogue of letters",
        "body": "A catalogue of letters from the mayor.",
    },
    {
        "id": "d4",
        "Date": "1948",
        "title": "Market report",
        "body": "Fish prices rose at the market.",
    },
    {
        "id": "d5",
        "title": "Notes on pets",
        "body": "Cats, dogs and a parrot.",
    },
]


@pytest.fixture(scope="session")
def index_dir(tmp_path_factory):
    path = tmp_path_factory.mktemp("index")
    store = WhooshStore.create(path)
    store.add(ARCHIVE)
    return path


@pytest.fixture()
def index(index_dir) -> WhooshIndexAdapter:
    return WhooshIndexAdapter.open(index_dir)


@pytest.fixture()
def settings(index_dir) -> Settings:
    return Settings(index_dir=index_dir, static_dir=None)


@pytest.fixture()
def client(settings, index) -> TestClient:
    return TestClient(create_app(settings=settings, index=index))
