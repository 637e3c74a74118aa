"""Shared fixtures: sample entries and a fake requests session."""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hyrule_compendium.data import Entry  # noqa: E402

BASE_URL = "https://compendium.test/api/v3/compendium"

RAW_ENTRIES = [
    {"id": 1, "name": "horse", "category": "creatures", "description": "A trusty steed.", "image": "https://img.test/1"},
    {"id": 2, "name": "master sword", "category": "equipment", "description": "The sword that seals the darkness.", "image": "https://img.test/2"},
    {"id": 3, "name": "moblin", "category": "monsters", "description": "Big and clumsy.", "image": "https://img.test/3"},
    {"id": 4, "name": "blue moblin", "category": "monsters", "description": "Bluer and tougher.", "image": "https://img.test/4"},
    {"id": 5, "name": "black moblin", "category": "monsters", "description": "Tougher still.", "image": "https://img.test/5"},
    {"id": 6, "name": "hylian shroom", "category": "materials", "description": "Grows near trees.", "image": "https://img.test/6"},
    {"id": 7, "name": "moblin horn", "category": "materials", "description": "Dropped by moblins.", "image": "https://img.test/7"},
]


def envelope(data, status=200, message=""):
    return {"status": status, "message": message, "data": data}


def make_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def raw_entries():
    return [dict(record) for record in RAW_ENTRIES]


@pytest.fixture
def entries():
    return [Entry.from_api(record) for record in RAW_ENTRIES]


@pytest.fixture
def session():
    fake = MagicMock()
    fake.get.return_value = make_response(envelope(RAW_ENTRIES))
    return fake
