"""Tests for hyrule_compendium/live.py. No network: the requests session is mocked."""

import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from hyrule_compendium.data import Entry
from hyrule_compendium.errors import ApplicationError, NotFound, TransportError
from hyrule_compendium.live import EMPTY, PENDING, READY, CacheCell, CompendiumClient

from .conftest import BASE_URL, RAW_ENTRIES, envelope, make_response


@pytest.fixture
def client(session):
    return CompendiumClient(BASE_URL, timeout=3, session=session)


# ===========================================================================
# CacheCell
# ===========================================================================


class TestCacheCell:
    def test_loads_once(self):
        cell = CacheCell()
        loader = MagicMock(return_value=[1, 2])
        assert cell.state == EMPTY
        assert cell.get(loader) == [1, 2]
        assert cell.get(loader) == [1, 2]
        assert loader.call_count == 1
        assert cell.state == READY

    def test_failure_resets_to_empty(self):
        cell = CacheCell()
        loader = MagicMock(side_effect=[RuntimeError("boom"), "ok"])
        with pytest.raises(RuntimeError):
            cell.get(loader)
        assert cell.state == EMPTY
        assert cell.get(loader) == "ok"
        assert loader.call_count == 2

    def test_concurrent_callers_share_one_load(self):
        cell = CacheCell()
        release = threading.Event()
        calls = []

        def loader():
            calls.append(threading.current_thread().name)
            release.wait(timeout=5)
            return "value"

        results = []
        first = threading.Thread(target=lambda: results.append(cell.get(loader)))
        first.start()
        deadline = time.monotonic() + 5
        while cell.state != PENDING and time.monotonic() < deadline:
            time.sleep(0.01)
        assert cell.state == PENDING

        second = threading.Thread(target=lambda: results.append(cell.get(loader)))
        second.start()
        time.sleep(0.05)
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert results == ["value", "value"]
        assert len(calls) == 1

    def test_waiters_see_the_failure(self):
        cell = CacheCell()
        release = threading.Event()

        def loader():
            release.wait(timeout=5)
            raise ValueError("bad payload")

        errors = []

        def call():
            try:
                cell.get(loader)
            except ValueError as exc:
                errors.append(str(exc))

        first = threading.Thread(target=call)
        first.start()
        deadline = time.monotonic() + 5
        while cell.state != PENDING and time.monotonic() < deadline:
            time.sleep(0.01)
        second = threading.Thread(target=call)
        second.start()
        time.sleep(0.05)
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert errors == ["bad payload", "bad payload"]
        assert cell.state == EMPTY


# ===========================================================================
# CompendiumClient
# ===========================================================================


class TestFetchAll:
    def test_returns_entries(self, client, session):
        entries = client.fetch_all()
        assert [e.name for e in entries] == [r["name"] for r in RAW_ENTRIES]
        session.get.assert_called_once_with(BASE_URL, timeout=3)

    def test_second_call_uses_cache(self, client, session):
        assert not client.is_loaded
        first = client.fetch_all()
        second = client.fetch_all()
        assert first is second
        assert session.get.call_count == 1
        assert client.is_loaded

    def test_transport_error_is_not_cached(self, client, session):
        session.get.side_effect = [
            requests.ConnectionError("offline"),
            make_response(envelope(RAW_ENTRIES)),
        ]
        with pytest.raises(TransportError) as excinfo:
            client.fetch_all()
        assert excinfo.value.url == BASE_URL
        assert not client.is_loaded
        assert len(client.fetch_all()) == len(RAW_ENTRIES)
        assert session.get.call_count == 2

    def test_bad_json_is_transport_error(self, client, session):
        session.get.return_value = make_response(ValueError("not json"), status_code=502)
        with pytest.raises(TransportError):
            client.fetch_all()

    def test_envelope_status_wins_over_http_status(self, client, session):
        session.get.return_value = make_response(
            envelope(None, status=500, message="database unavailable"), status_code=200
        )
        with pytest.raises(ApplicationError) as excinfo:
            client.fetch_all()
        assert excinfo.value.status == 500
        assert str(excinfo.value) == "database unavailable"

    def test_non_dict_envelope(self, client, session):
        session.get.return_value = make_response(["not", "an", "envelope"])
        with pytest.raises(ApplicationError):
            client.fetch_all()

    def test_categories_from_entries(self, client):
        assert client.categories() == ["creatures", "equipment", "monsters", "materials"]

    def test_categories_fall_back_to_known_list(self, client, session):
        session.get.return_value = make_response(envelope([]))
        assert client.categories() == ["creatures", "equipment", "materials", "monsters", "treasure"]


class TestSubFetches:
    def test_fetch_category_is_not_cached(self, client, session):
        monsters = [r for r in RAW_ENTRIES if r["category"] == "monsters"]
        session.get.return_value = make_response(envelope(monsters))
        assert [e.name for e in client.fetch_category("Monsters")] == ["moblin", "blue moblin", "black moblin"]
        client.fetch_category("monsters")
        assert session.get.call_count == 2
        session.get.assert_called_with(f"{BASE_URL}/category/monsters", timeout=3)

    def test_fetch_category_error(self, client, session):
        session.get.return_value = make_response(envelope(None, status=400, message="bad category"))
        with pytest.raises(ApplicationError):
            client.fetch_category("pets")

    def test_fetch_entry_quotes_name(self, client, session):
        session.get.return_value = make_response(envelope(RAW_ENTRIES[1]))
        entry = client.fetch_entry("Master Sword")
        assert entry == Entry.from_api(RAW_ENTRIES[1])
        session.get.assert_called_once_with(f"{BASE_URL}/entry/master%20sword", timeout=3)

    def test_fetch_entry_not_found(self, client, session):
        session.get.return_value = make_response(envelope({}, status=404, message="no results"))
        assert client.fetch_entry("lynel") is None

    def test_fetch_entry_empty_payload(self, client, session):
        session.get.return_value = make_response(envelope({}))
        assert client.fetch_entry("lynel") is None

    def test_fetch_entry_blank_name_skips_request(self, client, session):
        assert client.fetch_entry("  ") is None
        session.get.assert_not_called()

    def test_fetch_entry_propagates_other_errors(self, client, session):
        session.get.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportError):
            client.fetch_entry("moblin")

    def test_not_found_is_application_error(self):
        assert issubclass(NotFound, ApplicationError)
