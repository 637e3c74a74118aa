"""Live access to the Hyrule Compendium REST API.

The full collection is fetched once and memoized for the life of the
process; category and single-entry lookups always hit the network.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Generic, List, TypeVar
from urllib.parse import quote

import requests

from .config import get_settings
from .data import CATEGORY_OPTIONS, Entry, collect_categories, entries_from_api
from .errors import ApplicationError, NotFound, TransportError
from .utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

EMPTY = "empty"
PENDING = "pending"
READY = "ready"


class CacheCell(Generic[T]):
    """Memo cell that lets at most one loader run at a time.

    Callers arriving while a load is pending wait on the same future. A
    failed load puts the cell back to empty so the next call retries.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = EMPTY
        self._pending: Future | None = None
        self._value: T | None = None

    @property
    def state(self) -> str:
        return self._state

    def get(self, loader: Callable[[], T]) -> T:
        with self._lock:
            if self._state == READY:
                return self._value  # type: ignore[return-value]
            if self._state == PENDING:
                future = self._pending
                owner = False
            else:
                future = Future()
                self._pending = future
                self._state = PENDING
                owner = True

        if not owner:
            return future.result()

        try:
            value = loader()
        except BaseException as exc:
            with self._lock:
                self._state = EMPTY
                self._pending = None
            future.set_exception(exc)
            raise
        with self._lock:
            self._value = value
            self._state = READY
            self._pending = None
        future.set_result(value)
        return value


class CompendiumClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self._entries: CacheCell[List[Entry]] = CacheCell()

    @property
    def is_loaded(self) -> bool:
        return self._entries.state == READY

    def _get(self, path: str = "") -> object:
        """GET ``path`` and return the envelope's ``data`` payload.

        The API mirrors its status into the JSON body, so the envelope is
        checked before the HTTP status.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Compendium request to %s failed: %s", url, exc)
            raise TransportError(url, exc) from exc

        try:
            envelope = response.json()
        except ValueError as exc:
            logger.error("Compendium response from %s is not JSON: %s", url, exc)
            raise TransportError(url, exc) from exc

        if not isinstance(envelope, dict):
            logger.error("Unexpected compendium envelope from %s: %r", url, envelope)
            raise ApplicationError(None, "Malformed response envelope", url)

        status = envelope.get("status", response.status_code)
        message = str(envelope.get("message") or "")
        if status != 200:
            error_cls = NotFound if status == 404 else ApplicationError
            logger.error("Compendium API error %s from %s: %s", status, url, message)
            raise error_cls(status, message, url)
        return envelope.get("data")

    def _load_all(self) -> List[Entry]:
        entries = entries_from_api(self._get())
        logger.info("Fetched %d compendium entries", len(entries))
        return entries

    def fetch_all(self) -> List[Entry]:
        return self._entries.get(self._load_all)

    def fetch_category(self, category: str) -> List[Entry]:
        entries = entries_from_api(self._get(f"/category/{quote(category.strip().lower(), safe='')}"))
        logger.info("Fetched %d entries for category %r", len(entries), category)
        return entries

    def fetch_entry(self, name: str) -> Entry | None:
        name = name.strip()
        if not name:
            return None
        try:
            data = self._get(f"/entry/{quote(name.lower(), safe='')}")
        except NotFound:
            return None
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict) or not data:
            return None
        try:
            return Entry.from_api(data)
        except ValueError:
            return None

    def categories(self) -> List[str]:
        found = collect_categories(self.fetch_all())
        return found or list(CATEGORY_OPTIONS)
