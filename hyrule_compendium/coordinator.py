"""Turns user actions into screens ready to render.

The coordinator owns one session's ``NavigationStack`` and talks to a shared
provider (normally ``CompendiumClient``). Every public method returns the
``Screen`` the front-end should draw next.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List

from .data import Entry, display_name
from .errors import CompendiumError
from .navigation import (
    MAX_HISTORY,
    Action,
    Categories,
    CategoryList,
    GoBack,
    GoHome,
    NavigationStack,
    PickCategory,
    PickItem,
    SearchResults,
    SingleItem,
    SubmitSearch,
    ViewState,
    transition,
)
from .search import find_partial_matches, find_related, run_search
from .utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_SEARCH_FEEDBACK = "Enter a name to search."
NO_RESULTS_MESSAGE = "No results found."


@dataclass
class Screen:
    state: ViewState
    title: str = ""
    categories: List[str] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)
    entry: Entry | None = None
    related: List[Entry] = field(default_factory=list)
    feedback: str = ""
    error: str = ""
    can_go_back: bool = False

    @property
    def is_list(self) -> bool:
        return isinstance(self.state, (CategoryList, SearchResults))

    @property
    def is_empty(self) -> bool:
        return self.is_list and not self.entries


class ViewCoordinator:
    def __init__(self, provider, stack: NavigationStack | None = None, max_history: int = MAX_HISTORY) -> None:
        self.provider = provider
        self.stack = stack or NavigationStack(max_history)
        self.screen: Screen | None = None

    @property
    def current(self) -> ViewState:
        return self.stack.current

    def _search_term_behind(self) -> str | None:
        states = self.stack.states()
        if len(states) >= 2 and isinstance(states[-2], SearchResults):
            return states[-2].term
        return None

    def _resolve(self, state: ViewState) -> Screen:
        if isinstance(state, Categories):
            screen = Screen(state, title="Categories", categories=self.provider.categories())
        elif isinstance(state, CategoryList):
            screen = Screen(
                state,
                title=display_name(state.category),
                entries=self.provider.fetch_category(state.category),
            )
        elif isinstance(state, SearchResults):
            screen = Screen(
                state,
                title=f'Results for "{state.term}"',
                entries=find_partial_matches(state.term, self.provider.fetch_all()),
            )
        elif isinstance(state, SingleItem):
            term = self._search_term_behind()
            related = find_related(state.entry, term, self.provider.fetch_all()) if term else []
            screen = Screen(state, title=state.entry.name, entry=state.entry, related=related)
        else:
            raise TypeError(f"Unknown view state: {state!r}")
        screen.can_go_back = self.stack.can_go_back
        return screen

    def _fail(self, exc: CompendiumError) -> Screen:
        message = f"Could not reach the compendium: {exc}"
        if self.screen is not None and self.screen.state == self.stack.current:
            self.screen = replace(self.screen, error=message, feedback="")
        else:
            self.screen = Screen(self.stack.current, error=message, can_go_back=self.stack.can_go_back)
        return self.screen

    def _navigate(self, action: Action) -> Screen:
        snapshot = self.stack.states()
        try:
            state = transition(self.stack, action)
            self.screen = self._resolve(state)
        except CompendiumError as exc:
            logger.error("Navigation %r failed: %s", action, exc)
            self.stack.restore(snapshot)
            return self._fail(exc)
        logger.debug("Now showing %s (depth %d)", state.tag, self.stack.depth)
        return self.screen

    def refresh(self) -> Screen:
        try:
            self.screen = self._resolve(self.stack.current)
        except CompendiumError as exc:
            logger.error("Refreshing %r failed: %s", self.stack.current, exc)
            return self._fail(exc)
        return self.screen

    def home(self) -> Screen:
        return self._navigate(GoHome())

    def back(self) -> Screen:
        return self._navigate(GoBack())

    def pick_category(self, category: str) -> Screen:
        return self._navigate(PickCategory(category))

    def pick_item(self, entry: Entry) -> Screen:
        return self._navigate(PickItem(entry))

    def open_entry(self, name: str) -> Screen:
        try:
            entry = self.provider.fetch_entry(name)
        except CompendiumError as exc:
            logger.error("Opening entry %r failed: %s", name, exc)
            return self._fail(exc)
        if entry is None:
            return self._with_feedback(f'No entry named "{name.strip()}".')
        return self.pick_item(entry)

    def submit_search(self, term: str) -> Screen:
        term = term.strip()
        if not term:
            return self._with_feedback(EMPTY_SEARCH_FEEDBACK)
        try:
            outcome = run_search(term, self.provider.fetch_all())
        except CompendiumError as exc:
            logger.error("Search for %r failed: %s", term, exc)
            return self._fail(exc)
        logger.info(
            "Search %r: exact=%s, %d partial matches",
            term,
            outcome.exact.name if outcome.exact else None,
            len(outcome.matches),
        )
        return self._navigate(SubmitSearch(term, exact=outcome.exact))

    def take_feedback(self) -> str:
        """Return the pending feedback message once; later reruns show none."""
        if self.screen is None or not self.screen.feedback:
            return ""
        message = self.screen.feedback
        self.screen = replace(self.screen, feedback="")
        return message

    def _with_feedback(self, message: str) -> Screen:
        if self.screen is None or self.screen.state != self.stack.current:
            self.refresh()
        self.screen = replace(self.screen, feedback=message)
        return self.screen
