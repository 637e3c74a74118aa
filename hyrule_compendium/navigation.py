"""View states, user actions and the navigation stack that ties them together."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .data import Entry

MAX_HISTORY = 64


@dataclass(frozen=True)
class Categories:
    tag = "categories"


@dataclass(frozen=True)
class CategoryList:
    category: str
    tag = "category_list"


@dataclass(frozen=True)
class SearchResults:
    term: str
    tag = "search_results"


@dataclass(frozen=True)
class SingleItem:
    entry: Entry
    tag = "single_item"


ViewState = Union[Categories, CategoryList, SearchResults, SingleItem]


@dataclass(frozen=True)
class PickCategory:
    category: str


@dataclass(frozen=True)
class PickItem:
    entry: Entry


@dataclass(frozen=True)
class SubmitSearch:
    term: str
    exact: Entry | None = None


@dataclass(frozen=True)
class GoBack:
    pass


@dataclass(frozen=True)
class GoHome:
    pass


Action = Union[PickCategory, PickItem, SubmitSearch, GoBack, GoHome]


class NavigationStack:
    """Ordered history of views; the bottom is always ``Categories``."""

    def __init__(self, max_depth: int = MAX_HISTORY) -> None:
        if max_depth < 2:
            raise ValueError("max_depth must leave room above the root view")
        self.max_depth = max_depth
        self._states: List[ViewState] = [Categories()]

    def __repr__(self) -> str:
        return f"NavigationStack({self._states!r})"

    @property
    def current(self) -> ViewState:
        return self._states[-1]

    @property
    def depth(self) -> int:
        return len(self._states)

    @property
    def can_go_back(self) -> bool:
        return len(self._states) > 1

    def states(self) -> List[ViewState]:
        return list(self._states)

    def push(self, state: ViewState) -> ViewState:
        if state == self.current:
            return state
        if isinstance(state, Categories):
            return self.reset()
        self._states.append(state)
        overflow = len(self._states) - self.max_depth
        if overflow > 0:
            # Drop the oldest views but keep the root.
            del self._states[1 : 1 + overflow]
        return state

    def pop(self) -> ViewState:
        if self.can_go_back:
            self._states.pop()
        return self.current

    def reset(self) -> ViewState:
        del self._states[1:]
        return self.current

    def restore(self, states: List[ViewState]) -> None:
        self.reset()
        for state in states:
            self.push(state)


def transition(stack: NavigationStack, action: Action) -> ViewState:
    if isinstance(action, PickCategory):
        return stack.push(CategoryList(action.category))
    if isinstance(action, PickItem):
        return stack.push(SingleItem(action.entry))
    if isinstance(action, SubmitSearch):
        term = action.term.strip()
        if not term:
            return stack.current
        stack.push(SearchResults(term))
        if action.exact is not None:
            stack.push(SingleItem(action.exact))
        return stack.current
    if isinstance(action, GoBack):
        return stack.pop()
    if isinstance(action, GoHome):
        return stack.reset()
    raise TypeError(f"Unknown navigation action: {action!r}")
