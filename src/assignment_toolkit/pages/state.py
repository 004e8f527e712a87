"""
Module: pages.state

Purpose:
    Page-set state machine.
    PageSetState is an immutable snapshot; every transition is a pure
    function returning a new snapshot. Rejected transitions return the
    input state unchanged.

Key Classes:
    - PageSetState: Pages, source text, overflow map and active page

Key Functions:
    - set_source_text(): Replace the root text and collapse to one page
    - layout_page_completed(): Record a page's leftover, creating the next page
    - add_page(): Append a copy of the last page
    - remove_page(): Remove a page
    - update_page_settings(): Merge settings into one page
    - set_active_page(): Change the active page
    - text_for_page(): Text a page displays

Dependencies:
    - core.models.settings: PageSettings

Used By:
    - pages.controller: Stateful shell with subscribers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from assignment_toolkit.core.models.settings import PageSettings

logger = logging.getLogger(__name__)

FIRST_PAGE_ID = 1


@dataclass(frozen=True)
class PageSetState:
    """
    Snapshot of the page set (immutable).

    Attributes:
        pages: Page settings ordered by page_id
        source_text: Root text shown on page 1
        overflow: page_id -> leftover text recorded by that page's last layout
        active_page_id: Page currently selected for editing

    Invariants:
        - pages is non-empty and contains page 1
        - page ids are unique
        - active_page_id refers to an existing page
    """

    pages: Tuple[PageSettings, ...] = (PageSettings(page_id=FIRST_PAGE_ID),)
    source_text: str = ""
    overflow: Dict[int, str] = field(default_factory=dict)
    active_page_id: int = FIRST_PAGE_ID

    def __post_init__(self) -> None:
        """Validate invariants on construction."""
        if not self.pages:
            raise ValueError("A page set needs at least one page")
        ids = [page.page_id for page in self.pages]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate page ids: {ids}")
        if FIRST_PAGE_ID not in ids:
            raise ValueError("A page set must contain page 1")
        if self.active_page_id not in ids:
            raise ValueError(f"Active page {self.active_page_id} does not exist")
        ordered = tuple(sorted(self.pages, key=lambda page: page.page_id))
        if ordered != self.pages:
            object.__setattr__(self, "pages", ordered)

    @property
    def page_ids(self) -> Tuple[int, ...]:
        return tuple(page.page_id for page in self.pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def active_page(self) -> PageSettings:
        page = self.page(self.active_page_id)
        assert page is not None
        return page

    def page(self, page_id: int) -> Optional[PageSettings]:
        """Settings of a page, or None if it does not exist."""
        for page in self.pages:
            if page.page_id == page_id:
                return page
        return None

    def has_page(self, page_id: int) -> bool:
        return self.page(page_id) is not None


def text_for_page(state: PageSetState, page_id: int) -> str:
    """
    Text displayed on a page.

    Page 1 shows the source text; page N shows the leftover recorded
    for page N-1, or nothing if none has been recorded yet.
    """
    if page_id == FIRST_PAGE_ID:
        return state.source_text
    return state.overflow.get(page_id - 1, "")


def set_source_text(state: PageSetState, text: str) -> PageSetState:
    """Replace the root text, keep only the first page and clear overflow."""
    first = state.pages[0]
    return PageSetState(
        pages=(first,),
        source_text=text,
        overflow={},
        active_page_id=first.page_id,
    )


def layout_page_completed(state: PageSetState, page_id: int, leftover_text: str) -> PageSetState:
    """
    Record the leftover text produced by laying out a page.

    If there is leftover text and no page page_id + 1 exists, a page
    cloning page_id's settings is appended to display it.
    """
    overflow = dict(state.overflow)
    overflow[page_id] = leftover_text
    pages = state.pages

    next_id = page_id + 1
    if leftover_text and not state.has_page(next_id):
        current = state.page(page_id)
        if current is None:
            logger.warning(f"Overflow recorded for missing page {page_id}; no page created")
        else:
            pages = pages + (current.clone_as(next_id),)
            logger.debug(f"Created page {next_id} for overflow from page {page_id}")

    return replace(state, pages=pages, overflow=overflow)


def add_page(state: PageSetState) -> PageSetState:
    """Append a copy of the last page with the next free id and activate it."""
    last = state.pages[-1]
    new_id = max(state.page_ids) + 1
    return replace(
        state,
        pages=state.pages + (last.clone_as(new_id),),
        active_page_id=new_id,
    )


def remove_page(state: PageSetState, page_id: int) -> PageSetState:
    """
    Remove a page.

    Rejected (state returned unchanged) when only one page remains, when
    the page does not exist, or when it is page 1. The overflow map is
    left as is; successors keep their text until their predecessor is
    laid out again.
    """
    if state.page_count <= 1:
        logger.debug("Refusing to remove the only page")
        return state
    if page_id == FIRST_PAGE_ID:
        logger.debug("Refusing to remove page 1")
        return state
    if not state.has_page(page_id):
        logger.debug(f"Ignoring removal of unknown page {page_id}")
        return state

    pages = tuple(page for page in state.pages if page.page_id != page_id)
    active = state.active_page_id
    if active == page_id:
        active = pages[0].page_id
    return replace(state, pages=pages, active_page_id=active)


def update_page_settings(state: PageSetState, page_id: int, **changes: Any) -> PageSetState:
    """
    Merge settings into one page.

    Does not trigger layout. Unknown pages are ignored.

    Raises:
        ValueError: If a field is unknown or a value is out of range
    """
    if not state.has_page(page_id):
        logger.debug(f"Ignoring settings update for unknown page {page_id}")
        return state

    pages = tuple(
        page.with_changes(**changes) if page.page_id == page_id else page
        for page in state.pages
    )
    return replace(state, pages=pages)


def set_active_page(state: PageSetState, page_id: int) -> PageSetState:
    """Activate an existing page; unknown ids are ignored."""
    if not state.has_page(page_id):
        logger.debug(f"Ignoring activation of unknown page {page_id}")
        return state
    return replace(state, active_page_id=page_id)
