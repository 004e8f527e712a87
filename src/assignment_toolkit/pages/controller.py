"""
Module: pages.controller

Purpose:
    Stateful shell around the page-set state machine.
    Applies transitions, publishes snapshots to subscribers and discards
    layout results computed from inputs that have since changed.

Key Classes:
    - PageSetController: Owns the current PageSetState
    - LayoutRequest: Inputs captured for one layout pass

Dependencies:
    - pages.state: Pure transitions
    - generation.client: GenerationError

Used By:
    - pipeline: Reflow and document building
    - cli: Command line entry point
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

from assignment_toolkit.core.models.settings import PageSettings
from assignment_toolkit.generation.client import GenerationError
from assignment_toolkit.layout.models import LayoutResult

from . import state as transitions
from .state import PageSetState

logger = logging.getLogger(__name__)

Subscriber = Callable[[PageSetState], None]

EMPTY_PROMPT_MESSAGE = "Enter a prompt"


class TextProvider(Protocol):
    def generate(self, prompt: str) -> str:
        ...


@dataclass(frozen=True)
class LayoutRequest:
    """
    Inputs of one layout pass.

    Attributes:
        page_id: Page being laid out
        text: Text the page displayed when the pass started
        settings: Page settings when the pass started
    """

    page_id: int
    text: str
    settings: PageSettings


class PageSetController:
    """
    Owns the page set and applies transitions to it.

    Every accepted transition replaces the snapshot and notifies
    subscribers with the new state.

    Example:
        >>> controller = PageSetController()
        >>> controller.set_source_text("Hello")
        >>> controller.text_for_page(1)
        'Hello'
    """

    def __init__(self, initial: Optional[PageSetState] = None) -> None:
        self._state = initial or PageSetState()
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> PageSetState:
        return self._state

    @property
    def pages(self) -> tuple[PageSettings, ...]:
        return self._state.pages

    @property
    def source_text(self) -> str:
        return self._state.source_text

    @property
    def active_page(self) -> PageSettings:
        return self._state.active_page

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state snapshots.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ─────────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────────

    def set_source_text(self, text: str) -> None:
        self._apply(transitions.set_source_text(self._state, text))

    def layout_page_completed(self, page_id: int, leftover_text: str) -> None:
        self._apply(transitions.layout_page_completed(self._state, page_id, leftover_text))

    def add_page(self) -> int:
        """Append a page and return its id."""
        self._apply(transitions.add_page(self._state))
        return self._state.active_page_id

    def remove_page(self, page_id: int) -> bool:
        """Remove a page; returns False when the removal was rejected."""
        before = self._state
        self._apply(transitions.remove_page(before, page_id))
        return self._state is not before

    def update_page_settings(self, page_id: int, **changes: Any) -> None:
        self._apply(transitions.update_page_settings(self._state, page_id, **changes))

    def set_active_page(self, page_id: int) -> bool:
        before = self._state
        self._apply(transitions.set_active_page(before, page_id))
        return self._state.active_page_id == page_id

    def text_for_page(self, page_id: int) -> str:
        return transitions.text_for_page(self._state, page_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Layout passes
    # ─────────────────────────────────────────────────────────────────────────

    def request_layout(self, page_id: int) -> Optional[LayoutRequest]:
        """Capture the inputs for laying out a page, or None if it does not exist."""
        settings = self._state.page(page_id)
        if settings is None:
            return None
        return LayoutRequest(page_id=page_id, text=self.text_for_page(page_id), settings=settings)

    def is_current(self, request: LayoutRequest) -> bool:
        """True if the page still has the settings and text the request captured."""
        return (
            self._state.page(request.page_id) == request.settings
            and self.text_for_page(request.page_id) == request.text
        )

    def complete_layout(self, request: LayoutRequest, result: LayoutResult) -> bool:
        """
        Apply a finished layout pass.

        Results from passes whose inputs changed in the meantime are
        discarded; a fresh pass must be run instead.

        Returns:
            True if the result was applied
        """
        if not self.is_current(request):
            logger.debug(f"Discarding stale layout for page {request.page_id}")
            return False
        self.layout_page_completed(request.page_id, result.leftover_text)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Source text generation
    # ─────────────────────────────────────────────────────────────────────────

    def generate_source_text(self, provider: TextProvider, prompt: str) -> bool:
        """
        Replace the source text with generated content.

        A blank prompt or a provider failure puts a visible message on
        page 1 instead.

        Returns:
            True if generation succeeded
        """
        if not prompt.strip():
            self.set_source_text(EMPTY_PROMPT_MESSAGE)
            return False

        try:
            content = provider.generate(prompt)
        except GenerationError as e:
            logger.error(f"Generation error: {e}")
            self.set_source_text(f"Error: {e.message}")
            return False

        self.set_source_text(content)
        logger.info(f"Generated {len(content)} characters of source text")
        return True

    def _apply(self, new_state: PageSetState) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        for callback in list(self._subscribers):
            callback(new_state)
