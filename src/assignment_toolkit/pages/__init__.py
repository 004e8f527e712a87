"""
Module: pages

Purpose:
    Page-set state machine: ordered pages with per-page settings, the
    root source text and the overflow chain between pages.

Key Classes:
    - PageSetState: Immutable snapshot
    - PageSetController: Stateful shell with subscribers
    - LayoutRequest: Inputs captured for one layout pass
"""

from .state import (
    PageSetState,
    add_page,
    layout_page_completed,
    remove_page,
    set_active_page,
    set_source_text,
    text_for_page,
    update_page_settings,
)
from .controller import LayoutRequest, PageSetController

__all__ = [
    "PageSetState",
    "PageSetController",
    "LayoutRequest",
    "add_page",
    "layout_page_completed",
    "remove_page",
    "set_active_page",
    "set_source_text",
    "text_for_page",
    "update_page_settings",
]
