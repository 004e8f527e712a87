"""
Unit tests for PageSetController.
"""

import pytest

from assignment_toolkit.generation.client import GenerationError
from assignment_toolkit.layout.models import LayoutResult
from assignment_toolkit.pages.controller import EMPTY_PROMPT_MESSAGE, PageSetController


class FakeProvider:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text


def _overflowing(leftover):
    return LayoutResult(lines=(), leftover_text=leftover, overflowed=bool(leftover))


class TestSubscriptions:

    def test_subscribe_when_transition_then_snapshot_published(self):
        # Arrange
        controller = PageSetController()
        snapshots = []
        controller.subscribe(snapshots.append)

        # Act
        controller.set_source_text("hello")

        # Assert
        assert len(snapshots) == 1
        assert snapshots[0].source_text == "hello"

    def test_unsubscribe_when_called_then_no_more_snapshots(self):
        # Arrange
        controller = PageSetController()
        snapshots = []
        unsubscribe = controller.subscribe(snapshots.append)

        # Act
        unsubscribe()
        controller.add_page()

        # Assert
        assert snapshots == []

    def test_subscribe_when_transition_rejected_then_not_notified(self):
        # Arrange
        controller = PageSetController()
        snapshots = []
        controller.subscribe(snapshots.append)

        # Act
        removed = controller.remove_page(1)

        # Assert
        assert removed is False
        assert snapshots == []


class TestTransitions:

    def test_add_page_when_called_then_returns_new_active_id(self):
        # Arrange
        controller = PageSetController()

        # Act
        page_id = controller.add_page()

        # Assert
        assert page_id == 2
        assert controller.active_page.page_id == 2

    def test_set_active_page_when_unknown_then_rejected(self):
        # Arrange
        controller = PageSetController()

        # Act & Assert
        assert controller.set_active_page(3) is False
        assert controller.active_page.page_id == 1

    def test_update_page_settings_when_called_then_page_changes(self):
        # Arrange
        controller = PageSetController()

        # Act
        controller.update_page_settings(1, font_family="Font3")

        # Assert
        assert controller.pages[0].font_family == "Font3"


class TestLayoutRequests:

    def test_complete_layout_when_inputs_unchanged_then_applied(self):
        # Arrange
        controller = PageSetController()
        controller.set_source_text("some long text")
        request = controller.request_layout(1)

        # Act
        applied = controller.complete_layout(request, _overflowing("text"))

        # Assert
        assert applied is True
        assert controller.text_for_page(2) == "text"

    def test_complete_layout_when_settings_changed_mid_pass_then_discarded(self):
        # Arrange
        controller = PageSetController()
        controller.set_source_text("some long text")
        request = controller.request_layout(1)
        controller.update_page_settings(1, font_size_px=30)

        # Act
        applied = controller.complete_layout(request, _overflowing("text"))

        # Assert
        assert applied is False
        assert controller.state.page_ids == (1,)
        assert controller.state.overflow == {}

    def test_complete_layout_when_text_changed_mid_pass_then_discarded(self):
        # Arrange
        controller = PageSetController()
        controller.set_source_text("first version")
        request = controller.request_layout(1)
        controller.set_source_text("second version")

        # Act & Assert
        assert controller.complete_layout(request, _overflowing("version")) is False

    def test_request_layout_when_page_unknown_then_none(self):
        # Act & Assert
        assert PageSetController().request_layout(4) is None


class TestGeneration:

    def test_generate_when_provider_succeeds_then_source_replaced_and_pages_reset(self):
        # Arrange
        controller = PageSetController()
        controller.add_page()
        provider = FakeProvider(text="Generated essay")

        # Act
        ok = controller.generate_source_text(provider, "Write about rivers")

        # Assert
        assert ok is True
        assert provider.prompts == ["Write about rivers"]
        assert controller.source_text == "Generated essay"
        assert controller.state.page_ids == (1,)

    def test_generate_when_provider_fails_then_error_shown_on_page_one(self):
        # Arrange
        controller = PageSetController()
        controller.add_page()
        provider = FakeProvider(error=GenerationError("API Error: 403 - Forbidden", status=403))

        # Act
        ok = controller.generate_source_text(provider, "Write about rivers")

        # Assert
        assert ok is False
        assert controller.text_for_page(1) == "Error: API Error: 403 - Forbidden"
        assert controller.state.page_ids == (1,)

    @pytest.mark.parametrize("prompt", ["", "   "])
    def test_generate_when_prompt_blank_then_asks_for_prompt(self, prompt):
        # Arrange
        controller = PageSetController()
        provider = FakeProvider(text="unused")

        # Act
        ok = controller.generate_source_text(provider, prompt)

        # Assert
        assert ok is False
        assert controller.source_text == EMPTY_PROMPT_MESSAGE
        assert provider.prompts == []
