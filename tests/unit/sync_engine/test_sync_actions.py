"""Unit tests for sync_engine.sync_actions module."""

import pytest

from src.sync_engine.config_store import ConfigStore
from src.sync_engine.sync_actions import SYNC_DOWN, SYNC_UP, SyncActionProvider


@pytest.fixture
def store(tmp_path):
    return ConfigStore(str(tmp_path / "config.yaml"))


@pytest.fixture
def provider(store):
    return SyncActionProvider(store)


class TestActionsFor:
    """Test cases for SyncActionProvider.actions_for."""

    def test_issue_header_offers_both_actions(self, provider):
        actions = provider.actions_for("---\nlinear-issue-id: ABC-1\n---\n\nBody")

        assert actions == [SYNC_UP, SYNC_DOWN]
        assert [a.title for a in actions] == ["Sync Up", "Sync Down"]

    def test_document_header_offers_actions(self, provider):
        assert provider.actions_for("---\nlinear-document-id: doc-1\n---\n\nBody") == [SYNC_UP, SYNC_DOWN]

    def test_no_header(self, provider):
        assert provider.actions_for("linear-issue-id: ABC-1\n") == []

    def test_header_without_identity_key(self, provider):
        assert provider.actions_for("---\nauthor: me\n---\n\nBody") == []

    def test_empty_identity_value(self, provider):
        assert provider.actions_for("---\nlinear-issue-id:\n---\n\nBody") == []

    def test_malformed_yaml_offers_nothing(self, provider):
        assert provider.actions_for("---\nlinear-issue-id: [ABC-1\n---\n\nBody") == []

    def test_disabled_in_settings(self, provider, store):
        store.set('enable_sync_actions', False)

        assert provider.actions_for("---\nlinear-issue-id: ABC-1\n---\n\nBody") == []

    def test_setting_change_applies_immediately(self, provider, store):
        content = "---\nlinear-issue-id: ABC-1\n---\n\nBody"
        store.set('enable_sync_actions', False)
        assert provider.actions_for(content) == []

        store.set('enable_sync_actions', True)
        assert provider.actions_for(content) == [SYNC_UP, SYNC_DOWN]
