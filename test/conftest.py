"""
Pytest configuration and fixtures for crowdfunding-fields tests
"""

import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from crowdfunding_fields.database import create_db_engine, create_session_factory, init_db  # noqa: E402
from crowdfunding_fields.plugins import loader as loader_module  # noqa: E402
from crowdfunding_fields.plugins.registry import HookRegistry  # noqa: E402
from crowdfunding_fields.plugins.subtitle_plugin import SubtitleFieldPlugin  # noqa: E402
from crowdfunding_fields.storage import CampaignRecord, SQLMetadataStore  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def test_engine():
    """Fresh in-memory database with the metadata tables created."""
    engine = create_db_engine(TEST_DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(test_engine) -> SQLMetadataStore:
    return SQLMetadataStore(create_session_factory(test_engine))


@pytest.fixture
def campaign(store):
    """Factory for CampaignRecord views over the test store."""

    def _make(campaign_id: int = 42) -> CampaignRecord:
        return CampaignRecord(id=campaign_id, store=store)

    return _make


@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def plugin(store) -> SubtitleFieldPlugin:
    return SubtitleFieldPlugin(store)


@pytest.fixture
def wired_registry(registry, plugin) -> HookRegistry:
    """Registry with the subtitle plugin registered."""
    plugin.on_load({"enabled": True})
    registry.register(plugin)
    return registry


@pytest.fixture
def plugins_config_file(tmp_path):
    """Point the plugin loader at a throwaway config file."""
    path = tmp_path / "plugins_config.json"
    with patch.object(loader_module, "_PLUGINS_CONFIG_FILE", path):
        yield path
