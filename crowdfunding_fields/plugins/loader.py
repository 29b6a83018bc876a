"""
Plugin Loader

Reads and writes per-plugin configuration from a JSON file and builds the
plugins at startup, injecting them into the hook registry.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from crowdfunding_fields.config import settings

if TYPE_CHECKING:
    from crowdfunding_fields.plugins.registry import HookRegistry
    from crowdfunding_fields.storage import MetadataStore

logger = logging.getLogger(__name__)

# ── Config file location ──────────────────────────────────────────────────────
_PLUGINS_CONFIG_FILE = Path(settings.plugins_config_file)

# ── Default plugin config ─────────────────────────────────────────────────────
_DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "crowdfunding_fields": {"enabled": True},
}


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_plugins_config() -> dict[str, dict[str, Any]]:
    """
    Load plugin configuration from disk.

    Returns defaults if the file does not exist or cannot be parsed.
    """
    if _PLUGINS_CONFIG_FILE.exists():
        try:
            return json.loads(_PLUGINS_CONFIG_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return copy.deepcopy(_DEFAULT_CONFIG)


def save_plugins_config(config: dict[str, dict[str, Any]]) -> None:
    """Persist plugin configuration to disk."""
    _PLUGINS_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    _PLUGINS_CONFIG_FILE.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ── Startup initialisation ────────────────────────────────────────────────────


def initialize_plugins(registry: HookRegistry, store: MetadataStore) -> None:
    """
    Build and register every enabled plugin.

    Each plugin is constructed once, given its config slice through on_load()
    and handed to the registry, which lets it attach its hook callbacks.
    """
    from crowdfunding_fields.plugins.subtitle_plugin import SubtitleFieldPlugin

    config = load_plugins_config()

    loaded = 0
    for plugin in [SubtitleFieldPlugin(store)]:
        plugin_config = config.get(plugin.meta.name, {})
        if not plugin_config.get("enabled", True):
            logger.info("Plugin %s disabled by config, skipping", plugin.meta.name)
            continue
        plugin.on_load(plugin_config)
        registry.register(plugin)
        loaded += 1

    logger.info("Plugin initialisation complete: %d plugins loaded", loaded)
