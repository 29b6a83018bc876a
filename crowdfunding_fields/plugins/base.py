"""
Plugin Base Classes

PluginMeta:        declarative metadata for a plugin (name, version, hooks, config schema).
PluginBase:        abstract base class all plugins must subclass.
FormFieldProvider: interface for plugins that contribute a submission form field.
FieldPersister:    interface for plugins that persist a field's value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from crowdfunding_fields.fields import FieldDescriptor
    from crowdfunding_fields.plugins.registry import HookRegistry
    from crowdfunding_fields.storage import CampaignRecord


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:          Machine-readable slug, e.g. "crowdfunding_fields".
        version:       Version string, e.g. "1.0".
        description:   Human-readable description shown in the admin.
        author:        Plugin author.
        hooks:         Hook names this plugin attaches callbacks to.
        config_schema: JSON Schema fragments describing configurable options.
    """

    name: str
    version: str
    description: str
    author: str = "Crowdfunding Fields Team"
    hooks: list[str] = field(default_factory=list)
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """
    Abstract base class for all host plugins.

    Subclasses must implement the `meta` property.
    Lifecycle methods default to no-ops so subclasses only override what they need.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    def on_load(self, config: dict[str, Any]) -> None:  # noqa: B027
        """Called once at startup with the plugin's persisted config dict."""

    def on_unload(self) -> None:  # noqa: B027
        """Called when the plugin is removed from the registry."""

    def register_hooks(self, registry: HookRegistry) -> None:  # noqa: B027
        """
        Attach this plugin's callbacks to hook names.

        Called by HookRegistry.register(). Default implementation attaches nothing.
        """


class FormFieldProvider(ABC):
    """Contributes one field to the submission form and the admin metabox."""

    @abstractmethod
    def describe_fields(self, existing_fields: Mapping[str, FieldDescriptor]) -> dict[str, FieldDescriptor]:
        """Return the host's field mapping with this plugin's field added."""

    @abstractmethod
    def read_saved_value(self, data: Any, key: str, campaign: CampaignRecord) -> str:
        """Return the value to pre-fill the submission form with."""

    @abstractmethod
    def render_admin_field(self, campaign: CampaignRecord, stream: TextIO | None = None) -> None:
        """Write the admin input markup for the field."""


class FieldPersister(ABC):
    """Persists a field's value from the submission form and the admin screen."""

    @abstractmethod
    def save_submitted_field(
        self,
        key: str,
        field: Mapping[str, Any],
        campaign_id: int,
        fields: Mapping[str, Any],
    ) -> None:
        """Sanitize and store a submitted value."""

    @abstractmethod
    def register_admin_save_key(self, existing_keys: Sequence[str]) -> list[str]:
        """Return the admin auto-save meta keys with this plugin's key added."""
