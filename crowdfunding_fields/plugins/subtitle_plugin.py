"""
Subtitle Field Plugin

Adds a "subtitle" text field to the campaign submission form and stores it
as campaign metadata under `campaign_subtitle`.

Hook subscriptions:
  - atcf_shortcode_submit_fields               → add the subtitle descriptor
  - atcf_shortcode_submit_save_field_subtitle  → sanitize and store the submitted value
  - atcf_shortcode_submit_saved_data_subtitle  → load the stored value into the form
  - atcf_metabox_campaign_info_after           → render the input in the admin metabox
  - edd_metabox_fields_save                    → have the admin save routine persist the key
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from jinja2 import Environment, FileSystemLoader, select_autoescape

from crowdfunding_fields.fields import FieldDescriptor, FieldType
from crowdfunding_fields.plugins.base import FieldPersister, FormFieldProvider, PluginBase, PluginMeta
from crowdfunding_fields.plugins.hooks import (
    HOOK_ADMIN_CAMPAIGN_INFO_AFTER,
    HOOK_ADMIN_SAVE_FIELDS,
    HOOK_GETTEXT,
    HOOK_SUBMIT_FIELDS,
    saved_data_hook,
    save_field_hook,
)
from crowdfunding_fields.utils.sanitize import esc_attr, sanitize_text_field

if TYPE_CHECKING:
    from crowdfunding_fields.plugins.registry import HookRegistry
    from crowdfunding_fields.storage import CampaignRecord, MetadataStore

logger = logging.getLogger(__name__)

SUBTITLE_FIELD_KEY = "subtitle"
SUBTITLE_META_KEY = "campaign_subtitle"

SUBTITLE_FIELD = FieldDescriptor(
    key=SUBTITLE_FIELD_KEY,
    label="Subtitle",
    type=FieldType.TEXT,
    placeholder=None,
    default=None,
    required=True,
    editable=True,
    priority=4,
)

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

_META = PluginMeta(
    name="crowdfunding_fields",
    version="1.0",
    description="Custom fields for the crowdfunding submission form: adds a campaign subtitle",
    hooks=[
        HOOK_SUBMIT_FIELDS,
        save_field_hook(SUBTITLE_FIELD_KEY),
        saved_data_hook(SUBTITLE_FIELD_KEY),
        HOOK_ADMIN_CAMPAIGN_INFO_AFTER,
        HOOK_ADMIN_SAVE_FIELDS,
    ],
    config_schema={
        "enabled": {"type": "boolean", "default": True},
    },
)


def _template_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["esc_attr"] = esc_attr
    return env


class SubtitleFieldPlugin(PluginBase, FormFieldProvider, FieldPersister):
    """Campaign subtitle field, on the submission form and in the admin metabox."""

    def __init__(self, store: MetadataStore, templates: Environment | None = None) -> None:
        self._store = store
        self._templates = templates or _template_env()
        self._registry: HookRegistry | None = None
        self._config: dict[str, Any] = {}

    @property
    def meta(self) -> PluginMeta:
        return _META

    def on_load(self, config: dict[str, Any]) -> None:
        self._config = config
        logger.debug("SubtitleFieldPlugin loaded (enabled=%s)", config.get("enabled", True))

    def register_hooks(self, registry: HookRegistry) -> None:
        self._registry = registry
        registry.add_filter(HOOK_SUBMIT_FIELDS, self.describe_fields)
        registry.add_action(save_field_hook(SUBTITLE_FIELD_KEY), self.save_submitted_field, accepted_args=4)
        registry.add_filter(saved_data_hook(SUBTITLE_FIELD_KEY), self.read_saved_value, accepted_args=3)
        registry.add_action(HOOK_ADMIN_CAMPAIGN_INFO_AFTER, self.render_admin_field, accepted_args=2)
        registry.add_filter(HOOK_ADMIN_SAVE_FIELDS, self.register_admin_save_key)

    def on_unload(self) -> None:
        self._registry = None

    # ── Submission form ───────────────────────────────────────────────────────

    def describe_fields(self, existing_fields: Mapping[str, FieldDescriptor]) -> dict[str, FieldDescriptor]:
        """Return a copy of the host's fields with the subtitle descriptor added."""
        fields = dict(existing_fields)
        if SUBTITLE_FIELD_KEY in fields:
            logger.warning(
                "Field %r already defined, keeping the existing descriptor",
                SUBTITLE_FIELD_KEY,
                extra={"field_key": SUBTITLE_FIELD_KEY},
            )
            return fields
        fields[SUBTITLE_FIELD_KEY] = SUBTITLE_FIELD
        return fields

    def save_submitted_field(
        self,
        key: str,
        field: Mapping[str, Any],
        campaign_id: int,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        raw = field.get("value") if isinstance(field, Mapping) else None
        value = sanitize_text_field(raw)
        self._store.update(campaign_id, SUBTITLE_META_KEY, value)
        logger.debug(
            "Saved %s for campaign %s",
            SUBTITLE_META_KEY,
            campaign_id,
            extra={"campaign_id": campaign_id, "field_key": key, "meta_key": SUBTITLE_META_KEY},
        )

    def read_saved_value(self, data: Any, key: str, campaign: CampaignRecord) -> str:
        return campaign.get_metadata(SUBTITLE_META_KEY) or ""

    # ── Admin metabox ─────────────────────────────────────────────────────────

    def admin_field_markup(self, campaign: CampaignRecord) -> str:
        """Render the labelled admin input pre-filled with the stored subtitle."""
        template = self._templates.get_template("admin/subtitle_field.html")
        return template.render(
            meta_key=SUBTITLE_META_KEY,
            label=self._translate(SUBTITLE_FIELD.label),
            value=campaign.get_metadata(SUBTITLE_META_KEY) or "",
        )

    def render_admin_field(self, campaign: CampaignRecord, stream: TextIO | None = None) -> None:
        out = stream if stream is not None else sys.stdout
        out.write(self.admin_field_markup(campaign))

    def register_admin_save_key(self, existing_keys: Sequence[str]) -> list[str]:
        keys = list(existing_keys)
        if SUBTITLE_META_KEY not in keys:
            keys.append(SUBTITLE_META_KEY)
        return keys

    def _translate(self, text: str) -> str:
        if self._registry is None:
            return text
        return self._registry.apply_filters(HOOK_GETTEXT, text, text, "default")
