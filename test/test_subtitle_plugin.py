"""
Subtitle field plugin tests

Handlers are exercised both directly and through the hook registry, the way
the host invokes them, against an in-memory SQLite metadata store.
"""

from __future__ import annotations

import io
import sys

from crowdfunding_fields.fields import FieldDescriptor, FieldType
from crowdfunding_fields.plugins.base import FieldPersister, FormFieldProvider, PluginBase
from crowdfunding_fields.plugins.hooks import (
    HOOK_ADMIN_CAMPAIGN_INFO_AFTER,
    HOOK_ADMIN_SAVE_FIELDS,
    HOOK_GETTEXT,
    HOOK_SUBMIT_FIELDS,
    saved_data_hook,
    save_field_hook,
)
from crowdfunding_fields.plugins.subtitle_plugin import (
    SUBTITLE_FIELD,
    SUBTITLE_FIELD_KEY,
    SUBTITLE_META_KEY,
    SubtitleFieldPlugin,
)

# ══════════════════════════════════════════════════════════════════════════════
# 1. TestSubtitlePluginMeta
# ══════════════════════════════════════════════════════════════════════════════


class TestSubtitlePluginMeta:
    def test_is_plugin_and_both_interfaces(self, plugin):
        assert isinstance(plugin, PluginBase)
        assert isinstance(plugin, FormFieldProvider)
        assert isinstance(plugin, FieldPersister)

    def test_meta_name_and_version(self, plugin):
        assert plugin.meta.name == "crowdfunding_fields"
        assert plugin.meta.version == "1.0"

    def test_meta_lists_every_attached_hook(self, plugin):
        assert set(plugin.meta.hooks) == {
            HOOK_SUBMIT_FIELDS,
            save_field_hook("subtitle"),
            saved_data_hook("subtitle"),
            HOOK_ADMIN_CAMPAIGN_INFO_AFTER,
            HOOK_ADMIN_SAVE_FIELDS,
        }

    def test_register_attaches_every_declared_hook(self, wired_registry, plugin):
        for hook in plugin.meta.hooks:
            assert wired_registry.has_hook(hook), hook


# ══════════════════════════════════════════════════════════════════════════════
# 2. TestDescribeFields
# ══════════════════════════════════════════════════════════════════════════════


class TestDescribeFields:
    def test_empty_mapping_gets_exactly_subtitle(self, plugin):
        fields = plugin.describe_fields({})
        assert list(fields) == ["subtitle"]

    def test_subtitle_descriptor_attributes(self, plugin):
        descriptor = plugin.describe_fields({})["subtitle"]
        assert descriptor.label == "Subtitle"
        assert descriptor.type is FieldType.TEXT
        assert descriptor.placeholder is None
        assert descriptor.default is None
        assert descriptor.required is True
        assert descriptor.editable is True
        assert descriptor.priority == 4

    def test_existing_entries_preserved(self, plugin):
        title = FieldDescriptor(key="title", label="Title", required=True, priority=2)
        goal = FieldDescriptor(key="goal", label="Goal", priority=6)
        existing = {"title": title, "goal": goal}

        fields = plugin.describe_fields(existing)

        assert len(fields) == 3
        assert fields["title"] is title
        assert fields["goal"] is goal
        assert fields["subtitle"] is SUBTITLE_FIELD

    def test_incoming_mapping_not_mutated(self, plugin):
        existing = {"title": FieldDescriptor(key="title", label="Title")}
        plugin.describe_fields(existing)
        assert list(existing) == ["title"]

    def test_existing_subtitle_kept(self, plugin):
        custom = FieldDescriptor(key="subtitle", label="Tagline", priority=9)
        fields = plugin.describe_fields({"subtitle": custom})
        assert fields["subtitle"] is custom
        assert len(fields) == 1

    def test_through_filter_hook(self, wired_registry):
        fields = wired_registry.apply_filters(HOOK_SUBMIT_FIELDS, {})
        assert fields["subtitle"].as_dict() == {
            "label": "Subtitle",
            "type": "text",
            "placeholder": None,
            "default": None,
            "required": True,
            "editable": True,
            "priority": 4,
        }


# ══════════════════════════════════════════════════════════════════════════════
# 3. TestSaveAndRead
# ══════════════════════════════════════════════════════════════════════════════


class TestSaveAndRead:
    def test_round_trip(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "Hello"}, 42, {})
        assert plugin.read_saved_value(None, "subtitle", campaign(42)) == "Hello"

    def test_unwritten_campaign_reads_empty(self, plugin, campaign):
        assert plugin.read_saved_value(None, "subtitle", campaign(7)) == ""

    def test_markup_removed_before_storing(self, plugin, store):
        plugin.save_submitted_field("subtitle", {"value": "<script>x</script>"}, 42, {})
        stored = store.get(42, SUBTITLE_META_KEY)
        assert "<" not in stored
        assert "script" not in stored

    def test_tags_stripped_text_kept(self, plugin, store):
        plugin.save_submitted_field("subtitle", {"value": "<b>Solar</b> kettles\n for all"}, 42, {})
        assert store.get(42, SUBTITLE_META_KEY) == "Solar kettles for all"

    def test_greater_than_survives_round_trip(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "Profit > Cost"}, 42, {})
        assert plugin.read_saved_value(None, "subtitle", campaign(42)) == "Profit > Cost"

    def test_ampersand_survives_round_trip(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "Tom & Jerry"}, 42, {})
        assert plugin.read_saved_value(None, "subtitle", campaign(42)) == "Tom & Jerry"

    def test_missing_value_stored_as_empty(self, plugin, store):
        plugin.save_submitted_field("subtitle", {}, 42, {})
        assert store.get(42, SUBTITLE_META_KEY) == ""

    def test_last_write_wins(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "First"}, 42, {})
        plugin.save_submitted_field("subtitle", {"value": "Second"}, 42, {})
        assert plugin.read_saved_value(None, "subtitle", campaign(42)) == "Second"

    def test_campaigns_are_isolated(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "A"}, 1, {})
        plugin.save_submitted_field("subtitle", {"value": "B"}, 2, {})
        assert plugin.read_saved_value(None, "subtitle", campaign(1)) == "A"
        assert plugin.read_saved_value(None, "subtitle", campaign(2)) == "B"

    def test_round_trip_through_hooks(self, wired_registry, campaign):
        field = {"value": "Hello", "label": "Subtitle"}
        wired_registry.do_action(save_field_hook("subtitle"), "subtitle", field, 42, {"subtitle": field})
        value = wired_registry.apply_filters(saved_data_hook("subtitle"), None, "subtitle", campaign(42))
        assert value == "Hello"

    def test_save_hook_for_other_field_ignored(self, wired_registry, store):
        wired_registry.do_action(save_field_hook("goal"), "goal", {"value": "1000"}, 42, {})
        assert store.get(42, SUBTITLE_META_KEY) is None


# ══════════════════════════════════════════════════════════════════════════════
# 4. TestAdminField
# ══════════════════════════════════════════════════════════════════════════════


class TestAdminField:
    def test_renders_labelled_input(self, plugin, campaign):
        out = io.StringIO()
        plugin.render_admin_field(campaign(42), out)
        html = out.getvalue()
        assert '<label for="campaign_subtitle"><strong>Subtitle</strong></label>' in html
        assert 'name="campaign_subtitle"' in html
        assert 'id="campaign_subtitle"' in html
        assert 'class="regular-text"' in html

    def test_empty_value_when_unset(self, plugin, campaign):
        out = io.StringIO()
        plugin.render_admin_field(campaign(42), out)
        assert 'value=""' in out.getvalue()

    def test_prefilled_with_stored_value(self, plugin, store, campaign):
        store.update(42, SUBTITLE_META_KEY, "Clean water for everyone")
        out = io.StringIO()
        plugin.render_admin_field(campaign(42), out)
        assert 'value="Clean water for everyone"' in out.getvalue()

    def test_double_quote_escaped(self, plugin, store, campaign):
        store.update(42, SUBTITLE_META_KEY, 'a"b')
        out = io.StringIO()
        plugin.render_admin_field(campaign(42), out)
        assert 'value="a&quot;b"' in out.getvalue()

    def test_markup_in_value_not_double_escaped(self, plugin, store, campaign):
        store.update(42, SUBTITLE_META_KEY, "Tom & Jerry <3")
        html = plugin.admin_field_markup(campaign(42))
        assert 'value="Tom &amp; Jerry &lt;3"' in html

    def test_submitted_value_rendered_without_double_encoding(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "Tom & Jerry <3"}, 42, {})
        html = plugin.admin_field_markup(campaign(42))
        assert 'value="Tom &amp; Jerry &lt;3"' in html
        assert "&amp;lt;" not in html

    def test_submitted_greater_than_rendered_once_escaped(self, plugin, campaign):
        plugin.save_submitted_field("subtitle", {"value": "Profit > Cost"}, 42, {})
        html = plugin.admin_field_markup(campaign(42))
        assert 'value="Profit &gt; Cost"' in html
        assert "&amp;gt;" not in html

    def test_defaults_to_stdout(self, plugin, campaign, monkeypatch):
        out = io.StringIO()
        monkeypatch.setattr(sys, "stdout", out)
        plugin.render_admin_field(campaign(42))
        assert "campaign_subtitle" in out.getvalue()

    def test_through_action_hook(self, wired_registry, campaign):
        out = io.StringIO()
        wired_registry.do_action(HOOK_ADMIN_CAMPAIGN_INFO_AFTER, campaign(42), out)
        assert "<input" in out.getvalue()

    def test_label_passes_through_gettext(self, wired_registry, campaign):
        translations = {"Subtitle": "Sous-titre"}
        wired_registry.add_filter(HOOK_GETTEXT, lambda translated, text: translations.get(text, translated), accepted_args=2)
        out = io.StringIO()
        wired_registry.do_action(HOOK_ADMIN_CAMPAIGN_INFO_AFTER, campaign(42), out)
        assert "<strong>Sous-titre</strong>" in out.getvalue()


# ══════════════════════════════════════════════════════════════════════════════
# 5. TestAdminSaveKey
# ══════════════════════════════════════════════════════════════════════════════


class TestAdminSaveKey:
    def test_appends_key(self, plugin):
        assert plugin.register_admin_save_key(["_campaign_goal"]) == ["_campaign_goal", "campaign_subtitle"]

    def test_appends_to_empty(self, plugin):
        assert plugin.register_admin_save_key([]) == [SUBTITLE_META_KEY]

    def test_not_duplicated(self, plugin):
        keys = plugin.register_admin_save_key([])
        keys = plugin.register_admin_save_key(keys)
        assert keys.count(SUBTITLE_META_KEY) == 1

    def test_input_not_mutated(self, plugin):
        existing = ["_campaign_goal"]
        plugin.register_admin_save_key(existing)
        assert existing == ["_campaign_goal"]

    def test_through_filter_hook(self, wired_registry):
        keys = wired_registry.apply_filters(HOOK_ADMIN_SAVE_FIELDS, ["_campaign_goal"])
        assert keys == ["_campaign_goal", "campaign_subtitle"]


# ══════════════════════════════════════════════════════════════════════════════
# 6. TestUnload
# ══════════════════════════════════════════════════════════════════════════════


class TestUnload:
    def test_unregister_detaches_hooks(self, wired_registry, plugin):
        wired_registry.unregister(plugin.meta.name)
        assert not wired_registry.has_hook(HOOK_SUBMIT_FIELDS)
        assert wired_registry.apply_filters(HOOK_SUBMIT_FIELDS, {}) == {}

    def test_unloaded_plugin_renders_untranslated_label(self, wired_registry, plugin, campaign):
        wired_registry.add_filter(HOOK_GETTEXT, lambda translated: "Sous-titre")
        wired_registry.unregister(plugin.meta.name)
        assert "<strong>Subtitle</strong>" in plugin.admin_field_markup(campaign(42))

    def test_reregister_after_unload(self, wired_registry, store, campaign):
        wired_registry.unregister("crowdfunding_fields")
        wired_registry.register(SubtitleFieldPlugin(store))
        wired_registry.do_action(save_field_hook(SUBTITLE_FIELD_KEY), "subtitle", {"value": "Again"}, 42, {})
        assert store.get(42, SUBTITLE_META_KEY) == "Again"
