"""
Plugin Hook Constants

Hook names the crowdfunding host fires while processing the campaign
submission form and the admin campaign metabox. The names are the host's
stable contract and must not change.

Per-field hooks carry the field key as a suffix; use save_field_hook() and
saved_data_hook() to build them.
"""

from __future__ import annotations

# ── Submission form ───────────────────────────────────────────────────────────
HOOK_SUBMIT_FIELDS = "atcf_shortcode_submit_fields"
HOOK_SUBMIT_SAVE_FIELD_PREFIX = "atcf_shortcode_submit_save_field_"
HOOK_SUBMIT_SAVED_DATA_PREFIX = "atcf_shortcode_submit_saved_data_"

# ── Admin metabox ─────────────────────────────────────────────────────────────
HOOK_ADMIN_CAMPAIGN_INFO_AFTER = "atcf_metabox_campaign_info_after"
HOOK_ADMIN_SAVE_FIELDS = "edd_metabox_fields_save"

# ── Translation ───────────────────────────────────────────────────────────────
HOOK_GETTEXT = "gettext"

# ── Default priority (lower runs first) ───────────────────────────────────────
DEFAULT_PRIORITY = 10


def save_field_hook(field_key: str) -> str:
    """Action fired with (key, field, campaign_id, fields) when a field is saved."""
    return f"{HOOK_SUBMIT_SAVE_FIELD_PREFIX}{field_key}"


def saved_data_hook(field_key: str) -> str:
    """Filter fired with (data, key, campaign) to load a field's saved value."""
    return f"{HOOK_SUBMIT_SAVED_DATA_PREFIX}{field_key}"


# ── Master list of fixed hook names ───────────────────────────────────────────
ALL_HOOKS: list[str] = [
    HOOK_SUBMIT_FIELDS,
    HOOK_ADMIN_CAMPAIGN_INFO_AFTER,
    HOOK_ADMIN_SAVE_FIELDS,
    HOOK_GETTEXT,
]
