"""
Crowdfunding Fields

Adds a campaign subtitle field to the crowdfunding submission form and the
admin campaign metabox.
"""

from .fields import FieldDescriptor, FieldType
from .main import bootstrap
from .plugins import HookRegistry, SubtitleFieldPlugin
from .storage import CampaignRecord, MetadataStore, SQLMetadataStore

__version__ = "1.0"

__all__ = [
    "CampaignRecord",
    "FieldDescriptor",
    "FieldType",
    "HookRegistry",
    "MetadataStore",
    "SQLMetadataStore",
    "SubtitleFieldPlugin",
    "bootstrap",
]
