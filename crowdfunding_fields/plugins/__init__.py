"""
Crowdfunding Plugin System

Public API for the plugin system:
    PluginMeta: plugin metadata dataclass
    PluginBase: abstract base class for all plugins
    FormFieldProvider: interface for plugins contributing a form field
    FieldPersister: interface for plugins persisting a field value
    HookRegistry: plugin registry + filter/action dispatcher
    SubtitleFieldPlugin: the campaign subtitle field
"""

from .base import FieldPersister, FormFieldProvider, PluginBase, PluginMeta
from .registry import HookRegistry
from .subtitle_plugin import SUBTITLE_FIELD, SUBTITLE_FIELD_KEY, SUBTITLE_META_KEY, SubtitleFieldPlugin

__all__ = [
    "FieldPersister",
    "FormFieldProvider",
    "HookRegistry",
    "PluginBase",
    "PluginMeta",
    "SUBTITLE_FIELD",
    "SUBTITLE_FIELD_KEY",
    "SUBTITLE_META_KEY",
    "SubtitleFieldPlugin",
]
