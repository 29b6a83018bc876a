"""
Custom Exception Classes for Crowdfunding Fields

The field handlers themselves never raise: missing values become empty
strings and sanitization is total. These exceptions cover the places where
the plugin is wired up wrongly (bad descriptors, bad hook registrations).
"""

from typing import Any


class CrowdfundingFieldsError(Exception):
    """Base exception class for all crowdfunding-fields exceptions"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Field Descriptor Exceptions
# ============================================================================


class InvalidFieldDescriptorError(CrowdfundingFieldsError):
    """Raised when a field descriptor is constructed with invalid attributes"""

    def __init__(self, message: str, field: str | None = None, attribute: str | None = None):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if attribute:
            details["attribute"] = attribute
        super().__init__(message=message, details=details)


# ============================================================================
# Hook & Plugin Exceptions
# ============================================================================


class HookRegistrationError(CrowdfundingFieldsError):
    """Raised when a callback cannot be attached to a hook"""

    def __init__(self, message: str, hook_name: str | None = None):
        details = {"hook_name": hook_name} if hook_name else {}
        super().__init__(message=message, details=details)


class PluginNotFoundError(CrowdfundingFieldsError):
    """Raised when a plugin is looked up for removal but was never registered"""

    def __init__(self, plugin_name: str):
        super().__init__(
            message=f"Plugin '{plugin_name}' is not registered",
            details={"plugin_name": plugin_name},
        )
