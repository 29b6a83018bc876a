"""
Form field descriptors.

A FieldDescriptor is the data a generic form-rendering engine needs to draw
one input on the campaign submission form. Descriptors are immutable and are
merged into the host's mapping of field key -> descriptor.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from crowdfunding_fields.exceptions import InvalidFieldDescriptorError


class FieldType(str, enum.Enum):
    TEXT = "text"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SELECT = "select"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Declarative description of one submission form field.

    Attributes:
        key:         Field key used by the host in hook names, e.g. "subtitle".
        label:       Label shown next to the input.
        type:        Input type understood by the host form engine.
        placeholder: Placeholder text, or None.
        default:     Default value, or None.
        required:    Whether the form can be submitted without a value.
        editable:    Whether the field appears on the campaign edit screen.
        priority:    Ordering weight relative to the other fields.
    """

    key: str
    label: str
    type: FieldType = FieldType.TEXT
    placeholder: str | None = None
    default: str | None = None
    required: bool = False
    editable: bool = True
    priority: int = 10

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidFieldDescriptorError("Field key must not be empty", attribute="key")
        if not self.label:
            raise InvalidFieldDescriptorError("Field label must not be empty", field=self.key, attribute="label")
        try:
            field_type = FieldType(self.type)
        except ValueError:
            raise InvalidFieldDescriptorError(
                f"Unknown field type '{self.type}'", field=self.key, attribute="type"
            ) from None
        # frozen: normalise plain strings like "text" to the enum member
        object.__setattr__(self, "type", field_type)
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise InvalidFieldDescriptorError("Field priority must be an integer", field=self.key, attribute="priority")

    def as_dict(self) -> dict[str, Any]:
        """Return the attribute mapping in the shape the host form engine reads."""
        return {
            "label": self.label,
            "type": self.type.value,
            "placeholder": self.placeholder,
            "default": self.default,
            "required": self.required,
            "editable": self.editable,
            "priority": self.priority,
        }
