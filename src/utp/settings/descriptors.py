"""Settings field descriptors declared with the host at activation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldType(Enum):
    """Host settings widget types used by this plugin."""

    INPUT = "input"
    TEXTAREA = "textarea"
    SELECT = "select"


@dataclass(frozen=True)
class SelectOption:
    """One choice of a select field."""

    label: str
    value: str


@dataclass(frozen=True)
class SettingDescriptor:
    """One configuration field declared through register_setting().

    Attributes:
        name: Setting key in the settings snapshot (kebab-case).
        label: Label shown in the admin settings form.
        type: Widget type.
        default: Default value (the host stores every value as a string).
        description_html: Help text, rendered as HTML by the host.
        input_type: HTML input type hint for INPUT fields (e.g. "number").
        options: Choices for SELECT fields.
    """

    name: str
    label: str
    type: FieldType = FieldType.INPUT
    default: str = ""
    description_html: str = ""
    input_type: str | None = None
    options: tuple[SelectOption, ...] = ()

    def __post_init__(self) -> None:
        """Validate select fields."""
        if self.type == FieldType.SELECT:
            if not self.options:
                raise ValueError(f"Select setting '{self.name}' has no options")
            values = {option.value for option in self.options}
            if self.default not in values:
                raise ValueError(
                    f"Default '{self.default}' of select setting '{self.name}' "
                    f"is not one of: {', '.join(sorted(values))}"
                )
        elif self.options:
            raise ValueError(
                f"Setting '{self.name}' of type '{self.type.value}' "
                "cannot have options"
            )

    def to_host(self) -> dict[str, Any]:
        """Return the descriptor dict passed to the host's register_setting()."""
        descriptor: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "default": self.default,
            "descriptionHTML": self.description_html,
        }
        if self.input_type is not None:
            descriptor["inputType"] = self.input_type
        if self.options:
            descriptor["options"] = [
                {"label": option.label, "value": option.value}
                for option in self.options
            ]
        return descriptor
