"""Plugin settings: field descriptors, snapshot models and schemas."""

from utp.settings.descriptors import (
    FieldType,
    SelectOption,
    SettingDescriptor,
)
from utp.settings.models import (
    FreeTextSettings,
    PresetSettings,
    ProfileSettings,
    normalize_setting_value,
    parse_priority,
)
from utp.settings.schemas import (
    DEFAULT_SCHEMA,
    FreeTextSchema,
    PresetSchema,
    SettingsSchema,
    available_schemas,
    get_schema,
)

__all__ = [
    # Descriptors
    "FieldType",
    "SelectOption",
    "SettingDescriptor",
    # Models
    "FreeTextSettings",
    "PresetSettings",
    "ProfileSettings",
    "normalize_setting_value",
    "parse_priority",
    # Schemas
    "DEFAULT_SCHEMA",
    "FreeTextSchema",
    "PresetSchema",
    "SettingsSchema",
    "available_schemas",
    "get_schema",
]
