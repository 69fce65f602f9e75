"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_JPEG_QUALITY
from ..domain.models import AspectRatio

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "intent/settings.schema.json",
    "type": "object",
    "required": ["schema", "editor"],
    "properties": {
        "schema": {"const": "intent/settings@1"},
        "database_path": {"type": ["string", "null"]},
        "export_directory": {"type": ["string", "null"]},
        "editor": {
            "type": "object",
            "properties": {
                "default_aspect_ratio": {
                    "type": "string",
                    "enum": [ratio.value for ratio in AspectRatio],
                },
                "show_grid": {"type": "boolean"},
                "jpeg_quality": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "maximum": 1,
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "intent/settings@1",
    "database_path": None,
    "export_directory": None,
    "editor": {
        "default_aspect_ratio": AspectRatio.FREE.value,
        "show_grid": True,
        "jpeg_quality": DEFAULT_JPEG_QUALITY,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)
_PATH_KEYS = ("database_path", "export_directory")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "editor" and isinstance(value, dict):
                target = merged.setdefault("editor", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            if key in _PATH_KEYS:
                if value in {None, ""}:
                    merged[key] = None
                    continue
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
