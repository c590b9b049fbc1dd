"""
AppConfig — the ``app-config.json`` that marks a UX4 application root.

Read-only to this tool. Only the fields the tool uses are modelled;
anything else in the file is preserved as extra data.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AppConfig(BaseModel):
    """Identity of an installed application."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ux4version: str | None = None
    name: str = ""
    display_name: str = Field(default="", alias="displayName")
    version: str = ""

    @model_validator(mode="before")
    @classmethod
    def _lift_nested_version(cls, data: Any) -> Any:
        # Newer apps declare {"ux4": {"version": "..."}} instead of ux4version
        if isinstance(data, dict) and not data.get("ux4version"):
            nested = data.get("ux4")
            if isinstance(nested, dict) and nested.get("version"):
                data = {**data, "ux4version": str(nested["version"])}
        return data
