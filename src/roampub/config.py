"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "roampub"
    export_tag:       str = Field(default="export", min_length=1, description="Tag marking a file or headline for export")
    id_property:      str = Field(default="ID",     min_length=1, description="Property holding a node's identifier")
    export_property:  str = Field(default="EXPORT", description="File drawer property that also marks a file for export")
    source_extension: str = Field(default="org",    description="Extension of source documents")
    output_extension: str = Field(default="md",     pattern=r"^\.?[A-Za-z0-9]+$", description="Extension of exported files")
    todo_keywords:    list[str] = Field(default=["TODO", "DOIN"], description="Open TODO keywords stripped from titles")
    done_keywords:    list[str] = Field(default=["DONE", "CNCL"], description="Closed TODO keywords stripped from titles")
    id_pattern:       str = Field(default=r"^[A-Za-z0-9][A-Za-z0-9._:-]*$", description="Regex every identifier must match")
    strict_uuid:      bool = Field(default=False, description="Require identifiers to be UUIDs")
    workers:          int = Field(default=4, ge=1, description="Thread pool size for both passes")
    slug_collisions:  str = Field(default="warn", pattern="^(warn|error)$", description="warn or error")
    anchor_heading:   bool = Field(default=False, description="Render an exported headline as the top heading of its own file")
    fail_fast:        bool = Field(default=False, description="Abort the run on the first failed document")
    log_level:        Optional[str] = Field(default=None, description="Explicit log level; overrides -v")

    @field_validator("todo_keywords", "done_keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> Any:
        """Accept 'TODO,DOIN' (env vars) as well as YAML lists."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then ROAMPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"ROAMPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
