"""Identity and export-marker lookups shared by both passes"""

import re
from typing import Mapping, Optional

from roampub.config import Settings


TRUTHY = {'t', 'true', 'yes', 'y', '1', 'on'}


def split_tags(value: str) -> list[str]:
    """Split a '#+filetags:' value (':a:b:' or 'a b') into tag names."""
    return [t for t in re.split(r'[:\s]+', value) if t]


def get_property(properties: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive property lookup."""
    for key, value in properties.items():
        if key.upper() == name.upper():
            return value
    return None


def is_export_keyword(key: str, value: str, settings: Settings) -> bool:
    """True for the '#+filetags:' line carrying the export tag."""
    return key.lower() == 'filetags' and settings.export_tag in split_tags(value)


def is_export_property(key: str, value: str, settings: Settings) -> bool:
    """True for a file drawer property that marks the file for export."""
    return (
        bool(settings.export_property)
        and key.upper() == settings.export_property.upper()
        and value.strip().lower() in TRUTHY
    )
