"""Front-matter aggregation and YAML serialization"""

from dataclasses import dataclass, field

import yaml


@dataclass
class FrontMatter:
    """Ordered key/value pairs collected for one output file.

    Entries are kept in encounter order. On serialization a repeated key keeps
    the position of its first occurrence and the value of its last one.
    """
    entries: list[tuple[str, str]] = field(default_factory=list)

    def add(self, key: str, value: str) -> None:
        self.entries.append((key.strip(), str(value).strip()))

    def setdefault(self, key: str, value: str) -> None:
        """Insert key first unless it was already collected."""
        if key not in self.keys():
            self.entries.insert(0, (key, str(value).strip()))

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries]

    def as_dict(self) -> dict[str, str]:
        merged: dict[str, str] = {}
        for key, value in self.entries:
            merged[key] = value
        return merged

    def render(self) -> str:
        """Return the delimited YAML header, including the trailing blank line."""
        header = yaml.safe_dump(
            self.as_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False,
        )
        return f"---\n{header}---\n\n"


def build_document(front_matter: FrontMatter, body: str) -> str:
    """Prepend the serialized front matter to a rendered body."""
    return front_matter.render() + body.lstrip('\n')
