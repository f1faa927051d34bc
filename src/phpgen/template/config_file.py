"""Generation and editing of PHP config files that `return` an array."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from phpgen.errors import ConfigFileError, DuplicateSectionError
from phpgen.fs import read_file
from phpgen.render.fragments import render_declare, render_open_tag
from phpgen.render.literals import INDENT, render_array, render_string
from phpgen.template.unit import TemplateUnit

logger = logging.getLogger(__name__)

CLOSING_MARKER = "];"

# Top-level entries are written one indent level deep: `    "name" => ...`
_SECTION_RE = re.compile(r"""^ {4}(["'])((?:\\.|(?!\1).)*)\1\s*=>""", re.MULTILINE)


def empty_config_text() -> str:
    return render_open_tag() + render_declare() + "return [\n" + CLOSING_MARKER + "\n"


def find_sections(text: str) -> list[str]:
    """Return the top-level keys of a generated config file, in file order.

    Only keys at the first indentation level are considered, so nested keys
    never count as sections.
    """
    names = []
    for match in _SECTION_RE.finditer(text):
        quote, raw = match.group(1), match.group(2)
        if quote == '"':
            raw = re.sub(r"\\([\\\"$])", r"\1", raw)
        else:
            raw = re.sub(r"\\([\\'])", r"\1", raw)
        names.append(raw)
    return names


def render_section(name: str, config: Mapping[str, Any]) -> str:
    """Render one `"name" => [...],` entry at the first indentation level."""
    return f"{INDENT}{render_string(name)} => {render_array(config, indent=1)},\n"


class ConfigFileEditor:
    """Creates config files and appends sections to existing ones.

    Editing is textual: a new section is inserted before the last `];` in
    the file. Sections are tracked either from the list given at
    construction or, by default, from the keys already present in the file.
    """

    def __init__(self, path: str | Path, sections: Iterable[str] | None = None) -> None:
        self.path = Path(path)
        self._sections = None if sections is None else list(sections)

    def generate(self) -> TemplateUnit:
        """Return a generated TemplateUnit for an empty config file."""
        return TemplateUnit().with_content_file(empty_config_text())

    def sections(self) -> list[str]:
        if self._sections is not None:
            return list(self._sections)
        if not self.path.exists():
            return []
        return find_sections(read_file(self.path))

    def create_section(self, section: str, config: Mapping[str, Any]) -> TemplateUnit:
        """Return a TemplateUnit holding the file text with a new section added.

        Nothing is written; call `save()` on the result.

        Raises:
            DuplicateSectionError: If the section is already tracked.
            ConfigFileError: If the file has no closing `];` marker.
            ReadFailure: If the file cannot be read.
        """
        if section in self.sections():
            raise DuplicateSectionError(section)

        text = read_file(self.path)
        position = text.rfind(CLOSING_MARKER)
        if position == -1:
            raise ConfigFileError(f"No closing '{CLOSING_MARKER}' found in {self.path}")

        logger.debug("Adding section %r to %s", section, self.path)
        new_text = text[:position] + render_section(section, config) + text[position:]
        return TemplateUnit().with_content_file(new_text)
