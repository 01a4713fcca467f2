"""
Request template rendering.

Templates carry ``{{NAME}}`` placeholders. Built-in defaults and
caller-supplied overrides go through the same renderer, so an override
supports exactly the placeholder set of the default it replaces.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


def render_template(template: str, values: Mapping[str, object]) -> str:
    """
    Substitute every known placeholder in a single pass.

    Unknown placeholders are left verbatim. Substituted values are never
    re-scanned, so a value that happens to look like another token is
    emitted literally.

    Args:
        template: Template text
        values: Placeholder name -> value (converted with ``str``)

    Returns:
        Rendered text
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def find_placeholders(text: str) -> list[str]:
    """Return placeholder names present in ``text``, in order of first appearance."""
    seen: list[str] = []
    for name in PLACEHOLDER_PATTERN.findall(text):
        if name not in seen:
            seen.append(name)
    return seen


@dataclass(frozen=True)
class TemplateSet:
    """Caller-supplied template overrides keyed by stable step name."""

    overrides: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, key: str, default: str) -> str:
        """Pick the override for ``key`` when present and non-empty, else ``default``."""
        override = self.overrides.get(key)
        return override if override else default

    def render(self, key: str, default: str, values: Mapping[str, object]) -> str:
        """Resolve the template for ``key`` and render it with ``values``."""
        return render_template(self.resolve(key, default), values)
