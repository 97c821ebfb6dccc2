"""Load bundled templates and fill their placeholders.

Issue templates are rendered with Jinja2. Tag template steps only
support plain ``{{key}}`` substitution, since tag parameter names may
contain hyphens and steps are free text.
"""

import importlib.resources
import re

import jinja2

from issue_cards.config import check_template_kind


_ENVIRONMENT = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)

_PLACEHOLDER_RE = re.compile(r'{{\s*([^}\s]+)\s*}}')


def packaged_templates(kind: str):
    """Return the traversable directory of bundled templates of ``kind``."""
    check_template_kind(kind)
    return importlib.resources.files(__package__).joinpath(kind)


def read_packaged_template(name: str, kind: str) -> str:
    """Read a bundled template by name.

    Raises:
        FileNotFoundError: If no template ``<name>.md`` is bundled for ``kind``.
    """
    source = packaged_templates(kind).joinpath(f"{name}.md")
    if not source.is_file():
        raise FileNotFoundError(f"Template not found: {name}.md ({kind})")
    return source.read_text(encoding="utf-8")


def render_text(text: str, **kwargs) -> str:
    """Render ``text`` as a Jinja2 template.

    Placeholders without a value raise ``jinja2.UndefinedError`` rather
    than rendering as empty text.
    """
    return _ENVIRONMENT.from_string(text).render(**kwargs)


def fill_placeholders(text: str, values: dict) -> str:
    """Replace every ``{{key}}`` in ``text`` with ``values[key]``; nothing else is interpreted.

    Raises:
        KeyError: If a placeholder has no value.
    """
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], text)
