"""Inline task directives: ``#tag(k=v)`` labels and trailing ``+tag`` expansion triggers.

The two prefixes have different consumers. ``#`` tags are read when a
task is displayed or completed and name the template its steps expand
from; they stay in the task text. ``+`` tags are read only when a task
is inserted, trigger expansion only as the final token, and are stripped
from the text that gets written.
"""

from dataclasses import dataclass, field
import re


_IDENTIFIER = r'[a-zA-Z0-9-]+(?:\([^)]+\))?'
_HASH_TAG_RE = re.compile(r'#(' + _IDENTIFIER + r')')
_EXPAND_TAG_RE = re.compile(r'\+(' + _IDENTIFIER + r')')
_PARAMETERIZED_RE = re.compile(r'^([a-zA-Z0-9-]+)\((.+)\)$')


@dataclass(frozen=True)
class Tag:
    name: str
    params: dict[str, str] = field(default_factory=dict)


def parse_tag(raw: str) -> Tag:
    """Parse ``name`` or ``name(key=value,...)`` into a Tag.

    Each pair keeps the text between its first and second ``=``, so
    ``k=v=w`` gives ``{"k": "v"}``. Malformed pairs (no ``=``, empty key
    or value) are dropped.
    """
    m = _PARAMETERIZED_RE.match(raw)
    if not m:
        return Tag(name=raw)
    params = {}
    for pair in m.group(2).split(','):
        parts = [part.strip() for part in pair.split('=')]
        if len(parts) < 2:
            continue
        key, value = parts[0], parts[1]
        if key and value:
            params[key] = value
    return Tag(name=m.group(1), params=params)


def extract_tags_from_task(task) -> list[Tag]:
    return [parse_tag(m.group(1)) for m in _HASH_TAG_RE.finditer(task.text)]


def extract_expand_tags_from_task(task) -> list[Tag]:
    return [parse_tag(m.group(1)) for m in _EXPAND_TAG_RE.finditer(task.text)]


def extract_tag_names_from_task(task) -> list[str]:
    return [tag.name for tag in extract_tags_from_task(task)]


def has_tag(task, tag_name: str) -> bool:
    return tag_name in extract_tag_names_from_task(task)


def get_tag_parameters(task, tag_name: str) -> dict[str, str] | None:
    tag = next((t for t in extract_tags_from_task(task) if t.name == tag_name), None)
    return tag.params if tag else None


def is_tag_at_end(text: str, tag_literal: str) -> bool:
    without = text.replace(tag_literal, '', 1).strip()
    return len(without) < len(text) and text.strip().endswith(tag_literal)


def find_trailing_expand_tag(text: str) -> Tag | None:
    """Return the ``+tag`` that ends ``text``, if any."""
    matches = list(_EXPAND_TAG_RE.finditer(text))
    if not matches:
        return None
    literal = matches[-1].group(0)
    if not is_tag_at_end(text, literal):
        return None
    return parse_tag(matches[-1].group(1))


def get_clean_task_text(task) -> str:
    return _EXPAND_TAG_RE.sub('', task.text).strip()
