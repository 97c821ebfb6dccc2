"""Section model: named ``## `` regions of an issue and edits to them."""

from dataclasses import dataclass
import re

from issue_cards.errors import SectionNotFoundError
from issue_cards.issue_domain.parser import iter_regions, split_lines


PROBLEM = 'Problem to be solved'
APPROACH = 'Planned approach'
FAILED_APPROACHES = 'Failed approaches'
QUESTIONS = 'Questions to resolve'
TASKS = 'Tasks'
INSTRUCTIONS = 'Instructions'
NEXT_STEPS = 'Next steps'

CANONICAL_SECTIONS = (PROBLEM, APPROACH, FAILED_APPROACHES, QUESTIONS, TASKS, INSTRUCTIONS, NEXT_STEPS)
LIST_SECTIONS = (TASKS, QUESTIONS)

_SHORT_ALIASES = {
    'problem': PROBLEM,
    'approach': APPROACH,
    'failed': FAILED_APPROACHES,
    'questions': QUESTIONS,
    'next': NEXT_STEPS,
}

_SECTION_ALIASES = {
    **{re.sub(r'[\s_-]', '', name.lower()): name for name in CANONICAL_SECTIONS},
    **_SHORT_ALIASES,
}

_BULLET_RE = re.compile(r'^\s*[-*] ')
_CHECKBOX_RE = re.compile(r'^\s*- \[[ x]\]')


@dataclass(frozen=True)
class Section:
    name: str
    content: str
    start_line: int
    end_line: int


def get_sections(document) -> list[Section]:
    lines = split_lines(document)
    return [_build_section(lines, region) for region in iter_regions(lines)]


def _build_section(lines, region) -> Section:
    body = [
        i for i in range(region.start + 1, region.end)
        if lines[i].strip()
    ]
    if not body:
        return Section(name=region.name, content='', start_line=region.start, end_line=region.start)
    first, last = body[0], body[-1]
    return Section(
        name=region.name,
        content='\n'.join(lines[first:last + 1]),
        start_line=region.start,
        end_line=last,
    )


def normalize_section_name(section_name: str) -> str:
    """Map case and separator variants of the standard section names to their canonical form.

    ``problem_to_be_solved``, ``plannedApproach``, ``next-steps`` and
    ``QUESTIONS`` all resolve; anything else is returned unchanged.
    """
    key = re.sub(r'[\s_-]', '', section_name.lower())
    return _SECTION_ALIASES.get(key, section_name)


def find_section_by_name(document, section_name: str) -> Section | None:
    """Return the section whose heading is exactly the normalised ``section_name``."""
    wanted = normalize_section_name(section_name)
    return next((s for s in get_sections(document) if s.name == wanted), None)


def get_section_content(document, section_name: str) -> str | None:
    section = find_section_by_name(document, section_name)
    return section.content if section else None


def format_note_for_section(text: str, section_name: str, kind: str | None = None, **extra) -> str:
    if kind == 'question':
        return f"- [ ] {text if text.endswith('?') else text + '?'}"
    if kind == 'failure':
        reason = extra.get('reason') or 'Not specified'
        return f"### Failed attempt\n\n{text}\n\n**Reason:** {reason}"
    if kind == 'task':
        return f"- [ ] {text}"
    return text


def add_content_to_section(document, section_name: str, content: str, kind: str | None = None, **extra) -> str:
    """Return the document with ``content`` appended to the named section.

    List-style sections (and sections already holding list items) receive
    the content as a new list item. Lines outside the insertion point are
    left untouched.

    Raises:
        SectionNotFoundError: If no section resolves to ``section_name``.
    """
    section = find_section_by_name(document, section_name)
    if section is None:
        raise SectionNotFoundError(section_name)

    formatted = format_note_for_section(content, section_name, kind, **extra)
    if kind != 'failure':
        formatted = _as_list_item(formatted, section)

    lines = split_lines(document)
    insert_at = section.end_line + 1
    lines[insert_at:insert_at] = formatted.split('\n')
    return '\n'.join(lines)


def _as_list_item(formatted: str, section: Section) -> str:
    if formatted.startswith('- '):
        return formatted
    existing = section.content.split('\n') if section.content else []
    if section.name in LIST_SECTIONS or any(_CHECKBOX_RE.match(line) for line in existing):
        return f"- [ ] {formatted}"
    if any(_BULLET_RE.match(line) for line in existing):
        return f"- {formatted}"
    return formatted
