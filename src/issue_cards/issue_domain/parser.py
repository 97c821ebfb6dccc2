"""Tokenize an issue markdown string into heading regions and task lines.

This module is the one grammar shared by every reader and writer of an
issue document: the section model, the task extractor and the task
mutator all walk the lines it yields, so they always agree on which
lines are headings and which lines are tasks.
"""

from dataclasses import dataclass
import re
from typing import Iterator

from issue_cards.errors import ParseError


TASKS_SECTION = 'Tasks'

_SECTION_HEADING_RE = re.compile(r'^## (.*\S)\s*$')
_TITLE_HEADING_RE = re.compile(r'^# ')
_FENCE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})')
_FENCE_CLOSE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})\s*$')
TASK_LINE_RE = re.compile(r'^- \[([ x])\] (.*)$')


@dataclass(frozen=True)
class HeadingRegion:
    """A ``## name`` heading and the lines it owns, ``end`` exclusive."""
    name: str
    start: int
    end: int


@dataclass(frozen=True)
class TaskLine:
    line_number: int
    completed: bool
    text: str


def as_text(document) -> str:
    if isinstance(document, str):
        return document
    if isinstance(document, (bytes, bytearray)):
        try:
            return bytes(document).decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(f"Failed to parse document: {e}") from e
    raise ParseError(f"Failed to parse document: expected text, got {type(document).__name__}")


def split_lines(document) -> list[str]:
    return as_text(document).split('\n')


def iter_regions(lines: list[str]) -> Iterator[HeadingRegion]:
    """Yield each level-2 section in document order.

    A ``## `` heading opens a section and closes the previous one; a
    ``# `` heading closes the current section without opening another.
    Heading-like lines inside fenced code blocks are plain content.
    """
    current_name = None
    current_start = 0
    for i, kind, name in _iter_headings(lines):
        if current_name is not None:
            yield HeadingRegion(current_name, current_start, i)
            current_name = None
        if kind == 2:
            current_name, current_start = name, i
    if current_name is not None:
        yield HeadingRegion(current_name, current_start, len(lines))


def find_tasks_region(lines: list[str]) -> HeadingRegion | None:
    return next((r for r in iter_regions(lines) if r.name == TASKS_SECTION), None)


def iter_task_lines(lines: list[str]) -> Iterator[TaskLine]:
    """Yield the checkbox lines that are direct items of the Tasks section."""
    region = find_tasks_region(lines)
    if region is None:
        return
    for i in _unfenced_line_numbers(lines, region.start + 1, region.end):
        m = TASK_LINE_RE.match(lines[i])
        if m:
            yield TaskLine(line_number=i, completed=m.group(1) == 'x', text=m.group(2).rstrip())


def _iter_headings(lines: list[str]) -> Iterator[tuple[int, int, str]]:
    for i in _unfenced_line_numbers(lines, 0, len(lines)):
        line = lines[i]
        m = _SECTION_HEADING_RE.match(line)
        if m:
            yield i, 2, m.group(1).strip()
        elif _TITLE_HEADING_RE.match(line):
            yield i, 1, line[2:].strip()


def _unfenced_line_numbers(lines: list[str], start: int, end: int) -> Iterator[int]:
    """Yield line numbers outside fenced code blocks.

    A fence closes only on a bare run of its own character at least as
    long as the opening run.
    """
    fence = None
    for i in range(start, end):
        if fence is None:
            m = _FENCE_RE.match(lines[i])
            if m:
                fence = m.group(1)
                continue
            yield i
        else:
            m = _FENCE_CLOSE_RE.match(lines[i])
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
                fence = None
