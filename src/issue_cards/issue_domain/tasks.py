"""Task extraction and in-place task edits for an issue document."""

from dataclasses import dataclass

from issue_cards.errors import IndexOutOfBoundsError, SectionNotFoundError, TaskLineNotFoundError
from issue_cards.issue_domain.parser import find_tasks_region, iter_task_lines, split_lines


BEFORE_CURRENT = 'before-current'
AFTER_CURRENT = 'after-current'
END = 'end'
POSITIONS = (BEFORE_CURRENT, AFTER_CURRENT, END)


@dataclass(frozen=True)
class Task:
    text: str
    completed: bool
    index: int


def extract_tasks(document) -> list[Task]:
    return [
        Task(text=line.text, completed=line.completed, index=index)
        for index, line in enumerate(iter_task_lines(split_lines(document)))
    ]


def find_task_by_index(tasks: list[Task], index: int) -> Task | None:
    return next((t for t in tasks if t.index == index), None)


def find_current_task(tasks: list[Task]) -> Task | None:
    return next((t for t in tasks if not t.completed), None)


def update_task_status(document, index: int, completed: bool) -> str:
    """Return the document with task ``index`` marked complete or incomplete.

    Only the marker of the target line changes.

    Raises:
        IndexOutOfBoundsError: If ``index`` is not a valid task index.
        TaskLineNotFoundError: If the line walk never reaches ``index``.
    """
    tasks = extract_tasks(document)
    if index < 0 or index >= len(tasks):
        raise IndexOutOfBoundsError(index, len(tasks))

    lines = split_lines(document)
    for count, task_line in enumerate(iter_task_lines(lines)):
        if count == index:
            i = task_line.line_number
            old, new = ('- [ ]', '- [x]') if completed else ('- [x]', '- [ ]')
            lines[i] = lines[i].replace(old, new, 1)
            return '\n'.join(lines)

    raise TaskLineNotFoundError(index)


def insert_task(document, task_text, position: str = END) -> str:
    """Insert one or more new unchecked task lines into the Tasks section.

    ``task_text`` may be a single string or a list of strings, which are
    written as consecutive tasks. ``before-current``/``after-current``
    place them around the first incomplete task; when every task is
    complete, or for ``end``, they follow the last task.
    """
    if position not in POSITIONS:
        raise ValueError(f"unknown task position: {position}")
    texts = [task_text] if isinstance(task_text, str) else list(task_text)

    lines = split_lines(document)
    region = find_tasks_region(lines)
    if region is None:
        raise SectionNotFoundError('Tasks')

    insert_at = _insertion_line(lines, region, position)
    lines[insert_at:insert_at] = [f'- [ ] {text}' for text in texts]
    return '\n'.join(lines)


def _insertion_line(lines: list[str], region, position: str) -> int:
    task_lines = list(iter_task_lines(lines))
    current = next((t for t in task_lines if not t.completed), None)
    if current is not None and position == BEFORE_CURRENT:
        return current.line_number
    if current is not None and position == AFTER_CURRENT:
        return current.line_number + 1
    if task_lines:
        return task_lines[-1].line_number + 1
    return region.start + 1
