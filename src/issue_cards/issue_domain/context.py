"""Read-only views of an issue combining its sections and tasks."""

from dataclasses import dataclass, field

from issue_cards.issue_domain.sections import (
    APPROACH, FAILED_APPROACHES, INSTRUCTIONS, NEXT_STEPS, PROBLEM, QUESTIONS, get_sections,
)
from issue_cards.issue_domain.tasks import Task, extract_tasks


_FAILED_ATTEMPT_HEADING = '### Failed attempt'
_REASON_MARKER = '**Reason:**'
TASKS_KEY = 'tasks'


@dataclass(frozen=True)
class FailedApproach:
    approach: str
    reason: str


@dataclass(frozen=True)
class Question:
    text: str
    completed: bool


@dataclass
class TaskContext:
    task: Task
    previous_task: str | None
    next_task: str | None
    problem: str = ''
    approach: str = ''
    instructions: str = ''
    next_steps: str = ''
    failed_approaches: list[FailedApproach] = field(default_factory=list)
    questions: list[Question] = field(default_factory=list)


def extract_context(document) -> dict:
    """Return ``{"tasks": [...], <section name>: <raw content>, ...}``.

    Sections appear in document order; a later section with the same
    name overwrites an earlier one. A section headed ``## tasks`` never
    replaces the task list.
    """
    context = {TASKS_KEY: extract_tasks(document)}
    for section in get_sections(document):
        if section.name != TASKS_KEY:
            context[section.name] = section.content
    return context


def parse_failed_approaches(content: str) -> list[FailedApproach]:
    approaches = []
    for block in content.split(_FAILED_ATTEMPT_HEADING)[1:]:
        block = block.strip()
        if not block:
            continue
        approach, _, reason = block.partition(_REASON_MARKER)
        approaches.append(FailedApproach(approach=approach.strip(), reason=reason.strip() or 'Not specified'))
    return approaches


def parse_questions(content: str) -> list[Question]:
    questions = []
    for line in content.split('\n'):
        stripped = line.strip()
        if stripped.startswith('- [ ]') or stripped.startswith('- [x]'):
            questions.append(Question(text=stripped[5:].strip(), completed=stripped.startswith('- [x]')))
    return questions


def get_context_for_task(document, task_index: int) -> TaskContext | None:
    context = extract_context(document)
    tasks = context[TASKS_KEY]
    if task_index < 0 or task_index >= len(tasks):
        return None
    return TaskContext(
        task=tasks[task_index],
        previous_task=tasks[task_index - 1].text if task_index > 0 else None,
        next_task=tasks[task_index + 1].text if task_index + 1 < len(tasks) else None,
        problem=context.get(PROBLEM, ''),
        approach=context.get(APPROACH, ''),
        instructions=context.get(INSTRUCTIONS, ''),
        next_steps=context.get(NEXT_STEPS, ''),
        failed_approaches=parse_failed_approaches(context.get(FAILED_APPROACHES, '')),
        questions=parse_questions(context.get(QUESTIONS, '')),
    )
