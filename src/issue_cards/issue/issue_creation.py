"""Create new issue files from issue templates."""

import os
import re

import jinja2

from issue_cards.config import get_issue_directory_path
from issue_cards.errors import UserError
from issue_cards.issue.issue_file_io import atomic_write
from issue_cards.templates.template_renderer import render_text

ISSUE_STATES = ("open", "closed")

_ISSUE_FILE_RE = re.compile(r'^issue-(\d+)\.md$')


def format_as_list(text) -> str:
    if not text:
        return ''
    return '\n'.join(f"- {line.strip()}" for line in text.split('\n') if line.strip())


def format_as_tasks(tasks) -> str:
    lines = []
    for task in tasks or ():
        task = task.strip()
        if task:
            lines.append(task if task.startswith('- [ ]') else f"- [ ] {task}")
    return '\n'.join(lines)


def next_issue_number(issues_dir=None) -> str:
    """Return the next four-digit issue number across open and closed issues."""
    base = issues_dir if issues_dir is not None else get_issue_directory_path()
    highest = 0
    for state in ISSUE_STATES:
        state_dir = os.path.join(base, state)
        if not os.path.isdir(state_dir):
            continue
        for name in os.listdir(state_dir):
            m = _ISSUE_FILE_RE.match(name)
            if m:
                highest = max(highest, int(m.group(1)))
    return str(highest + 1).zfill(4)


def render_issue(template_text: str, template_name: str, number: str, title: str, problem='', approach='',
                 failed_approaches='', questions='', tasks=(), instructions='', next_steps='') -> str:
    """Render an issue template with the fields of a new issue.

    Raises:
        UserError: If the template uses a placeholder with no value or is not valid Jinja2.
    """
    try:
        return render_text(
            template_text,
            number=number,
            title=title,
            problem=problem or '',
            approach=approach or '',
            failed_approaches=format_as_list(failed_approaches),
            questions=format_as_list(questions),
            tasks=format_as_tasks(tasks),
            instructions=instructions or '',
            next_steps=format_as_list(next_steps),
        )
    except jinja2.TemplateError as e:
        raise UserError(f"Cannot render issue template {template_name}: {e}") from e


def save_issue(number: str, content: str, issues_dir=None) -> str:
    base = issues_dir if issues_dir is not None else get_issue_directory_path()
    open_dir = os.path.join(base, "open")
    os.makedirs(open_dir, exist_ok=True)
    path = os.path.join(open_dir, f"issue-{number}.md")
    atomic_write(path, content)
    return path
