"""Click handlers for task commands."""

import click

from issue_cards.errors import IndexOutOfBoundsError
from issue_cards.expansion.expander import TaskExpander
from issue_cards.expansion.template_store import default_template_store
from issue_cards.issue.issue_file_io import read_issue, with_error_handling, with_issue_file_update
from issue_cards.issue_domain.context import get_context_for_task
from issue_cards.issue_domain.sections import (
    APPROACH, FAILED_APPROACHES, INSTRUCTIONS, PROBLEM, QUESTIONS,
)
from issue_cards.issue_domain.tags import extract_expand_tags_from_task, extract_tags_from_task
from issue_cards.issue_domain.tasks import (
    AFTER_CURRENT, BEFORE_CURRENT, END, Task, extract_tasks, find_current_task, find_task_by_index,
    insert_task, update_task_status,
)


def print_task_with_context(document, task, expander, header="CURRENT"):
    click.echo(f"{header} TASK: {task.text}")
    steps = expander.expand_task(task)
    click.echo()
    click.echo("TASKS:")
    for i, step in enumerate(steps, 1):
        click.echo(f"{i}. {step}")

    context = get_context_for_task(document, task.index)
    click.echo()
    click.echo("CONTEXT:")
    for title, body in [
        (PROBLEM, context.problem),
        (APPROACH, context.approach),
        (INSTRUCTIONS, context.instructions),
    ]:
        if body:
            click.echo(f"{title}:\n{body}\n")
    if context.failed_approaches:
        click.echo(f"{FAILED_APPROACHES}:")
        for failed in context.failed_approaches:
            click.echo(f"- {failed.approach} (Reason: {failed.reason})")
        click.echo()
    open_questions = [q for q in context.questions if not q.completed]
    if open_questions:
        click.echo(f"{QUESTIONS}:")
        for question in open_questions:
            click.echo(f"- {question.text}")
        click.echo()


@click.command("tasks")
@click.argument("issue_file")
def tasks_cmd(issue_file):
    """List the tasks of an issue."""
    with with_error_handling():
        tasks = extract_tasks(read_issue(issue_file))
    if not tasks:
        click.echo("No tasks found.")
    for task in tasks:
        status = 'x' if task.completed else ' '
        click.echo(f"[{status}] {task.index + 1}. {task.text}")


@click.command("current")
@click.argument("issue_file")
def current_cmd(issue_file):
    """Show the current task, its expanded steps and the issue context."""
    with with_error_handling():
        document = read_issue(issue_file)
        task = find_current_task(extract_tasks(document))
        if task is None:
            click.echo("All tasks are complete.")
            return
        print_task_with_context(document, task, TaskExpander(default_template_store()))


@click.command("complete-task")
@click.argument("issue_file")
@click.option("--index", type=int, default=None, help="1-based task number (defaults to the current task)")
def complete_task_cmd(issue_file, index):
    """Mark the current task (or task INDEX) as complete and show the next task."""
    with with_error_handling():
        with with_issue_file_update(issue_file) as issue:
            task = _select_task(issue.text, index)
            if task is None:
                raise click.ClickException("No tasks found or all tasks are already completed.")
            issue.text = update_task_status(issue.text, task.index, True)
    click.echo(f"Completed: {task.text}")

    next_task = find_current_task(extract_tasks(issue.text))
    if next_task is None:
        click.echo("All tasks complete!")
    else:
        click.echo()
        print_task_with_context(issue.text, next_task, TaskExpander(default_template_store()), header="NEXT")


@click.command("uncomplete-task")
@click.argument("issue_file")
@click.option("--index", required=True, type=int, help="1-based task number")
def uncomplete_task_cmd(issue_file, index):
    """Mark a completed task as incomplete."""
    with with_error_handling():
        with with_issue_file_update(issue_file) as issue:
            issue.text = update_task_status(issue.text, index - 1, False)
    click.echo(f"Marked task {index} as incomplete")


def _select_task(document, index):
    tasks = extract_tasks(document)
    if index is None:
        return find_current_task(tasks)
    task = find_task_by_index(tasks, index - 1)
    if task is None:
        raise IndexOutOfBoundsError(index - 1, len(tasks))
    return task


@click.command("add-task")
@click.argument("issue_file")
@click.argument("task_text")
@click.option("--before", "position", flag_value=BEFORE_CURRENT, help="Add before the current task")
@click.option("--after", "position", flag_value=AFTER_CURRENT, help="Add after the current task")
def add_task_cmd(issue_file, task_text, position):
    """Add a task; a trailing +tag expands it into the tag's steps."""
    expander = TaskExpander(default_template_store())
    probe = Task(text=task_text, completed=False, index=-1)
    with with_error_handling():
        errors = expander.validate_tags(extract_tags_from_task(probe) + extract_expand_tags_from_task(probe))
        if errors:
            raise click.ClickException(f"Invalid tags in task: {', '.join(errors)}")
        new_tasks = expander.expand_task_for_insertion(task_text)
        with with_issue_file_update(issue_file) as issue:
            issue.text = insert_task(issue.text, new_tasks, position or END)
    click.echo(f"Added {len(new_tasks)} task(s) at position: {position or END}")


def register(group):
    """Register task commands with the given Click group."""
    group.add_command(tasks_cmd)
    group.add_command(current_cmd)
    group.add_command(complete_task_cmd)
    group.add_command(uncomplete_task_cmd)
    group.add_command(add_task_cmd)
