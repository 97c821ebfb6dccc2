"""Click handlers for adding notes to issue sections and showing issue context."""

from dataclasses import asdict
import json

import click

from issue_cards.issue.issue_file_io import read_issue, with_error_handling, with_issue_file_update
from issue_cards.issue_domain.context import extract_context
from issue_cards.issue_domain.sections import FAILED_APPROACHES, QUESTIONS, add_content_to_section


@click.command("add-note")
@click.argument("issue_file")
@click.argument("note")
@click.option("--section", required=True, help="Section name (e.g. problem, approach, next-steps)")
def add_note_cmd(issue_file, note, section):
    """Append a note to a section of an issue."""
    with with_error_handling():
        with with_issue_file_update(issue_file) as issue:
            issue.text = add_content_to_section(issue.text, section, note)
    click.echo(f"Added note to section: {section}")


@click.command("add-question")
@click.argument("issue_file")
@click.argument("question")
def add_question_cmd(issue_file, question):
    """Add a question to the Questions to resolve section."""
    with with_error_handling():
        with with_issue_file_update(issue_file) as issue:
            issue.text = add_content_to_section(issue.text, QUESTIONS, question, 'question')
    click.echo("Added question")


@click.command("log-failure")
@click.argument("issue_file")
@click.argument("approach")
@click.option("--reason", default=None, help="Why the approach failed")
def log_failure_cmd(issue_file, approach, reason):
    """Record a failed approach."""
    with with_error_handling():
        with with_issue_file_update(issue_file) as issue:
            issue.text = add_content_to_section(issue.text, FAILED_APPROACHES, approach, 'failure', reason=reason)
    click.echo("Logged failed approach")


@click.command("context")
@click.argument("issue_file")
def context_cmd(issue_file):
    """Print the sections and tasks of an issue as JSON."""
    with with_error_handling():
        context = extract_context(read_issue(issue_file))
    context['tasks'] = [asdict(task) for task in context['tasks']]
    click.echo(json.dumps(context, indent=2))


def register(group):
    """Register note and context commands with the given Click group."""
    group.add_command(add_note_cmd)
    group.add_command(add_question_cmd)
    group.add_command(log_failure_cmd)
    group.add_command(context_cmd)
