"""Top-level Click group for the issue-cards CLI."""

import logging

import click

from issue_cards.issue.create_cli import register as register_create_commands
from issue_cards.issue.note_cli import register as register_note_commands
from issue_cards.issue.task_cli import register as register_task_commands
from issue_cards.issue.template_cli import register as register_template_commands


@click.group()
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
def main(verbose):
    """issue-cards - track work as markdown issues with expandable tasks."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


register_task_commands(main)
register_note_commands(main)
register_template_commands(main)
register_create_commands(main)
