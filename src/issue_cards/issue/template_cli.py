"""Click handler for listing, showing and validating templates."""

import sys

import click

from issue_cards.config import TEMPLATE_KINDS
from issue_cards.expansion.expander import TaskExpander
from issue_cards.expansion.template_store import default_template_store
from issue_cards.issue.issue_file_io import with_error_handling


@click.command("templates")
@click.argument("name", required=False)
@click.option("--kind", type=click.Choice(TEMPLATE_KINDS), default="tag", show_default=True, help="Template type")
@click.option("--validate", is_flag=True, help="Validate the named tag template")
def templates_cmd(name, kind, validate):
    """List templates, or show a single template by NAME."""
    store = default_template_store()
    if name is None:
        for template_name in store.list_templates(kind):
            click.echo(template_name)
        return

    if validate:
        result = TaskExpander(store).validate_tag_template(name)
        if result.valid:
            click.echo(f"Tag template '{name}' is valid")
            return
        for error in result.errors:
            click.echo(error, err=True)
        sys.exit(2)

    with with_error_handling():
        click.echo(store.load_template(name, kind))


def register(group):
    group.add_command(templates_cmd)
