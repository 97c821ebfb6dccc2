"""Click handler for creating issues from templates."""

import click

from issue_cards.expansion.template_store import default_template_store
from issue_cards.issue.issue_creation import next_issue_number, render_issue, save_issue
from issue_cards.issue.issue_file_io import with_error_handling


@click.command("create")
@click.argument("template_name")
@click.option("--title", required=True, help="Issue title")
@click.option("--problem", default="", help="Problem to be solved")
@click.option("--approach", default="", help="Planned approach")
@click.option("--failed-approaches", default="", help="Failed approaches, one per line")
@click.option("--questions", default="", help="Questions to resolve, one per line")
@click.option("--task", "tasks", multiple=True, help="Task to add (repeatable)")
@click.option("--instructions", default="", help="Instructions")
@click.option("--next-steps", default="", help="Next steps, one per line")
def create_cmd(template_name, title, problem, approach, failed_approaches, questions, tasks, instructions,
               next_steps):
    """Create a new open issue from issue template TEMPLATE_NAME."""
    with with_error_handling():
        template = default_template_store().load_template(template_name, "issue")
        number = next_issue_number()
        content = render_issue(
            template, template_name, number, title,
            problem=problem, approach=approach, failed_approaches=failed_approaches,
            questions=questions, tasks=tasks, instructions=instructions, next_steps=next_steps,
        )
        path = save_issue(number, content)
    click.echo(f"Created Issue #{number}: {title}")
    click.echo(f"Issue saved to {path}")


def register(group):
    group.add_command(create_cmd)
