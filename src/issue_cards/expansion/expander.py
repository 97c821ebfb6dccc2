"""Expand a tagged task into the ordered steps of its tag templates."""

from dataclasses import dataclass, field
import logging

from issue_cards.errors import TemplateNotFoundError
from issue_cards.issue_domain.tags import (
    Tag, extract_tags_from_task, find_trailing_expand_tag, get_clean_task_text,
)
from issue_cards.issue_domain.tasks import Task
from issue_cards.templates.template_renderer import fill_placeholders

logger = logging.getLogger(__name__)

TASK_PLACEHOLDER = '[ACTUAL TASK GOES HERE]'
STEPS_HEADING = '## Steps'


@dataclass(frozen=True)
class TemplateValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExpandedTask:
    original_task: Task
    expanded_steps: list[str]


def combine_steps(task_text: str, tag_steps: list[str], params: dict[str, str] | None = None) -> list[str]:
    """Render tag steps with ``params`` and splice ``task_text`` into the placeholder slot.

    With no steps the task text stands alone. Steps that fail to render
    are kept verbatim. When the steps carry no placeholder the task text
    becomes the last step.
    """
    if not tag_steps:
        return [task_text]

    steps = [_render_step(step, params) for step in tag_steps]
    if TASK_PLACEHOLDER in steps:
        steps[steps.index(TASK_PLACEHOLDER)] = task_text
    else:
        steps.append(task_text)
    return steps


def _render_step(step, params):
    if step == TASK_PLACEHOLDER or not params:
        return step
    try:
        return fill_placeholders(step, params)
    except KeyError as e:
        logger.debug("Keeping step %r verbatim, no value for %s", step, e)
        return step


def parse_steps(template_text: str) -> list[str]:
    """Return the list items under ``## Steps``, up to the next heading."""
    steps = []
    in_steps = False
    for line in template_text.split('\n'):
        stripped = line.strip()
        if stripped == STEPS_HEADING:
            in_steps = True
        elif in_steps and stripped.startswith('#'):
            break
        elif in_steps and stripped.startswith('- '):
            steps.append(stripped[2:].strip())
    return steps


class TaskExpander:
    """Expands tasks using the tag templates of an injected template store."""

    def __init__(self, store):
        self.store = store

    def extract_tag_steps(self, tag_name: str) -> list[str]:
        try:
            template = self.store.load_template(tag_name, 'tag')
        except TemplateNotFoundError as e:
            logger.debug("Tag %r contributes no steps: %s", tag_name, e)
            return []
        return parse_steps(template)

    def validate_tag_template(self, tag_name: str) -> TemplateValidation:
        try:
            template = self.store.load_template(tag_name, 'tag')
        except TemplateNotFoundError:
            return TemplateValidation(valid=False, errors=['Template not found'])

        errors = []
        if STEPS_HEADING not in template:
            errors.append('Template must have a Steps section')
        if TASK_PLACEHOLDER not in template:
            errors.append(f'Template must have a {TASK_PLACEHOLDER} placeholder in Steps')
        return TemplateValidation(valid=not errors, errors=errors)

    def get_merged_tag_steps(self, tag_names: list) -> list[str]:
        """Merge the steps of several tags in order, keeping one task placeholder.

        The first placeholder wins; if no tag has one it is added at the front.
        """
        contributions = []
        for tag in tag_names:
            name = tag.name if isinstance(tag, Tag) else tag
            if not self.store.template_exists(name, 'tag'):
                logger.debug("Skipping unknown tag %r", name)
                continue
            steps = self.extract_tag_steps(name)
            if steps:
                contributions.append(steps)

        if not contributions:
            return []
        if len(contributions) == 1:
            return contributions[0]

        merged = []
        for steps in contributions:
            for step in steps:
                if step == TASK_PLACEHOLDER and TASK_PLACEHOLDER in merged:
                    continue
                merged.append(step)
        if TASK_PLACEHOLDER not in merged:
            merged.insert(0, TASK_PLACEHOLDER)
        return merged

    def expand_task(self, task: Task) -> list[str]:
        tags = extract_tags_from_task(task)
        clean_text = get_clean_task_text(task)

        if not tags:
            return [clean_text]

        if len(tags) == 1:
            tag = tags[0]
            if not self.store.template_exists(tag.name, 'tag'):
                return [clean_text]
            return combine_steps(clean_text, self.extract_tag_steps(tag.name), tag.params)

        merged_params = {}
        for tag in tags:
            merged_params.update(tag.params)
        return combine_steps(clean_text, self.get_merged_tag_steps([t.name for t in tags]), merged_params)

    def create_expanded_task_list(self, tasks: list[Task]) -> list[ExpandedTask]:
        return [
            ExpandedTask(original_task=task, expanded_steps=self.expand_task(task))
            for task in tasks
        ]

    def expand_task_for_insertion(self, text: str) -> list[str]:
        """Expand a new task whose text ends in a ``+tag`` into the task lines to insert.

        A ``+tag`` anywhere but at the end leaves the text as a single task.
        """
        tag = find_trailing_expand_tag(text)
        if tag is None:
            return [text]
        clean_text = get_clean_task_text(Task(text=text, completed=False, index=-1))
        if not self.store.template_exists(tag.name, 'tag'):
            return [text]
        return combine_steps(clean_text, self.extract_tag_steps(tag.name), tag.params)

    def validate_tags(self, tags: list[Tag]) -> list[str]:
        errors = []
        available = self.store.list_templates('tag')
        for tag in tags:
            if tag.name not in available:
                errors.append(f"Tag '{tag.name}' does not exist")
                continue
            validation = self.validate_tag_template(tag.name)
            if not validation.valid:
                errors.append(f"Tag '{tag.name}' has invalid template: {', '.join(validation.errors)}")
        return errors
