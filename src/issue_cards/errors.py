"""Error taxonomy for issue documents, tasks and templates.

Every error carries the exit code the CLI should terminate with:
2 for problems the user can fix, 3 for environment problems and
4 for internal inconsistencies.
"""


class IssueCardsError(ValueError):
    exit_code = 1


class UserError(IssueCardsError):
    exit_code = 2


class IssueSystemError(IssueCardsError):
    exit_code = 3


class InternalError(IssueCardsError):
    exit_code = 4


class ParseError(UserError):
    """The document could not be read as text."""


class SectionNotFoundError(UserError):
    def __init__(self, section_name: str):
        super().__init__(f'Section "{section_name}" not found in issue')
        self.section_name = section_name


class IndexOutOfBoundsError(UserError):
    def __init__(self, index: int, task_count: int):
        super().__init__(f"task index {index} is out of bounds ({task_count} tasks)")
        self.index = index
        self.task_count = task_count


class TaskLineNotFoundError(InternalError):
    def __init__(self, index: int):
        super().__init__(f"task {index} not found in document lines")
        self.index = index


class TemplateNotFoundError(UserError):
    def __init__(self, name: str, kind: str):
        super().__init__(f"Template not found: {name}.md ({kind})")
        self.name = name
        self.kind = kind
