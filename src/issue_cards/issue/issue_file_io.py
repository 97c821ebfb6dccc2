"""Issue file I/O: atomic writes and context managers for reading/updating issues."""

import os
import sys
import tempfile
from contextlib import contextmanager

import click

from issue_cards.errors import IssueCardsError, IssueSystemError, ParseError


class IssueDocument:
    """Holds the text of an issue while a command rewrites it."""

    def __init__(self, text: str):
        self.original_text = text
        self.text = text


def atomic_write(file_path: str, content: str) -> None:
    """Write content to file atomically using temp file + rename."""
    dir_name = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        os.replace(tmp_path, file_path)
    except Exception:
        os.unlink(tmp_path)
        raise


def read_issue(issue_file) -> str:
    try:
        with open(issue_file, "r", encoding="utf-8", newline='') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"Issue file is not valid UTF-8: {issue_file}") from e
    except OSError as e:
        raise IssueSystemError(f"Cannot read issue file {issue_file}: {e.strerror}") from e


@contextmanager
def with_error_handling():
    try:
        yield
    except IssueCardsError as e:
        click.echo(str(e), err=True)
        sys.exit(e.exit_code)
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


@contextmanager
def with_issue_file_update(issue_file):
    """Yield an IssueDocument; write it back only if its text changed."""
    document = IssueDocument(read_issue(issue_file))
    yield document
    if document.text != document.original_text:
        atomic_write(issue_file, document.text)
