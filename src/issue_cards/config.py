"""Locations of the issue tracking directory and its template folders."""

import os

ISSUE_CARDS_DIR_ENV = "ISSUE_CARDS_DIR"
TEMPLATE_KINDS = ("issue", "tag")


def get_issue_directory_path(subdir=None):
    """Return the issues directory, or a subdirectory of it.

    Uses $ISSUE_CARDS_DIR when set, otherwise ``.issues`` in the
    current working directory.
    """
    issues_dir = os.environ.get(ISSUE_CARDS_DIR_ENV) or os.path.join(os.getcwd(), ".issues")
    return os.path.join(issues_dir, subdir) if subdir else issues_dir


def check_template_kind(kind):
    if kind not in TEMPLATE_KINDS:
        raise ValueError(f"Invalid template type: {kind}")


def get_template_dir(kind, issues_dir=None):
    check_template_kind(kind)
    base = issues_dir if issues_dir is not None else get_issue_directory_path()
    return os.path.join(base, "config", "templates", kind)
