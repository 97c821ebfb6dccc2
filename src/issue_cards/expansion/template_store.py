"""Template stores: where issue and tag templates are loaded from.

A store answers ``load_template(name, kind)``, ``template_exists(name, kind)``
and ``list_templates(kind)``. The expander receives a store explicitly;
nothing here is cached between calls.
"""

import logging
import os
from typing import Protocol

from issue_cards.config import check_template_kind, get_issue_directory_path, get_template_dir
from issue_cards.errors import TemplateNotFoundError
from issue_cards.templates.template_renderer import packaged_templates, read_packaged_template

logger = logging.getLogger(__name__)

_SUFFIX = ".md"


class TemplateStore(Protocol):
    def load_template(self, name: str, kind: str) -> str: ...

    def template_exists(self, name: str, kind: str) -> bool: ...

    def list_templates(self, kind: str) -> list[str]: ...


class DirectoryTemplateStore:
    """Templates under ``<issues_dir>/config/templates/<kind>/<name>.md``."""

    def __init__(self, issues_dir):
        self.issues_dir = str(issues_dir)

    def template_path(self, name: str, kind: str) -> str:
        return os.path.join(get_template_dir(kind, self.issues_dir), f"{name}{_SUFFIX}")

    def load_template(self, name: str, kind: str) -> str:
        path = self.template_path(name, kind)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            logger.debug("Could not read template %s: %s", path, e)
            raise TemplateNotFoundError(name, kind) from e

    def template_exists(self, name: str, kind: str) -> bool:
        return os.path.isfile(self.template_path(name, kind))

    def list_templates(self, kind: str) -> list[str]:
        template_dir = get_template_dir(kind, self.issues_dir)
        if not os.path.isdir(template_dir):
            return []
        return sorted(
            f[:-len(_SUFFIX)] for f in os.listdir(template_dir)
            if f.endswith(_SUFFIX)
        )


class PackagedTemplateStore:
    """The default templates shipped inside the package."""

    def load_template(self, name: str, kind: str) -> str:
        try:
            return read_packaged_template(name, kind)
        except FileNotFoundError as e:
            raise TemplateNotFoundError(name, kind) from e

    def template_exists(self, name: str, kind: str) -> bool:
        return packaged_templates(kind).joinpath(f"{name}{_SUFFIX}").is_file()

    def list_templates(self, kind: str) -> list[str]:
        return sorted(
            entry.name[:-len(_SUFFIX)] for entry in packaged_templates(kind).iterdir()
            if entry.name.endswith(_SUFFIX)
        )


class ChainedTemplateStore:
    """Look templates up in each store in turn; the first store that has one wins."""

    def __init__(self, *stores):
        self.stores = stores

    def _find(self, name, kind):
        check_template_kind(kind)
        return next((s for s in self.stores if s.template_exists(name, kind)), None)

    def load_template(self, name: str, kind: str) -> str:
        store = self._find(name, kind)
        if store is None:
            raise TemplateNotFoundError(name, kind)
        return store.load_template(name, kind)

    def template_exists(self, name: str, kind: str) -> bool:
        return self._find(name, kind) is not None

    def list_templates(self, kind: str) -> list[str]:
        names = set()
        for store in self.stores:
            names.update(store.list_templates(kind))
        return sorted(names)


def default_template_store(issues_dir=None) -> ChainedTemplateStore:
    """Project templates first, then the bundled defaults."""
    directory = issues_dir if issues_dir is not None else get_issue_directory_path()
    return ChainedTemplateStore(DirectoryTemplateStore(directory), PackagedTemplateStore())
