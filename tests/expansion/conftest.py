import pytest

from issue_cards.expansion.template_store import DirectoryTemplateStore


def pytest_collection_modifyitems(items):
    for item in items:
        if "expansion" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


TAG_TEMPLATES = {
    "unit-test": """\
# unit-test

## Steps
- Write failing tests for {{component}}
- [ACTUAL TASK GOES HERE]
- Run tests
""",
    "update-docs": """\
# update-docs

## Steps
- [ACTUAL TASK GOES HERE]
- Update docs for {{component}}

## Notes
- Not a step
""",
    "lint": """\
# lint

## Steps
- Run linter
""",
    "no-placeholder": """\
# no-placeholder

## Steps
- Prepare
- Clean up
""",
    "no-steps": """\
# no-steps

Just a description.
""",
}


def write_templates(issues_dir, templates, kind="tag"):
    template_dir = issues_dir / "config" / "templates" / kind
    template_dir.mkdir(parents=True, exist_ok=True)
    for name, text in templates.items():
        (template_dir / f"{name}.md").write_text(text, encoding="utf-8")


@pytest.fixture
def tag_store(tmp_path):
    write_templates(tmp_path, TAG_TEMPLATES)
    return DirectoryTemplateStore(tmp_path)


@pytest.fixture
def template_writer():
    return write_templates
