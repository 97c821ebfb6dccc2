import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "issue-cli" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def issues_dir(tmp_path, monkeypatch):
    directory = tmp_path / ".issues"
    directory.mkdir()
    monkeypatch.setenv("ISSUE_CARDS_DIR", str(directory))
    return directory

