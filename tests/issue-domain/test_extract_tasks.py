"""Tests for extracting the ordered task list of an issue."""

import pytest

from issue_cards.errors import ParseError
from issue_cards.issue_domain.tasks import Task, extract_tasks, find_current_task, find_task_by_index


ISSUE = """\
# Issue 0003: Refactor parser

## Problem to be solved
- [ ] Not a task, wrong section

## Tasks
- [ ] Split tokenizer #unit-test(component=Lexer)
- [x] Remove dead code
- Plain bullet, not a task
  - [ ] Nested checkbox, not a direct item
- [X] Uppercase marker, not a task
- [ ] Wire up CLI +lint-and-commit

```
- [ ] Inside a code fence
```

## Next steps
- [ ] Not a task either
"""


class TestExtractTasks:

    def test_minimal_example(self):
        assert extract_tasks("## Tasks\n- [ ] A\n- [x] B\n") == [
            Task(text='A', completed=False, index=0),
            Task(text='B', completed=True, index=1),
        ]

    def test_only_direct_checkbox_items_of_tasks_section(self):
        assert [t.text for t in extract_tasks(ISSUE)] == [
            'Split tokenizer #unit-test(component=Lexer)',
            'Remove dead code',
            'Wire up CLI +lint-and-commit',
        ]

    def test_indices_follow_document_order(self):
        assert [t.index for t in extract_tasks(ISSUE)] == [0, 1, 2]

    def test_completion_flags(self):
        assert [t.completed for t in extract_tasks(ISSUE)] == [False, True, False]

    def test_missing_tasks_section_yields_empty_list(self):
        assert extract_tasks("# Issue\n\n## Problem to be solved\nNothing\n") == []

    def test_tasks_section_without_checkboxes_yields_empty_list(self):
        assert extract_tasks("## Tasks\nNothing planned yet.\n- a bullet\n") == []

    def test_longer_fence_is_not_closed_by_shorter_one(self):
        text = "## Tasks\n````\n```\n- [ ] Inside the example\n```\n````\n- [ ] Real task\n"
        assert [t.text for t in extract_tasks(text)] == ['Real task']

    def test_fence_closes_only_on_bare_run(self):
        text = "## Tasks\n```\n```python\n- [ ] Still fenced\n```\n- [ ] Real task\n"
        assert [t.text for t in extract_tasks(text)] == ['Real task']

    def test_crlf_line_endings(self):
        tasks = extract_tasks("## Tasks\r\n- [ ] A\r\n- [x] B\r\n")
        assert [(t.text, t.completed) for t in tasks] == [('A', False), ('B', True)]

    def test_bytes_are_decoded(self):
        assert extract_tasks("## Tasks\n- [ ] Café\n".encode('utf-8'))[0].text == 'Café'

    def test_undecodable_bytes_raise_parse_error(self):
        with pytest.raises(ParseError):
            extract_tasks(b"## Tasks\n- [ ] \xff\xfe\n")

    def test_non_text_raises_parse_error(self):
        with pytest.raises(ParseError):
            extract_tasks(None)


class TestTaskLookups:

    TASKS = [
        Task(text='A', completed=True, index=0),
        Task(text='B', completed=False, index=1),
        Task(text='C', completed=False, index=2),
    ]

    def test_find_task_by_index(self):
        assert find_task_by_index(self.TASKS, 2).text == 'C'

    def test_find_task_by_missing_index(self):
        assert find_task_by_index(self.TASKS, 7) is None

    def test_find_current_task_is_first_incomplete(self):
        assert find_current_task(self.TASKS).text == 'B'

    def test_find_current_task_is_idempotent(self):
        assert find_current_task(self.TASKS) == find_current_task(self.TASKS)

    def test_find_current_task_when_all_complete(self):
        done = [Task(text='A', completed=True, index=0)]
        assert find_current_task(done) is None

    def test_find_current_task_on_empty_list(self):
        assert find_current_task([]) is None
