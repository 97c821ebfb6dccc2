"""Tests for appending notes to issue sections."""

import pytest

from issue_cards.errors import SectionNotFoundError
from issue_cards.issue_domain.sections import add_content_to_section, format_note_for_section


ISSUE = """\
# Issue 0002: Fix export

## Problem to be solved
Export drops rows.

## Questions to resolve

## Tasks
- [ ] Reproduce bug
- [x] Write failing test

## Next steps
- Talk to ops
"""


class TestAddContentToSection:

    def test_appends_checkbox_to_tasks_section(self):
        result = add_content_to_section(ISSUE, 'Tasks', 'New task')
        assert result == ISSUE.replace(
            "- [x] Write failing test\n",
            "- [x] Write failing test\n- [ ] New task\n",
        )

    def test_appends_paragraph_to_prose_section(self):
        result = add_content_to_section(ISSUE, 'problem', 'Only with unicode names.')
        assert result == ISSUE.replace(
            "Export drops rows.\n",
            "Export drops rows.\nOnly with unicode names.\n",
        )

    def test_fills_empty_section_directly_after_heading(self):
        result = add_content_to_section(ISSUE, 'questions', 'Which encoding?')
        assert result == ISSUE.replace(
            "## Questions to resolve\n",
            "## Questions to resolve\n- [ ] Which encoding?\n",
        )

    def test_section_with_plain_bullets_gets_a_bullet(self):
        result = add_content_to_section(ISSUE, 'next_steps', 'Deploy')
        assert result.endswith("- Talk to ops\n- Deploy\n")

    def test_existing_list_item_is_not_wrapped_again(self):
        result = add_content_to_section(ISSUE, 'Tasks', '- [ ] Already formatted')
        assert '- [ ] - [ ]' not in result
        assert '- [ ] Already formatted' in result

    def test_question_format(self):
        result = add_content_to_section(ISSUE, 'questions', 'Is it UTF-8', 'question')
        assert '- [ ] Is it UTF-8?' in result

    def test_other_lines_are_unchanged(self):
        result = add_content_to_section(ISSUE, 'Tasks', 'New task')
        assert result.split('\n')[:10] == ISSUE.split('\n')[:10]
        assert result.split('\n')[11:] == ISSUE.split('\n')[10:]

    def test_missing_section_raises(self):
        with pytest.raises(SectionNotFoundError, match='Instructions'):
            add_content_to_section(ISSUE, 'Instructions', 'text')

    def test_heading_must_match_canonical_name_exactly(self):
        text = "## tasks\nnotes\n"
        with pytest.raises(SectionNotFoundError, match='Tasks'):
            add_content_to_section(text, 'Tasks', 'New task')

    def test_input_is_not_modified(self):
        original = str(ISSUE)
        add_content_to_section(ISSUE, 'Tasks', 'New task')
        assert ISSUE == original


class TestFormatNoteForSection:

    def test_plain_note_is_unchanged(self):
        assert format_note_for_section('A note', 'Planned approach') == 'A note'

    def test_question_becomes_checkbox_with_question_mark(self):
        assert format_note_for_section('Why', 'questions', 'question') == '- [ ] Why?'
        assert format_note_for_section('Why?', 'questions', 'question') == '- [ ] Why?'

    def test_task_becomes_checkbox(self):
        assert format_note_for_section('Do it', 'Tasks', 'task') == '- [ ] Do it'

    def test_failure_block(self):
        assert format_note_for_section('Tried caching', 'failed', 'failure', reason='Stale data') == (
            "### Failed attempt\n\nTried caching\n\n**Reason:** Stale data"
        )

    def test_failure_without_reason(self):
        assert format_note_for_section('Tried caching', 'failed', 'failure').endswith(
            "**Reason:** Not specified"
        )
