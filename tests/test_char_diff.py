"""
Tests for the character diff against the base document.
"""
import pytest

from core.char_diff import diff_characters, diff_strings, count_character_differences
from core.line_diff import format_document
from core.models import CharDiffPart


def _old_text(parts):
    return "".join(p.value for p in parts if not p.added)


def _new_text(parts):
    return "".join(p.value for p in parts if not p.removed)


class TestDiffStrings:

    def test_equal_strings_single_unchanged_part(self):
        assert diff_strings("same", "same") == [CharDiffPart(value="same")]

    def test_substitution(self):
        parts = diff_strings("hello", "hallo")
        assert parts == [
            CharDiffPart(value="h"),
            CharDiffPart(value="e", removed=True),
            CharDiffPart(value="a", added=True),
            CharDiffPart(value="llo"),
        ]

    def test_insert_into_empty(self):
        assert diff_strings("", "abc") == [CharDiffPart(value="abc", added=True)]

    def test_delete_to_empty(self):
        assert diff_strings("abc", "") == [CharDiffPart(value="abc", removed=True)]

    @pytest.mark.parametrize("old,new", [
        ('  "name": "alpha"', '  "name": "alpine"'),
        ('  "count": 10,', '  "count": 1000'),
        ("kitten", "sitting"),
        ("", ""),
        ('  "a": [', "}"),
    ])
    def test_parts_rebuild_both_sides(self, old, new):
        parts = diff_strings(old, new)
        assert _old_text(parts) == old
        assert _new_text(parts) == new
        assert not any(p.added and p.removed for p in parts)


class TestDiffCharacters:

    def test_base_lines_are_single_unchanged_parts(self):
        doc = "hello"
        result = diff_characters([doc, doc])
        assert result[0] == [[CharDiffPart(value='"hello"')]]
        assert result[1] == [[CharDiffPart(value='"hello"')]]

    def test_base_document_alone(self):
        doc = {"a": 1, "b": [1, 2]}
        result = diff_characters([doc])
        lines = format_document(doc).split("\n")
        assert len(result) == 1
        assert [parts[0].value for parts in result[0]] == lines
        assert all(len(parts) == 1 and parts[0].is_unchanged for parts in result[0])

    def test_changed_line_is_diffed_against_base(self):
        result = diff_characters([{"name": "alpha"}, {"name": "alpine"}])
        changed = result[1][1]
        assert _old_text(changed) == '  "name": "alpha"'
        assert _new_text(changed) == '  "name": "alpine"'
        assert any(p.added for p in changed)
        assert any(p.removed for p in changed)
        # Unchanged lines stay a single part
        assert result[1][0] == [CharDiffPart(value="{")]
        assert result[1][2] == [CharDiffPart(value="}")]

    def test_longer_document_covers_all_its_lines(self):
        base = {"a": 1}
        longer = {"a": 1, "b": 2, "c": 3}
        result = diff_characters([base, longer])
        assert len(result[0]) == 3
        assert len(result[1]) == 5
        # Lines past the end of the base are pure insertions
        assert result[1][4] == [CharDiffPart(value="}", added=True)]

    def test_shorter_document_shows_removed_base_lines(self):
        result = diff_characters([{"a": 1, "b": 2}, {}])
        assert len(result[1]) == 4
        assert result[1][3] == [CharDiffPart(value="}", removed=True)]

    def test_non_base_documents_only_compared_to_base(self):
        base = {"v": 1}
        result = diff_characters([base, {"v": 2}, {"v": 2}])
        # Documents 1 and 2 are equal to each other but both differ from base
        assert result[1] == result[2]
        assert any(not p.is_unchanged for p in result[2][1])

    def test_empty_input(self):
        assert diff_characters([]) == []


class TestCountCharacterDifferences:

    def test_counts_lines_of_non_base_documents(self):
        result = diff_characters([{"a": 1, "b": 1}, {"a": 2, "b": 1}, {"a": 2, "b": 2}])
        assert count_character_differences(result) == 3

    def test_identical(self):
        doc = {"a": [1, 2]}
        assert count_character_differences(diff_characters([doc, doc, doc])) == 0

    def test_base_never_counts(self):
        assert count_character_differences(diff_characters([{"a": 1}])) == 0
        assert count_character_differences([]) == 0
