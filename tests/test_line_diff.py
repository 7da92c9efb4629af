"""
Tests for the positional line diff.
"""
from core.line_diff import format_document, diff_lines, diff_text_lines, count_differences


class TestFormatDocument:

    def test_two_space_indent_keeps_key_order(self):
        text = format_document({"b": 1, "a": [1, 2]})
        assert text == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_non_ascii_kept(self):
        assert format_document({"name": "Zoë"}) == '{\n  "name": "Zoë"\n}'

    def test_empty_containers(self):
        assert format_document({}) == "{}"
        assert format_document([]) == "[]"


class TestDiffLines:

    def test_identical_documents(self):
        doc = {"id": "1", "values": [1, 2, 3], "nested": {"x": None}}
        result = diff_lines([doc, doc])
        assert count_differences(result) == 0
        assert all(not line.is_different for rows in result for line in rows)

    def test_single_value_change(self):
        result = diff_lines([{"a": 1, "b": 2}, {"a": 1, "b": 3}])
        assert count_differences(result) == 1
        differing = [line for line in result[1] if line.is_different]
        assert len(differing) == 1
        assert differing[0].text == '  "b": 3'
        assert differing[0].line_number == 3

    def test_rows_are_parallel(self):
        result = diff_lines([{"a": 1}, {"a": 1, "b": 2, "c": 3}, {}])
        lengths = {len(rows) for rows in result}
        assert lengths == {5}
        for position in range(5):
            flags = {rows[position].is_different for rows in result}
            assert len(flags) == 1
            assert {rows[position].line_number for rows in result} == {position + 1}

    def test_shorter_documents_padded_with_empty_lines(self):
        result = diff_lines([{}, {"a": 1}])
        assert [line.text for line in result[0]] == ["{}", "", ""]
        assert [line.text for line in result[1]] == ["{", '  "a": 1', "}"]

    def test_all_documents_must_match_the_first(self):
        # Third document differs; the position is marked in all of them
        result = diff_lines([{"a": 1}, {"a": 1}, {"a": 2}])
        assert [line.is_different for line in result[0]] == [False, True, False]
        assert [line.is_different for line in result[1]] == [False, True, False]

    def test_key_order_matters(self):
        result = diff_lines([{"a": 1, "b": 2}, {"b": 2, "a": 1}])
        assert count_differences(result) == 2

    def test_empty_input(self):
        assert diff_lines([]) == []
        assert count_differences([]) == 0

    def test_single_document(self):
        result = diff_lines([{"a": 1}])
        assert len(result) == 1
        assert count_differences(result) == 0


class TestPositionalCascade:

    def test_inserted_line_marks_everything_after_it(self):
        result = diff_text_lines(["x\ny\nz", "w\nx\ny\nz"])
        assert [line.text for line in result[0]] == ["x", "y", "z", ""]
        assert [line.text for line in result[1]] == ["w", "x", "y", "z"]
        assert [line.is_different for line in result[0]] == [True, True, True, True]
        assert count_differences(result) == 4

    def test_cascade_stops_when_lines_realign(self):
        result = diff_text_lines(["a\nb\nc", "a\nX\nc"])
        assert [line.is_different for line in result[0]] == [False, True, False]

    def test_empty_strings(self):
        result = diff_text_lines(["", ""])
        assert len(result[0]) == 1
        assert count_differences(result) == 0
