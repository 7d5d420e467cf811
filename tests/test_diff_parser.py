"""Tests for the unified diff parser."""

from gitoscope.git.diff_parser import NO_LINE, DiffParser
from gitoscope.git.models import LineOrigin


class TestBasicParsing:
    def test_single_line_change(self, sample_diff_modified):
        patches = list(DiffParser(sample_diff_modified).parse())
        assert len(patches) == 1
        patch = patches[0]
        assert patch.old_path == "file.txt"
        assert patch.new_path == "file.txt"
        assert len(patch.hunks) == 1

        hunk = patch.hunks[0]
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (2, 1, 2, 1)
        assert [line.origin for line in hunk.lines] == [LineOrigin.DELETION, LineOrigin.ADDITION]
        assert hunk.lines[0].content == "b\n"
        assert hunk.lines[1].content == "B\n"

    def test_deleted_lines_have_no_new_lineno(self, sample_diff_modified):
        hunk = next(DiffParser(sample_diff_modified).parse()).hunks[0]
        deleted, added = hunk.lines
        assert deleted.new_lineno == NO_LINE
        assert deleted.old_lineno == 2
        assert added.old_lineno == NO_LINE
        assert added.new_lineno == 2

    def test_two_hunks(self, sample_diff_two_hunks):
        patch = next(DiffParser(sample_diff_two_hunks).parse())
        assert len(patch.hunks) == 2
        first, second = patch.hunks
        assert (first.old_start, first.old_lines) == (1, 2)
        assert len(first.lines) == 3
        assert (second.old_start, second.old_lines) == (9, 0)
        assert [line.new_lineno for line in second.lines] == [9, 10]

    def test_context_lines_numbered_on_both_sides(self):
        diff = (
            "diff --git a/f.txt b/f.txt\n"
            "index abc..def 100644\n"
            "--- a/f.txt\n"
            "+++ b/f.txt\n"
            "@@ -1,3 +1,3 @@\n"
            " a\n"
            "-b\n"
            "+B\n"
            " c\n"
        )
        hunk = next(DiffParser(diff).parse()).hunks[0]
        assert [(line.old_lineno, line.new_lineno) for line in hunk.lines] == [
            (1, 1), (2, NO_LINE), (NO_LINE, 2), (3, 3),
        ]


class TestEdgeCases:
    def test_new_file_uses_new_path_for_old(self, sample_diff_new_file):
        patch = next(DiffParser(sample_diff_new_file).parse())
        assert patch.old_path == "hello.py"
        assert patch.new_path == "hello.py"
        assert patch.hunks[0].old_start == 0
        assert patch.hunks[0].old_lines == 0

    def test_no_newline_marker_strips_terminator(self, sample_diff_no_newline):
        hunk = next(DiffParser(sample_diff_no_newline).parse()).hunks[0]
        assert [line.content for line in hunk.lines] == ["last", "LAST"]

    def test_binary_file(self, sample_diff_binary):
        patch = next(DiffParser(sample_diff_binary).parse())
        assert patch.is_binary is True
        assert patch.hunks == []

    def test_crlf_content_preserved(self):
        diff = (
            "diff --git a/win.txt b/win.txt\n"
            "index abc..def 100644\n"
            "--- a/win.txt\n"
            "+++ b/win.txt\n"
            "@@ -1 +1 @@\n"
            "-old\r\n"
            "+new\r\n"
        )
        hunk = next(DiffParser(diff).parse()).hunks[0]
        assert hunk.lines[1].content == "new\r\n"

    def test_removed_line_that_looks_like_file_header(self):
        """A deleted line starting with '-- ' must not be taken for a header."""
        diff = (
            "diff --git a/q.sql b/q.sql\n"
            "index abc..def 100644\n"
            "--- a/q.sql\n"
            "+++ b/q.sql\n"
            "@@ -1 +1 @@\n"
            "--- a/comment\n"
            "+-- b/comment\n"
        )
        patch = next(DiffParser(diff).parse())
        assert patch.old_path == "q.sql"
        assert [line.content for line in patch.hunks[0].lines] == ["-- a/comment\n", "-- b/comment\n"]

    def test_path_with_spaces(self):
        diff = (
            "diff --git a/my file.txt b/my file.txt\n"
            "index abc..def 100644\n"
            "--- a/my file.txt\t\n"
            "+++ b/my file.txt\t\n"
            "@@ -1 +1 @@\n"
            "-x\n"
            "+y\n"
        )
        patch = next(DiffParser(diff).parse())
        assert patch.old_path == "my file.txt"
        assert patch.new_path == "my file.txt"

    def test_quoted_path(self):
        diff = (
            'diff --git "a/say \\"hi\\".txt" "b/say \\"hi\\".txt"\n'
            "index abc..def 100644\n"
            '--- "a/say \\"hi\\".txt"\n'
            '+++ "b/say \\"hi\\".txt"\n'
            "@@ -1 +1 @@\n"
            "-x\n"
            "+y\n"
        )
        patch = next(DiffParser(diff).parse())
        assert patch.old_path == 'say "hi".txt'
        assert patch.new_path == 'say "hi".txt'

    def test_quoted_path_with_escapes(self):
        diff = (
            'diff --git "a/tab\\there" "b/tab\\there"\n'
            "new file mode 100644\n"
            "--- /dev/null\n"
            '+++ "b/tab\\there"\n'
            "@@ -0,0 +1 @@\n"
            "+x\n"
        )
        patch = next(DiffParser(diff).parse())
        assert patch.old_path == "tab\there"
        assert patch.new_path == "tab\there"

    def test_multiple_files(self, sample_diff_modified, sample_diff_new_file):
        patches = list(DiffParser(sample_diff_modified + sample_diff_new_file).parse())
        assert [p.old_path for p in patches] == ["file.txt", "hello.py"]

    def test_empty_diff(self):
        assert list(DiffParser("").parse()) == []
