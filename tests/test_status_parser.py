"""Tests for porcelain status parsing."""

from gitoscope.git.status_parser import parse_porcelain, record_from_code


class TestRecordFromCode:
    def test_untracked(self):
        rec = record_from_code("new.txt", "??")
        assert rec.is_new is True
        assert rec.in_index is False
        assert rec.in_working_tree is True

    def test_staged_add(self):
        rec = record_from_code("added.txt", "A ")
        assert rec.is_new is True
        assert rec.in_index is True
        assert rec.in_working_tree is False

    def test_staged_and_unstaged_modification(self):
        rec = record_from_code("both.txt", "MM")
        assert rec.is_modified is True
        assert rec.in_index is True
        assert rec.in_working_tree is True

    def test_unstaged_delete(self):
        rec = record_from_code("gone.txt", " D")
        assert rec.is_deleted is True
        assert rec.in_index is False
        assert rec.in_working_tree is True

    def test_staged_delete(self):
        rec = record_from_code("gone.txt", "D ")
        assert rec.is_deleted is True
        assert rec.in_index is True
        assert rec.in_working_tree is False

    def test_ignored(self):
        rec = record_from_code("build/out.o", "!!")
        assert rec.is_ignored is True
        assert rec.in_index is False

    def test_conflict(self):
        rec = record_from_code("clash.txt", "UU")
        assert rec.is_conflicted is True
        assert rec.in_index is False
        assert rec.in_working_tree is False


class TestParsePorcelain:
    def test_nul_separated_entries(self):
        output = " M file.txt\0?? new file.txt\0D  old.txt\0"
        records = parse_porcelain(output)
        assert [r.path for r in records] == ["file.txt", "new file.txt", "old.txt"]
        assert records[0].in_working_tree is True
        assert records[1].is_new is True
        assert records[2].in_index is True

    def test_rename_consumes_original_path(self):
        output = "R  new.txt\0old.txt\0 M other.txt\0"
        records = parse_porcelain(output)
        assert [r.path for r in records] == ["new.txt", "other.txt"]
        assert records[0].is_new is True

    def test_empty_output(self):
        assert parse_porcelain("") == []
