"""Tests for raw git object parsers and descriptor serialisation."""

from gitoscope.git.models import ReferenceInfo
from gitoscope.git.objects import (
    looks_binary,
    parse_batch_check,
    parse_commit,
    parse_for_each_ref,
    parse_ls_tree,
    parse_name_list,
)

_RAW_COMMIT = (
    "tree 4b825dc642cb6eb9a060e54bf8d69288fbee4904\n"
    "parent 1111111111111111111111111111111111111111\n"
    "parent 2222222222222222222222222222222222222222\n"
    "author Ada Lovelace <ada@example.com> 1700000000 +0100\n"
    "committer Grace Hopper <grace@example.com> 1700000100 -0500\n"
    "gpgsig -----BEGIN PGP SIGNATURE-----\n"
    " iQEzBAABCAAdFiEE\n"
    " -----END PGP SIGNATURE-----\n"
    "\n"
    "Merge feature\n"
    "\n"
    "Longer body.\n"
)


class TestBatchCheck:
    def test_found(self):
        assert parse_batch_check("abc123 blob 42\n") == ("abc123", "blob", 42)

    def test_missing(self):
        assert parse_batch_check("HEAD:nope.txt missing\n") is None

    def test_empty(self):
        assert parse_batch_check("") is None


class TestParseCommit:
    def test_headers(self):
        commit = parse_commit("c0ffee", _RAW_COMMIT)
        assert commit.tree_id == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
        assert len(commit.parents) == 2
        assert commit.author.name == "Ada Lovelace"
        assert commit.author.email == "ada@example.com"
        assert commit.author.timestamp == 1700000000
        assert commit.committer.offset == "-0500"

    def test_message_and_summary(self):
        commit = parse_commit("c0ffee", _RAW_COMMIT)
        assert commit.message == "Merge feature\n\nLonger body.\n"
        assert commit.summary == "Merge feature"
        assert commit.to_dict()["summary"] == "Merge feature"


class TestParseTree:
    def test_ls_tree(self):
        output = (
            "100644 blob aaaa\tREADME.md\0"
            "040000 tree bbbb\tsrc\0"
            "160000 commit cccc\tvendor/lib\0"
        )
        entries = parse_ls_tree(output)
        assert [e.name for e in entries] == ["README.md", "src", "vendor/lib"]
        assert entries[0].is_blob
        assert entries[1].is_tree
        assert entries[2].type == "commit"

    def test_name_list(self):
        assert parse_name_list("a.txt\0dir/b c.txt\0") == ["a.txt", "dir/b c.txt"]


class TestReferences:
    def test_for_each_ref(self):
        output = (
            "refs/heads/main\0aaaa\0\n"
            "refs/remotes/origin/HEAD\0aaaa\0refs/remotes/origin/main\n"
            "refs/tags/v1.0\0bbbb\0\n"
        )
        refs = parse_for_each_ref(output)
        assert [r.shorthand for r in refs] == ["main", "origin/HEAD", "v1.0"]
        assert refs[0].is_branch
        assert refs[1].is_remote
        assert refs[1].symbolic_target == "refs/remotes/origin/main"
        assert refs[2].is_tag

    def test_head_to_dict(self):
        head = ReferenceInfo(name="HEAD", target="aaaa", symbolic_target="refs/heads/main", is_head=True)
        data = head.to_dict()
        assert data["isHead"] is True
        assert data["isBranch"] is False
        assert data["symbolicTarget"] == "refs/heads/main"


class TestBinary:
    def test_nul_means_binary(self):
        assert looks_binary("PNG\0\0data") is True

    def test_text(self):
        assert looks_binary("plain text\n") is False
