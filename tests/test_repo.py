import os

import pytest

from minivcs.repo import (
    IgnorePattern,
    NotARepositoryError,
    clean_working_directory,
    ensure_initialized,
    hash_file,
    hash_string,
    init_repository,
    is_ignored,
    load_ignore_patterns,
    load_index,
    load_tree_recursive,
    read_head_ref,
    read_ref,
    save_index,
)


@pytest.fixture
def repo(tmp_path):
    init_repository(tmp_path)
    return tmp_path


def test_hash_of_empty_input():
    assert hash_string(b"") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_drops_leading_zero_of_each_byte():
    digest = hash_string("abc")
    assert digest == "ba7816bf8f1cfea414140de5dae2223b0361a396177a9cb410ff61f2015ad"
    assert len(digest) < 64


def test_hash_string_accepts_text_and_bytes():
    assert hash_string("hello") == hash_string(b"hello")


def test_hash_file_matches_contents(tmp_path):
    target = tmp_path / "f.bin"
    target.write_bytes(b"\x00\x01payload")
    assert hash_file(target) == hash_string(b"\x00\x01payload")


def test_hash_file_missing_is_empty(tmp_path):
    assert hash_file(tmp_path / "missing") == ""


def test_init_creates_layout(tmp_path, capsys):
    vcs = init_repository(tmp_path)
    assert vcs == tmp_path / ".vcs"
    assert (vcs / "objects").is_dir()
    assert (vcs / "refs" / "heads").is_dir()
    assert read_head_ref(tmp_path) == "refs/heads/master"
    assert "Initialized empty VCS repository in .vcs/" in capsys.readouterr().out


def test_ensure_initialized_raises_without_repo(tmp_path):
    with pytest.raises(NotARepositoryError):
        ensure_initialized(tmp_path)


def test_ensure_initialized_returns_vcs_dir(repo):
    assert ensure_initialized(repo) == repo / ".vcs"


def test_index_round_trip(repo):
    index = {"a.txt": "abc", os.path.join("dir", "b.txt"): "def"}
    save_index(index, repo)
    assert load_index(repo) == index


def test_load_index_missing_is_empty(repo):
    assert load_index(repo) == {}


def test_load_index_skips_incomplete_lines(repo):
    (repo / ".vcs" / "index").write_text("lonely\na.txt h1\n\n")
    assert load_index(repo) == {"a.txt": "h1"}


def test_clean_working_directory_keeps_repository(repo):
    (repo / "file.txt").write_text("x")
    (repo / "sub").mkdir()
    (repo / "sub" / "inner.txt").write_text("y")
    clean_working_directory(repo)
    assert {entry.name for entry in repo.iterdir()} == {".vcs"}
    assert (repo / ".vcs" / "HEAD").is_file()


def test_load_tree_recursive_flattens_nested_trees(repo):
    objects = repo / ".vcs" / "objects"
    (objects / "childtree").write_text("blob h2 c.txt\n")
    (objects / "roottree").write_text("blob h1 a.txt\ntree childtree sub\n")
    assert load_tree_recursive("roottree", root=repo) == {
        "a.txt": "h1",
        f"sub{os.sep}c.txt": "h2",
    }
    assert load_tree_recursive("childtree", "base", repo) == {
        f"base{os.sep}c.txt": "h2"
    }


def test_load_tree_recursive_missing_or_empty_hash(repo):
    assert load_tree_recursive("nosuchtree", root=repo) == {}
    assert load_tree_recursive("", root=repo) == {}


def test_read_ref_missing(repo):
    assert read_ref("refs/heads/master", repo) == ""
    assert read_ref("", repo) == ""


def test_read_ref_first_line(repo):
    (repo / ".vcs" / "refs" / "heads" / "dev").write_text("commit1\nextra\n")
    assert read_ref("refs/heads/dev", repo) == "commit1"


def test_no_ignore_file_gives_no_patterns(tmp_path):
    assert load_ignore_patterns(tmp_path) == []


def test_ignore_patterns_skip_comments_and_blank_lines(tmp_path):
    (tmp_path / ".vcsignore").write_text("# comment\n\n*.log\n!keep.log\n")
    patterns = load_ignore_patterns(tmp_path)
    assert len(patterns) == 2
    assert isinstance(patterns[0], IgnorePattern)
    assert patterns[0].source == r"(^|.*/)[^/]*\.log"
    assert [p.negated for p in patterns] == [False, True]


def test_star_pattern_matches_in_any_directory(tmp_path):
    (tmp_path / ".vcsignore").write_text("*.log\n")
    patterns = load_ignore_patterns(tmp_path)
    assert is_ignored("a.log", patterns)
    assert is_ignored("dir/a.log", patterns)
    assert is_ignored("dir\\a.log", patterns)
    assert not is_ignored("a.txt", patterns)


def test_first_matching_pattern_wins(tmp_path):
    (tmp_path / ".vcsignore").write_text("!keep.log\n*.log\n")
    patterns = load_ignore_patterns(tmp_path)
    assert not is_ignored("keep.log", patterns)
    assert is_ignored("other.log", patterns)


def test_directory_pattern_covers_contents(tmp_path):
    (tmp_path / ".vcsignore").write_text("build/\n")
    patterns = load_ignore_patterns(tmp_path)
    assert is_ignored("build/out.o", patterns)
    assert is_ignored("src/build/out.o", patterns)
    assert not is_ignored("builder.txt", patterns)


def test_double_star_pattern(tmp_path):
    (tmp_path / ".vcsignore").write_text("**/tmp\n")
    patterns = load_ignore_patterns(tmp_path)
    assert is_ignored("a/b/tmp", patterns)
    assert is_ignored("tmp", patterns)
    assert not is_ignored("a/tmpfile", patterns)