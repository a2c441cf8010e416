"""Tests for reading commit messages from files and git."""
from pathlib import Path

import pytest
from git import Repo

from gitcommitlint.sources import (
    SCISSORS_LINE,
    default_edit_file,
    is_merge_message,
    read_commit_range,
    read_edit_file,
    strip_comments,
)


def test_strip_comments():
    text = (
        "feat: add thing\n"
        "\n"
        "# Please enter the commit message for your changes.\n"
        "Body text\n"
        f"{SCISSORS_LINE}\n"
        "diff --git a/x b/x\n"
    )
    assert strip_comments(text) == "feat: add thing\n\nBody text"


def test_read_edit_file(tmp_path):
    path = tmp_path / "COMMIT_EDITMSG"
    path.write_text("fix: typo\n# comment\n", encoding="utf-8")
    assert read_edit_file(path) == "fix: typo"


def test_default_edit_file(temp_git_repo):
    path = default_edit_file(Path(temp_git_repo))
    assert path.name == "COMMIT_EDITMSG"
    assert path.parent.name == ".git"


def test_read_commit_range(temp_git_repo):
    repo = Repo(temp_git_repo)
    first = list(repo.iter_commits())[-1]

    messages = read_commit_range(Path(temp_git_repo), first.hexsha)
    assert [text.strip() for _, text in messages] == [
        "feat(parser): add footer parsing",
        "update readme",
    ]
    assert all(len(sha) == 7 for sha, _ in messages)


def test_read_single_commit(temp_git_repo):
    messages = read_commit_range(Path(temp_git_repo), to_rev="HEAD~1")
    assert [text.strip() for _, text in messages] == ["feat(parser): add footer parsing"]


def test_read_commit_range_bad_revision(temp_git_repo):
    with pytest.raises(Exception):
        read_commit_range(Path(temp_git_repo), "does-not-exist")


@pytest.mark.parametrize("text, expected", [
    ("Merge branch 'main' into feature", True),
    ("Merge pull request #12 from user/branch\n\nfeat: stuff", True),
    ("Merge remote-tracking branch 'origin/main'", True),
    ("merge: combine configs", False),
    ("feat: Merge branch handling", False),
])
def test_is_merge_message(text, expected):
    assert is_merge_message(text) is expected


def test_strip_comments_splits_on_newlines_only():
    assert strip_comments("feat: a\x0cb\n# note\nbody text") == "feat: a\x0cb\nbody text"
