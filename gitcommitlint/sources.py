"""Reading commit messages from git."""
import re
from pathlib import Path
from typing import List, Optional, Tuple

from git import Repo

SCISSORS_LINE = "# ------------------------ >8 ------------------------"

MERGE_PATTERN = re.compile(
    r"^(Merge (branch|branches|tag|tags|remote-tracking branch|commit|pull request) .+"
    r"|Merge .+ into .+)$"
)


def strip_comments(text: str, comment_char: str = "#") -> str:
    """Remove git comment lines and everything below the scissors line."""
    lines = []
    for line in text.split("\n"):
        if line == SCISSORS_LINE:
            break
        if line.startswith(comment_char):
            continue
        lines.append(line)
    return "\n".join(lines)


def read_edit_file(path: Path) -> str:
    """Read a commit message file as written by ``git commit``.

    Args:
        path: Path to the message file, e.g. ``.git/COMMIT_EDITMSG``

    Returns:
        str: The message without comment lines
    """
    return strip_comments(path.read_text(encoding="utf-8"))


def default_edit_file(repo_path: Path) -> Path:
    """Location of the message file git hands to the commit-msg hook."""
    repo = Repo(repo_path, search_parent_directories=True)
    return Path(repo.git_dir) / "COMMIT_EDITMSG"


def read_commit_range(
    repo_path: Path, from_rev: Optional[str] = None, to_rev: str = "HEAD"
) -> List[Tuple[str, str]]:
    """Get commit messages for a revision range.

    Args:
        repo_path: Path to the git repository
        from_rev: Exclusive start of the range; if None, only ``to_rev`` is read
        to_rev: Inclusive end of the range

    Returns:
        List[Tuple[str, str]]: ``(short sha, message)`` pairs, oldest first
    """
    repo = Repo(repo_path, search_parent_directories=True)

    if from_rev is None:
        commits = [repo.commit(to_rev)]
    else:
        commits = list(repo.iter_commits(f"{from_rev}..{to_rev}"))
        commits.reverse()

    return [(commit.hexsha[:7], commit.message) for commit in commits]


def is_merge_message(text: str) -> bool:
    """Check whether a message is a git-generated merge message."""
    first_line = text.lstrip().split("\n", 1)[0].strip()
    return bool(MERGE_PATTERN.match(first_line))
