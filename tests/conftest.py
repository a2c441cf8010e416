import pytest
import tempfile
from pathlib import Path
from git import Repo

pytest_plugins = ('pytest_asyncio',)

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep environment overrides from leaking into Config()."""
    for name in ('GIT_COMMIT_LINT_IGNORE_MERGES', 'GIT_COMMIT_LINT_ALWAYS_LOG', 'GIT_COMMIT_LINT_LOG_FILE'):
        monkeypatch.delenv(name, raising=False)

def _commit(repo, tmp_dir, name, message):
    path = Path(tmp_dir) / name
    path.write_text(message)
    repo.index.add([name])
    return repo.index.commit(message)

@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with a few commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        with repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")

        _commit(repo, tmp_dir, "a.txt", "chore: initial commit")
        _commit(repo, tmp_dir, "b.txt", "feat(parser): add footer parsing")
        _commit(repo, tmp_dir, "c.txt", "update readme")

        yield tmp_dir
