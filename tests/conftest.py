from pathlib import Path

import git
import pytest
from rich.console import Console

import quickpush.main as pipeline


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Print without colors or wrapping; also undoes any swap made by --no-color."""
    monkeypatch.setattr(pipeline, "console", Console(color_system=None, width=200))


@pytest.fixture
def bare_remote(tmp_path: Path) -> git.Repo:
    """Create a bare repository to push to."""
    return git.Repo.init(tmp_path / "remote.git", bare=True)


@pytest.fixture
def temp_git_repo(tmp_path: Path, bare_remote: git.Repo) -> git.Repo:
    """Create a repository on branch main with one pushed commit and an origin remote."""
    repo = git.Repo.init(tmp_path / "work")
    repo.git.symbolic_ref("HEAD", "refs/heads/main")

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    readme = Path(repo.working_dir) / "README.md"
    readme.write_text("# Test project\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.create_remote("origin", bare_remote.git_dir)
    repo.git.push("origin", "main")
    return repo


@pytest.fixture
def repo_with_changes(temp_git_repo: git.Repo) -> git.Repo:
    """Add a modified and an untracked file to the working tree."""
    work = Path(temp_git_repo.working_dir)
    (work / "README.md").write_text("# Test project\n\nNow with docs.\n")
    (work / "app.py").write_text("print('hello')\n")
    return temp_git_repo
