"""Stage, commit and push the working tree in one go.

The run is a straight pipeline: check that there is something to commit,
settle on a commit message, then ``git add``, ``git commit``, look up the
current branch and ``git push`` it. The first failing step ends the run.
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple

from rich.markup import escape

from .config import Config, default_config
from .utils import SubprocessHandler, console

__all__ = [
    "GitCommandError",
    "run_git_command",
    "get_git_status",
    "has_pending_changes",
    "default_commit_message",
    "message_from_args",
    "prompt_commit_message",
    "resolve_commit_message",
    "run_step",
    "stage_changes",
    "commit_changes",
    "get_current_branch",
    "push_branch",
    "push_changes",
]

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """A git query exited non-zero."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit code {returncode}"
        super().__init__(f"Command failed: {' '.join(self.command)}: {detail}")


def run_git_command(command: List[str], config: Config = default_config) -> Tuple[str, str, int]:
    """Run a git command with captured output."""
    handler = SubprocessHandler(timeout=config.timeout)
    return handler.run_command(command)


def _git(config: Config, *args: str) -> List[str]:
    return [config.git_executable, *args]


def get_git_status(config: Config = default_config) -> str:
    """Return the porcelain status of the working tree.

    Raises:
        GitCommandError: If git cannot report the repository state.
    """
    command = _git(config, "status", "--porcelain")
    stdout, stderr, code = run_git_command(command, config)
    if code != 0:
        raise GitCommandError(command, code, stderr)
    return stdout


def has_pending_changes(config: Config = default_config) -> bool:
    return bool(get_git_status(config).strip())


def default_commit_message(config: Config = default_config) -> str:
    """Build the fallback message, e.g. ``Update: Mon Oct 19 14:02:11 2026``."""
    return f"{config.message_prefix}: {time.strftime(config.timestamp_format)}"


def message_from_args(args: Sequence[str]) -> Optional[str]:
    """Join command-line words into a message, or None if there are none."""
    if not args:
        return None
    message = " ".join(args)
    # git refuses an empty message; treat it like no message at all
    return message if message.strip() else None


def prompt_commit_message(config: Config = default_config) -> str:
    """Ask for a commit message, falling back to the default on empty input."""
    try:
        answer = console.input("Enter a commit message (leave empty for the default): ")
    except EOFError:
        answer = ""
    return answer.strip() or default_commit_message(config)


def resolve_commit_message(args: Sequence[str], config: Config = default_config) -> str:
    """Use the command-line words if there are any, otherwise ask."""
    message = message_from_args(args)
    if message is not None:
        return message
    return prompt_commit_message(config)


def run_step(command: List[str], description: str, config: Config = default_config) -> bool:
    """Run one visible step of the pipeline.

    The command's own output goes straight to the terminal. Returns True when
    the command exits zero; otherwise prints why it failed and returns False.
    """
    console.print(f"\n{escape(description)}...")
    handler = SubprocessHandler(timeout=config.timeout)
    try:
        code = handler.run_passthrough(command)
    except (OSError, TimeoutError) as e:
        console.print(f"[red]✗ {escape(description)} failed:[/red] {escape(str(e))}")
        return False

    if code != 0:
        error = f"Command failed with exit code {code}: {' '.join(command)}"
        console.print(f"[red]✗ {escape(description)} failed:[/red] {escape(error)}")
        return False

    console.print(f"[green]✓ {escape(description)} succeeded[/green]\n")
    return True


def stage_changes(config: Config = default_config) -> bool:
    return run_step(_git(config, "add", config.pathspec), "Staging changes", config)


def commit_changes(message: str, config: Config = default_config) -> bool:
    return run_step(_git(config, "commit", "-m", message), "Committing changes", config)


def get_current_branch(config: Config = default_config) -> str:
    """Return the name of the checked-out branch.

    Raises:
        GitCommandError: If git cannot resolve HEAD.
    """
    command = _git(config, "rev-parse", "--abbrev-ref", "HEAD")
    stdout, stderr, code = run_git_command(command, config)
    if code != 0:
        raise GitCommandError(command, code, stderr)
    return stdout.strip()


def push_branch(branch: str, config: Config = default_config) -> bool:
    return run_step(
        _git(config, "push", config.remote, branch),
        f"Pushing to {config.remote}/{branch}",
        config,
    )


def display_header() -> None:
    console.rule("[bold]Pushing changes to remote[/bold]")


def display_success(config: Config) -> None:
    console.rule(style="green")
    console.print(
        f"[bold green]✓ Push to {escape(config.remote)} succeeded![/bold green] "
        "CI deployment, if configured, will pick it up."
    )
    console.rule(style="green")


def push_changes(args: Sequence[str] = (), config: Config = default_config) -> int:
    """Stage, commit and push everything in the working tree.

    Args:
        args: Commit message words from the command line; empty to prompt.
        config: Run settings.

    Returns:
        int: 0 on success or when there is nothing to commit, 1 on failure.
    """
    display_header()

    try:
        if not has_pending_changes(config):
            console.print("[yellow]Nothing to commit, working tree clean[/yellow]")
            return 0
    except (GitCommandError, OSError, TimeoutError) as e:
        console.print(f"[red]✗ Checking git status failed:[/red] {escape(str(e))}")
        return 1

    logger.debug("Working tree has changes")
    message = resolve_commit_message(args, config)
    console.print(f"Commit message: [cyan]{escape(message)}[/cyan]")

    if not stage_changes(config):
        return 1

    if not commit_changes(message, config):
        return 1

    try:
        branch = get_current_branch(config)
        logger.debug("Current branch: %s", branch)
    except (GitCommandError, OSError, TimeoutError) as e:
        console.print(f"[red]✗ Resolving current branch failed:[/red] {escape(str(e))}")
        return 1

    if not push_branch(branch, config):
        return 1

    display_success(config)
    return 0
