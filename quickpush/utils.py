import logging
import os
import subprocess
import time
from typing import Any, Dict, List, Optional, Tuple, Union

from rich.console import Console

__all__ = ["console", "error_console", "SubprocessHandler"]

console = Console()

error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class SubprocessHandler:
    """Dedicated class for running external commands.

    Output is either captured (for queries whose result we inspect) or passed
    straight through to the parent's streams (for steps the user should watch).
    The child process is always reaped, and terminated if it is still running
    when the handler unwinds.
    """

    def __init__(self, timeout: Optional[Union[int, float]] = None,
                 max_termination_retries: Optional[int] = None,
                 termination_wait: Optional[float] = None) -> None:
        """Initialize the SubprocessHandler.

        Args:
            timeout: Maximum time in seconds to wait for a process. None waits forever.
            max_termination_retries: Maximum number of checks after asking a process to terminate.
            termination_wait: Time to wait between termination checks in seconds.
        """
        self.process: Optional[subprocess.Popen[Any]] = None
        self.timeout: Optional[Union[int, float]] = timeout
        self.max_termination_retries: int = max_termination_retries or 3
        self.termination_wait: float = termination_wait or 0.5

    @staticmethod
    def create_env() -> Dict[str, str]:
        """Create environment with explicit encoding settings for subprocess.

        Returns:
            Dict[str, str]: Environment variables dictionary with encoding settings.
        """
        env = os.environ.copy()
        env['PYTHONIOENCODING'] = 'utf-8'
        return env

    def _timeout_for(self, timeout: Optional[Union[int, float]]) -> Optional[Union[int, float]]:
        return timeout if timeout is not None else self.timeout

    def run_command(self, command: List[str], timeout: Optional[Union[int, float]] = None,
                    encoding: str = 'utf-8', errors: str = 'replace') -> Tuple[str, str, int]:
        """Execute a command and capture its output.

        Args:
            command: Command to execute as a list of strings.
            timeout: Maximum time in seconds to wait; falls back to the handler default.
            encoding: Character encoding to use.
            errors: How to handle encoding/decoding errors.

        Returns:
            Tuple[str, str, int]: stdout, stderr, and return code.

        Raises:
            TimeoutError: If the process exceeds the timeout.
            OSError: If the executable cannot be started.
        """
        wait_for = self._timeout_for(timeout)
        logger.debug("Running (captured): %s", " ".join(command))
        process: Optional[subprocess.Popen[Any]] = None
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding=encoding,
                errors=errors,
                env=self.create_env(),
            )
            self.process = process

            stdout, stderr = process.communicate(timeout=wait_for)
            logger.debug("Exit code %s: %s", process.returncode, " ".join(command))
            return stdout, stderr, process.returncode
        except subprocess.TimeoutExpired:
            self._terminate_process(process)
            raise TimeoutError(f"Command timed out after {wait_for} seconds: {' '.join(command)}")
        finally:
            self._cleanup_process(process)
            self.process = None

    def run_passthrough(self, command: List[str], timeout: Optional[Union[int, float]] = None) -> int:
        """Execute a command with its output mirrored to our own stdout/stderr.

        Args:
            command: Command to execute as a list of strings.
            timeout: Maximum time in seconds to wait; falls back to the handler default.

        Returns:
            int: The process return code.

        Raises:
            TimeoutError: If the process exceeds the timeout.
            OSError: If the executable cannot be started.
        """
        wait_for = self._timeout_for(timeout)
        logger.debug("Running: %s", " ".join(command))
        process: Optional[subprocess.Popen[Any]] = None
        try:
            process = subprocess.Popen(command, env=self.create_env())
            self.process = process

            returncode = process.wait(timeout=wait_for)
            logger.debug("Exit code %s: %s", returncode, " ".join(command))
            return returncode
        except subprocess.TimeoutExpired:
            self._terminate_process(process)
            raise TimeoutError(f"Command timed out after {wait_for} seconds: {' '.join(command)}")
        finally:
            self._cleanup_process(process)
            self.process = None

    def _terminate_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        """Terminate a process, killing it if it does not exit in time.

        Args:
            process: The subprocess.Popen object to terminate.
        """
        if process is None or process.poll() is not None:
            return

        try:
            process.terminate()

            for _ in range(self.max_termination_retries):
                if process.poll() is not None:
                    return
                time.sleep(self.termination_wait)

            if process.poll() is None:
                logger.debug("Killing process %s after failed terminate", process.pid)
                process.kill()
                process.wait()
        except OSError:
            # Process might already be gone
            pass

    def _cleanup_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        """Close pipes and make sure the process is no longer running.

        Args:
            process: The subprocess.Popen object to clean up.
        """
        if process is None:
            return

        for fd in [process.stdout, process.stderr]:
            if fd is not None:
                try:
                    fd.close()
                except OSError:
                    pass

        self._terminate_process(process)
