"""Configuration module for quickpush.

This module provides a configuration class that holds all the settings
for a stage, commit and push run.
"""

from typing import Optional, Union

# Type alias for timeout values accepted by the subprocess handler
TIMEOUT_TYPE = Optional[Union[int, float]]


class Config:
    """Configuration class for quickpush.

    This class holds all the configuration settings for a push run.
    It can be instantiated with default values or customized values.

    Attributes:
        remote: Name of the remote to push to.
        pathspec: Pathspec handed to ``git add`` when staging.
        message_prefix: Prefix of the generated default commit message.
        timestamp_format: strftime format of the timestamp in the default message.
        git_executable: The git binary to invoke.
        timeout: Seconds to wait for each git command, or None to wait forever.
    """

    def __init__(
        self,
        remote: str = "origin",
        pathspec: str = ".",
        message_prefix: str = "Update",
        timestamp_format: str = "%c",
        git_executable: str = "git",
        timeout: TIMEOUT_TYPE = None,
    ):
        """Initialize the configuration with the given values.

        Raises:
            ValueError: If any of the values is invalid.
        """
        self.remote: str = remote
        self.pathspec: str = pathspec
        self.message_prefix: str = message_prefix
        self.timestamp_format: str = timestamp_format
        self.git_executable: str = git_executable
        self.timeout: TIMEOUT_TYPE = timeout

        error = self._validate()
        if error:
            raise ValueError(f"Invalid configuration: {error}")

    def _validate(self) -> Optional[str]:
        """Return a description of the first invalid field, or None."""
        for name in ("remote", "pathspec", "message_prefix", "timestamp_format", "git_executable"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                return f"{name} must be a non-empty string"

        if any(ch.isspace() for ch in self.remote):
            return "remote must not contain whitespace"

        if self.timeout is not None:
            # bool is an int subclass but never a meaningful timeout
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                return "timeout must be a number or None"
            if self.timeout <= 0:
                return "timeout must be positive"

        return None

    def is_valid(self) -> bool:
        """Check whether the current values are valid."""
        return self._validate() is None

    def __repr__(self) -> str:
        return (
            f"Config(remote={self.remote!r}, pathspec={self.pathspec!r}, "
            f"message_prefix={self.message_prefix!r}, timestamp_format={self.timestamp_format!r}, "
            f"git_executable={self.git_executable!r}, timeout={self.timeout!r})"
        )


# Default configuration instance
default_config = Config()
