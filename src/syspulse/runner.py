"""External command execution for syspulse."""

import logging
import subprocess
from collections.abc import Sequence

import psutil

from syspulse.errors import CommandError

logger = logging.getLogger(__name__)

_CREATION_FLAGS = subprocess.CREATE_NO_WINDOW if psutil.WINDOWS else 0


class CommandRunner:
    """
    Runs an OS command and returns its standard output.

    Any way the command can fail (missing executable, denied execution,
    non-zero exit, timeout) is raised as CommandError. No parsing happens here.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Initialize the CommandRunner.

        Args:
            timeout: Seconds to wait for a command, or None to wait forever.
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        """Get the per-command timeout."""
        return self._timeout

    def run(self, args: Sequence[str]) -> str:
        """Run args (argv form, no shell) and return stdout as text."""
        argv = list(args)
        logger.debug("Running command: %s", argv)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout,
                creationflags=_CREATION_FLAGS,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(argv, stderr=f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise CommandError(argv, stderr=str(e)) from e

        if result.returncode != 0:
            raise CommandError(argv, returncode=result.returncode, stderr=result.stderr or "")
        return result.stdout
