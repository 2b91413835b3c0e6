"""Exceptions raised inside the syspulse sampler."""


class SamplerError(Exception):
    """Base class for failures a measurement step recovers from."""


class CommandError(SamplerError):
    """An external command could not be run or exited non-zero."""

    def __init__(
        self,
        args: list[str],
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = f"exit code {returncode}" if returncode is not None else "not started"
        message = f"{' '.join(self.command)!r} failed ({detail})"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ParseError(SamplerError):
    """Command output did not have the expected shape."""
