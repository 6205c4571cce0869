"""Exceptions raised outside the lexing and scanning core."""


class GfxDocsError(Exception):
    """Base class for errors reported to the command line."""


class UnknownOutputFormatError(GfxDocsError):
    """Raised when no output writer is registered under a format name."""

    def __init__(self, output_format: str, known: list[str]) -> None:
        self.output_format = output_format
        self.known = known
        super().__init__(
            f"Unknown output type '{output_format}'. "
            f"Choose from: {', '.join(known)}"
        )


class OutputDestinationError(GfxDocsError):
    """Raised when a writer cannot write to the requested destination."""
