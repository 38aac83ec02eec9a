"""Error types raised by the spectrum pipeline.

Every error derives from :class:`SpectrumLabError` and also from
:class:`ValueError`, so callers that already guard against bad values
with ``except ValueError`` keep working.
"""


class SpectrumLabError(Exception):
    """Base class for all spectrum_lab errors."""


class UnsupportedWindowKind(SpectrumLabError, ValueError):
    """Raised when a window identifier is not recognized.

    Attributes:
        kind: The rejected window identifier.
    """

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unknown window type: {kind!r}")


class UnsupportedSignalKind(SpectrumLabError, ValueError):
    """Raised when a signal kind is not one of the generator's kinds.

    Attributes:
        kind: The rejected signal kind.
    """

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unknown signal kind: {kind!r}")


class InvalidConfig(SpectrumLabError, ValueError):
    """Raised when processing or signal parameters are out of range."""
