"""Error taxonomy for the forecast pipeline."""


class SkycastError(Exception):
    """Base class for all pipeline errors."""


class NetworkError(SkycastError):
    """Raised when a search call or page fetch fails at the transport or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EnvelopeDecodeError(SkycastError):
    """Raised when the location search response is not the expected envelope."""


class AmbiguousEnvelopeError(EnvelopeDecodeError):
    """Raised when the search namespace holds more than one result key."""

    def __init__(self, namespace: str, keys: list[str]):
        super().__init__(
            f"Expected one key under {namespace!r}, found {len(keys)}: {sorted(keys)}"
        )
        self.namespace = namespace
        self.keys = keys


class UserInputError(SkycastError):
    """Raised for blank queries, empty candidate lists and invalid selections."""


class SelectorMissError(SkycastError):
    """An expected structural node is absent. Always absorbed during extraction."""

    def __init__(self, field: str, selector: str):
        super().__init__(f"Selector not found for {field}: {selector}")
        self.field = field
        self.selector = selector


class MalformedValueError(SkycastError):
    """Leaf text is present but cannot be parsed. Always absorbed during extraction."""
