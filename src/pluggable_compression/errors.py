from __future__ import annotations


class CompressionError(Exception):
    """Base class for every error raised by this package."""


class UnregisteredAlgorithmError(CompressionError, LookupError):
    """No algorithm is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"algorithm not registered: {name}")
        self.name = name


class UnsupportedOptionError(CompressionError):
    """An option was applied to an algorithm without that tunable."""

    def __init__(self, algorithm: str, option: str) -> None:
        super().__init__(f"{algorithm}: unsupported option: {option}")
        self.algorithm = algorithm
        self.option = option


class ConfigError(CompressionError, ValueError):
    """A supported option was given a value the codec rejects."""


class FormatError(CompressionError, ValueError):
    """Compressed input is malformed or truncated."""
