from typing import Any, Protocol


class Sink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


class Source(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...
