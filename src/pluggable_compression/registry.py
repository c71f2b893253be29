from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from pluggable_compression.algorithm import Algorithm
from pluggable_compression.errors import UnregisteredAlgorithmError
from pluggable_compression.options import Option, apply_options
from pluggable_compression.stream import Decoder, Encoder
from pluggable_compression.types import Sink, Source

log = logging.getLogger(__name__)


class Registry:
    """
    Thread-safe mapping from algorithm name to a prototype :class:`Algorithm`.

    Registering an existing name replaces the previous entry. Prototypes are
    never handed out: :meth:`construct` always returns a fresh instance.
    """

    def __init__(self) -> None:
        self._algorithms: dict[str, Algorithm] = {}
        self._lock = threading.Lock()

    def register(self, name: str, algorithm: Algorithm) -> None:
        with self._lock:
            replaced = name in self._algorithms
            self._algorithms[name] = algorithm
        log.debug("registered algorithm %r (%s)%s", name, type(algorithm).__name__,
                  ", replacing previous entry" if replaced else "")

    def lookup(self, name: str) -> Algorithm | None:
        with self._lock:
            return self._algorithms.get(name)

    def names(self) -> set[str]:
        with self._lock:
            return set(self._algorithms)

    def require_registered(self, name: str) -> None:
        if self.lookup(name) is None:
            raise UnregisteredAlgorithmError(name)

    def construct(self, name: str, *options: Option) -> Algorithm:
        """Return a new instance of ``name`` configured with ``options``.

        Options are applied in order and the first failure is raised; the
        partially configured instance is dropped.
        """
        prototype = self.lookup(name)
        if prototype is None:
            raise UnregisteredAlgorithmError(name)
        algorithm = prototype.new_instance()
        # identity is the registered name, which may differ from the class default
        algorithm.name = name
        apply_options(algorithm, options)
        log.debug("constructed %r with %d option(s)", name, len(options))
        return algorithm

    def new_encoder(self, name: str, sink: Sink, *options: Option) -> Encoder:
        return self.construct(name, *options).new_encoder(sink)

    def new_decoder(self, name: str, source: Source, *options: Option) -> Decoder:
        return self.construct(name, *options).new_decoder(source)

    def encode(self, name: str, data: bytes, *options: Option) -> bytes:
        return self.construct(name, *options).encode(data)

    def decode(self, name: str, data: bytes, *options: Option) -> bytes:
        return self.construct(name, *options).decode(data)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._algorithms

    def __len__(self) -> int:
        with self._lock:
            return len(self._algorithms)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names()))
