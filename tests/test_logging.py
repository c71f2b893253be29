import logging as stdlib_logging

from pluggable_compression import Registry, logging

from stubs import IdentityAlgorithm


def test_setup_attaches_handler():
    logger = stdlib_logging.getLogger("pluggable_compression.test_setup")
    logging.setup(level=logging.DEBUG, logger=logger)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_twice_replaces_handler():
    logger = stdlib_logging.getLogger("pluggable_compression.test_setup_twice")
    first = logging.setup(logger=logger)
    second = logging.setup(level=logging.WARNING, logger=logger)

    assert logger.handlers == [second]
    assert first is not second
    assert logger.level == logging.WARNING


def test_registration_is_logged(caplog):
    registry = Registry()
    with caplog.at_level(stdlib_logging.DEBUG, logger="pluggable_compression"):
        registry.register("id", IdentityAlgorithm())
        registry.register("id", IdentityAlgorithm())
        registry.construct("id")

    messages = [r.getMessage() for r in caplog.records]
    assert any("registered algorithm 'id'" in m for m in messages)
    assert any("replacing previous entry" in m for m in messages)
    assert any("constructed 'id'" in m for m in messages)
