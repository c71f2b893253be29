import pytest

from pluggable_compression import Registry

from stubs import IdentityAlgorithm, ReverseAlgorithm


@pytest.fixture
def registry():
    """Isolated registry holding only the two stub algorithms."""
    reg = Registry()
    reg.register("id", IdentityAlgorithm())
    reg.register("rev", ReverseAlgorithm())
    return reg
