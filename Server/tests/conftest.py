"""Shared fixtures for cryptoquote tests."""
import random

import pytest

from cryptoquote import create_app
from cryptoquote.config import TestingConfig
from cryptoquote.models import EncryptedQuote


@pytest.fixture
def make_encrypted():
    """Build a wire payload from ciphertext and a cipher -> plaintext solution."""
    def _make(text, solution, author="Tester"):
        return EncryptedQuote(
            text=text,
            author=author,
            map={plain: cipher for cipher, plain in solution.items()},
        )
    return _make


@pytest.fixture
def rng():
    """Seeded random source so generator tests are reproducible."""
    return random.Random(1234)


@pytest.fixture
def app(rng):
    """Flask app built from the testing configuration and the built-in catalog."""
    return create_app(TestingConfig, rng)


@pytest.fixture
def client(app):
    return app.test_client()
