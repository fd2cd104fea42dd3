import random

import pytest

from file_compressor.app import create_app


@pytest.fixture
def app(tmp_path):
    return create_app({"TESTING": True, "STORAGE_DIR": str(tmp_path / "storage")})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_text():
    return b"This is a test of the Huffman file compressor. " * 40


@pytest.fixture
def random_bytes():
    rng = random.Random(1234)
    return bytes(rng.getrandbits(8) for _ in range(10 * 1024))
