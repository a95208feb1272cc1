import numpy as np
import pytest
from fastapi.testclient import TestClient

from classic_cipher.history import OperationHistory
from classic_cipher.keygen import KeyGenerator
from classic_cipher.main import app, get_history, get_key_generator


@pytest.fixture
def history():
    return OperationHistory(limit=20)


@pytest.fixture
def keygen():
    return KeyGenerator(np.random.default_rng(1234))


@pytest.fixture
def client(history, keygen):
    app.dependency_overrides[get_history] = lambda: history
    app.dependency_overrides[get_key_generator] = lambda: keygen
    yield TestClient(app)
    app.dependency_overrides.clear()
