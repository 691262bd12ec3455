"""Shared fixtures: a data directory per test and a Flask client bound to it."""

import pytest

from app import Config, create_app


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def data_path(data_dir):
    return data_dir / "output.txt"


@pytest.fixture
def client(data_path):
    app = create_app(Config(data_path=str(data_path)))
    app.config["TESTING"] = True
    return app.test_client()
