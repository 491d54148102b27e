"""Shared fixtures: a served root directory and a client for it."""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def root_dir(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>hi</h1>")
    (root / "app.js").write_text("console.log('hi');\n")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01\x02\xff")
    (root / "docs").mkdir()
    (root / "docs" / "index.html").write_text("<p>docs</p>")
    (root / "empty").mkdir()
    (tmp_path / "secret.txt").write_text("outside the root")
    return root


@pytest.fixture
def server_settings(root_dir) -> Settings:
    return Settings(root_dir=root_dir, host="127.0.0.1", port=0)


@pytest.fixture
def client(server_settings):
    with TestClient(create_app(server_settings)) as test_client:
        yield test_client
