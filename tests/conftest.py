"""Shared fixtures for appenv tests."""

import io
import zipfile
from typing import Dict

import pytest

from appenv.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from cached settings and the caller's APP_ENV."""
    monkeypatch.delenv("APP_ENV", raising=False)
    for name in ("APPENV_APP_ENV_VAR", "APPENV_DEFAULT_APP_ENV", "APPENV_SHARED_FILE", "APPENV_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def zip_tree():
    """Build an in-memory file tree: ``zip_tree({"config/test.env": "A=1"})``."""

    def build(files: Dict[str, str]) -> zipfile.Path:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, text in files.items():
                zf.writestr(name, text)
        buf.seek(0)
        return zipfile.Path(zipfile.ZipFile(buf))

    return build
