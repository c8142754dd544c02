"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally, and provide backends
rooted in per-test temporary directories.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def kv_root(tmp_path):
    root = tmp_path / "kv"
    root.mkdir()
    return root


@pytest.fixture
def file_backend(kv_root):
    from filekv_lib.storage.file_backend import FileBackend
    return FileBackend({"path": str(kv_root)})
