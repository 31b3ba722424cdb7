"""Shared fixtures for building throwaway vaults."""

import logging
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

from wlls.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging configuration between tests."""
    yield
    pkg_logger = logging.getLogger(LOGGER_NAME)
    pkg_logger.handlers = [logging.NullHandler()]
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


@pytest.fixture
def make_vault(tmp_path) -> Callable[[Dict[str, Union[str, bytes]]], Path]:
    """
    Return a factory that writes files into a fresh vault.

    Keys are vault-relative paths; str values are written as UTF-8 text,
    bytes values as-is. The canonical vault root is returned.
    """
    root = (tmp_path / "vault").resolve()
    root.mkdir()

    def _make(files: Dict[str, Union[str, bytes]]) -> Path:
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make
