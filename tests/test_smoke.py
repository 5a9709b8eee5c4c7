from __future__ import annotations

import importlib

import pytest


@pytest.mark.unit
def test_import_package() -> None:
    importlib.import_module("wavespec")


@pytest.mark.unit
def test_import_cli_main() -> None:
    importlib.import_module("wavespec.cli.main")


@pytest.mark.unit
def test_public_api_exports() -> None:
    import wavespec

    for name in wavespec.__all__:
        assert hasattr(wavespec, name), name
