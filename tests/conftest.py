"""Shared fixtures for litenum tests.

``load_enum`` compiles DSL text, writes the module under ``tmp_path`` and
imports it from there, so tests exercise the generated code for real.
"""

from __future__ import annotations

import importlib.util
import itertools
from pathlib import Path
from types import ModuleType
from typing import Callable

import pytest

from litenum.compiler.compiler import compile_source
from litenum.core.config import LitEnumConfig, set_config

_TESTS_DIR = Path(__file__).parent
_module_ids = itertools.count()


@pytest.fixture(autouse=True)
def _reset_config():
    """Keep the global config singleton from leaking between tests."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def load_enum(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., ModuleType]:
    # enum_support.py lives beside this file and backs the data-field tests
    monkeypatch.syspath_prepend(str(_TESTS_DIR))

    def _load(source: str, config: LitEnumConfig | None = None) -> ModuleType:
        name = f"generated_enum_{next(_module_ids)}"
        path = tmp_path / f"{name}.py"
        path.write_text(compile_source(source, config or LitEnumConfig()), encoding="utf-8")
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load
