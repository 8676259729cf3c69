"""
Shared fixtures for the obj-for-dto test suite.

Generated Python modules are written into a throwaway package under
tmp_path and imported from there, so their runtime behaviour is tested
against real JSON-like inputs.
"""

import importlib
import logging
import types
from dataclasses import replace
from pathlib import Path
from uuid import uuid4

import pytest

from obj_for_dto.core.config import load_config
from obj_for_dto.languages.python import PythonGenerator
from obj_for_dto.languages.typescript import TypeScriptGenerator

HAS_VALUE_PY = "def has_value(value):\n    return value is not None\n"

HAS_VALUE_TS = (
    "export function hasValue<T>(value: T | null | undefined): value is T {\n"
    "    return value !== null && value !== undefined\n"
    "}\n"
)

SETUP_JEST_TS = "export function getRandomInt(): number { return 4 }\n"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging detaches the package logger; put it back after each test."""
    yield
    package_logger = logging.getLogger("obj_for_dto")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def ts_workspace(tmp_path: Path) -> Path:
    """Project root holding the TypeScript helper files, models go to src/."""
    (tmp_path / "has-value.ts").write_text(HAS_VALUE_TS)
    (tmp_path / "setup-jest-esm.ts").write_text(SETUP_JEST_TS)
    (tmp_path / "src").mkdir()
    return tmp_path


@pytest.fixture
def ts_generator(ts_workspace: Path):
    """Factory for TypeScript generators writing into <workspace>/src."""

    def make(**overrides) -> TypeScriptGenerator:
        config = load_config("typescript", custom_config=overrides or None)
        return TypeScriptGenerator(config, output_dir=ts_workspace / "src")

    return make


@pytest.fixture
def python_helper(tmp_path: Path) -> Path:
    """has_value.py next to the flat Python output."""
    path = tmp_path / "has_value.py"
    path.write_text(HAS_VALUE_PY)
    return path


@pytest.fixture
def py_generator(tmp_path: Path):
    """Factory for flat Python generators writing into tmp_path."""

    def make(**overrides) -> PythonGenerator:
        config = load_config("python", custom_config=overrides or None)
        return PythonGenerator(config, output_dir=tmp_path)

    return make


@pytest.fixture
def generated_package(tmp_path: Path, monkeypatch):
    """
    Build Python models into an importable package.

    Returns a ``build(*entries)`` callable taking ``(class_name, spec)``
    pairs. Entries are generated and written in order so later classes can
    import earlier ones. The returned namespace exposes ``load(module)``.
    """
    package_name = f"generated_{uuid4().hex}"
    package_dir = tmp_path / package_name
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("")
    (package_dir / "has_value.py").write_text(HAS_VALUE_PY)
    monkeypatch.syspath_prepend(str(tmp_path))

    def build(*entries, **overrides):
        warnings = {}
        config = replace(load_config("python"), **overrides)
        for class_name, spec in entries:
            generator = PythonGenerator(config, output_dir=package_dir)
            bundle = generator.generate(class_name, spec)
            warnings[bundle.class_name] = bundle.warnings
            for relative_path, text in generator.render(bundle).items():
                (package_dir / relative_path).write_text(text)

        importlib.invalidate_caches()
        return types.SimpleNamespace(
            name=package_name,
            path=package_dir,
            warnings=warnings,
            load=lambda module: importlib.import_module(f"{package_name}.{module}"),
        )

    return build
