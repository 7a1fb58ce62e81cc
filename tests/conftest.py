from __future__ import annotations

import sys
import textwrap
import uuid
from dataclasses import dataclass
from pathlib import Path

import pytest

from usecase_runner.utils.logger import reset_logging

USECASES_SOURCE = textwrap.dedent(
    """
    from usecase_runner.engine.interface import UseCase

    CONSTRUCTED = []


    class RenameUseCase(UseCase):
        def __init__(self):
            CONSTRUCTED.append(self)

        def operations(self):
            return {"rename-logger"}

        def prefiltering_predicate(self):
            return lambda path: path.endswith(".py")

        def additional_classpath_entries(self):
            return {"/declared/by/usecase"}


    class DefaultsUseCase(UseCase):
        def operations(self):
            return {"noop"}


    class NeedsArgs(UseCase):
        def __init__(self, target):
            self.target = target

        def operations(self):
            return set()


    class Exploding(UseCase):
        def __init__(self):
            raise RuntimeError("boom")

        def operations(self):
            return set()


    class Incomplete(UseCase):
        pass


    class NotAUseCase:
        def operations(self):
            return set()


    def make_rename():
        return RenameUseCase()


    def make_other():
        return object()


    CONSTANT = 42
    """
)

ENGINE_SOURCE = textwrap.dedent(
    """
    CALLS = []


    class RecordingEngine:
        def run(self, source_root, use_case):
            CALLS.append(
                {
                    "source_root": source_root,
                    "operations": sorted(use_case.operations()),
                    "classpath": sorted(use_case.additional_classpath_entries()),
                }
            )


    def failing_engine(source_root, use_case):
        raise RuntimeError("parse error in Foo.py")
    """
)

ENTRY_POINTS = """\
[usecase_runner.strategies]
rename = {package}.usecases:RenameUseCase
factory = {package}.usecases:make_rename
bad-factory = {package}.usecases:make_other
missing = {package}.usecases:DoesNotExist

[usecase_runner.engines]
recording = {package}.engine:RecordingEngine
"""


@dataclass
class PluginProject:
    """A dependency directory holding a generated use case package."""

    root: Path
    package: str

    def usecase(self, attr: str) -> str:
        return f"{self.package}.usecases.{attr}"

    def module(self, name: str):
        return sys.modules[f"{self.package}.{name}"]


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def plugin_project(tmp_path: Path):
    package = f"uc_{uuid.uuid4().hex[:12]}"
    root = tmp_path / "deps"
    pkg_dir = root / package
    pkg_dir.mkdir(parents=True)

    (pkg_dir / "__init__.py").write_text("", encoding="utf-8")
    (pkg_dir / "usecases.py").write_text(USECASES_SOURCE, encoding="utf-8")
    (pkg_dir / "engine.py").write_text(ENGINE_SOURCE, encoding="utf-8")
    (pkg_dir / "broken.py").write_text("import definitely_missing_dependency_xyz\n", encoding="utf-8")
    (pkg_dir / "raising.py").write_text("raise ValueError('module init failed')\n", encoding="utf-8")

    dist_info = root / f"{package}-1.0.dist-info"
    dist_info.mkdir()
    (dist_info / "METADATA").write_text(
        f"Metadata-Version: 2.1\nName: {package}\nVersion: 1.0\n", encoding="utf-8"
    )
    (dist_info / "entry_points.txt").write_text(ENTRY_POINTS.format(package=package), encoding="utf-8")

    yield PluginProject(root=root, package=package)

    for name in [m for m in sys.modules if m == package or m.startswith(package + ".")]:
        sys.modules.pop(name, None)
