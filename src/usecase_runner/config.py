"""Build manifest loading and environment overrides.

The build tool describes one invocation in a YAML manifest. Values from the
environment (``USECASE_RUNNER_*``, optionally loaded from ``.env``) override
the manifest, and CLI options override both.
"""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .models import Artifact, BuildContext, Scope
from .utils.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "USECASE_RUNNER_"
DEFAULT_BUILD_DIRECTORY = "build"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


def parse_bool(value: Any) -> bool:
    """Interpret a flag given as a bool or a string such as 'true' / 'off'."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False

    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ConfigurationError(f"Not a boolean value: {value!r}")


def _resolve_path(value: Any, base_dir: Path) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base_dir / path


def context_from_dict(data: Mapping[str, Any], base_dir: Path) -> BuildContext:
    """Build a BuildContext from parsed manifest data.

    Args:
        data: Parsed manifest mapping
        base_dir: Directory relative paths are resolved against

    Returns:
        The build context

    Raises:
        ConfigurationError: on malformed values
    """
    artifacts_raw = data.get("artifacts") or []
    if not isinstance(artifacts_raw, list):
        raise ConfigurationError("'artifacts' must be a list")

    artifacts = []
    for i, item in enumerate(artifacts_raw):
        if not isinstance(item, Mapping):
            raise ConfigurationError(f"artifacts[{i}] must be a mapping, got {type(item).__name__}")
        artifacts.append(Artifact.from_dict(dict(item), base_dir))

    elements_raw = data.get("classpath_elements") or []
    if not isinstance(elements_raw, list):
        raise ConfigurationError("'classpath_elements' must be a list")

    scope_raw = data.get("scope", Scope.TEST.value)
    scope = Scope.parse(scope_raw)
    if scope is None:
        raise ConfigurationError(f"Unknown scope: {scope_raw!r}")

    return BuildContext(
        source_directory=_resolve_path(data.get("source_directory", "."), base_dir),
        build_directory=_resolve_path(data.get("build_directory", DEFAULT_BUILD_DIRECTORY), base_dir),
        usecase=data.get("usecase"),
        engine=data.get("engine"),
        artifacts=artifacts,
        classpath_elements=[_resolve_path(e, base_dir) for e in elements_raw],
        scope=scope,
        skip=parse_bool(data.get("skip", False)),
    )


def load_manifest(path: Path) -> BuildContext:
    """Read a YAML build manifest.

    Raises:
        ConfigurationError: if the file is missing or not a valid manifest
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Build manifest does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Build manifest {path} must contain a mapping")

    logger.debug(f"Loaded build manifest {path}")
    return context_from_dict(data, path.resolve().parent)


def apply_overrides(
    context: BuildContext,
    *,
    usecase: Optional[str] = None,
    engine: Optional[str] = None,
    skip: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BuildContext:
    """Return a copy of ``context`` with environment, then explicit, overrides applied."""
    env = os.environ if environ is None else environ
    changes: dict[str, Any] = {}

    if env.get(f"{ENV_PREFIX}USECASE"):
        changes["usecase"] = env[f"{ENV_PREFIX}USECASE"]
    if env.get(f"{ENV_PREFIX}ENGINE"):
        changes["engine"] = env[f"{ENV_PREFIX}ENGINE"]
    if f"{ENV_PREFIX}SKIP" in env:
        changes["skip"] = parse_bool(env[f"{ENV_PREFIX}SKIP"])

    if usecase:
        changes["usecase"] = usecase
    if engine:
        changes["engine"] = engine
    if skip is not None:
        changes["skip"] = skip

    return replace(context, **changes)


def log_level(environ: Optional[Mapping[str, str]] = None, default: str = "INFO") -> str:
    """Log level from ``USECASE_RUNNER_LOG_LEVEL``."""
    env = os.environ if environ is None else environ
    return env.get(f"{ENV_PREFIX}LOG_LEVEL", default).upper()
