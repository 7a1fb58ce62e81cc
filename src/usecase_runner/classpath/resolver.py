"""Reduce a resolved artifact set to the locations of one scope."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from ..errors import ConfigurationError
from ..models import Artifact, Scope
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ArtifactClasspathResolver:
    """Extracts scope-filtered artifact locations from the build's artifact graph."""

    def resolve(self, artifacts: Iterable[Artifact], scope: Union[Scope, str]) -> list[Path]:
        """Return the locations of artifacts whose scope equals ``scope``.

        Order follows the artifact set. Artifacts without a location, or
        whose file is not on disk yet, are skipped silently; artifacts with
        an unrecognized scope are skipped with a warning.

        Args:
            artifacts: Resolved artifacts from the build tool
            scope: Scope to select, as a Scope or its name

        Returns:
            Ordered list of artifact locations

        Raises:
            ConfigurationError: if ``scope`` names no known scope
        """
        selected = scope if isinstance(scope, Scope) else Scope.parse(scope)
        if selected is None:
            raise ConfigurationError(f"Unknown scope: {scope!r}")

        locations: list[Path] = []
        for artifact in artifacts:
            if artifact.scope and Scope.parse(artifact.scope) is None:
                logger.warning(
                    f"Ignoring artifact {artifact.coordinates or artifact.location} "
                    f"with unrecognized scope '{artifact.scope}'"
                )
                continue
            if Scope.parse(artifact.scope) is not selected:
                continue
            if artifact.location is None:
                continue
            location = Path(artifact.location)
            if not location.exists():
                logger.debug(f"Skipping {artifact.coordinates or location}: {location} does not exist")
                continue
            locations.append(location)

        logger.debug(f"Resolved {len(locations)} '{selected.value}' artifact locations")
        return locations
