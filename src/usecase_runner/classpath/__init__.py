"""Classpath assembly: scope resolution, sanitization and the import realm."""

from .realm import ClassRealm, RuntimeClasspathInjector, to_path_entry
from .resolver import ArtifactClasspathResolver
from .sanitizer import partition, sanitize, unique_entries

__all__ = [
    "ArtifactClasspathResolver",
    "ClassRealm",
    "RuntimeClasspathInjector",
    "partition",
    "sanitize",
    "to_path_entry",
    "unique_entries",
]
