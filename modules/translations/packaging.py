"""Language package archives and the policy deciding when to rebuild them.

An archive is a disposable zip of the manifest and every language document,
named after the dataset version. It can always be regenerated from disk.
"""

import os
import tempfile
import time
import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()

MANIFEST_ARCHIVE_NAME = "language-list.json"
LANGUAGES_ARCHIVE_DIR = "languages"


@dataclass(frozen=True)
class ArchiveInfo:
    """A built archive on disk."""

    file_name: str
    version: str
    file_size: int
    path: Path


def archive_name(version: str) -> str:
    return f"language-{version}.zip"


class ArchiveBuilder:
    """Builds ``language-<version>.zip`` archives in the downloads directory.

    Attributes:
        manifest_path: Manifest file added as ``language-list.json``.
        languages_dir: Directory copied recursively under ``languages/``.
        downloads_dir: Directory receiving the archives.
    """

    def __init__(self, manifest_path: Path, languages_dir: Path, downloads_dir: Path):
        self.manifest_path = Path(manifest_path)
        self.languages_dir = Path(languages_dir)
        self.downloads_dir = Path(downloads_dir)

    def archive_path(self, version: str) -> Path:
        return self.downloads_dir / archive_name(version)

    def build(self, version: str) -> ArchiveInfo:
        """Rebuild the archive for ``version`` from the current files.

        Any archive previously built for the same version is replaced.
        Entries are added in sorted order.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            OSError: On any write failure.
        """
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        target = self.archive_path(version)
        if target.exists():
            target.unlink()

        fd, tmp_name = tempfile.mkstemp(
            dir=self.downloads_dir, prefix=f".{target.name}.", suffix=".tmp"
        )
        os.close(fd)
        try:
            with zipfile.ZipFile(tmp_name, "w", zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
                zf.write(self.manifest_path, MANIFEST_ARCHIVE_NAME)
                if self.languages_dir.exists():
                    for path in sorted(self.languages_dir.rglob("*")):
                        if path.is_file() and not path.name.startswith("."):
                            relative = path.relative_to(self.languages_dir).as_posix()
                            zf.write(path, f"{LANGUAGES_ARCHIVE_DIR}/{relative}")
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        info = ArchiveInfo(
            file_name=target.name,
            version=version,
            file_size=target.stat().st_size,
            path=target,
        )
        logger.info(
            "language_package_created",
            file_name=info.file_name,
            version=version,
            file_size=info.file_size,
        )
        return info

    def get(self, version: str) -> Optional[ArchiveInfo]:
        """Info of the archive for ``version``, or None if it was never built."""
        target = self.archive_path(version)
        if not target.exists():
            return None
        return ArchiveInfo(
            file_name=target.name,
            version=version,
            file_size=target.stat().st_size,
            path=target,
        )

    def find(self, file_name: str) -> Optional[Path]:
        """Resolve a downloadable file name inside the downloads directory.

        Names with path components or hidden names are rejected.
        """
        if not file_name or file_name != Path(file_name).name or file_name.startswith("."):
            return None
        path = self.downloads_dir / file_name
        return path if path.is_file() else None


class PackagePolicy(ABC):
    """Decides whether a version bump rebuilds the archive right away."""

    name = "abstract"

    @abstractmethod
    def should_build(self) -> bool:
        """Return True if the bump in progress should rebuild the archive."""

    def record_build(self) -> None:
        """Called after every successful physical build."""


class ImmediatePackagePolicy(PackagePolicy):
    """Every bump rebuilds the archive before returning."""

    name = "immediate"

    def should_build(self) -> bool:
        return True


class ManualPackagePolicy(PackagePolicy):
    """Bumps never rebuild; archives come from explicit package requests."""

    name = "manual"

    def should_build(self) -> bool:
        return False


class DebouncedPackagePolicy(PackagePolicy):
    """Rebuild at most once per ``min_interval`` seconds.

    Skipped bumps leave the current version without an archive until the
    next build. POST /download/create-package rebuilds it explicitly, and
    GET /download/latest builds it on demand.
    """

    name = "debounced"

    def __init__(self, min_interval: float, clock: Callable[[], float] = time.monotonic):
        self.min_interval = min_interval
        self.clock = clock
        self._last_build: Optional[float] = None

    def should_build(self) -> bool:
        if self._last_build is None:
            return True
        return self.clock() - self._last_build >= self.min_interval

    def record_build(self) -> None:
        self._last_build = self.clock()


def create_package_policy(name: str, min_interval: float = 30.0) -> PackagePolicy:
    """Build the policy named by configuration.

    Raises:
        ValueError: If ``name`` is not a known policy.
    """
    if name == "immediate":
        return ImmediatePackagePolicy()
    if name == "manual":
        return ManualPackagePolicy()
    if name == "debounced":
        return DebouncedPackagePolicy(min_interval=min_interval)
    raise ValueError(f"Unknown package policy: {name}")
