"""Deployment version resolution"""

import re
import tomllib
from pathlib import Path
from typing import Optional

from fleet.exceptions import ManifestReadError

SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


def is_semver(version: str) -> bool:
    return bool(SEMVER_PATTERN.match(version))


def read_manifest_version(manifest_path: Path) -> str:
    """
    Read [package].version from a Cargo manifest.

    Raises:
        ManifestReadError: Manifest missing, unparsable or without a version
    """
    manifest_path = Path(manifest_path)
    try:
        with open(manifest_path, "rb") as f:
            manifest = tomllib.load(f)
    except FileNotFoundError:
        raise ManifestReadError(
            f"Program manifest not found: {manifest_path}",
            context="Pass --version explicitly or check the program name",
        )
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ManifestReadError(f"Could not parse {manifest_path}: {e}")

    version = manifest.get("package", {}).get("version")
    if not isinstance(version, str):
        raise ManifestReadError(f"No [package] version declared in {manifest_path}")
    if not is_semver(version):
        raise ManifestReadError(f"Invalid version '{version}' in {manifest_path}")
    return version


def resolve(explicit: Optional[str], manifest_path: Path) -> str:
    """
    Resolve the deployment version.

    An explicit version is returned verbatim; otherwise the manifest is read.
    """
    if explicit:
        return explicit
    return read_manifest_version(manifest_path)
