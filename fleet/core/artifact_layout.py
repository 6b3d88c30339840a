"""
Artifact Layout

Path conventions for a program's latest build output and for the
version-addressed archive of that output, plus the archiver that copies
one into the other.
"""

import shutil
from pathlib import Path
from typing import Optional

from fleet.constants import (
    ARTIFACT_BIN_NAME,
    ARTIFACT_ID_NAME,
    ARTIFACT_IDL_NAME,
    BUILD_DEPLOY_DIR,
    BUILD_IDL_DIR,
    CARGO_MANIFEST,
    PROGRAMS_DIR,
)
from fleet.exceptions import IoError
from fleet.logger import DeployLogger
from fleet.models.workspace import ArtifactPaths, ProgramPaths


class ArtifactLayout:
    """Pure path computation over the build-output and artifact roots."""

    def __init__(self, workspace_root: Path, artifacts_root: Path, track_idl: bool = False):
        self.workspace_root = Path(workspace_root)
        self.artifacts_root = Path(artifacts_root)
        self.track_idl = track_idl

    def program_paths(self, program: str) -> ProgramPaths:
        deploy_dir = self.workspace_root / BUILD_DEPLOY_DIR
        return ProgramPaths(
            bin=deploy_dir / f"{program}.so",
            id=deploy_dir / f"{program}-keypair.json",
            idl=self.workspace_root / BUILD_IDL_DIR / f"{program}.json",
        )

    def artifact_paths(self, program: str, version: str) -> ArtifactPaths:
        root = self.artifacts_root / program / version
        return ArtifactPaths(
            root=root,
            bin=root / ARTIFACT_BIN_NAME,
            id=root / ARTIFACT_ID_NAME,
            idl=root / ARTIFACT_IDL_NAME if self.track_idl else None,
        )

    def manifest_path(self, program: str) -> Path:
        return self.workspace_root / PROGRAMS_DIR / program / CARGO_MANIFEST


class ArtifactArchiver:
    """Copies fresh build output into its version directory."""

    def __init__(self, logger: Optional[DeployLogger] = None):
        self.logger = logger

    def copy(self, source: ProgramPaths, target: ArtifactPaths) -> None:
        """
        Copy binary, id and (when tracked) IDL into the archive.

        Files already copied stay in place if a later copy fails; a re-run
        overwrites them.

        Raises:
            IoError: On any directory creation or copy failure
        """
        pairs = [(source.bin, target.bin), (source.id, target.id)]
        if target.idl is not None:
            pairs.append((source.idl, target.idl))

        try:
            target.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoError(f"Could not create artifact directory {target.root}: {e}")

        for src, dst in pairs:
            try:
                shutil.copyfile(src, dst)
            except OSError as e:
                raise IoError(
                    f"Could not copy {src} to {dst}: {e}",
                    context="Fix the cause and re-run; existing artifact files are overwritten",
                )
            if self.logger:
                self.logger.log(f"Copied {src} -> {dst}")
