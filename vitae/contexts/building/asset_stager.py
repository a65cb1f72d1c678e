"""
Asset Staging

Copies static assets (stylesheets, scripts, images, vendor bundles, icons and
documents) from the project root into the output directory.

Volatile entries are replaced on every build. Stable entries are copied once
and then left alone.
"""

import asyncio
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vitae.contexts.building.exceptions import AssetCopyError
from vitae.contexts.building.logger import _log_debug, _log_info, _log_success

load_dotenv()
ASSETS_CONFIG_PATH = Path(
    os.getenv("ASSETS_CONFIG_PATH", str(Path(__file__).parent / "assets.yaml"))
)


@dataclass
class AssetManifest:
    """Lists of asset paths (relative to the project root) to stage."""

    volatile: List[str] = field(default_factory=list)
    stable: List[str] = field(default_factory=list)

    @classmethod
    def load(cls, config_path: Path = None) -> "AssetManifest":
        """
        Load the asset lists from YAML.

        Args:
            config_path: YAML file with `volatile` and `stable` lists
                        (default: ASSETS_CONFIG_PATH)
        """
        config = OmegaConf.load(config_path or ASSETS_CONFIG_PATH)
        config_dict = OmegaConf.to_container(config, resolve=True)
        return cls(
            volatile=list(config_dict.get("volatile") or []),
            stable=list(config_dict.get("stable") or []),
        )


@dataclass
class StagingResult:
    """
    Outcome of one staging pass.

    Attributes:
        copied: Entries copied during this pass
        kept: Stable entries already present in the output directory
        skipped: Entries whose source does not exist
    """

    copied: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def _copy(source: Path, destination: Path) -> None:
    if source.is_dir():
        shutil.copytree(source, destination)
    else:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)


def _stage_entry(entry: str, source: Path, destination: Path, replace: bool) -> None:
    try:
        if replace:
            _remove(destination)
        _copy(source, destination)
    except OSError as e:
        raise AssetCopyError(
            f"Failed to copy asset '{entry}' to {destination}", path=source, original_error=e
        ) from e


def stage_assets(
    source_root: Union[str, Path],
    dist_dir: Union[str, Path],
    manifest: Optional[AssetManifest] = None,
) -> StagingResult:
    """
    Copy static assets into the output directory.

    Args:
        source_root: Project root that asset entries are relative to
        dist_dir: Output directory
        manifest: Asset lists (default: loaded from ASSETS_CONFIG_PATH)

    Returns:
        StagingResult describing what was copied, kept and skipped

    Raises:
        AssetCopyError: If an existing source cannot be copied
    """
    source_root = Path(source_root)
    dist_dir = Path(dist_dir)
    manifest = manifest or AssetManifest.load()
    result = StagingResult()

    _log_info("Copying static assets")

    for entry in manifest.volatile:
        source = source_root / entry
        if not source.exists():
            _log_debug(f"  Skipped {entry} (no source)")
            result.skipped.append(entry)
            continue
        _stage_entry(entry, source, dist_dir / entry, replace=True)
        _log_debug(f"  Copied {entry}")
        result.copied.append(entry)

    for entry in manifest.stable:
        source = source_root / entry
        destination = dist_dir / entry
        if destination.exists():
            _log_debug(f"  Kept {entry} (already staged)")
            result.kept.append(entry)
            continue
        if not source.exists():
            _log_debug(f"  Skipped {entry} (no source)")
            result.skipped.append(entry)
            continue
        _stage_entry(entry, source, destination, replace=False)
        _log_debug(f"  Copied {entry} (initial)")
        result.copied.append(entry)

    _log_success(
        f"Assets staged: {len(result.copied)} copied, {len(result.kept)} kept, "
        f"{len(result.skipped)} skipped"
    )
    return result


async def stage_assets_async(
    source_root: Union[str, Path],
    dist_dir: Union[str, Path],
    manifest: Optional[AssetManifest] = None,
) -> StagingResult:
    """Async variant of stage_assets(); copying runs off the event loop."""
    return await asyncio.to_thread(stage_assets, source_root, dist_dir, manifest)
