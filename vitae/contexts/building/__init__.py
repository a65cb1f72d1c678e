"""
Building Context

Responsibilities:
- Stages static assets into the output directory
- Runs the build pipeline (assets -> data -> documents -> PDF)
- Coalesces rebuild triggers so builds never overlap
- Watches sources and serves the output directory in watch mode

Owns: Output directory layout, build sequencing, watch mode
Never: Renders HTML itself, talks to the browser directly
"""

from vitae.contexts.building.asset_stager import AssetManifest, StagingResult, stage_assets
from vitae.contexts.building.coordinator import BuildCoordinator, BuildState
from vitae.contexts.building.exceptions import AssetCopyError
from vitae.contexts.building.pipeline import BuildPaths, BuildResult, build_pdf_only, build_site
from vitae.contexts.building.preview_server import PreviewServer
from vitae.contexts.building.watcher import FileWatcher, default_watch_patterns

__all__ = [
    "AssetCopyError",
    "AssetManifest",
    "BuildCoordinator",
    "BuildPaths",
    "BuildResult",
    "BuildState",
    "FileWatcher",
    "PreviewServer",
    "StagingResult",
    "build_pdf_only",
    "build_site",
    "default_watch_patterns",
    "stage_assets",
]
