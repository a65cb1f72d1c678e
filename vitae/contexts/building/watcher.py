"""
File Watcher

Polls watched files by modification time and reports changes. Used by watch
mode to trigger the build coordinator.
"""

import asyncio
import glob
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from dotenv import load_dotenv

from vitae.contexts.building.logger import _log_debug, _log_info

load_dotenv()
WATCH_INTERVAL_S = float(os.getenv("WATCH_INTERVAL_S", "0.5"))

PACKAGE_ROOT = Path(__file__).resolve().parents[2]

Snapshot = Dict[Path, float]


def default_watch_patterns(project_root: Union[str, Path], data_file: Union[str, Path]) -> List[str]:
    """Data files, templates and package sources that affect the build output."""
    data_dir = Path(project_root) / Path(data_file).parent
    return [
        str(data_dir / "**" / "*.json"),
        str(PACKAGE_ROOT / "**" / "*.jinja"),
        str(PACKAGE_ROOT / "**" / "*.yaml"),
        str(PACKAGE_ROOT / "**" / "*.py"),
    ]


def _is_excluded(path: Path, exclude: Sequence[Path]) -> bool:
    return any(path == root or root in path.parents for root in exclude)


class FileWatcher:
    """
    Polling watcher over glob patterns.

    Args:
        patterns: Glob patterns (recursive "**" allowed)
        on_change: Called with the sorted list of added, modified or removed paths
        interval_s: Poll interval
        exclude: Directories whose contents are never reported (e.g. the output dir)
    """

    def __init__(
        self,
        patterns: Iterable[str],
        on_change: Callable[[List[Path]], None],
        interval_s: float = WATCH_INTERVAL_S,
        exclude: Optional[Iterable[Union[str, Path]]] = None,
    ):
        self.patterns = list(patterns)
        self.on_change = on_change
        self.interval_s = interval_s
        self.exclude = [Path(p).resolve() for p in (exclude or [])]
        self._snapshot: Snapshot = {}

    def snapshot(self) -> Snapshot:
        """Current mtime of every watched file."""
        current: Snapshot = {}
        for pattern in self.patterns:
            for match in glob.glob(pattern, recursive=True):
                path = Path(match).resolve()
                if _is_excluded(path, self.exclude) or not path.is_file():
                    continue
                try:
                    current[path] = path.stat().st_mtime
                except OSError:
                    # Removed between glob and stat
                    continue
        return current

    @staticmethod
    def diff(previous: Snapshot, current: Snapshot) -> List[Path]:
        """Paths added, removed or modified between two snapshots."""
        changed = {p for p in current if previous.get(p) != current[p]}
        changed.update(p for p in previous if p not in current)
        return sorted(changed)

    def scan(self) -> List[Path]:
        """Take a new snapshot and return what changed since the last one."""
        current = self.snapshot()
        changed = self.diff(self._snapshot, current)
        self._snapshot = current
        return changed

    def prime(self) -> int:
        """Record the starting state without reporting it. Returns the file count."""
        self._snapshot = self.snapshot()
        return len(self._snapshot)

    async def run(self) -> None:
        """Poll until cancelled."""
        count = await asyncio.to_thread(self.prime)
        _log_info(f"Watching {count} files (every {self.interval_s}s)")
        while True:
            await asyncio.sleep(self.interval_s)
            changed = await asyncio.to_thread(self.scan)
            if changed:
                for path in changed:
                    _log_debug(f"  Changed: {path}")
                _log_info(f"{len(changed)} file(s) changed")
                self.on_change(changed)
