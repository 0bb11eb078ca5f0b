"""Tracking of temporary files created while serving one request."""

from pathlib import Path

from transcriber_common import setup_logging

logger = setup_logging()


class TempArtifacts:
    """
    Every temporary file a request owns.

    Files are registered before anything writes them, so a crash mid-write
    still leaves the path known. ``release`` removes one file as soon as it
    is no longer needed; ``cleanup`` removes whatever is left.
    """

    def __init__(self, *paths: Path):
        self._paths: list[Path] = []
        for path in paths:
            self.track(path)

    def track(self, path: Path) -> Path:
        if path not in self._paths:
            self._paths.append(path)
        return path

    def release(self, path: Path) -> None:
        """Deletes one tracked file now."""
        self._delete(path)
        if path in self._paths:
            self._paths.remove(path)

    def cleanup(self) -> None:
        """Deletes every file still tracked."""
        for path in list(self._paths):
            self.release(path)

    @property
    def pending(self) -> list[Path]:
        return list(self._paths)

    def __enter__(self) -> "TempArtifacts":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def _delete(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Temporary file removal failed", extra={"path": str(path)})
