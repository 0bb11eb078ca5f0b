"""ffprobe/ffmpeg implementations of the media tool interfaces."""

import asyncio
from pathlib import Path

from transcriber_common import setup_logging

from config import AudioEncoding, MediaToolsConfig
from exceptions import MediaConversionError, MediaProbeError

from .interfaces import MediaProbe, MediaTranscoder

logger = setup_logging()


class ToolTimeoutError(Exception):
    """Raised when an external tool exceeds its deadline."""

    def __init__(self, program: str, timeout: float):
        self.program = program
        self.timeout = timeout
        super().__init__(f"{program} did not finish within {timeout:g}s")


async def run_tool(args: list[str], timeout: float) -> tuple[int, bytes, bytes]:
    """
    Runs an external program from an argument vector, without a shell.

    Returns:
        Tuple of (return_code, stdout, stderr).

    Raises:
        ToolTimeoutError: If the program runs longer than timeout; it is killed.
        OSError: If the program cannot be started.

    A cancelled caller also kills the program, so nothing keeps writing
    into files that the caller is about to clean up.
    """
    proc = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        proc.kill()
        await proc.wait()
        raise ToolTimeoutError(args[0], timeout) from e
    except BaseException:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise
    return proc.returncode, stdout, stderr


def _seconds(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _tail(stderr: bytes, limit: int = 500) -> str:
    return stderr.decode("utf-8", errors="replace").strip()[-limit:]


class FFprobeDurationProbe(MediaProbe):
    """Reads the container duration with ffprobe."""

    def __init__(self, config: MediaToolsConfig):
        self._config = config

    async def probe_duration(self, path: Path) -> float:
        args = [
            self._config.ffprobe_path,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]
        try:
            code, stdout, stderr = await run_tool(args, self._config.timeout_seconds)
        except (OSError, ToolTimeoutError) as e:
            raise MediaProbeError(path.name, str(e), e) from e

        if code != 0:
            raise MediaProbeError(path.name, f"ffprobe exited with {code}: {_tail(stderr)}")

        raw = stdout.decode("utf-8", errors="replace").strip()
        try:
            duration = float(raw)
        except ValueError as e:
            raise MediaProbeError(path.name, f"unexpected ffprobe output {raw!r}", e) from e

        logger.info(
            "Media duration probed",
            extra={"file_name": path.name, "duration_seconds": duration},
        )
        return duration


class FFmpegTranscoder(MediaTranscoder):
    """Re-encodes audio with ffmpeg."""

    def __init__(self, config: MediaToolsConfig):
        self._config = config

    def build_args(
        self,
        source: Path,
        destination: Path,
        encoding: AudioEncoding,
        start_seconds: float | None = None,
        duration_seconds: float | None = None,
    ) -> list[str]:
        args = [self._config.ffmpeg_path, "-y", "-hide_banner", "-loglevel", "error"]
        # Seeking before -i is fast and exact for audio-only output
        if start_seconds is not None:
            args += ["-ss", _seconds(start_seconds)]
        args += ["-i", str(source)]
        if duration_seconds is not None:
            args += ["-t", _seconds(duration_seconds)]
        args += ["-vn", "-codec:a", encoding.codec, "-b:a", encoding.bitrate, str(destination)]
        return args

    async def transcode(
        self,
        source: Path,
        destination: Path,
        encoding: AudioEncoding,
        start_seconds: float | None = None,
        duration_seconds: float | None = None,
    ) -> None:
        args = self.build_args(source, destination, encoding, start_seconds, duration_seconds)
        try:
            code, _, stderr = await run_tool(args, self._config.timeout_seconds)
        except (OSError, ToolTimeoutError) as e:
            logger.exception("ffmpeg invocation failed", extra={"file_name": source.name})
            raise MediaConversionError(source.name, str(e), e) from e

        if code != 0:
            logger.error(
                "ffmpeg exited with an error",
                extra={"file_name": source.name, "return_code": code, "stderr": _tail(stderr)},
            )
            raise MediaConversionError(source.name, f"ffmpeg exited with {code}")

        logger.info(
            "Media transcoded",
            extra={
                "source": source.name,
                "destination": destination.name,
                "start_seconds": start_seconds,
                "duration_seconds": duration_seconds,
            },
        )
