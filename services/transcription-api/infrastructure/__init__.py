"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .ffmpeg_tools import FFmpegTranscoder, FFprobeDurationProbe
from .memory_store import InMemoryTranscriptionStore
from .openai_transcriber import OpenAIWhisperTranscriber

__all__ = [
    "AssemblyAITranscriber",
    "FFmpegTranscoder",
    "FFprobeDurationProbe",
    "InMemoryTranscriptionStore",
    "OpenAIWhisperTranscriber",
]
