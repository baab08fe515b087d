"""Domain models for browser speech capture."""

from dataclasses import dataclass
from enum import Enum


class CaptureCapability(Enum):
    """Whether the host environment can capture speech."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class TranscriptPiece:
    """First alternative of a single recognition result."""

    transcript: str
    is_final: bool


@dataclass(frozen=True)
class Transcript:
    """Final and interim text assembled from one result batch."""

    final: str
    interim: str

    @property
    def display_text(self) -> str:
        """Text shown as the current original text."""
        return self.final + self.interim

    @property
    def finalized(self) -> str:
        """Trimmed final text; empty when nothing was finalized."""
        return self.final.strip()


def assemble_transcript(
    results: list[TranscriptPiece], result_index: int = 0
) -> Transcript:
    """Concatenate results from result_index onward into final and interim text."""
    final_parts: list[str] = []
    interim_parts: list[str] = []
    for piece in results[max(result_index, 0) :]:
        if piece.is_final:
            final_parts.append(piece.transcript)
        else:
            interim_parts.append(piece.transcript)
    return Transcript(final="".join(final_parts), interim="".join(interim_parts))
