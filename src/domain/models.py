from dataclasses import dataclass, field

from config import BEATS_PER_QUARTER
from domain.notes import LineBreak, Note, SungNote


@dataclass(frozen=True)
class Song:
    """Música do UltraStar: cabeçalho e sequência de notas com tempo absoluto."""

    title: str
    bpm: float
    gap: int
    artist: str | None = None
    mp3: str | None = None
    video: str | None = None
    edition: str | None = None
    genre: str | None = None
    year: str | None = None
    language: str | None = None
    video_gap: int | None = None
    notes: tuple[Note, ...] = field(default=())

    @property
    def sung_notes(self) -> list[SungNote]:
        return [note for note in self.notes if isinstance(note, SungNote)]

    @property
    def lines(self) -> list[list[SungNote]]:
        """Agrupa as notas cantadas em linhas separadas pelas quebras."""
        lines: list[list[SungNote]] = [[]]
        for note in self.notes:
            if isinstance(note, LineBreak):
                lines.append([])
            elif isinstance(note, SungNote):
                lines[-1].append(note)

        return [line for line in lines if line]

    def beat_to_seconds(self, beat: float) -> float:
        """Converte uma batida absoluta em segundos desde o início do áudio."""
        if self.bpm <= 0:
            raise ValueError(f'BPM deve ser positivo: {self.bpm}')
        seconds_per_beat: float = 60.0 / (self.bpm * BEATS_PER_QUARTER)
        return self.gap / 1000.0 + beat * seconds_per_beat

    def lyrics_text(self) -> str:
        """Texto da letra, uma linha por frase."""
        return '\n'.join(
            ''.join(note.lyric for note in line) for line in self.lines
        )
