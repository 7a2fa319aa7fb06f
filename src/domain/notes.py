from dataclasses import dataclass, replace
from enum import StrEnum
from typing import ClassVar, Self


class NoteType(StrEnum):
    """Tipos de nota; o valor é o marcador usado no arquivo."""

    NORMAL = ':'
    GOLDEN = '*'
    FREESTYLE = 'F'
    LINE_BREAK = '-'


@dataclass(frozen=True)
class Note:
    """Classe base para todos os itens da sequência de notas."""

    beat_number: int

    def offset(self, beats: int) -> Self:
        """Retorna uma cópia deslocada em `beats` batidas."""
        return replace(self, beat_number=self.beat_number + beats)


@dataclass(frozen=True)
class SungNote(Note):
    """Sílaba cantada (normal, dourada ou livre)."""

    note_type: NoteType
    note_length: int
    note_tone: int
    lyric: str

    def __post_init__(self) -> None:
        if self.note_type is NoteType.LINE_BREAK:
            raise ValueError('Quebra de linha deve ser representada por LineBreak')

    @property
    def end_beat(self) -> int:
        return self.beat_number + self.note_length


@dataclass(frozen=True)
class LineBreak(Note):
    """Quebra de linha da letra; não tem duração, tom nem texto."""

    note_type: ClassVar[NoteType] = NoteType.LINE_BREAK
