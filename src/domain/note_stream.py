import logging
from collections.abc import Callable, Iterable, Iterator

from config import HEADER_PREFIX, TERMINATOR
from domain.errors import MalformedNoteLineError, SongParseError, UnknownNoteTypeError
from domain.header import parse_int
from domain.notes import LineBreak, Note, NoteType, SungNote

logger = logging.getLogger(__name__)

NoteBuilder = Callable[[NoteType, int, list[str]], Note]


def resolve_relative_offsets(notes: Iterable[Note]) -> list[Note]:
    """Converte batidas relativas em absolutas.

    Cada nota é deslocada pelo acumulado das quebras anteriores; a batida
    relativa de uma quebra só passa a valer para as notas seguintes.
    """
    counter = 0
    resolved: list[Note] = []

    for note in notes:
        resolved.append(note.offset(counter))
        if isinstance(note, LineBreak):
            counter += note.beat_number

    return resolved


class NoteStreamParser:
    """Converte as linhas de nota em objetos `Note` usando Dispatch Table."""

    def __init__(self) -> None:
        self.dispatch_table: dict[NoteType, NoteBuilder] = self._build_dispatch_table()

    def parse(self, lines: Iterable[str], relative: bool = False) -> list[Note]:
        """Analisa todas as linhas de nota até o terminador.

        Linhas inválidas são descartadas sem interromper o documento.
        """
        notes: list[Note] = []

        for line in self._note_lines(lines):
            try:
                notes.append(self.parse_line(line))
            except SongParseError as e:
                logger.debug('Linha de nota descartada %r: %s', line, e)

        if relative:
            notes = resolve_relative_offsets(notes)

        return notes

    def parse_line(self, line: str) -> Note:
        """Analisa uma única linha (sem espaços iniciais)."""
        tokens: list[str] = line.split(' ')

        marker: str = tokens[0]
        try:
            note_type = NoteType(marker)
        except ValueError:
            raise UnknownNoteTypeError(marker) from None

        beat_number: int = parse_int(self._token(tokens, 1, 'beat_number'), 'beat_number')

        builder: NoteBuilder = self.dispatch_table[note_type]
        return builder(note_type, beat_number, tokens)

    def _note_lines(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            stripped: str = line.lstrip()
            if stripped.startswith(TERMINATOR):
                return
            if not stripped or stripped.startswith(HEADER_PREFIX):
                continue
            yield stripped

    def _build_dispatch_table(self) -> dict[NoteType, NoteBuilder]:
        """Construir a tabela de mapeamento Tipo -> Função."""
        table: dict[NoteType, NoteBuilder] = {
            NoteType.LINE_BREAK: self._build_line_break,
        }

        for note_type in (NoteType.NORMAL, NoteType.GOLDEN, NoteType.FREESTYLE):
            table[note_type] = self._build_sung_note

        return table

    def _build_line_break(
        self,
        _note_type: NoteType,
        beat_number: int,
        _tokens: list[str],
    ) -> LineBreak:
        return LineBreak(beat_number=beat_number)

    def _build_sung_note(
        self,
        note_type: NoteType,
        beat_number: int,
        tokens: list[str],
    ) -> SungNote:
        note_length: int = parse_int(self._token(tokens, 2, 'note_length'), 'note_length')
        note_tone: int = parse_int(
            self._token(tokens, 3, 'note_tone'), 'note_tone', signed=True
        )

        return SungNote(
            beat_number=beat_number,
            note_type=note_type,
            note_length=note_length,
            note_tone=note_tone,
            lyric=' '.join(tokens[4:]),
        )

    def _token(self, tokens: list[str], index: int, field: str) -> str:
        if index >= len(tokens):
            raise MalformedNoteLineError(field)
        return tokens[index]


class NoteStreamSerializer:
    """Escreve as notas na ordem canônica dos campos."""

    def format_note(self, note: Note) -> str:
        match note:
            case LineBreak():
                return f'{note.note_type} {note.beat_number}'
            case SungNote():
                return (
                    f'{note.note_type} {note.beat_number} {note.note_length} '
                    f'{note.note_tone} {note.lyric}'
                )
            case _:
                raise TypeError(f'Nota não suportada: {note!r}')

    def format(self, notes: Iterable[Note]) -> list[str]:
        lines: list[str] = [self.format_note(note) for note in notes]
        lines.append(TERMINATOR)
        return lines
