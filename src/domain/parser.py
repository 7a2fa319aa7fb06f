import logging

from domain.header import HeaderParser, HeaderSerializer, SongHeader
from domain.models import Song
from domain.note_stream import NoteStreamParser, NoteStreamSerializer
from domain.notes import Note

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Divide o texto em linhas, aceitando `\\n` ou `\\r\\n`."""
    return [line.removesuffix('\r') for line in text.split('\n')]


class SongParser:
    """Facade que combina o cabeçalho e a sequência de notas em um `Song`."""

    def __init__(self) -> None:
        self.header_parser: HeaderParser = HeaderParser()
        self.note_parser: NoteStreamParser = NoteStreamParser()

    def parse(self, text: str) -> Song:
        lines: list[str] = split_lines(text)

        header: SongHeader = self.header_parser.parse(lines)
        notes: list[Note] = self.note_parser.parse(lines, relative=header.relative)

        logger.debug(
            'Música %r analisada: %d notas (relativa=%s)',
            header.title,
            len(notes),
            header.relative,
        )

        return Song(
            title=header.title,
            bpm=header.bpm,
            gap=header.gap,
            artist=header.artist,
            mp3=header.mp3,
            video=header.video,
            edition=header.edition,
            genre=header.genre,
            year=header.year,
            language=header.language,
            video_gap=header.video_gap,
            notes=tuple(notes),
        )


class SongSerializer:
    """Gera o texto do arquivo, sempre com batidas absolutas."""

    def __init__(self) -> None:
        self.header_serializer: HeaderSerializer = HeaderSerializer()
        self.note_serializer: NoteStreamSerializer = NoteStreamSerializer()

    def serialize(self, song: Song) -> str:
        lines: list[str] = self.header_serializer.format(song)
        lines.extend(self.note_serializer.format(song.notes))
        return '\n'.join(lines) + '\n'


def parse_song(text: str) -> Song:
    return SongParser().parse(text)


def serialize_song(song: Song) -> str:
    return SongSerializer().serialize(song)
