import logging
from dataclasses import replace
from pathlib import Path

from domain.models import Song
from domain.parser import SongParser, SongSerializer
from infrastructure.midi_exporter import MIDIExporter
from infrastructure.midi_importer import MIDIImporter
from infrastructure.song_file import SongFileReader, SongFileWriter

logger = logging.getLogger(__name__)


class SongController:
    def __init__(self) -> None:
        self.parser: SongParser = SongParser()
        self.serializer: SongSerializer = SongSerializer()
        self.reader: SongFileReader = SongFileReader()
        self.writer: SongFileWriter = SongFileWriter()
        self.exporter: MIDIExporter = MIDIExporter()
        self.importer: MIDIImporter = MIDIImporter()

    def parse_text(self, text: str) -> Song:
        """Analisa o texto de um arquivo já carregado."""
        return self.parser.parse(text)

    def to_text(self, song: Song) -> str:
        return self.serializer.serialize(song)

    def load_song(self, file_path: Path) -> Song:
        return self.reader.load(file_path)

    def save_song(self, song: Song, file_path: Path) -> None:
        self.writer.save(song, file_path)

    def normalize_file(self, source: Path, target: Path | None = None) -> Song:
        """Reescreve o arquivo no formato canônico, com batidas absolutas."""
        song: Song = self.load_song(source)
        destination: Path = target if target is not None else source
        self.save_song(song, destination)
        logger.info('Arquivo normalizado: %s -> %s', source, destination)
        return song

    def export_midi(self, source: Path, file_path: Path) -> Song:
        """Analisa o arquivo e exporta a melodia para MIDI."""
        song: Song = self.load_song(source)
        self.exporter.save(song=song, file_path=file_path)
        return song

    def import_midi(
        self,
        file_path: Path,
        target: Path,
        title: str | None = None,
        artist: str | None = None,
    ) -> Song:
        """Importa um arquivo MIDI e grava o resultado em formato de texto."""
        song: Song = self.importer.load(file_path, title=title)
        if artist is not None:
            song = replace(song, artist=artist)
        self.save_song(song, target)
        return song
