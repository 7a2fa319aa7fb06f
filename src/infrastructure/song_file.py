import logging
from pathlib import Path

from config import DEFAULT_ENCODING
from domain.models import Song
from domain.parser import SongParser, SongSerializer
from infrastructure.errors import SongFileError

logger = logging.getLogger(__name__)


class SongFileReader:
    """Lê um arquivo `.txt` do UltraStar do disco."""

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self.encoding: str = encoding
        self.parser: SongParser = SongParser()

    def read_text(self, file_path: Path) -> str:
        try:
            with file_path.open('r', encoding=self.encoding, newline='') as input_file:
                return input_file.read()
        except UnicodeDecodeError as e:
            raise SongFileError(f'Codificação inválida em {file_path}: {e}') from e
        except OSError as e:
            raise SongFileError(f'Não foi possível ler {file_path}: {e}') from e

    def load(self, file_path: Path) -> Song:
        """Lê e analisa o arquivo; erros de formato propagam como `SongParseError`."""
        text: str = self.read_text(file_path)
        song: Song = self.parser.parse(text)
        logger.info('Arquivo carregado: %s (%d notas)', file_path, len(song.notes))
        return song


class SongFileWriter:
    """Grava um `Song` no formato de texto."""

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self.encoding: str = encoding
        self.serializer: SongSerializer = SongSerializer()

    def save(self, song: Song, file_path: Path) -> None:
        text: str = self.serializer.serialize(song)
        try:
            with file_path.open('w', encoding=self.encoding, newline='\n') as output_file:
                output_file.write(text)
        except OSError as e:
            raise SongFileError(f'Não foi possível gravar {file_path}: {e}') from e
        logger.info('Arquivo gravado: %s', file_path)


def load_song(file_path: Path | str) -> Song:
    return SongFileReader().load(Path(file_path))
