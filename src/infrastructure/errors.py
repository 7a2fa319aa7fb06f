class SongFileError(OSError):
    """Falha de leitura ou escrita do arquivo, distinta de erros de formato."""


class MidiConversionError(Exception):
    """Falha ao converter entre `Song` e arquivo MIDI."""
