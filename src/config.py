from typing import Final

# Codificação padrão dos arquivos de música
DEFAULT_ENCODING: Final[str] = 'utf-8'

# Marcador de fim da sequência de notas
TERMINATOR: Final[str] = 'E'

# Prefixo das linhas de cabeçalho
HEADER_PREFIX: Final[str] = '#'

# Mapeamento de campos do modelo para as tags do cabeçalho
HEADER_TAGS: Final[dict[str, str]] = {
    'artist': 'ARTIST',
    'title': 'TITLE',
    'mp3': 'MP3',
    'video': 'VIDEO',
    'edition': 'EDITION',
    'genre': 'GENRE',
    'year': 'YEAR',
    'language': 'LANGUAGE',
    'bpm': 'BPM',
    'gap': 'GAP',
    'video_gap': 'VIDEOGAP',
    'relative': 'RELATIVE',
}

# Ordem de escrita do cabeçalho (compatível com os arquivos do UltraStar)
HEADER_WRITE_ORDER: Final[tuple[str, ...]] = (
    'artist',
    'title',
    'mp3',
    'edition',
    'genre',
    'year',
    'language',
    'bpm',
    'gap',
    'video',
    'video_gap',
)

# Valores aceitos para `#RELATIVE`
RELATIVE_VALUES: Final[dict[str, bool]] = {
    'yes': True,
    'true': True,
    'no': False,
    'false': False,
}

# Batidas da música por semínima (uma batida do UltraStar = 1/16)
BEATS_PER_QUARTER: Final[int] = 4

# Tom 0 corresponde ao C4 (MIDI 60)
TONE_ZERO_MIDI_PITCH: Final[int] = 60

# Valor máximo para dados MIDI (notas, volume, etc.)
MAX_MIDI_VALUE: Final[int] = 127

# Volumes usados na exportação MIDI
NORMAL_NOTE_VOLUME: Final[int] = 90
GOLDEN_NOTE_VOLUME: Final[int] = 120

# Instrumento da melodia exportada (General MIDI 53: Voice Oohs)
MELODY_INSTRUMENT: Final[int] = 53

# Pausa mínima (em batidas da música) para inserir uma quebra de linha na importação
LINE_BREAK_MIN_REST: Final[int] = 8

# Andamento usado quando o MIDI importado não tem `set_tempo`
DEFAULT_BPM: Final[int] = 120
