import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from config import HEADER_PREFIX, HEADER_TAGS, HEADER_WRITE_ORDER, RELATIVE_VALUES
from domain.errors import (
    BpmParseError,
    IntegerParseError,
    InvalidRelativeFlagError,
    MissingFieldError,
)

if TYPE_CHECKING:
    from domain.models import Song

UNSIGNED_REGEX: Final[re.Pattern[str]] = re.compile(r'\+?\d+', re.ASCII)
SIGNED_REGEX: Final[re.Pattern[str]] = re.compile(r'[+-]?\d+', re.ASCII)
DECIMAL_REGEX: Final[re.Pattern[str]] = re.compile(
    r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?',
    re.ASCII,
)


def parse_int(value: str, field: str, *, signed: bool = False) -> int:
    """Converte `value` em inteiro, sem aceitar espaços ou separadores."""
    pattern = SIGNED_REGEX if signed else UNSIGNED_REGEX
    if not pattern.fullmatch(value):
        raise IntegerParseError(field=field, value=value)
    return int(value)


def parse_bpm(value: str) -> float:
    """Aceita `,` ou `.` como separador decimal."""
    normalized: str = value.replace(',', '.')
    if not DECIMAL_REGEX.fullmatch(normalized):
        raise BpmParseError(value)
    bpm: float = float(normalized)
    if not math.isfinite(bpm):
        raise BpmParseError(value)
    return bpm


def format_bpm(bpm: float) -> str:
    """Formata o BPM com `,` decimal, sem fração quando for inteiro."""
    text: str = str(int(bpm)) if bpm.is_integer() else repr(bpm)
    return text.replace('.', ',')


@dataclass(frozen=True)
class SongHeader:
    """Campos do cabeçalho já convertidos, incluindo a flag `#RELATIVE`."""

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
    relative: bool = False


class HeaderParser:
    """Extrai as linhas `#TAG:valor` de um documento."""

    def __init__(self) -> None:
        self.prefixes: dict[str, str] = {
            field: f'{HEADER_PREFIX}{tag}:' for field, tag in HEADER_TAGS.items()
        }

    def parse(self, lines: Iterable[str]) -> SongHeader:
        values: dict[str, str] = self._collect_values(lines)

        relative: bool = self._parse_relative(values.get('relative'))

        title: str | None = values.get('title')
        if title is None:
            raise MissingFieldError('title')

        raw_bpm: str | None = values.get('bpm')
        if raw_bpm is None:
            raise MissingFieldError('bpm')
        bpm: float = parse_bpm(raw_bpm)

        raw_gap: str | None = values.get('gap')
        if raw_gap is None:
            raise MissingFieldError('gap')
        gap: int = parse_int(raw_gap, 'gap')

        raw_video_gap: str | None = values.get('video_gap')
        video_gap: int | None = (
            parse_int(raw_video_gap, 'video_gap') if raw_video_gap is not None else None
        )

        return SongHeader(
            title=title,
            bpm=bpm,
            gap=gap,
            artist=values.get('artist'),
            mp3=values.get('mp3'),
            video=values.get('video'),
            edition=values.get('edition'),
            genre=values.get('genre'),
            year=values.get('year'),
            language=values.get('language'),
            video_gap=video_gap,
            relative=relative,
        )

    def _collect_values(self, lines: Iterable[str]) -> dict[str, str]:
        """Monta a tabela tag -> valor; a primeira ocorrência vence."""
        values: dict[str, str] = {}

        for line in lines:
            stripped: str = line.lstrip()
            if not stripped.startswith(HEADER_PREFIX):
                continue

            for field, prefix in self.prefixes.items():
                if field not in values and stripped.startswith(prefix):
                    values[field] = stripped[len(prefix) :]
                    break

        return values

    def _parse_relative(self, value: str | None) -> bool:
        if value is None:
            return False
        try:
            return RELATIVE_VALUES[value]
        except KeyError:
            raise InvalidRelativeFlagError(value) from None


class HeaderSerializer:
    """Escreve o cabeçalho na ordem usada pelos arquivos do UltraStar."""

    def format(self, song: 'Song') -> list[str]:
        lines: list[str] = []

        for field in HEADER_WRITE_ORDER:
            value = getattr(song, field)
            if value is None:
                continue

            text: str = format_bpm(value) if field == 'bpm' else str(value)
            lines.append(f'{HEADER_PREFIX}{HEADER_TAGS[field]}:{text}')

        return lines
