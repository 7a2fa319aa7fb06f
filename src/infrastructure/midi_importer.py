import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import mido  # pyright: ignore[reportMissingTypeStubs]

from config import (
    BEATS_PER_QUARTER,
    DEFAULT_BPM,
    GOLDEN_NOTE_VOLUME,
    LINE_BREAK_MIN_REST,
    TONE_ZERO_MIDI_PITCH,
)
from domain.models import Song
from domain.notes import LineBreak, Note, NoteType, SungNote
from infrastructure.errors import MidiConversionError

logger = logging.getLogger(__name__)

LYRIC_MESSAGE_TYPES: Final[frozenset[str]] = frozenset({'lyrics', 'text'})


@dataclass
class NoteEvent:
    start_ticks: int
    duration_ticks: int
    pitch: int
    velocity: int


class MIDIImporter:
    """Converte arquivos MIDI em `Song`, forçando monofonia."""

    def load(self, file_path: Path, title: str | None = None) -> Song:
        """Carrega um arquivo MIDI e retorna a melodia como `Song`."""
        try:
            mid: mido.MidiFile = mido.MidiFile(filename=file_path)
        except (OSError, EOFError, ValueError) as e:
            raise MidiConversionError(f'Não foi possível ler {file_path}: {e}') from e

        tpb: int = mid.ticks_per_beat
        bpm: float = self._get_initial_bpm(mid)
        lyrics: dict[int, str] = self._collect_lyrics(mid)

        raw_events: list[NoteEvent] = self._parse_track_events(mid)
        processed_events: list[NoteEvent] = self._resolve_monophony(events=raw_events)

        song_title: str = title if title is not None else file_path.stem
        if not processed_events:
            logger.warning('Nenhuma nota encontrada em %s', file_path)
            return Song(title=song_title, bpm=bpm, gap=0)

        origin: int = processed_events[0].start_ticks
        gap: int = round(origin / tpb * 60000.0 / bpm)
        notes: list[Note] = self._transpile_to_notes(
            events=processed_events,
            tpb=tpb,
            origin=origin,
            lyrics=lyrics,
        )

        logger.info('%d notas importadas de %s', len(notes), file_path)
        return Song(title=song_title, bpm=bpm, gap=gap, notes=tuple(notes))

    def _get_initial_bpm(self, mid: mido.MidiFile) -> float:
        """Escaneia as faixas em busca da primeira mensagem `set_tempo`."""
        for track in mid.tracks:
            for msg in track:
                if msg.type == 'set_tempo' and msg.tempo > 0:
                    return round(mido.tempo2bpm(msg.tempo), 2)
        return float(DEFAULT_BPM)

    def _collect_lyrics(self, mid: mido.MidiFile) -> dict[int, str]:
        """Mapeia tick absoluto -> sílaba (eventos `lyrics` têm prioridade)."""
        lyrics: dict[int, str] = {}
        texts: dict[int, str] = {}

        for track in mid.tracks:
            curr_ticks = 0
            for msg in track:
                curr_ticks += msg.time
                if msg.type not in LYRIC_MESSAGE_TYPES:
                    continue
                target = lyrics if msg.type == 'lyrics' else texts
                # Quebras de linha não são válidas dentro de uma linha de nota
                text: str = msg.text.replace('\r', '').replace('\n', '')
                target.setdefault(curr_ticks, text)

        return {**texts, **lyrics}

    def _parse_track_events(self, mid: mido.MidiFile) -> list[NoteEvent]:
        """Extrai eventos lineares de todas as faixas."""
        events = []

        for track in mid.tracks:
            curr_ticks = 0
            active_notes: dict[int, tuple[int, int]] = {}

            for msg in track:
                curr_ticks += msg.time

                is_note_on = msg.type == 'note_on' and msg.velocity > 0
                is_note_off = msg.type == 'note_off' or (
                    msg.type == 'note_on' and msg.velocity == 0
                )

                if is_note_on:
                    if msg.note not in active_notes:
                        active_notes[msg.note] = (curr_ticks, msg.velocity)

                elif is_note_off and msg.note in active_notes:
                    start, vel = active_notes.pop(msg.note)
                    duration = curr_ticks - start
                    if duration > 0:
                        events.append(
                            NoteEvent(
                                start_ticks=start,
                                duration_ticks=duration,
                                pitch=msg.note,
                                velocity=vel,
                            )
                        )

        return events

    def _resolve_monophony(self, events: list[NoteEvent]) -> list[NoteEvent]:
        """Ordena eventos e trata sobreposições.

        Estratégia: Prioridade de melodia (Nota mais aguda) -> Truncar sobreposições.
        """
        events.sort(key=lambda x: (x.start_ticks, -x.pitch))

        unique_events: list[NoteEvent] = []
        last_start = -1

        for note in events:
            if note.start_ticks > last_start:
                unique_events.append(note)
                last_start = note.start_ticks

        for curr, nxt in zip(unique_events, unique_events[1:]):
            delta = nxt.start_ticks - curr.start_ticks
            curr.duration_ticks = min(curr.duration_ticks, delta)

        return unique_events

    def _transpile_to_notes(
        self,
        events: list[NoteEvent],
        tpb: int,
        origin: int,
        lyrics: dict[int, str],
    ) -> list[Note]:
        """Converte eventos limpos em notas com batidas absolutas."""
        notes: list[Note] = []
        prev_end: int | None = None

        for event in events:
            beat: int = self._ticks_to_beats(event.start_ticks - origin, tpb)
            length: int = max(1, self._ticks_to_beats(event.duration_ticks, tpb))

            if prev_end is not None and beat - prev_end >= LINE_BREAK_MIN_REST:
                notes.append(LineBreak(beat_number=prev_end))

            notes.append(
                SungNote(
                    beat_number=beat,
                    note_type=self._note_type(event),
                    note_length=length,
                    note_tone=event.pitch - TONE_ZERO_MIDI_PITCH,
                    lyric=lyrics.get(event.start_ticks, ''),
                )
            )
            prev_end = beat + length

        return notes

    def _note_type(self, event: NoteEvent) -> NoteType:
        # Notas exportadas como douradas usam o volume mais alto
        if event.velocity >= GOLDEN_NOTE_VOLUME:
            return NoteType.GOLDEN
        return NoteType.NORMAL

    def _ticks_to_beats(self, ticks: int, tpb: int) -> int:
        return round(ticks * BEATS_PER_QUARTER / tpb)
