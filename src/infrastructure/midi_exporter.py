import logging
from pathlib import Path

from midiutil import MIDIFile

from config import (
    BEATS_PER_QUARTER,
    GOLDEN_NOTE_VOLUME,
    MAX_MIDI_VALUE,
    MELODY_INSTRUMENT,
    NORMAL_NOTE_VOLUME,
    TONE_ZERO_MIDI_PITCH,
)
from domain.models import Song
from domain.notes import NoteType, SungNote
from infrastructure.errors import MidiConversionError

logger = logging.getLogger(__name__)


def tone_to_pitch(tone: int) -> int:
    """Converte o tom do UltraStar (0 = C4) em nota MIDI."""
    return max(0, min(MAX_MIDI_VALUE, TONE_ZERO_MIDI_PITCH + tone))


class MIDIExporter:
    """Gera e salva um arquivo MIDI com a melodia da música."""

    def build(self, song: Song) -> MIDIFile:
        """Criar o objeto `MIDIFile` a partir das notas cantadas."""
        if song.bpm <= 0:
            raise MidiConversionError(f'BPM inválido para MIDI: {song.bpm}')

        midi = MIDIFile(1, deinterleave=False)

        track = 0
        channel = 0
        # `gap` em ms convertido para semínimas no andamento da música
        start_offset: float = song.gap / 1000.0 * song.bpm / 60.0

        midi.addTrackName(track=track, time=0, trackName=self._latin1(song.title))
        midi.addTempo(track=track, time=0, tempo=song.bpm)
        midi.addProgramChange(
            tracknum=track,
            channel=channel,
            time=0,
            program=MELODY_INSTRUMENT,
        )

        exported = 0
        for note in song.sung_notes:
            # Notas livres não têm altura definida
            if note.note_type is NoteType.FREESTYLE or note.note_length <= 0:
                continue

            time: float = start_offset + note.beat_number / BEATS_PER_QUARTER
            midi.addNote(
                track=track,
                channel=channel,
                pitch=tone_to_pitch(note.note_tone),
                time=time,
                duration=note.note_length / BEATS_PER_QUARTER,
                volume=self._volume(note),
            )
            if note.lyric.strip():
                midi.addText(track=track, time=time, text=self._latin1(note.lyric))
            exported += 1

        logger.debug('%d notas exportadas para MIDI', exported)
        return midi

    def save(self, song: Song, file_path: Path) -> None:
        """Criar o objeto `MIDIFile` e o salvar no disco."""
        midi: MIDIFile = self.build(song)
        try:
            with file_path.open('wb') as output_file:
                midi.writeFile(output_file)
        except OSError as e:
            raise MidiConversionError(f'Não foi possível gravar {file_path}: {e}') from e

    def _volume(self, note: SungNote) -> int:
        if note.note_type is NoteType.GOLDEN:
            return GOLDEN_NOTE_VOLUME
        return NORMAL_NOTE_VOLUME

    def _latin1(self, text: str) -> str:
        # Eventos de texto MIDI só aceitam ISO-8859-1
        return text.encode('latin-1', errors='replace').decode('latin-1')
