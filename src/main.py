import argparse
import logging
import sys
from pathlib import Path

from application.controller import SongController
from domain.errors import SongParseError
from domain.models import Song
from infrastructure.errors import MidiConversionError, SongFileError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='usdx-txt',
        description='Lê, normaliza e converte arquivos de karaokê do UltraStar.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', default=False)
    commands = parser.add_subparsers(dest='command', required=True)

    normalize = commands.add_parser('normalize', help='reescreve no formato canônico')
    normalize.add_argument('source', type=Path)
    normalize.add_argument('-o', '--output', type=Path, default=None)

    info = commands.add_parser('info', help='mostra o cabeçalho e a letra')
    info.add_argument('source', type=Path)

    export_midi = commands.add_parser('export-midi', help='exporta a melodia em MIDI')
    export_midi.add_argument('source', type=Path)
    export_midi.add_argument('output', type=Path)

    import_midi = commands.add_parser('import-midi', help='cria um arquivo a partir de MIDI')
    import_midi.add_argument('source', type=Path)
    import_midi.add_argument('output', type=Path)
    import_midi.add_argument('--title', default=None)
    import_midi.add_argument('--artist', default=None)

    return parser


def describe(song: Song) -> str:
    lines: list[str] = [
        f'{song.artist or "?"} - {song.title}',
        f'BPM: {song.bpm}  GAP: {song.gap} ms',
        f'Notas: {len(song.sung_notes)}  Linhas: {len(song.lines)}',
    ]
    # Sem andamento válido não há como calcular a duração
    if song.sung_notes and song.bpm > 0:
        last = song.sung_notes[-1]
        lines.append(f'Duração: {song.beat_to_seconds(last.end_beat):.2f} s')
    lines.append('')
    lines.append(song.lyrics_text())
    return '\n'.join(lines)


def run(args: argparse.Namespace, controller: SongController) -> None:
    match args.command:
        case 'normalize':
            controller.normalize_file(args.source, args.output)
        case 'info':
            print(describe(controller.load_song(args.source)))
        case 'export-midi':
            controller.export_midi(args.source, args.output)
        case 'import-midi':
            controller.import_midi(
                args.source,
                args.output,
                title=args.title,
                artist=args.artist,
            )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(args, SongController())
    except (SongParseError, SongFileError, MidiConversionError) as e:
        logger.error('%s', e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
