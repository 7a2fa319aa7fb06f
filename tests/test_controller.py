import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from application.controller import SongController
from main import main

DATA_DIR = Path(__file__).parent / 'data'


class TestSongController(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmp.name)
        self.controller = SongController()

    def tearDown(self):
        self.tmp.cleanup()

    def test_parse_and_serialize_text(self):
        text = (DATA_DIR / 'sample_song.txt').read_text(encoding='utf-8')

        song = self.controller.parse_text(text)

        self.assertEqual(self.controller.to_text(song), text)

    def test_normalize_relative_file(self):
        target = self.tmp_path / 'absolute.txt'

        self.controller.normalize_file(DATA_DIR / 'relative_song.txt', target)

        text = target.read_text(encoding='utf-8')
        self.assertNotIn('#RELATIVE', text)
        self.assertTrue(text.startswith('#ARTIST:Someone\n#TITLE:Relative Song\n'))

    def test_normalize_in_place(self):
        source = self.tmp_path / 'song.txt'
        source.write_text('#GAP:0\n#BPM:100\n#TITLE:Song\n: 0 1 0 a\nE\n', encoding='utf-8')

        self.controller.normalize_file(source)

        self.assertEqual(
            source.read_text(encoding='utf-8'),
            '#TITLE:Song\n#BPM:100\n#GAP:0\n: 0 1 0 a\nE\n',
        )

    def test_midi_round_trip_through_files(self):
        midi_path = self.tmp_path / 'melody.mid'
        text_path = self.tmp_path / 'melody.txt'

        self.controller.export_midi(DATA_DIR / 'relative_song.txt', midi_path)
        song = self.controller.import_midi(
            midi_path,
            text_path,
            title='Imported',
            artist='Someone',
        )

        self.assertEqual(song.artist, 'Someone')
        self.assertEqual(self.controller.load_song(text_path), song)
        self.assertEqual(len(song.sung_notes), 5)


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_normalize_command(self):
        target = self.tmp_path / 'out.txt'

        code = main(['normalize', str(DATA_DIR / 'sample_song.txt'), '-o', str(target)])

        self.assertEqual(code, 0)
        self.assertEqual(
            target.read_bytes(),
            (DATA_DIR / 'sample_song.txt').read_bytes(),
        )

    def test_info_command(self):
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(['info', str(DATA_DIR / 'sample_song.txt')])

        self.assertEqual(code, 0)
        self.assertIn('Test Artist - Test Song', output.getvalue())
        self.assertIn('Hello world', output.getvalue())

    def test_parse_error_returns_failure(self):
        source = self.tmp_path / 'broken.txt'
        source.write_text('#BPM:100\n#GAP:0\nE\n', encoding='utf-8')

        with self.assertLogs('main', level='ERROR'):
            code = main(['info', str(source)])

        self.assertEqual(code, 1)

    def test_missing_file_returns_failure(self):
        with self.assertLogs('main', level='ERROR'):
            code = main(['info', str(self.tmp_path / 'missing.txt')])

        self.assertEqual(code, 1)

    def _zero_bpm_song(self) -> Path:
        source = self.tmp_path / 'zero_bpm.txt'
        source.write_text('#TITLE:Song\n#BPM:0\n#GAP:0\n: 0 4 0 a\nE\n', encoding='utf-8')
        return source

    def test_info_with_zero_bpm(self):
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(['info', str(self._zero_bpm_song())])

        self.assertEqual(code, 0)
        self.assertIn('BPM: 0.0', output.getvalue())
        self.assertNotIn('Duração', output.getvalue())

    def test_export_midi_with_zero_bpm_returns_failure(self):
        target = self.tmp_path / 'zero_bpm.mid'

        with self.assertLogs('main', level='ERROR'):
            code = main(['export-midi', str(self._zero_bpm_song()), str(target)])

        self.assertEqual(code, 1)
        self.assertFalse(target.exists())


if __name__ == '__main__':
    unittest.main()
