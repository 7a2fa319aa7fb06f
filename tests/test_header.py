import unittest

from domain.errors import (
    BpmParseError,
    IntegerParseError,
    InvalidRelativeFlagError,
    MissingFieldError,
)
from domain.header import HeaderParser, HeaderSerializer, format_bpm, parse_bpm
from domain.models import Song


class TestHeaderParser(unittest.TestCase):
    def setUp(self):
        self.parser = HeaderParser()

    def test_parse_all_fields(self):
        header = self.parser.parse(
            [
                '#ARTIST:Queen',
                '#TITLE:Bohemian Rhapsody',
                '#MP3:Queen - Bohemian Rhapsody.mp3',
                '#VIDEO:Queen - Bohemian Rhapsody.avi',
                '#EDITION:SingStar',
                '#GENRE:Rock',
                '#YEAR:1975',
                '#LANGUAGE:English',
                '#BPM:286,19',
                '#GAP:1160',
                '#VIDEOGAP:3',
            ]
        )

        self.assertEqual(header.artist, 'Queen')
        self.assertEqual(header.title, 'Bohemian Rhapsody')
        self.assertEqual(header.mp3, 'Queen - Bohemian Rhapsody.mp3')
        self.assertEqual(header.video, 'Queen - Bohemian Rhapsody.avi')
        self.assertEqual(header.edition, 'SingStar')
        self.assertEqual(header.genre, 'Rock')
        self.assertEqual(header.year, '1975')
        self.assertEqual(header.language, 'English')
        self.assertEqual(header.bpm, 286.19)
        self.assertEqual(header.gap, 1160)
        self.assertEqual(header.video_gap, 3)
        self.assertFalse(header.relative)

    def test_order_does_not_matter(self):
        header = self.parser.parse(['#GAP:5', '#BPM:100', '#TITLE:Song'])

        self.assertEqual(header.title, 'Song')
        self.assertEqual(header.bpm, 100.0)
        self.assertEqual(header.gap, 5)

    def test_first_occurrence_wins(self):
        header = self.parser.parse(
            ['#TITLE:First', '#TITLE:Second', '#BPM:100', '#BPM:200', '#GAP:0']
        )

        self.assertEqual(header.title, 'First')
        self.assertEqual(header.bpm, 100.0)

    def test_leading_whitespace_is_stripped_and_value_kept_verbatim(self):
        header = self.parser.parse(
            ['   #TITLE: Spaced Title ', '\t#BPM:100', '#GAP:0']
        )

        self.assertEqual(header.title, ' Spaced Title ')

    def test_missing_optional_fields_are_none(self):
        header = self.parser.parse(['#TITLE:Song', '#BPM:100', '#GAP:0'])

        self.assertIsNone(header.artist)
        self.assertIsNone(header.mp3)
        self.assertIsNone(header.video)
        self.assertIsNone(header.video_gap)

    def test_videogap_is_not_confused_with_video(self):
        header = self.parser.parse(
            ['#TITLE:Song', '#BPM:100', '#GAP:0', '#VIDEOGAP:12']
        )

        self.assertIsNone(header.video)
        self.assertEqual(header.video_gap, 12)

    def test_missing_title(self):
        with self.assertRaises(MissingFieldError) as ctx:
            self.parser.parse(['#BPM:100', '#GAP:0'])

        self.assertEqual(ctx.exception.field, 'title')

    def test_missing_bpm(self):
        with self.assertRaises(MissingFieldError) as ctx:
            self.parser.parse(['#TITLE:Song', '#GAP:0'])

        self.assertEqual(ctx.exception.field, 'bpm')

    def test_missing_gap(self):
        with self.assertRaises(MissingFieldError) as ctx:
            self.parser.parse(['#TITLE:Song', '#BPM:100'])

        self.assertEqual(ctx.exception.field, 'gap')

    def test_bpm_with_comma(self):
        header = self.parser.parse(['#TITLE:Song', '#BPM:100,5', '#GAP:0'])

        self.assertEqual(header.bpm, 100.5)

    def test_invalid_bpm(self):
        with self.assertRaises(BpmParseError):
            self.parser.parse(['#TITLE:Song', '#BPM:fast', '#GAP:0'])

    def test_bpm_must_be_finite(self):
        for value in ('1e400', '-1e400'):
            with self.subTest(value=value):
                with self.assertRaises(BpmParseError):
                    self.parser.parse(['#TITLE:Song', f'#BPM:{value}', '#GAP:0'])

    def test_bpm_rejects_non_ascii_digits(self):
        with self.assertRaises(BpmParseError):
            self.parser.parse(['#TITLE:Song', '#BPM:١٠٠', '#GAP:0'])

    def test_invalid_gap(self):
        for value in ('abc', '-10', '1.5', '', '١٢', '１２'):
            with self.subTest(value=value):
                with self.assertRaises(IntegerParseError) as ctx:
                    self.parser.parse(['#TITLE:Song', '#BPM:100', f'#GAP:{value}'])

                self.assertEqual(ctx.exception.field, 'gap')

    def test_invalid_videogap(self):
        with self.assertRaises(IntegerParseError) as ctx:
            self.parser.parse(['#TITLE:Song', '#BPM:100', '#GAP:0', '#VIDEOGAP:x'])

        self.assertEqual(ctx.exception.field, 'video_gap')

    def test_relative_values(self):
        expected = {'yes': True, 'true': True, 'no': False, 'false': False}
        for value, relative in expected.items():
            with self.subTest(value=value):
                header = self.parser.parse(
                    ['#TITLE:Song', '#BPM:100', '#GAP:0', f'#RELATIVE:{value}']
                )

                self.assertEqual(header.relative, relative)

    def test_invalid_relative_value_fails(self):
        with self.assertRaises(InvalidRelativeFlagError) as ctx:
            self.parser.parse(['#TITLE:Song', '#BPM:100', '#GAP:0', '#RELATIVE:maybe'])

        self.assertEqual(ctx.exception.value, 'maybe')


class TestHeaderSerializer(unittest.TestCase):
    def test_fixed_order_and_omitted_fields(self):
        song = Song(
            title='Song',
            bpm=120.0,
            gap=500,
            artist='Artist',
            video='clip.mp4',
            language='German',
            video_gap=7,
        )

        lines = HeaderSerializer().format(song)

        self.assertEqual(
            lines,
            [
                '#ARTIST:Artist',
                '#TITLE:Song',
                '#LANGUAGE:German',
                '#BPM:120',
                '#GAP:500',
                '#VIDEO:clip.mp4',
                '#VIDEOGAP:7',
            ],
        )

    def test_format_bpm(self):
        self.assertEqual(format_bpm(100.5), '100,5')
        self.assertEqual(format_bpm(280.0), '280')
        self.assertEqual(format_bpm(parse_bpm('311,4')), '311,4')


if __name__ == '__main__':
    unittest.main()
