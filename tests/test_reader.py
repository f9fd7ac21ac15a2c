import unittest

from serato_tags.errors import FillerMismatchError, TrailingDataError, TruncatedInputError
from serato_tags.models import Version
from serato_tags.reader import ByteReader


class TestByteReader(unittest.TestCase):
    def test_reads_big_endian_fields(self) -> None:
        reader = ByteReader(b"\x01\x00\x02\x00\x00\x00\x03\x42\xf0\x00\x00abc\x00")
        self.assertEqual(reader.u8(), 1)
        self.assertEqual(reader.be_u16(), 2)
        self.assertEqual(reader.be_u32(), 3)
        self.assertEqual(reader.be_f32(), 120.0)
        self.assertEqual(reader.cstring(), b"abc")
        self.assertTrue(reader.at_end())
        reader.finish()

    def test_truncation_reports_offset(self) -> None:
        reader = ByteReader(b"\x00\x01\x02")
        reader.u8()
        with self.assertRaises(TruncatedInputError) as ctx:
            reader.be_u32("count")
        self.assertEqual(ctx.exception.offset, 1)
        self.assertIn("count", str(ctx.exception))

    def test_missing_terminator_is_truncation(self) -> None:
        with self.assertRaises(TruncatedInputError):
            ByteReader(b"abc").cstring()

    def test_expect_matches_exactly(self) -> None:
        reader = ByteReader(b"\x7f\x7f\x7f\x7e")
        with self.assertRaises(FillerMismatchError):
            reader.expect(b"\x7f\x7f\x7f\x7f")

    def test_finish_rejects_trailing_bytes(self) -> None:
        reader = ByteReader(b"\x00\x01")
        reader.u8()
        with self.assertRaises(TrailingDataError) as ctx:
            reader.finish()
        self.assertEqual(ctx.exception.offset, 1)

    def test_sub_reader_offsets_are_absolute(self) -> None:
        reader = ByteReader(b"\x00\x00\x01\x02")
        reader.take(2)
        block = reader.sub_reader(2)
        block.u8()
        self.assertEqual(block.offset, 3)
        self.assertTrue(reader.at_end())


class TestVersion(unittest.TestCase):
    def test_round_trip_all_byte_pairs(self) -> None:
        for major in range(256):
            for minor in (0, 1, 5, 127, 128, 255):
                data = bytes((major, minor))
                self.assertEqual(Version.take(ByteReader(data)).dump(), data)

    def test_needs_two_bytes(self) -> None:
        with self.assertRaises(TruncatedInputError):
            Version.take(ByteReader(b"\x01"))

    def test_str(self) -> None:
        self.assertEqual(str(Version(2, 5)), "2.5")


if __name__ == "__main__":
    unittest.main()
