import struct
import tempfile
import unittest
from pathlib import Path

from serato_tags import database
from serato_tags.errors import InvalidDiscriminantError, TrailingDataError, TruncatedInputError


def field(name: bytes, data: bytes) -> bytes:
    return name + struct.pack(">I", len(data)) + data


def text(value: str) -> bytes:
    return value.encode("utf-16-be")


TRACK = field(
    b"otrk",
    field(b"ttyp", text("mp3"))
    + field(b"pfil", text("Music/track.mp3"))
    + field(b"tsng", text("Weekend"))
    + field(b"uadd", struct.pack(">I", 1700000000))
    + field(b"sbav", struct.pack(">H", 2))
    + field(b"bmis", b"\x01")
    + field(b"ulbl", struct.pack(">I", 0xFF99FF)),
)
DATABASE = field(b"vrsn", text("2.0/Serato Scratch LIVE Database")) + TRACK


class TestDatabase(unittest.TestCase):
    def test_parses_typed_fields(self) -> None:
        db = database.parse(DATABASE)
        self.assertEqual(db.version, "2.0/Serato Scratch LIVE Database")
        tracks = list(db.tracks())
        self.assertEqual(len(tracks), 1)
        track = tracks[0]
        self.assertEqual(track.get("pfil").value, "Music/track.mp3")
        self.assertEqual(track.get("uadd").value, 1700000000)
        self.assertEqual(track.get("sbav").value, 2)
        self.assertIs(track.get("bmis").value, True)
        self.assertEqual(track.get("ulbl").value, 0xFF99FF)
        self.assertIsNone(track.get("tart"))
        self.assertEqual(db.track_paths(), ["Music/track.mp3"])

    def test_unknown_prefix_is_raw(self) -> None:
        db = database.parse(field(b"zzzz", b"\x01\x02"))
        self.assertEqual(db.fields[0].value, b"\x01\x02")

    def test_dump_round_trip(self) -> None:
        self.assertEqual(database.parse(DATABASE).dump(), DATABASE)

    def test_truncated_field(self) -> None:
        with self.assertRaises(TruncatedInputError):
            database.parse(DATABASE[:-1])

    def test_bool_must_be_zero_or_one(self) -> None:
        with self.assertRaises(InvalidDiscriminantError):
            database.parse(field(b"bmis", b"\x02"))

    def test_integer_length_must_match(self) -> None:
        with self.assertRaises(TrailingDataError):
            database.parse(field(b"uadd", b"\x00\x00\x00\x00\x00"))

    def test_parse_file_and_record(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "database V2"
            path.write_bytes(DATABASE)
            record = database.parse_file(path).to_record()
        self.assertEqual(record["version"], "2.0/Serato Scratch LIVE Database")
        self.assertEqual(record["fields"][1]["name"], "otrk")


if __name__ == "__main__":
    unittest.main()
