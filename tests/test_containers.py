import shutil
import tempfile
import unittest
from pathlib import Path

from mutagen.flac import FLAC
from mutagen.id3 import ID3
from mutagen.mp4 import MP4
from mutagen.oggvorbis import OggVorbis

from serato_tags import containers
from serato_tags.errors import CapabilityError
from serato_tags.formats import Capability
from serato_tags.models import Color, Version
from serato_tags.tags import Analysis, Autotags, Markers, Markers2, Overview
from serato_tags.tags.markers import EntryType, Marker
from serato_tags.tags.markers2 import BpmLockEntry, CueEntry

AUDIO_DIR = Path(__file__).parent / "data" / "audio"


class TestContainers(unittest.TestCase):
    def test_capability_from_extension(self) -> None:
        self.assertIs(containers.capability_for(Path("a.MP3")), Capability.ID3)
        self.assertIs(containers.capability_for(Path("a.flac")), Capability.FLAC)
        self.assertIs(containers.capability_for(Path("a.m4a")), Capability.MP4)
        self.assertIs(containers.capability_for(Path("a.ogg")), Capability.OGG)
        with self.assertRaises(ValueError):
            containers.capability_for(Path("a.txt"))

    def test_geob_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "track.mp3"
            path.write_bytes(b"\x00" * 256)
            self.assertIsNone(containers.read_tag(path, Analysis))

            containers.write_tag(path, Analysis(Version(2, 1)))
            overview = Overview(Version(1, 5), (bytes(range(16)),))
            containers.write_tag(path, overview)
            containers.write_tag(path, Analysis(Version(2, 2)))

            frames = ID3(path).getall("GEOB")
            self.assertEqual(sorted(frame.desc for frame in frames), ["Serato Analysis", "Serato Overview"])
            self.assertEqual(containers.read_payload(path, Analysis), b"\x02\x02")
            self.assertEqual(containers.read_tag(path, Analysis), Analysis(Version(2, 2)))
            self.assertEqual(containers.read_tag(path, Overview), overview)
            self.assertIsNone(containers.read_tag(path, Markers))

    def _copy(self, tmpdir: str, name: str) -> Path:
        path = Path(tmpdir) / name
        shutil.copy(AUDIO_DIR / name, path)
        return path

    def _round_trip(self, path: Path) -> None:
        self.assertIsNone(containers.read_tag(path, Analysis))
        autotags = Autotags(Version(1, 1), 128.0, -3.257, 0.0)
        markers2 = Markers2(
            Version(1, 1),
            Version(1, 1),
            (CueEntry(0, 1500, Color(0xCC, 0, 0), "Intro"), BpmLockEntry(True)),
        )
        containers.write_tag(path, Analysis(Version(2, 1)))
        containers.write_tag(path, autotags)
        containers.write_tag(path, markers2)
        containers.write_tag(path, Analysis(Version(2, 2)))
        self.assertEqual(containers.read_tag(path, Analysis), Analysis(Version(2, 2)))
        self.assertEqual(containers.read_tag(path, Autotags), autotags)
        self.assertEqual(containers.read_tag(path, Markers2), markers2)
        self.assertIsNone(containers.read_tag(path, Overview))

    def test_flac_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._copy(tmpdir, "silence.flac")
            self._round_trip(path)
            payload = FLAC(path)["SERATO_ANALYSIS"][0]
            self.assertEqual(payload, Analysis(Version(2, 2)).dump_flac())

    def test_mp4_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._copy(tmpdir, "silence.m4a")
            self._round_trip(path)
            atom = MP4(path).tags["----:com.serato.dj:analysisVersion"][0]
            self.assertEqual(bytes(atom), Analysis(Version(2, 2)).dump_mp4())

            cue = Marker(300, None, Color(0xCC, 0, 0), EntryType.CUE, False)
            markers = Markers(Version(2, 5), (cue,), Color(0xFF, 0, 0))
            containers.write_tag(path, markers)
            self.assertEqual(containers.read_tag(path, Markers), markers)

    def test_ogg_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._copy(tmpdir, "silence.ogg")
            self._round_trip(path)
            self.assertEqual(OggVorbis(path)["serato_analysis_ver"], ["AgI="])

    def test_missing_capability(self) -> None:
        with self.assertRaises(CapabilityError):
            containers.read_tag(Path("/nonexistent/track.flac"), Markers)
        with self.assertRaises(CapabilityError):
            containers.read_tag(Path("/nonexistent/track.ogg"), Markers)


if __name__ == "__main__":
    unittest.main()
