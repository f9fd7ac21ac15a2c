import base64
import unittest

from serato_tags import dump, parse
from serato_tags.errors import CapabilityError, FillerMismatchError, InvalidEncodingError
from serato_tags.formats import Capability, capabilities, container_key, dump_container, parse_container
from serato_tags.formats import envelope
from serato_tags.models import Version
from serato_tags.tags import TAG_KINDS, Analysis, Markers, Markers2, Overview


class TestEnvelope(unittest.TestCase):
    def test_wrap_layout(self) -> None:
        self.assertEqual(
            envelope.wrap("Serato Analysis", b"\x02\x01"),
            b"application/octet-stream\x00\x00Serato Analysis\x00\x02\x01",
        )

    def test_unwrap_checks_name(self) -> None:
        data = envelope.wrap("Serato Overview", b"\x01\x05")
        with self.assertRaises(FillerMismatchError):
            envelope.unwrap("Serato Analysis", data)

    def test_unwrap_checks_mime_type(self) -> None:
        with self.assertRaises(FillerMismatchError):
            envelope.unwrap("Serato Analysis", b"text/plain\x00\x00Serato Analysis\x00\x02\x01")

    def test_base64_lines(self) -> None:
        encoded = envelope.encode_base64(bytes(200))
        lines = encoded.split(b"\n")
        self.assertEqual([len(line) for line in lines[:-1]], [72] * (len(lines) - 1))
        self.assertEqual(envelope.decode_base64(encoded), bytes(200))

    def test_decode_tolerates_missing_padding_and_whitespace(self) -> None:
        self.assertEqual(envelope.decode_base64("AgE"), b"\x02\x01")
        self.assertEqual(envelope.decode_base64(b"Ag\r\nE=\n"), b"\x02\x01")

    def test_decode_single_leftover_character(self) -> None:
        self.assertEqual(envelope.decode_base64(b"AQIDB"), b"\x01\x02\x03\x04")

    def test_decode_rejects_garbage(self) -> None:
        with self.assertRaises(InvalidEncodingError):
            envelope.decode_base64("A*B!")
        with self.assertRaises(InvalidEncodingError):
            envelope.decode_base64("Ä")


class TestCapabilities(unittest.TestCase):
    def test_markers_has_no_text_comment_layout(self) -> None:
        self.assertEqual(capabilities(Markers), [Capability.ID3, Capability.MP4])
        self.assertEqual(container_key(Markers, "mp4"), "----:com.serato.dj:markers")
        with self.assertRaises(CapabilityError):
            container_key(Markers, Capability.FLAC)
        with self.assertRaises(TypeError):
            parse_container(Markers, "ogg", "")
        self.assertFalse(hasattr(Markers, "parse_flac"))

    def test_every_other_kind_supports_all_containers(self) -> None:
        for kind, tag_cls in TAG_KINDS.items():
            if tag_cls is Markers:
                continue
            with self.subTest(kind=kind):
                self.assertEqual(capabilities(tag_cls), list(Capability))

    def test_keys(self) -> None:
        self.assertEqual(container_key(Analysis, "id3"), "Serato Analysis")
        self.assertEqual(container_key(Analysis, "flac"), "SERATO_ANALYSIS")
        self.assertEqual(container_key(Analysis, "mp4"), "----:com.serato.dj:analysisVersion")
        self.assertEqual(container_key(Overview, "mp4"), "----:com.serato.dj:overview")
        self.assertEqual(container_key(Markers2, "flac"), "SERATO_MARKERS_V2")
        self.assertEqual(container_key(Markers2, "ogg"), "serato_markers2")

    def test_mp4_atoms_are_namespaced(self) -> None:
        for kind, tag_cls in TAG_KINDS.items():
            if Capability.MP4 in capabilities(tag_cls):
                self.assertTrue(tag_cls.MP4_ATOM.startswith("----:com.serato.dj:"), kind)


class TestContainerRoundTrip(unittest.TestCase):
    def test_id3_is_passthrough(self) -> None:
        tag = Analysis(Version(2, 1))
        self.assertEqual(dump(tag, "id3"), b"\x02\x01")
        self.assertEqual(parse("analysis", b"\x02\x01"), tag)

    def test_flac_envelope(self) -> None:
        tag = Analysis(Version(2, 1))
        text = tag.dump_flac()
        self.assertIsInstance(text, str)
        raw = base64.b64decode(text)
        self.assertEqual(raw, b"application/octet-stream\x00\x00Serato Analysis\x00\x02\x01")
        self.assertEqual(Analysis.parse_flac(text), tag)

    def test_mp4_envelope(self) -> None:
        tag = Overview(Version(1, 5), (bytes(16),) * 3)
        data = dump_container(tag, Capability.MP4)
        self.assertIsInstance(data, bytes)
        self.assertEqual(parse_container(Overview, Capability.MP4, data), tag)

    def test_ogg_has_no_envelope(self) -> None:
        tag = Analysis(Version(2, 1))
        self.assertEqual(tag.dump_ogg(), "AgE=")
        self.assertEqual(parse("analysis", "AgE=", "ogg"), tag)

    def test_flac_payload_for_other_tag_is_rejected(self) -> None:
        text = Analysis(Version(2, 1)).dump_flac()
        with self.assertRaises(FillerMismatchError):
            Overview.parse_flac(text)

    def test_id3_rejects_text(self) -> None:
        with self.assertRaises(TypeError):
            parse("analysis", "AgE=", "id3")

    def test_unknown_kind(self) -> None:
        with self.assertRaises(ValueError):
            parse("cues", b"\x02\x01")


if __name__ == "__main__":
    unittest.main()
