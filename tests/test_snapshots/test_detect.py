"""Tests for snapshot parser detection."""

from groupvote.snapshots import (
    detect_parser,
    detect_parser_by_content,
    get_all_parsers,
    get_supported_formats,
)
from groupvote.snapshots.collection import CollectionExportParser
from groupvote.snapshots.native import NativeSnapshotParser


class TestDetectParser:
    def test_registered_parsers(self):
        assert get_all_parsers() == [NativeSnapshotParser, CollectionExportParser]

    def test_by_filename(self):
        assert isinstance(detect_parser("a.groupvote.json"), NativeSnapshotParser)
        assert isinstance(detect_parser("a.collection.json"), CollectionExportParser)
        assert detect_parser("a.json") is None

    def test_supported_formats(self):
        text = get_supported_formats()
        assert "friday-dinner.groupvote.json" in text
        assert "date-night.collection.json" in text


class TestDetectParserByContent:
    def test_detects_native(self, native_json):
        parser = detect_parser_by_content(native_json, "upload.json")
        assert isinstance(parser, NativeSnapshotParser)

    def test_detects_collection(self, collection_json):
        parser = detect_parser_by_content(collection_json, "upload.json")
        assert isinstance(parser, CollectionExportParser)

    def test_returns_none_for_other_json(self):
        assert detect_parser_by_content(b'{"hello": "world"}', "upload.json") is None

    def test_returns_none_for_empty_content(self):
        assert detect_parser_by_content(b"", "empty.json") is None
