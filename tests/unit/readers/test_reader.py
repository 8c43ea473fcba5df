import gzip
import json
import pytest
from cloudtrail_streamer.readers.reader import RecordReader
from cloudtrail_streamer.utils.serializer import Serializer
from cloudtrail_streamer.utils.exceptions import DecodeError

TEST_DATA = b"""
    {"Records": [
        {"foo": "bar"},
        {"key": {"subkey": "value"}}
    ]}
"""


class TestRecordReader:
    """Test cases for the RecordReader."""

    @pytest.fixture
    def reader(self):
        return RecordReader()

    def test_read_gzip_log_file(self, reader):
        """Test decoding a gzip compressed log file with gzip content type."""
        records = reader.read(gzip.compress(TEST_DATA), "application/x-gzip")

        assert len(records) == 2
        assert Serializer().serialize(records[0]) == b'{"foo":"bar"}'
        assert records[1] == {"key": {"subkey": "value"}}

    def test_read_gzip_without_metadata(self, reader):
        """Test that gzip bodies are detected even without content metadata."""
        records = reader.read(gzip.compress(TEST_DATA))

        assert len(records) == 2

    def test_read_gzip_with_content_encoding(self, reader):
        records = reader.read(gzip.compress(TEST_DATA), "application/json", "gzip")

        assert len(records) == 2

    def test_read_plain_json(self, reader):
        records = reader.read(TEST_DATA, "application/json")

        assert records == [{"foo": "bar"}, {"key": {"subkey": "value"}}]

    def test_read_plain_json_with_gzip_content_type(self, reader):
        """Test that a mislabelled plain JSON object still decodes."""
        records = reader.read(TEST_DATA, "application/x-gzip")

        assert len(records) == 2

    def test_read_is_idempotent(self, reader):
        body = gzip.compress(TEST_DATA)

        assert reader.read(body) == reader.read(body)

    def test_read_preserves_order(self, reader):
        body = json.dumps({"Records": [{"n": i} for i in range(50)]}).encode()

        records = reader.read(body)

        assert [r["n"] for r in records] == list(range(50))

    def test_missing_records_key_yields_empty_list(self, reader):
        assert reader.read(b'{"other": []}') == []

    def test_null_records_yields_empty_list(self, reader):
        assert reader.read(b'{"Records": null}') == []

    def test_non_array_records_yields_empty_list(self, reader):
        assert reader.read(b'{"Records": "nope"}') == []

    def test_empty_records_array(self, reader):
        assert reader.read(gzip.compress(b'{"Records": []}')) == []

    def test_invalid_json_raises(self, reader):
        with pytest.raises(DecodeError) as exc_info:
            reader.read(b'{"Records": [')

        assert exc_info.value.kind == "decode"
        assert exc_info.value.cause is not None

    def test_invalid_json_inside_gzip_raises(self, reader):
        with pytest.raises(DecodeError):
            reader.read(gzip.compress(b"not json"))

    def test_truncated_gzip_raises(self, reader):
        body = gzip.compress(TEST_DATA)

        with pytest.raises(DecodeError):
            reader.read(body[: len(body) // 2])

    def test_corrupt_gzip_raises(self, reader):
        with pytest.raises(DecodeError):
            reader.read(b"\x1f\x8b" + b"\x00" * 30)

    def test_top_level_array_raises(self, reader):
        with pytest.raises(DecodeError):
            reader.read(b'[{"foo": "bar"}]')

    def test_non_object_record_raises(self, reader):
        with pytest.raises(DecodeError) as exc_info:
            reader.read(b'{"Records": [{"foo": "bar"}, 42]}')

        assert "Records[1]" in str(exc_info.value)

    def test_invalid_utf8_raises(self, reader):
        with pytest.raises(DecodeError):
            reader.read(b'{"Records": ["\xff\xfe\xfa"]}')

    def test_empty_body_raises(self, reader):
        with pytest.raises(DecodeError):
            reader.read(b"")
