"""
Tests for record normalizers.
"""

import json

import pytest

from clefview.core.exceptions import MalformedEntryError
from clefview.core.limits import DEFAULT_LEVEL, DEFAULT_TIMESTAMP, MAX_JSON_DEPTH
from clefview.parsers import (
    NormalizerRegistry,
    decode_line,
    normalize_record,
    parse_line,
    registry,
)
from clefview.parsers.compact import CompactNormalizer
from clefview.parsers.verbose import VerboseNormalizer


class TestCompactNormalizer:
    """Tests for the CLEF normalizer."""

    @pytest.fixture
    def normalizer(self):
        return CompactNormalizer()

    def test_full_record(self, normalizer):
        """Test every reserved key is mapped."""
        entry = normalizer.normalize({
            "@t": "2024-01-01T10:15:34.789Z",
            "@m": "Disk full on C:",
            "@mt": "Disk full on {Drive}",
            "@l": "Error",
            "@x": "System.IO.IOException: disk full",
            "@i": "0badcafe",
            "@r": ["C:"],
            "Drive": "C:",
        })
        assert entry.timestamp == "2024-01-01T10:15:34.789Z"
        assert entry.level == "Error"
        assert entry.message == "Disk full on C:"
        assert entry.template == "Disk full on {Drive}"
        assert entry.exception == "System.IO.IOException: disk full"
        assert entry.event_id == "0badcafe"
        assert entry.renderings == ["C:"]
        assert entry.properties == {"Drive": "C:"}

    def test_missing_level_defaults_to_information(self, normalizer):
        """Test absent @l becomes Information."""
        entry = normalizer.normalize({"@t": "2024-01-01T00:00:00Z", "@mt": "Started"})
        assert entry.level == "Information"
        assert entry.level == DEFAULT_LEVEL

    def test_template_stands_in_for_message(self, normalizer):
        """Test @mt is used as the message when @m is absent."""
        entry = normalizer.normalize({"@t": "2024-01-01T00:00:00Z", "@mt": "User {Name} logged in", "Name": "bob"})
        assert entry.message == "User {Name} logged in"
        assert entry.template is None

    def test_message_without_template(self, normalizer):
        """Test @m alone is enough."""
        entry = normalizer.normalize({"@m": "Plain text"})
        assert entry.message == "Plain text"
        assert entry.template is None

    def test_missing_timestamp_defaulted(self, normalizer):
        """Test absent @t is defaulted rather than rejected."""
        entry = normalizer.normalize({"@mt": "No time"})
        assert entry.timestamp == DEFAULT_TIMESTAMP
        assert entry.parsed_timestamp is None

    def test_neither_message_nor_template(self, normalizer):
        """Test records without text are malformed."""
        with pytest.raises(MalformedEntryError):
            normalizer.normalize({"@t": "2024-01-01T00:00:00Z", "@l": "Error"})

    def test_non_string_message(self, normalizer):
        """Test a non-string message is malformed."""
        with pytest.raises(MalformedEntryError):
            normalizer.normalize({"@mt": {"nested": True}})

    def test_renderings_must_be_list(self, normalizer):
        """Test @r with the wrong shape is malformed."""
        with pytest.raises(MalformedEntryError):
            normalizer.normalize({"@mt": "x", "@r": "oops"})

    def test_canonical_keys_not_in_properties(self, normalizer):
        """Test reserved keys never leak into properties."""
        entry = normalizer.normalize({
            "@t": "2024-01-01T00:00:00Z", "@mt": "x", "@l": "Debug",
            "@x": "trace", "@i": "1", "@r": [], "User": "ann",
        })
        assert entry.properties == {"User": "ann"}

    def test_no_properties_is_none(self, normalizer):
        """Test an event without properties stores None."""
        entry = normalizer.normalize({"@t": "2024-01-01T00:00:00Z", "@mt": "x"})
        assert entry.properties is None

    def test_escaped_property_names(self, normalizer):
        """Test @@-prefixed names are unescaped."""
        entry = normalizer.normalize({"@mt": "x", "@@t": "literal", "Plain": 1})
        assert entry.properties == {"@t": "literal", "Plain": 1}
        assert entry.timestamp == DEFAULT_TIMESTAMP

    def test_structured_property_values(self, normalizer):
        """Test nested property values are kept as-is."""
        entry = normalizer.normalize({
            "@mt": "x",
            "Ctx": {"Region": "eu", "Ids": [1, 2]},
            "Flag": False,
            "Missing": None,
            "Ratio": 0.5,
        })
        assert entry.properties == {
            "Ctx": {"Region": "eu", "Ids": [1, 2]},
            "Flag": False,
            "Missing": None,
            "Ratio": 0.5,
        }

    def test_event_id_stringified(self, normalizer):
        """Test numeric event ids become opaque strings."""
        entry = normalizer.normalize({"@mt": "x", "@i": 1234})
        assert entry.event_id == "1234"

    def test_deterministic(self, normalizer, sample_compact_logs):
        """Test normalizing the same record twice gives equal entries."""
        for line in sample_compact_logs:
            record = json.loads(line)
            assert normalizer.normalize(record) == normalizer.normalize(record)

    def test_does_not_mutate_record(self, normalizer):
        """Test the raw record is left untouched."""
        record = {"@mt": "x", "@@odd": 1, "A": [1]}
        snapshot = json.loads(json.dumps(record))
        normalizer.normalize(record)
        assert record == snapshot

    def test_can_normalize(self, normalizer):
        """Test detection by reserved keys."""
        assert normalizer.can_normalize({"@t": "x"})
        assert normalizer.can_normalize({"@mt": "x"})
        assert not normalizer.can_normalize({"message": "x"})


class TestVerboseNormalizer:
    """Tests for the long-name normalizer."""

    @pytest.fixture
    def normalizer(self):
        return VerboseNormalizer()

    def test_full_record(self, normalizer):
        """Test every canonical field is mapped."""
        entry = normalizer.normalize({
            "timestamp": "2024-01-02T08:00:05Z",
            "level": "Error",
            "message": "Connection refused",
            "template": "Connection {State}",
            "exception": "ConnectionError",
            "eventId": "7",
            "properties": {"State": "refused"},
        })
        assert entry.level == "Error"
        assert entry.message == "Connection refused"
        assert entry.template == "Connection {State}"
        assert entry.exception == "ConnectionError"
        assert entry.event_id == "7"
        assert entry.properties == {"State": "refused"}

    def test_unknown_keys_folded(self, normalizer):
        """Test extra top-level keys join properties; nested wins on clash."""
        entry = normalizer.normalize({
            "message": "m",
            "Host": "web-1",
            "Name": "outer",
            "properties": {"Name": "inner"},
        })
        assert entry.properties == {"Host": "web-1", "Name": "inner"}

    def test_defaults(self, normalizer):
        """Test missing level and timestamp are defaulted."""
        entry = normalizer.normalize({"message": "m"})
        assert entry.level == DEFAULT_LEVEL
        assert entry.timestamp == DEFAULT_TIMESTAMP

    def test_template_only(self, normalizer):
        """Test template stands in for the message."""
        entry = normalizer.normalize({"template": "T {X}"})
        assert entry.message == "T {X}"
        assert entry.template is None

    def test_properties_must_be_object(self, normalizer):
        """Test a non-object properties field is malformed."""
        with pytest.raises(MalformedEntryError):
            normalizer.normalize({"message": "m", "properties": [1, 2]})

    def test_reads_back_exported_entries(self, normalizer, mixed_entries):
        """Test LogEntry.to_dict output normalizes to the same entry."""
        for entry in mixed_entries:
            assert normalizer.normalize(entry.to_dict()) == entry


class TestEncodingEquivalence:
    """The same event in both encodings normalizes to the same entry."""

    def test_same_event(self):
        """Test timestamp, level, message and properties agree."""
        compact = normalize_record({
            "@t": "2024-01-01T00:00:00Z",
            "@m": "Order 7 shipped",
            "@mt": "Order {Id} shipped",
            "@l": "Information",
            "Id": 7,
        })
        verbose = normalize_record({
            "timestamp": "2024-01-01T00:00:00Z",
            "level": "Information",
            "message": "Order 7 shipped",
            "template": "Order {Id} shipped",
            "properties": {"Id": 7},
        })
        assert compact.timestamp == verbose.timestamp
        assert compact.level == verbose.level
        assert compact.message == verbose.message
        assert compact.properties == verbose.properties
        assert compact == verbose


class TestNormalizerRegistry:
    """Tests for registry dispatch."""

    def test_builtin_encodings(self):
        """Test both encodings are registered, compact first."""
        assert registry.list_encodings() == ["compact", "verbose"]

    def test_detect(self):
        """Test dispatch on record shape."""
        assert registry.detect({"@mt": "x"}).name == "compact"
        assert registry.detect({"message": "x"}).name == "verbose"
        assert registry.detect({"foo": "bar"}) is None

    def test_unrecognized_record(self):
        """Test records matching no encoding are malformed."""
        with pytest.raises(MalformedEntryError):
            normalize_record({"foo": "bar"})

    def test_not_a_mapping(self):
        """Test non-object records are malformed."""
        with pytest.raises(MalformedEntryError):
            normalize_record(["@mt", "x"])

    def test_forced_encoding(self):
        """Test an explicit encoding skips detection."""
        entry = normalize_record({"message": "m", "@odd": 1}, encoding="verbose")
        assert entry.properties == {"@odd": 1}

    def test_unknown_encoding(self):
        """Test an unknown encoding name is rejected."""
        with pytest.raises(MalformedEntryError):
            normalize_record({"message": "m"}, encoding="xml")

    def test_empty_registry(self):
        """Test a fresh registry knows nothing."""
        empty = NormalizerRegistry()
        assert empty.list_encodings() == []
        assert empty.get_normalizer("compact") is None


class TestParseLine:
    """Tests for line decoding."""

    def test_compact_line(self, sample_compact_logs):
        """Test a CLEF line end to end."""
        entry = parse_line(sample_compact_logs[2])
        assert entry.level == "Error"
        assert entry.message == "Disk full on {Drive}"
        assert entry.properties == {"Drive": "C:"}

    def test_verbose_line(self, sample_verbose_logs):
        """Test a verbose line end to end."""
        entry = parse_line(sample_verbose_logs[0])
        assert entry.message == "Service started"
        assert entry.properties == {"Service": "api"}

    def test_invalid_json(self):
        """Test undecodable lines are malformed."""
        with pytest.raises(MalformedEntryError):
            parse_line("{not json")

    def test_json_not_object(self):
        """Test JSON arrays are malformed."""
        with pytest.raises(MalformedEntryError):
            parse_line('["a", "b"]')

    def test_too_deep(self):
        """Test excessive nesting is rejected."""
        nested = {"@mt": "x"}
        deep = nested
        for _ in range(MAX_JSON_DEPTH + 5):
            deep["child"] = {}
            deep = deep["child"]
        with pytest.raises(MalformedEntryError):
            parse_line(json.dumps(nested))

    def test_too_long(self):
        """Test oversized lines are rejected."""
        line = json.dumps({"@mt": "x" * 200})
        with pytest.raises(MalformedEntryError):
            decode_line(line, max_length=100)

    def test_normalizer_parse_line(self):
        """Test a single normalizer can decode lines itself."""
        entry = CompactNormalizer().parse_line('  {"@mt": "hello"}  ')
        assert entry.message == "hello"

    def test_normalize_stream_skips_malformed(self):
        """Test stream normalization drops bad records."""
        records = [{"@mt": "a"}, {"@l": "Error"}, {"@mt": "b"}]
        entries = list(CompactNormalizer().normalize_stream(iter(records)))
        assert [e.message for e in entries] == ["a", "b"]
