"""
Pytest fixtures for clefview tests.
"""

import json

import pytest

from clefview.core.models import LogEntry


# Sample log lines for each encoding

@pytest.fixture
def sample_compact_logs() -> list[str]:
    """Sample CLEF log lines."""
    return [
        '{"@t": "2024-01-01T10:15:32.123Z", "@mt": "Application {App} started", "App": "orders", "@r": []}',
        '{"@t": "2024-01-01T10:15:33.456Z", "@m": "Processing request 42", "@mt": "Processing request {Id}", "@l": "Debug", "Id": 42}',
        '{"@t": "2024-01-01T10:15:34.789Z", "@mt": "Disk full on {Drive}", "@l": "Error", "@x": "System.IO.IOException: disk full", "Drive": "C:"}',
        '{"@t": "2024-01-01T10:15:35.000Z", "@mt": "Cache miss", "@l": "Warning", "@i": "a1b2c3d4"}',
        '{"@t": "2024-01-01T10:15:36.111Z", "@mt": "Request completed in {Elapsed} ms", "Elapsed": 150.5}',
    ]


@pytest.fixture
def sample_verbose_logs() -> list[str]:
    """Sample verbose JSON log lines."""
    return [
        '{"timestamp": "2024-01-02T08:00:00Z", "level": "Information", "message": "Service started", "properties": {"Service": "api"}}',
        '{"timestamp": "2024-01-02T08:00:05Z", "level": "Error", "message": "Connection refused", "exception": "ConnectionError", "eventId": "7"}',
    ]


@pytest.fixture
def scenario_entries() -> list[LogEntry]:
    """Two entries a day apart, one Error and one Information."""
    return [
        LogEntry(level="Error", message="disk full", timestamp="2024-01-01T00:00:00Z"),
        LogEntry(level="Information", message="started", timestamp="2024-01-02T00:00:00Z"),
    ]


@pytest.fixture
def mixed_entries() -> list[LogEntry]:
    """Entries covering templates, exceptions, properties and a bad timestamp."""
    return [
        LogEntry(
            timestamp="2024-03-01T09:00:00Z",
            level="Information",
            message="User alice logged in",
            template="User {Name} logged in",
            properties={"Name": "alice"},
        ),
        LogEntry(
            timestamp="2024-03-01T09:05:00+02:00",
            level="Warning",
            message="Slow query",
            event_id="1001",
        ),
        LogEntry(
            timestamp="Unknown",
            level="Error",
            message="Payment failed",
            exception="TimeoutError: gateway",
        ),
        LogEntry(
            timestamp="2024-03-02T12:00:00.123456Z",
            level="Error",
            message="Payment retried",
            template="Payment {Attempt} retried",
            properties={"Attempt": 2, "Tags": ["billing", "retry"], "Ctx": {"Region": "eu"}},
        ),
    ]


@pytest.fixture
def temp_clef_file(tmp_path, sample_compact_logs):
    """Create a temporary CLEF file with sample content."""
    log_file = tmp_path / "app.clef"
    log_file.write_text("\n".join(sample_compact_logs) + "\n")
    return log_file


@pytest.fixture
def temp_mixed_file(tmp_path, sample_compact_logs, sample_verbose_logs):
    """A file mixing both encodings, blank lines and malformed records."""
    lines = [
        sample_compact_logs[0],
        "",
        sample_verbose_logs[1],
        "not json at all",
        json.dumps({"@t": "2024-01-01T11:00:00Z", "@l": "Error"}),
        "   ",
        sample_compact_logs[2],
    ]
    log_file = tmp_path / "mixed.log"
    log_file.write_text("\n".join(lines) + "\n")
    return log_file
