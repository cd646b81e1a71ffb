from __future__ import annotations

import pytest

from tubebridge.errors import TranscriptParseError, UnrecognizedFormat
from tubebridge.transcript import (
    TranscriptLine,
    normalize_transcript,
    parse_timestamp,
    transcript_as_text,
)

from conftest import VTT_BODY


def test_single_cue_with_hours():
    lines = normalize_transcript("00:01:05.000 --> 00:01:07.000\nHello world\n\n")
    assert lines == [TranscriptLine(start_ms=65000, text="Hello world")]


def test_webvtt_skips_header_and_cue_numbers_and_joins_text():
    lines = normalize_transcript(VTT_BODY)
    assert [line.text for line in lines] == ["Hello there", "General Kenobi"]
    assert [line.start_ms for line in lines] == [1000, 65500]


def test_webvtt_minutes_only_timestamps_and_cue_settings():
    body = "WEBVTT\n\n01:02.250 --> 01:04.000 align:start position:0%\nfirst\n\n02:00.000 --> 02:01.000\nsecond"
    lines = normalize_transcript(body)
    assert lines == [
        TranscriptLine(start_ms=62250, text="first"),
        TranscriptLine(start_ms=120000, text="second"),
    ]


def test_webvtt_returns_one_entry_per_cue_in_order():
    cues = "\n\n".join(f"00:00:{i:02d}.000 --> 00:00:{i + 1:02d}.000\nline {i}" for i in range(10))
    lines = normalize_transcript("WEBVTT\n\n" + cues + "\n")
    assert len(lines) == 10
    assert [line.text for line in lines] == [f"line {i}" for i in range(10)]
    assert all(line.start_ms >= 0 for line in lines)


def test_webvtt_crlf_line_endings():
    lines = normalize_transcript("WEBVTT\r\n\r\n00:00:02.000 --> 00:00:03.000\r\nhi\r\n\r\n")
    assert lines == [TranscriptLine(start_ms=2000, text="hi")]


def test_malformed_timestamp_is_an_explicit_parse_failure():
    with pytest.raises(TranscriptParseError):
        normalize_transcript("00:01:05 --> 00:01:07\nno fraction\n\n")
    # callers branching on UnrecognizedFormat still catch it
    with pytest.raises(UnrecognizedFormat):
        normalize_transcript("garbage --> 00:00:01.000\ntext\n")


def test_parse_timestamp_formats():
    assert parse_timestamp("1:00:00.000") == 3600000
    assert parse_timestamp("00:10.5") == 10500
    with pytest.raises(TranscriptParseError):
        parse_timestamp("1:2:3:4.000")


def test_lines_key():
    assert normalize_transcript({"lines": [{"start": 1000, "text": "hi"}]}) == [
        TranscriptLine(start_ms=1000, text="hi")
    ]


def test_captions_key_takes_precedence_over_lines():
    raw = {"captions": [{"offset": 250, "text": "from captions"}], "lines": [{"start": 1, "text": "from lines"}]}
    assert normalize_transcript(raw) == [TranscriptLine(start_ms=250, text="from captions")]


def test_entry_defaults_for_missing_start_and_text():
    lines = normalize_transcript([{"start": 0, "offset": 900, "text": "zero wins"}, {"text": "no start"}, {"start": 5}, "junk"])
    assert lines == [
        TranscriptLine(start_ms=0, text="zero wins"),
        TranscriptLine(start_ms=0, text="no start"),
        TranscriptLine(start_ms=5, text=""),
    ]


def test_timedtext_xml():
    xml = (
        '<?xml version="1.0" encoding="utf-8" ?><transcript>'
        '<text start="1.5" dur="2">It&amp;#39;s here</text>'
        '<text start="4" dur="1">next\nline</text>'
        "</transcript>"
    )
    assert normalize_transcript(xml) == [
        TranscriptLine(start_ms=1500, text="It's here"),
        TranscriptLine(start_ms=4000, text="next line"),
    ]


@pytest.mark.parametrize("raw", [{"unrelated": 1}, "plain text without cues", 42, None, {"lines": "not a list"}])
def test_unrecognized_shapes(raw):
    with pytest.raises(UnrecognizedFormat):
        normalize_transcript(raw)


def test_transcript_as_text_and_serialisation():
    lines = [TranscriptLine(start_ms=1000, text=" a "), TranscriptLine(start_ms=2000, text=""), TranscriptLine(start_ms=3000, text="b")]
    assert transcript_as_text(lines) == "a b"
    assert lines[0].as_dict() == {"start": 1000, "text": " a "}
    assert lines[0].start_seconds == 1.0
