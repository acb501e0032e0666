"""Tests for roster parsing and deduplication."""

import pytest
from dispatch_roster.roster import parse_transcript
from dispatch_roster.roster.dedup import dedup, record_key
from dispatch_roster.roster.models import UnitRecord, UnitStatus
from dispatch_roster.roster.parser import infer_status, parse_line, parse_lines


class TestParseLine:
    def test_noise_line_skipped(self):
        assert parse_line("--- | ---") is None
        assert parse_line("|") is None

    def test_code_and_name(self):
        record = parse_line("AB101 وحدة الشمال")
        assert record.code == "AB-101"
        assert record.name == "وحدة الشمال"
        assert record.status == UnitStatus.IN_FIELD
        assert record.location == ""

    def test_latin_only_line_kept(self):
        record = parse_line("A-1 team")
        assert record.code == "A-1"
        assert record.name == "team"

    def test_arabic_first_token(self):
        # An Arabic first token yields no code but is still removed from the name
        record = parse_line("وحدة 1")
        assert record.code == ""
        assert record.name == "1"

    def test_single_token_line(self):
        record = parse_line("CD2O2")
        assert record.code == "CD-202"
        assert record.name == ""

    def test_busy_status(self):
        assert parse_line("CD-202 وحدة 2 مشغول").status == UnitStatus.BUSY

    def test_out_of_service_status(self):
        assert parse_line("EF-3 وحدة خارج الخدمة").status == UnitStatus.OUT_OF_SERVICE

    def test_busy_takes_precedence(self):
        assert parse_line("EF-3 مشغول خارج").status == UnitStatus.BUSY


class TestInferStatus:
    def test_default_in_field(self):
        assert infer_status("AB-1 وحدة") == UnitStatus.IN_FIELD

    def test_keyword_inside_word(self):
        assert infer_status("AB-1 بالخارج") == UnitStatus.OUT_OF_SERVICE


class TestParseLines:
    def test_preserves_order_and_skips_noise(self):
        lines = ["B-2 ثانية", "--- | ---", "A-1 أولى", "C-3 ثالثة مشغول"]
        records = parse_lines(lines)
        assert [r.code for r in records] == ["B-2", "A-1", "C-3"]

    def test_empty(self):
        assert parse_lines([]) == []


class TestDedup:
    def test_drops_repeated_code_and_name(self):
        records = [
            UnitRecord(name="وحدة 1", code="AB-101", status=UnitStatus.BUSY),
            UnitRecord(name="وحدة 2", code="CD-202"),
            UnitRecord(name="وحدة 1", code="AB-101", status=UnitStatus.OUT_OF_SERVICE),
        ]
        unique = dedup(records)
        assert len(unique) < len(records)
        assert [r.code for r in unique] == ["AB-101", "CD-202"]
        # First occurrence wins, other fields included
        assert unique[0].status == UnitStatus.BUSY

    def test_same_code_different_name_kept(self):
        records = [
            UnitRecord(name="وحدة 1", code="AB-101"),
            UnitRecord(name="وحدة 3", code="AB-101"),
        ]
        assert len(dedup(records)) == 2

    def test_key_is_trimmed(self):
        assert record_key(UnitRecord(name="", code="")) == "|"
        assert record_key(UnitRecord(name="x ", code="A-1")) == "A-1|x"

    def test_empty(self):
        assert dedup([]) == []


class TestParseTranscript:
    def test_full_text_stages(self):
        text = (
            chr(0x200F) + "AB101 وحدة 1\n"
            "AB-101 وحدة 1\n"
            "--- | ---\n"
            "\n"
            "CD2O2 وحدة 2 خارج\n"
        )
        units = parse_transcript(text)
        assert len(units) == 2
        assert units[0].code == "AB-101"
        assert units[0].name == "وحدة 1"
        assert units[1].code == "CD-202"
        assert units[1].status == UnitStatus.OUT_OF_SERVICE

    def test_noise_only_transcript(self):
        assert parse_transcript("©©\n--- | ---\n") == []
