"""Tests for the command line interface."""

import json

import pytest
from dispatch_roster.config import OCREngine
from dispatch_roster.main import main, parse_engines

TRANSCRIPT = "AB101 وحدة 1\nCD2O2 وحدة 2 خارج\n--- | ---\n"


@pytest.fixture(autouse=True)
def clear_roster_env(monkeypatch):
    monkeypatch.delenv("ROSTER_RECIPIENT", raising=False)
    monkeypatch.delenv("ROSTER_DEPUTY", raising=False)


class TestParseEngines:
    def test_known_engines(self):
        assert parse_engines("tesseract, easyocr") == [OCREngine.TESSERACT, OCREngine.EASYOCR]

    def test_unknown_ignored(self):
        assert parse_engines("tesseract,paddle") == [OCREngine.TESSERACT]


class TestExtractCommand:
    def test_extract_from_text(self, tmp_path, capsys):
        transcript = tmp_path / "transcript.txt"
        transcript.write_text(TRANSCRIPT, encoding="utf-8")
        output = tmp_path / "units.json"

        assert main(["extract", "--text", str(transcript), "-o", str(output)]) == 0

        units = json.loads(output.read_text(encoding="utf-8"))
        assert [u["code"] for u in units] == ["AB-101", "CD-202"]
        assert units[1]["status"] == "خارج الخدمة"
        assert "تم استخراج القائمة" in capsys.readouterr().out

    def test_extract_empty_text(self, tmp_path, capsys):
        transcript = tmp_path / "transcript.txt"
        transcript.write_text("--- | ---\n", encoding="utf-8")
        assert main(["extract", "--text", str(transcript)]) == 0
        assert "لم يُستخرج أي عناصر" in capsys.readouterr().out

    def test_missing_transcript(self, tmp_path):
        assert main(["extract", "--text", str(tmp_path / "nope.txt")]) == 1

    def test_missing_image(self, tmp_path):
        assert main(["extract", str(tmp_path / "nope.png")]) == 1

    def test_no_input(self):
        assert main(["extract"]) == 1


class TestRenderCommand:
    def test_render_without_units(self, capsys):
        code = main(["render", "--recipient", "أحمد | A-1", "--deputy", "سارة | B-2"])
        assert code == 0
        out = capsys.readouterr().out
        assert "المستلم : أحمد | A-1" in out
        assert ":{1}" in out

    def test_render_missing_deputy(self, capsys):
        assert main(["render", "--recipient", "أحمد | A-1"]) == 1
        assert "الرجاء كتابة المستلم والنائب" in capsys.readouterr().err

    def test_extract_then_render(self, tmp_path):
        transcript = tmp_path / "transcript.txt"
        transcript.write_text(TRANSCRIPT, encoding="utf-8")
        units = tmp_path / "units.json"
        report = tmp_path / "report.txt"

        assert main(["extract", "--text", str(transcript), "-o", str(units)]) == 0
        assert main([
            "render",
            "--recipient", "أحمد | A-1",
            "--deputy", "سارة | B-2",
            "--units", str(units),
            "-o", str(report),
        ]) == 0

        text = report.read_text(encoding="utf-8")
        assert ":{2}" in text
        assert "وحدة 1 | AB-101" in text
        assert "خارج الخدمة : (1)" in text
        assert "وحدة 2 خارج | CD-202" in text

    def test_render_bad_units_file(self, tmp_path):
        units = tmp_path / "units.json"
        units.write_text("not json", encoding="utf-8")
        code = main([
            "render", "--recipient", "a", "--deputy", "b", "--units", str(units),
        ])
        assert code == 1

    def test_render_non_object_unit(self, tmp_path, capsys):
        units = tmp_path / "units.json"
        units.write_text('["x"]', encoding="utf-8")
        code = main([
            "render", "--recipient", "a", "--deputy", "b", "--units", str(units),
        ])
        assert code == 1
        assert "Error reading units" in capsys.readouterr().err
