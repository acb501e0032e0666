"""Tests for the roster extraction pipeline with a mocked OCR collaborator."""

import asyncio

import numpy as np
import pytest
from unittest.mock import MagicMock

from dispatch_roster.config import OCRConfig, RosterConfig
from dispatch_roster.pipeline import (
    EMPTY_NOTICE,
    FAILURE_NOTICE,
    SUCCESS_NOTICE,
    ExtractionFailure,
    ExtractionOutcome,
    RosterExtractor,
    extract_from_text,
)
from dispatch_roster.roster.models import UnitStatus

ROSTER_TEXT = (
    "AB101 وحدة 1\n"
    "AB-101 وحدة 1\n"
    "--- | ---\n"
    "CD2O2 وحدة 2 خارج\n"
    "DAT وحدة 3 مشغول\n"
)


def make_extractor(ocr_text="", error=None, preprocess=True):
    preprocessor = MagicMock()
    preprocessor.process.side_effect = lambda image: image
    ocr_manager = MagicMock()
    if error is not None:
        ocr_manager.extract_text.side_effect = error
    else:
        ocr_manager.extract_text.return_value = (ocr_text, 0.9, [])
    config = RosterConfig(ocr=OCRConfig(enable_preprocessing=preprocess))
    return RosterExtractor(config, preprocessor=preprocessor, ocr_manager=ocr_manager)


@pytest.fixture
def image():
    return np.zeros((20, 40, 3), dtype=np.uint8)


class TestRosterExtractor:
    def test_success(self, image):
        extractor = make_extractor(ROSTER_TEXT)
        result = extractor.extract(image)

        assert result.outcome is ExtractionOutcome.SUCCESS
        assert result.message == SUCCESS_NOTICE
        assert [u.code for u in result.units] == ["AB-101", "CD-202", "DA-1"]
        assert result.units[1].status == UnitStatus.OUT_OF_SERVICE
        assert result.units[2].status == UnitStatus.BUSY
        assert result.ocr_confidence == 0.9
        assert result.error is None
        extractor.preprocessor.process.assert_called_once()

    def test_empty_extraction(self, image):
        result = make_extractor("--- | ---\n©\n").extract(image)
        assert result.outcome is ExtractionOutcome.EMPTY
        assert result.message == EMPTY_NOTICE
        assert result.units == []

    def test_ocr_error_becomes_failure(self, image):
        result = make_extractor(error=RuntimeError("tesseract crashed")).extract(image)
        assert result.outcome is ExtractionOutcome.FAILED
        assert result.message == FAILURE_NOTICE
        assert isinstance(result.error, ExtractionFailure)
        assert "tesseract crashed" in str(result.error)
        assert result.units == []

    def test_preprocessing_error_becomes_failure(self, image):
        extractor = make_extractor(ROSTER_TEXT)
        extractor.preprocessor.process.side_effect = ValueError("bad image")
        result = extractor.extract(image)
        assert result.outcome is ExtractionOutcome.FAILED
        extractor.ocr_manager.extract_text.assert_not_called()

    def test_preprocessing_disabled(self, image):
        extractor = make_extractor(ROSTER_TEXT, preprocess=False)
        extractor.extract(image)
        extractor.preprocessor.process.assert_not_called()
        extractor.ocr_manager.extract_text.assert_called_once_with(image)

    def test_extract_file_load_error(self):
        extractor = make_extractor(ROSTER_TEXT)
        extractor.preprocessor.load_image.side_effect = FileNotFoundError("missing.png")
        result = extractor.extract_file("missing.png")
        assert result.outcome is ExtractionOutcome.FAILED

    def test_extract_file(self, image):
        extractor = make_extractor(ROSTER_TEXT)
        extractor.preprocessor.load_image.return_value = image
        result = extractor.extract_file("roster.png")
        assert result.outcome is ExtractionOutcome.SUCCESS
        extractor.preprocessor.load_image.assert_called_once_with("roster.png")

    def test_to_dict(self, image):
        data = make_extractor(ROSTER_TEXT).extract(image).to_dict()
        assert data["outcome"] == "success"
        assert data["units"][0] == {
            "name": "وحدة 1",
            "code": "AB-101",
            "status": "في الميدان",
            "location": "",
        }
        assert data["error"] is None


class TestExtractAsync:
    def test_success(self, image):
        extractor = make_extractor(ROSTER_TEXT)
        result = asyncio.run(extractor.extract_async(image))
        assert result.outcome is ExtractionOutcome.SUCCESS
        assert len(result.units) == 3

    def test_failure_resolves(self, image):
        extractor = make_extractor(error=OSError("engine died"))
        result = asyncio.run(extractor.extract_async(image))
        assert result.outcome is ExtractionOutcome.FAILED


class TestExtractFromText:
    def test_text_only(self):
        result = extract_from_text(ROSTER_TEXT)
        assert result.outcome is ExtractionOutcome.SUCCESS
        assert result.ocr_text == ROSTER_TEXT

    def test_blank_text(self):
        assert extract_from_text("").outcome is ExtractionOutcome.EMPTY

    def test_each_call_returns_fresh_list(self):
        first = extract_from_text(ROSTER_TEXT)
        second = extract_from_text(ROSTER_TEXT)
        assert first.units == second.units
        assert first.units is not second.units
        assert first.units[0] is not second.units[0]
