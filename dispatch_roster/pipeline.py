"""
Main pipeline orchestrator for roster extraction.

Ties together:
1. Image preprocessing → OCR extraction
2. Line cleaning → roster parsing → deduplication
3. Conversion of failures into an extraction outcome for the caller
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import numpy as np

from dispatch_roster.config import RosterConfig
from dispatch_roster.roster import UnitRecord, parse_transcript
from dispatch_roster.utils import setup_logging

logger = logging.getLogger(__name__)

SUCCESS_NOTICE = "تم استخراج القائمة"
EMPTY_NOTICE = "لم يُستخرج أي عناصر"
FAILURE_NOTICE = "تعذّر استخراج النص — جرّب صورة أوضح أو عدّل القائمة يدوياً."


class ExtractionFailure(RuntimeError):
    """Preprocessing or OCR failed; no units were extracted."""


class ExtractionOutcome(Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ExtractionResult:
    """Outcome of one roster extraction."""
    outcome: ExtractionOutcome
    units: list[UnitRecord] = field(default_factory=list)
    ocr_text: str = ""
    ocr_confidence: float = 0.0
    error: Optional[ExtractionFailure] = None
    processing_time_seconds: float = 0.0

    @property
    def message(self) -> str:
        """User-facing notice for this outcome."""
        return {
            ExtractionOutcome.SUCCESS: SUCCESS_NOTICE,
            ExtractionOutcome.EMPTY: EMPTY_NOTICE,
            ExtractionOutcome.FAILED: FAILURE_NOTICE,
        }[self.outcome]

    def to_dict(self) -> dict:
        """Convert to a serializable dictionary."""
        return {
            "outcome": self.outcome.value,
            "message": self.message,
            "units": [u.to_dict() for u in self.units],
            "ocr_confidence": self.ocr_confidence,
            "error": str(self.error) if self.error else None,
            "processing_time_seconds": self.processing_time_seconds,
        }


class RosterExtractor:
    """
    Complete roster photo → unit list pipeline.

    Usage:
        extractor = RosterExtractor(RosterConfig())
        result = extractor.extract_file("roster.jpg")
        if result.outcome is ExtractionOutcome.SUCCESS:
            print(result.units)

    The preprocessor and OCR manager can be injected; by default they
    are built from the OCR configuration.
    """

    def __init__(
        self,
        config: Optional[RosterConfig] = None,
        preprocessor=None,
        ocr_manager=None,
    ):
        self.config = config or RosterConfig()
        setup_logging()

        if preprocessor is None:
            from dispatch_roster.ocr.preprocessor import ImagePreprocessor
            preprocessor = ImagePreprocessor(
                max_width=self.config.ocr.max_width,
                contrast=self.config.ocr.contrast,
                brightness=self.config.ocr.brightness,
            )
        if ocr_manager is None:
            from dispatch_roster.ocr.engine import OCREngineManager
            ocr_manager = OCREngineManager(self.config.ocr)

        self.preprocessor = preprocessor
        self.ocr_manager = ocr_manager
        logger.info("RosterExtractor initialized")

    def extract(self, image: np.ndarray) -> ExtractionResult:
        """
        Extract the unit list from a roster image.

        Args:
            image: Roster photo as numpy array (RGB or grayscale).

        Returns:
            ExtractionResult; never raises for preprocessing/OCR errors.
        """
        start = time.time()
        try:
            text, confidence = self._recognize(image)
        except ExtractionFailure as e:
            return self._failed(e, start)
        return _build_result(text, confidence, start)

    async def extract_async(self, image: np.ndarray) -> ExtractionResult:
        """
        Extract the unit list, running the blocking OCR call in the
        event loop's default executor.
        """
        start = time.time()
        loop = asyncio.get_running_loop()
        try:
            text, confidence = await loop.run_in_executor(None, self._recognize, image)
        except ExtractionFailure as e:
            return self._failed(e, start)
        return _build_result(text, confidence, start)

    def extract_file(self, image_path: Union[str, Path]) -> ExtractionResult:
        """Load a roster photo from disk and extract its units."""
        start = time.time()
        try:
            image = self.preprocessor.load_image(image_path)
        except Exception as e:
            logger.error("Failed to load image %s: %s", image_path, e)
            return self._failed(ExtractionFailure(str(e)), start)
        return self.extract(image)

    def extract_text(self, ocr_text: str) -> ExtractionResult:
        """Run the text stages on an existing OCR transcript (skip OCR)."""
        return extract_from_text(ocr_text)

    def _recognize(self, image: np.ndarray) -> tuple[str, float]:
        """Preprocess and OCR one image, wrapping any error as ExtractionFailure."""
        try:
            if self.config.ocr.enable_preprocessing:
                image = self.preprocessor.process(image)
            text, confidence, _ = self.ocr_manager.extract_text(image)
        except Exception as e:
            logger.error("Roster OCR failed: %s", e)
            raise ExtractionFailure(str(e)) from e
        return text, confidence

    @staticmethod
    def _failed(error: ExtractionFailure, start: float) -> ExtractionResult:
        return ExtractionResult(
            outcome=ExtractionOutcome.FAILED,
            error=error,
            processing_time_seconds=time.time() - start,
        )


def _build_result(text: str, confidence: float, start: float) -> ExtractionResult:
    units = parse_transcript(text)
    outcome = ExtractionOutcome.SUCCESS if units else ExtractionOutcome.EMPTY
    result = ExtractionResult(
        outcome=outcome,
        units=units,
        ocr_text=text,
        ocr_confidence=confidence,
        processing_time_seconds=time.time() - start,
    )
    logger.info(
        "Extraction %s: %d units, %.1fs",
        outcome.value,
        len(units),
        result.processing_time_seconds,
    )
    return result


def extract_from_text(ocr_text: str) -> ExtractionResult:
    """Run the text stages on an existing OCR transcript (no OCR involved)."""
    return _build_result(ocr_text, 0.0, time.time())
