"""
Multi-engine OCR for roster photos.

Supports Tesseract and EasyOCR with an Arabic+Latin language hint.
Engines return plain text with one roster row per line.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from dispatch_roster.config import OCRConfig, OCREngine

logger = logging.getLogger(__name__)


@dataclass
class OCRResult:
    """Result from a single OCR engine."""
    engine: str
    text: str
    confidence: float  # 0.0 to 1.0
    line_count: int = 0
    raw_data: Optional[dict] = None


class TesseractOCR:
    """Tesseract OCR wrapper for mixed Arabic/Latin rosters."""

    def __init__(self, config: OCRConfig):
        try:
            import pytesseract
            self.pytesseract = pytesseract
        except ImportError:
            raise ImportError(
                "pytesseract is required. Install with: pip install pytesseract\n"
                "Also install Tesseract binary: "
                "sudo apt-get install tesseract-ocr tesseract-ocr-ara"
            )
        if config.tesseract_cmd:
            self.pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd
        self.config = config

    def extract(self, image: np.ndarray) -> OCRResult:
        """Extract roster text using Tesseract, one output line per detected row."""
        custom_config = (
            f"--oem {self.config.tesseract_oem} "
            f"--psm {self.config.tesseract_psm}"
        )

        data = self.pytesseract.image_to_data(
            image,
            lang=self.config.tesseract_lang,
            config=custom_config,
            output_type=self.pytesseract.Output.DICT,
        )

        # Words keyed by (block, paragraph, line), in Tesseract's output order
        rows: dict[tuple, list[str]] = {}
        confidences = []
        for i, word in enumerate(data["text"]):
            word = word.strip()
            if not word:
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            rows.setdefault(key, []).append(word)
            # Tesseract reports confidence as 0-100, normalize to 0-1
            confidences.append(max(0.0, float(data["conf"][i]) / 100.0))

        lines = [" ".join(words) for words in rows.values()]
        avg_confidence = sum(confidences) / len(confidences) if confidences else 0.0

        logger.info(
            "Tesseract OCR: extracted %d words in %d lines, avg confidence %.2f",
            len(confidences),
            len(lines),
            avg_confidence,
        )

        return OCRResult(
            engine="tesseract",
            text="\n".join(lines),
            confidence=avg_confidence,
            line_count=len(lines),
            raw_data=data,
        )


class EasyOCREngine:
    """EasyOCR wrapper with Arabic and English readers."""

    def __init__(self, config: OCRConfig):
        try:
            import easyocr
            self.reader = easyocr.Reader(
                config.easyocr_langs,
                gpu=config.easyocr_gpu,
            )
        except ImportError:
            raise ImportError(
                "easyocr is required. Install with: pip install easyocr"
            )
        self.config = config

    def extract(self, image: np.ndarray) -> OCRResult:
        """Extract roster text using EasyOCR, grouping blocks into rows."""
        results = self.reader.readtext(image, detail=1, paragraph=False)

        blocks = []
        confidences = []
        for item in results:
            if len(item) != 3:
                continue
            bbox, text, conf = item
            text = str(text).strip()
            if not text:
                continue
            blocks.append((bbox, text))
            try:
                confidences.append(float(conf))
            except (ValueError, TypeError):
                confidences.append(0.5)

        lines = group_blocks_into_lines(blocks)
        avg_confidence = sum(confidences) / len(confidences) if confidences else 0.0

        logger.info(
            "EasyOCR: extracted %d blocks in %d lines, avg confidence %.2f",
            len(blocks),
            len(lines),
            avg_confidence,
        )

        return OCRResult(
            engine="easyocr",
            text="\n".join(lines),
            confidence=avg_confidence,
            line_count=len(lines),
        )


def group_blocks_into_lines(blocks: list[tuple[list, str]]) -> list[str]:
    """
    Group detected text blocks into visual rows.

    Blocks whose vertical centers are within half a median block height
    belong to the same row. Rows are read top to bottom; blocks within a
    row right to left, the roster's reading order.
    """
    if not blocks:
        return []

    boxes = []
    for bbox, text in blocks:
        ys = [point[1] for point in bbox]
        xs = [point[0] for point in bbox]
        boxes.append(((min(ys) + max(ys)) / 2, max(ys) - min(ys), max(xs), text))

    tolerance = float(np.median([height for _, height, _, _ in boxes])) / 2
    boxes.sort(key=lambda b: b[0])

    rows: list[list[tuple]] = []
    for box in boxes:
        if rows and abs(box[0] - rows[-1][0][0]) <= tolerance:
            rows[-1].append(box)
        else:
            rows.append([box])

    return [
        " ".join(text for _, _, _, text in sorted(row, key=lambda b: -b[2]))
        for row in rows
    ]


class OCREngineManager:
    """
    Manages the configured OCR engines and picks the best transcript.

    Strategy:
    1. Run all configured engines
    2. Keep engines that returned text
    3. Prefer the highest confidence, weighted by the number of lines read
    """

    ENGINE_MAP = {
        OCREngine.TESSERACT: TesseractOCR,
        OCREngine.EASYOCR: EasyOCREngine,
    }

    def __init__(self, config: OCRConfig):
        self.config = config
        self.engines = {}
        self._init_engines()

    def _init_engines(self) -> None:
        """Initialize all configured OCR engines, skip unavailable ones."""
        for engine_type in self.config.engines:
            engine_cls = self.ENGINE_MAP.get(engine_type)
            if engine_cls is None:
                logger.warning("Unknown OCR engine: %s", engine_type)
                continue
            try:
                self.engines[engine_type] = engine_cls(self.config)
                logger.info("Initialized OCR engine: %s", engine_type.value)
            except ImportError as e:
                logger.warning("OCR engine %s unavailable: %s", engine_type.value, e)

        if not self.engines:
            raise RuntimeError(
                "No OCR engines available. Install at least one of: "
                "pytesseract, easyocr"
            )

    def extract_text(self, image: np.ndarray) -> tuple[str, float, list[OCRResult]]:
        """
        Extract text using all available engines and return the best result.

        Returns:
            Tuple of (best_text, confidence, all_results).

        Raises:
            RuntimeError: If every engine failed with an exception.
        """
        results: list[OCRResult] = []
        errors: list[str] = []

        for engine_type, engine in self.engines.items():
            try:
                result = engine.extract(image)
            except Exception as e:
                logger.error("OCR engine %s failed: %s", engine_type.value, e)
                errors.append(f"{engine_type.value}: {e}")
                continue
            if result.text.strip():
                results.append(result)

        if errors and len(errors) == len(self.engines):
            raise RuntimeError("All OCR engines failed: " + "; ".join(errors))

        if not results:
            logger.warning("All OCR engines returned empty results")
            return "", 0.0, results

        best = max(results, key=lambda r: r.line_count * r.confidence)

        logger.info(
            "Selected OCR result from %s (confidence: %.2f, lines: %d)",
            best.engine,
            best.confidence,
            best.line_count,
        )

        return best.text, best.confidence, results
