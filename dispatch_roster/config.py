"""
Configuration management for the dispatch roster OCR & report pipeline.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OCREngine(Enum):
    TESSERACT = "tesseract"
    EASYOCR = "easyocr"


# District names selectable for a unit; "" is the "none" option.
LOCATIONS: tuple[str, ...] = (
    "",
    "الغرب",
    "الشرق",
    "وسط",
    "الجنوب",
    "الشمال",
    "ساندي",
    "بوليتو",
)


@dataclass
class OCRConfig:
    """OCR processing configuration."""
    engines: list[OCREngine] = field(
        default_factory=lambda: [OCREngine.TESSERACT]
    )
    enable_preprocessing: bool = True
    # Preprocessing options
    max_width: int = 1600
    contrast: float = 1.5
    brightness: float = 12.0
    # Tesseract-specific
    tesseract_lang: str = "ara+eng"
    tesseract_psm: int = 6  # Assume uniform block of text
    tesseract_oem: int = 3  # LSTM + legacy
    tesseract_cmd: Optional[str] = None
    # EasyOCR-specific
    easyocr_langs: list[str] = field(default_factory=lambda: ["ar", "en"])
    easyocr_gpu: bool = False

    def __post_init__(self):
        """Load the Tesseract binary path from the environment if not provided."""
        if not self.tesseract_cmd:
            self.tesseract_cmd = os.environ.get("TESSERACT_CMD")


@dataclass
class RosterConfig:
    """Roster session configuration."""
    # "Name | Code" strings, loaded from env vars if not set
    recipient: Optional[str] = None
    deputy: Optional[str] = None

    locations: tuple[str, ...] = LOCATIONS

    # OCR settings
    ocr: OCRConfig = field(default_factory=OCRConfig)

    def __post_init__(self):
        """Load the on-duty recipient and deputy from environment variables if not provided."""
        if not self.recipient:
            self.recipient = os.environ.get("ROSTER_RECIPIENT", "")
        if not self.deputy:
            self.deputy = os.environ.get("ROSTER_DEPUTY", "")
