"""
OCR subsystem for roster photos.

Preprocessing and engines need numpy/OpenCV/OCR backends and are
imported lazily; line cleaning is pure text and always available.
"""

from dispatch_roster.ocr.cleaner import LineCleaner, clean_line, clean_transcript


def __getattr__(name: str):
    if name == "ImagePreprocessor":
        from dispatch_roster.ocr.preprocessor import ImagePreprocessor
        return ImagePreprocessor
    if name == "OCREngineManager":
        from dispatch_roster.ocr.engine import OCREngineManager
        return OCREngineManager
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ImagePreprocessor",
    "OCREngineManager",
    "LineCleaner",
    "clean_line",
    "clean_transcript",
]
