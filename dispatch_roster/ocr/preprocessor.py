"""
Image preprocessing for roster photos.

Roster photos are usually phone captures or screenshots of a printed
sheet. Before OCR they are:
- Downscaled to a maximum width (aspect ratio kept)
- Converted to grayscale with luma weights
- Stretched linearly in contrast and shifted in brightness
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)

try:
    import cv2
    CV2_AVAILABLE = True
except ImportError:
    CV2_AVAILABLE = False

try:
    from PIL import Image
    PIL_AVAILABLE = True
except ImportError:
    PIL_AVAILABLE = False

# ITU-R BT.601 luma weights, RGB order
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


class ImagePreprocessor:
    """
    Resize, grayscale and contrast adjustment ahead of OCR.

    Pipeline stages:
    1. Downscale to max_width (never upscale)
    2. Grayscale conversion
    3. Linear contrast/brightness: (g - 128) * contrast + 128 + brightness
    """

    def __init__(
        self,
        max_width: int = 1600,
        contrast: float = 1.5,
        brightness: float = 12.0,
    ):
        self.max_width = max_width
        self.contrast = contrast
        self.brightness = brightness

        if not CV2_AVAILABLE and not PIL_AVAILABLE:
            raise ImportError(
                "Either opencv-python or Pillow is required for image preprocessing. "
                "Install with: pip install opencv-python-headless Pillow"
            )

    def process(self, image: np.ndarray) -> np.ndarray:
        """
        Run the preprocessing pipeline on an RGB or grayscale image.

        Args:
            image: Input image as numpy array (H x W, H x W x 3 or H x W x 4, RGB order).

        Returns:
            Grayscale uint8 image ready for OCR.
        """
        logger.info("Starting image preprocessing: input shape %s", image.shape)

        img = self._resize(image)
        gray = self._to_grayscale(img)
        adjusted = self._adjust_contrast(gray)

        logger.info("Preprocessing complete: output shape %s", adjusted.shape)
        return adjusted

    def _resize(self, img: np.ndarray) -> np.ndarray:
        """Downscale wide images to max_width keeping the aspect ratio."""
        h, w = img.shape[:2]
        if w <= self.max_width:
            return img

        new_w = self.max_width
        new_h = round(h * (self.max_width / w))
        if CV2_AVAILABLE:
            resized = cv2.resize(img, (new_w, new_h), interpolation=cv2.INTER_AREA)
        else:
            resized = np.array(
                Image.fromarray(img).resize((new_w, new_h), Image.LANCZOS)
            )
        logger.debug("Downscaled image from %dx%d to %dx%d", w, h, new_w, new_h)
        return resized

    def _to_grayscale(self, img: np.ndarray) -> np.ndarray:
        if img.ndim == 2:
            return img.astype(np.float64)
        rgb = img[:, :, :3].astype(np.float64)
        return rgb @ LUMA_WEIGHTS

    def _adjust_contrast(self, gray: np.ndarray) -> np.ndarray:
        """Linear contrast stretch around mid-gray plus a brightness offset."""
        adjusted = (gray - 128.0) * self.contrast + 128.0 + self.brightness
        logger.debug(
            "Applied contrast %.2f, brightness %+.1f", self.contrast, self.brightness
        )
        return np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)

    def load_image(self, image_path: Union[str, Path]) -> np.ndarray:
        """
        Load an image file as an RGB numpy array.

        Args:
            image_path: Path to a PNG/JPEG/etc. roster photo.

        Returns:
            Image as numpy array in RGB order.
        """
        path = Path(image_path)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")

        if PIL_AVAILABLE:
            with Image.open(path) as img:
                return np.array(img.convert("RGB"))

        img = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if img is None:
            raise ValueError(f"Could not decode image: {path}")
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)

    def process_file(self, image_path: Union[str, Path]) -> np.ndarray:
        """Load an image file and preprocess it."""
        return self.process(self.load_image(image_path))
