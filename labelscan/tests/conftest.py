"""
Shared pytest fixtures.

Recognition is replaced by a scripted engine so tests never need a
Tesseract binary; images are synthesised with numpy/Pillow.
"""
import threading
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from labelscan.domain.entities.image import RawImage
from labelscan.domain.entities.ocr_result import EngineOutput, RecognizedWord
from labelscan.infrastructure.ocr.engine import TextRecognitionEngine


LABEL_TEXT = (
    "Ingredients: sugar, cocoa butter, milk powder. "
    "Nutrition Facts per serving: Calories 210, Protein 3g, Sodium 40mg"
)


class ScriptedEngine(TextRecognitionEngine):
    """Returns the scripted outputs in call order; exceptions are raised."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self._lock = threading.Lock()

    def recognize(self, pixels, language, options):
        with self._lock:
            index = len(self.calls)
            self.calls.append((pixels.shape, language, options.segmentation_mode))
        response = self.responses[index % len(self.responses)]
        if isinstance(response, Exception):
            raise response
        return response


def engine_output(text: str, confidence: float) -> EngineOutput:
    words = [RecognizedWord(word, confidence) for word in text.split()]
    return EngineOutput(text=text, confidence=confidence, words=words, lines=text.split("\n"))


def solid_image(width: int, height: int, rgb=(255, 255, 255)) -> RawImage:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = rgb
    pixels[..., 3] = 255
    return RawImage.from_array(pixels)


def png_bytes(width: int = 100, height: int = 50, color="white") -> bytes:
    img = Image.new("RGB", (width, height), color=color)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def label_text():
    return LABEL_TEXT


@pytest.fixture
def white_image():
    return solid_image(1000, 600)


@pytest.fixture
def sample_png():
    return png_bytes()


@pytest.fixture
def scripted_engine():
    return ScriptedEngine


@pytest.fixture
def make_output():
    return engine_output


@pytest.fixture
def make_image():
    return solid_image


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture(autouse=True)
def no_cloud_credentials(monkeypatch):
    """Keep a developer's .env from sending test images to the cloud."""
    from labelscan import config

    monkeypatch.setattr(config, "GOOGLE_VISION_API_KEY", None)
