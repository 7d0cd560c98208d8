"""Contract between the orchestrator and a text-recognition engine."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np

from labelscan.domain.entities.ocr_result import EngineOutput


class SegmentationMode(Enum):
    """Expected page layout, numbered as Tesseract page segmentation modes."""

    AUTO = 3
    SINGLE_BLOCK = 6
    SPARSE_TEXT = 11

    @property
    def label(self) -> str:
        return self.name.lower()


# Characters the engine may emit. Quotes are left out because the option
# string is tokenised like a shell command line.
CHARACTER_WHITELIST = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
    ".,;:-()[]{}/%&@#$+=*!?"
)


@dataclass(frozen=True)
class RecognitionOptions:
    segmentation_mode: SegmentationMode = SegmentationMode.AUTO
    preserve_interword_spaces: bool = True
    character_whitelist: str = CHARACTER_WHITELIST


class TextRecognitionEngine(ABC):
    @abstractmethod
    def recognize(
        self, pixels: np.ndarray, language: str, options: RecognitionOptions
    ) -> EngineOutput:
        """Recognise text in an RGBA buffer.

        Implementations raise EngineInvocationError when the engine itself
        fails; an image with no text is a normal, empty EngineOutput.
        """
