import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pytesseract
from PIL import Image

from labelscan import config
from labelscan.domain.entities.ocr_result import EngineOutput, RecognizedWord
from labelscan.domain.errors import EngineInvocationError
from labelscan.infrastructure.ocr.engine import RecognitionOptions, TextRecognitionEngine


logger = logging.getLogger(__name__)


def build_config(options: RecognitionOptions) -> str:
    parts = ["--oem 3", f"--psm {options.segmentation_mode.value}"]
    if options.preserve_interword_spaces:
        parts.append("-c preserve_interword_spaces=1")
    if options.character_whitelist:
        parts.append(f"-c tessedit_char_whitelist={options.character_whitelist}")
    return " ".join(parts)


def _parse_confidence(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return -1.0


def parse_tesseract_data(data: Dict[str, list]) -> EngineOutput:
    """Fold pytesseract's per-word table into text, lines and a mean confidence."""
    words: List[RecognizedWord] = []
    lines: Dict[Tuple[int, int, int, int], List[str]] = {}

    for idx in range(len(data.get("text", []))):
        text = (data["text"][idx] or "").strip()
        confidence = _parse_confidence(data["conf"][idx])
        # confidence -1 marks page/block/line rows rather than words
        if not text or confidence < 0:
            continue

        words.append(RecognizedWord(text=text, confidence=min(confidence, 100.0)))
        line_key = (
            data["page_num"][idx],
            data["block_num"][idx],
            data["par_num"][idx],
            data["line_num"][idx],
        )
        lines.setdefault(line_key, []).append(text)

    line_texts = [" ".join(tokens) for tokens in lines.values()]
    mean_confidence = sum(w.confidence for w in words) / len(words) if words else 0.0

    return EngineOutput(
        text="\n".join(line_texts),
        confidence=mean_confidence,
        words=words,
        lines=line_texts,
    )


class TesseractEngine(TextRecognitionEngine):
    def __init__(self, tesseract_cmd: Optional[str] = None):
        cmd = tesseract_cmd or config.TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    def recognize(
        self, pixels: np.ndarray, language: str, options: RecognitionOptions
    ) -> EngineOutput:
        tesseract_config = build_config(options)

        try:
            image = Image.fromarray(np.ascontiguousarray(pixels[..., :3]))
            data = pytesseract.image_to_data(
                image,
                lang=language,
                config=tesseract_config,
                output_type=pytesseract.Output.DICT,
            )
        except (
            pytesseract.TesseractError,
            pytesseract.TesseractNotFoundError,
            RuntimeError,
            OSError,
            TypeError,
            ValueError,
        ) as e:
            logger.warning("Tesseract failed with %s: %s", tesseract_config, e)
            raise EngineInvocationError(f"Tesseract failed: {e}") from e

        return parse_tesseract_data(data)
