import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from labelscan import config
from labelscan.application.services.brand_detector import BrandDetector
from labelscan.application.services.image_preprocessor import ImagePreprocessor
from labelscan.application.services.text_enhancer import enhance_text
from labelscan.application.services.text_quality import assess_text_quality, looks_like_food_label
from labelscan.domain.entities.image import ProcessedImage, RawImage
from labelscan.domain.entities.ocr_result import OCRAttempt, OCRResult
from labelscan.domain.errors import EngineInvocationError, InsufficientTextError
from labelscan.infrastructure.ocr.engine import (
    RecognitionOptions,
    SegmentationMode,
    TextRecognitionEngine,
)


logger = logging.getLogger(__name__)

# Order matters: on equal effective confidence the earlier attempt wins.
# adaptive and invert are available from the preprocessor but not rotated in.
STRATEGY_ROTATION: Tuple[Tuple[str, Tuple[SegmentationMode, ...]], ...] = (
    ("grayscale", (SegmentationMode.AUTO,)),
    ("highContrast", (SegmentationMode.AUTO,)),
    ("original", (SegmentationMode.AUTO, SegmentationMode.SINGLE_BLOCK, SegmentationMode.SPARSE_TEXT)),
)

MIN_TEXT_LENGTH = 10
ENGINE_SHARE = 0.7
QUALITY_SHARE = 0.3
MAX_BUFFERS = 5

_FAILED = object()


def effective_confidence(engine_confidence: float, quality_score: float) -> float:
    return ENGINE_SHARE * engine_confidence + QUALITY_SHARE * quality_score


class LocalOCROrchestrator:
    """Runs the engine over every (strategy, segmentation mode) pair and keeps the best."""

    def __init__(
        self,
        engine: TextRecognitionEngine,
        preprocessor: Optional[ImagePreprocessor] = None,
        brand_detector: Optional[BrandDetector] = None,
        language: Optional[str] = None,
        max_workers: Optional[int] = None,
        rotation=STRATEGY_ROTATION,
    ):
        if len(rotation) > MAX_BUFFERS:
            raise ValueError(f"At most {MAX_BUFFERS} strategies may be rotated")

        self.engine = engine
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.brand_detector = brand_detector or BrandDetector()
        self.language = language or config.OCR_LANGUAGE
        self.max_workers = max_workers or config.OCR_MAX_WORKERS
        self.rotation = tuple(rotation)

    def _plan(self, image: RawImage) -> List[Tuple[ProcessedImage, SegmentationMode]]:
        plan = []
        for strategy, modes in self.rotation:
            # one buffer per strategy, shared read-only by its modes
            processed = self.preprocessor.preprocess(image, strategy)
            processed.pixels.setflags(write=False)
            plan.extend((processed, mode) for mode in modes)
        return plan

    def _attempt(self, step: Tuple[ProcessedImage, SegmentationMode]):
        processed, mode = step
        try:
            output = self.engine.recognize(
                processed.pixels, self.language, RecognitionOptions(segmentation_mode=mode)
            )
        except EngineInvocationError as e:
            logger.warning("Skipping %s/%s: %s", processed.strategy, mode.label, e)
            return _FAILED
        except Exception as e:
            # any other engine error skips this attempt only
            logger.warning("Skipping %s/%s after %s: %s", processed.strategy, mode.label, type(e).__name__, e)
            return _FAILED

        text = output.text or ""
        if len(text.strip()) <= MIN_TEXT_LENGTH:
            logger.debug("Rejected %s/%s: too little text", processed.strategy, mode.label)
            return None

        engine_confidence = min(100.0, max(0.0, float(output.confidence)))
        quality = assess_text_quality(text)
        return OCRAttempt(
            strategy=processed.strategy,
            segmentation_mode=mode.label,
            raw_text=text,
            engine_confidence=engine_confidence,
            quality_score=quality,
            effective_confidence=effective_confidence(engine_confidence, quality),
            words=list(output.words),
            lines=list(output.lines),
        )

    def select_best_attempt(self, image: RawImage) -> OCRAttempt:
        plan = self._plan(image)

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(plan))) as pool:
                # map() yields in submission order, whatever order workers finish in
                outcomes = list(pool.map(self._attempt, plan))
        else:
            outcomes = [self._attempt(step) for step in plan]

        failures = sum(1 for outcome in outcomes if outcome is _FAILED)
        if plan and failures == len(plan):
            raise EngineInvocationError(f"All {failures} recognition attempts failed")

        best: Optional[OCRAttempt] = None
        for outcome in outcomes:
            if outcome is None or outcome is _FAILED:
                continue
            if best is None or outcome.effective_confidence > best.effective_confidence:
                best = outcome

        if best is None:
            raise InsufficientTextError()

        logger.info(
            "Selected %s/%s (engine=%.1f quality=%d effective=%.1f)",
            best.strategy, best.segmentation_mode, best.engine_confidence,
            best.quality_score, best.effective_confidence,
        )
        return best

    def run(self, image: RawImage) -> OCRResult:
        """Best attempt, enhanced and annotated.

        Returns the empty result when no attempt produced enough text and
        raises EngineInvocationError only when every attempt failed.
        """
        try:
            attempt = self.select_best_attempt(image)
        except InsufficientTextError as e:
            logger.info("No attempt produced usable text")
            return OCRResult.empty(str(e))

        enhanced = enhance_text(attempt.raw_text)
        return OCRResult(
            attempt=attempt,
            enhanced_text=enhanced,
            has_text=len(enhanced.strip()) > MIN_TEXT_LENGTH,
            looks_like_food_label=looks_like_food_label(enhanced),
            detected_brands=self.brand_detector.detect(enhanced),
        )
