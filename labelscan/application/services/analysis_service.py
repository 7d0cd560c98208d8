import logging
import time
from typing import List, Optional, Sequence, Union

from labelscan.application.providers.base import ProviderResult, RecognitionProvider
from labelscan.application.services.color_analyzer import ColorAnalyzer
from labelscan.application.services.confidence import (
    calculate_overall_confidence,
    generate_recommendations,
)
from labelscan.application.services.section_extractor import clean_extracted_text
from labelscan.domain.entities.analysis_report import (
    AnalysisOutcome,
    AnalysisReport,
    ConfidenceBreakdown,
)
from labelscan.domain.entities.image import RawImage
from labelscan.domain.entities.product import ColorAnalysis
from labelscan.domain.errors import LabelScanError
from labelscan.infrastructure.imaging.image_codec import decode_image


logger = logging.getLogger(__name__)


def default_providers(local_only: bool = False) -> List[RecognitionProvider]:
    from labelscan.application.providers.cloud_vision import CloudVisionProvider
    from labelscan.application.providers.local_engine import LocalEngineProvider

    providers: List[RecognitionProvider] = []
    if not local_only:
        providers.append(CloudVisionProvider())
    providers.append(LocalEngineProvider())
    return providers


class AnalysisService:
    """Public entry point: raw image in, AnalysisOutcome out. Never raises."""

    def __init__(
        self,
        providers: Optional[Sequence[RecognitionProvider]] = None,
        color_analyzer: Optional[ColorAnalyzer] = None,
    ):
        self.providers = list(providers) if providers is not None else default_providers()
        self.color_analyzer = color_analyzer or ColorAnalyzer()

    def close(self):
        for provider in self.providers:
            provider.close()

    def analyze(self, data: Union[bytes, str]) -> AnalysisOutcome:
        start_time = time.time()
        try:
            image = decode_image(data)
            outcome = self.analyze_image(image)
        except LabelScanError as e:
            logger.warning("Analysis failed with %s: %s", e.kind, e)
            return AnalysisOutcome.failed(e.kind, str(e))
        except Exception as e:
            logger.exception("Unexpected error during label analysis")
            return AnalysisOutcome.failed("UnexpectedError", str(e))

        logger.info(
            "Analysis finished in %.2fs (success=%s)", time.time() - start_time, outcome.success
        )
        return outcome

    def analyze_image(self, image: RawImage) -> AnalysisOutcome:
        last_failure: Optional[ProviderResult] = None

        for provider in self.providers:
            if not provider.is_available():
                logger.debug("Provider %s not available, skipping", provider.name)
                continue

            result = provider.attempt_recognition(image)
            if result.success:
                color = self.color_analyzer.analyze(image)
                return AnalysisOutcome.ok(self._build_report(result, color))

            logger.warning(
                "Provider %s failed (%s: %s), falling back", provider.name, result.error_kind, result.error
            )
            last_failure = result

        if last_failure is None:
            return AnalysisOutcome.failed("NoProviderAvailable", "No recognition provider is available")
        return AnalysisOutcome.failed(last_failure.error_kind, last_failure.error)

    def _build_report(self, result: ProviderResult, color: ColorAnalysis) -> AnalysisReport:
        ocr = result.ocr
        brands = ocr.detected_brands

        if result.overall_confidence is not None:
            # provider scored itself; label categories take precedence over colour
            guess = result.product_types[0] if result.product_types else None
            product_type = guess.product_type if guess else color.product_type
            product_type_confidence = guess.confidence if guess else color.confidence
            overall = result.overall_confidence
            type_signal = guess.confidence if guess else 0
        else:
            product_type = color.product_type
            product_type_confidence = color.confidence
            overall = calculate_overall_confidence(
                ocr.confidence, ocr.has_text, ocr.looks_like_food_label, brands, color.confidence
            )
            type_signal = color.confidence

        cleaned_text, sections = clean_extracted_text(ocr.raw_text)

        return AnalysisReport(
            provider=result.provider_name,
            ocr=ocr,
            products=list(brands),
            product_type=product_type,
            product_type_confidence=product_type_confidence,
            color_profile=color.profile,
            confidence=ConfidenceBreakdown(
                overall=overall, ocr=ocr.confidence, product_type=type_signal
            ),
            recommendations=generate_recommendations(
                overall, ocr.confidence, ocr.has_text, ocr.looks_like_food_label, brands
            ),
            sections=sections,
            cleaned_text=cleaned_text,
            labels=list(result.labels),
        )
