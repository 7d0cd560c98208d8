import logging
from typing import Optional

from labelscan.application.providers.base import ProviderResult, RecognitionProvider
from labelscan.application.services.ocr_orchestrator import LocalOCROrchestrator
from labelscan.domain.entities.image import RawImage
from labelscan.domain.errors import EngineInvocationError
from labelscan.infrastructure.ocr.engine import TextRecognitionEngine


logger = logging.getLogger(__name__)


class LocalEngineProvider(RecognitionProvider):
    name = "Tesseract"

    def __init__(
        self,
        engine: Optional[TextRecognitionEngine] = None,
        orchestrator: Optional[LocalOCROrchestrator] = None,
    ):
        if orchestrator is None:
            if engine is None:
                from labelscan.infrastructure.ocr.tesseract_engine import TesseractEngine
                engine = TesseractEngine()
            orchestrator = LocalOCROrchestrator(engine)
        self.orchestrator = orchestrator

    def is_available(self) -> bool:
        return True

    def attempt_recognition(self, image: RawImage) -> ProviderResult:
        try:
            ocr = self.orchestrator.run(image)
        except EngineInvocationError as e:
            logger.error("[%s] %s", self.name, e)
            return ProviderResult.failed(self.name, e.kind, str(e))

        return ProviderResult(provider_name=self.name, success=True, ocr=ocr)
