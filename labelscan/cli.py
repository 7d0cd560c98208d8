"""
Analyse a food-label photo from the command line.

USAGE:
    labelscan photo.jpg                 # cloud first when configured, else Tesseract
    labelscan photo.jpg --local-only    # skip the cloud provider
    labelscan photo.jpg --workers 3     # run recognition attempts concurrently
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from labelscan import config
from labelscan.application.providers.cloud_vision import CloudVisionProvider
from labelscan.application.providers.local_engine import LocalEngineProvider
from labelscan.application.services.analysis_service import AnalysisService
from labelscan.application.services.ocr_orchestrator import LocalOCROrchestrator
from labelscan.infrastructure.ocr.tesseract_engine import TesseractEngine


def build_service(local_only: bool, workers: int) -> AnalysisService:
    orchestrator = LocalOCROrchestrator(TesseractEngine(), max_workers=workers)
    providers = [] if local_only else [CloudVisionProvider()]
    providers.append(LocalEngineProvider(orchestrator=orchestrator))
    return AnalysisService(providers=providers)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Read a food-label photo into a confidence-scored JSON report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", help="Path to the input image")
    parser.add_argument(
        "--local-only", action="store_true", help="Never call the cloud vision provider"
    )
    parser.add_argument(
        "--workers", type=int, default=config.OCR_MAX_WORKERS,
        help="Concurrent recognition attempts (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    path = Path(args.image)
    if not path.exists():
        print(f"Error: image not found: {path}", file=sys.stderr)
        return 1

    service = build_service(args.local_only, max(1, args.workers))
    try:
        outcome = service.analyze(path.read_bytes())
    finally:
        service.close()

    if not outcome.success:
        print(f"Error: {outcome.error_kind}: {outcome.error}", file=sys.stderr)
        return 1

    print(json.dumps(outcome.report.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
