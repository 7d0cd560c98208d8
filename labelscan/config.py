"""
Central configuration, read from the environment (and a local .env file).

Components read these attributes when they are constructed and also accept
explicit overrides, so tests can monkeypatch either the module attribute or
pass values directly.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# ── Cloud vision provider ─────────────────────────────────────────────────────
# Leave the key unset to run the local Tesseract pipeline only.
GOOGLE_VISION_API_KEY: str | None = os.getenv("GOOGLE_VISION_API_KEY") or None
GOOGLE_VISION_API_URL: str = os.getenv(
    "GOOGLE_VISION_API_URL", "https://vision.googleapis.com/v1/images:annotate"
)
GOOGLE_VISION_TIMEOUT: float = float(os.getenv("GOOGLE_VISION_TIMEOUT", "30"))

# ── Local recognition engine ──────────────────────────────────────────────────
OCR_LANGUAGE: str = os.getenv("OCR_LANGUAGE", "eng")
# Number of (strategy, mode) attempts run concurrently; 1 runs them in order.
OCR_MAX_WORKERS: int = max(1, int(os.getenv("OCR_MAX_WORKERS", "1")))
# Path to the tesseract binary when it is not on PATH.
TESSERACT_CMD: str | None = os.getenv("TESSERACT_CMD") or None

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
