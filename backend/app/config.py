"""
Review Engine - Configuration

Environment-driven settings for the generation engine and API.
"""
import logging
import os
from typing import Optional


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _optional_int_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(f"Ignoring non-integer {name}={raw!r}")
        return None


# Log level for the API process
LOG_LEVEL = os.getenv("REVIEW_ENGINE_LOG_LEVEL", "INFO").upper()

# Default seed for generation calls that do not supply one (None = unseeded)
DEFAULT_SEED = _optional_int_env("REVIEW_ENGINE_SEED")

# Request defaults
DEFAULT_NIGHTS = _int_env("REVIEW_ENGINE_DEFAULT_NIGHTS", 3)
DEFAULT_VOICE = os.getenv("REVIEW_ENGINE_DEFAULT_VOICE", "friendly")

# Authenticity scoring thresholds
VARIANCE_THRESHOLD = _int_env("REVIEW_ENGINE_VARIANCE_THRESHOLD", 10)
PRONOUN_MIN = _int_env("REVIEW_ENGINE_PRONOUN_MIN", 3)


def get_scoring_config():
    """Build the ScoringConfig from the environment settings above."""
    from .services.review_generator.scoring import ScoringConfig

    return ScoringConfig(
        variance_threshold=float(VARIANCE_THRESHOLD),
        pronoun_min=PRONOUN_MIN,
    )


def configure_logging() -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
