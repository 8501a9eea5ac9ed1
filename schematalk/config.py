"""
schematalk/config.py
Process configuration - environment variables (.env supported)
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DECKS_BASE_PATH = Path(os.getenv("SCHEMATALK_DECKS_PATH", Path(__file__).parent.parent / "decks"))
LOG_LEVEL = os.getenv("SCHEMATALK_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Batch playback default: "all" stages or only the "final" one
DEFAULT_STAGE_EXPANSION = os.getenv("SCHEMATALK_STAGES", "all").lower()
if DEFAULT_STAGE_EXPANSION not in ("all", "final"):
    DEFAULT_STAGE_EXPANSION = "all"
