# catalog/config.py
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

ORPHAN_POLICIES = ("drop", "promote")

class Config:
    """Configuration settings for the catalog tools"""

    # Category tree settings
    ORPHAN_POLICY: str = os.getenv("ORPHAN_POLICY", "drop").strip().lower()
    if ORPHAN_POLICY not in ORPHAN_POLICIES:
        raise ValueError(
            f"Invalid ORPHAN_POLICY {ORPHAN_POLICY!r}, expected one of {', '.join(ORPHAN_POLICIES)}"
        )

    # Variant settings
    SKU_SEPARATOR: str = os.getenv("SKU_SEPARATOR", "-")
    if not SKU_SEPARATOR:
        raise ValueError("SKU_SEPARATOR must not be empty")

    # Preview runner
    CATALOG_SNAPSHOT: str = os.getenv("CATALOG_SNAPSHOT", "")

    # Other settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Paths
    LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = Config.LOG_DIR / "catalog.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
