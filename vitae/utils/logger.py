"""
Session logger setup shared by the build scripts.

Each build session gets its own log directory with a DEBUG file sink, plus a
console sink whose level comes from VITAE_LOG_LEVEL. The first lines of every
log describe the build: what was run, on which data, with which theme and
library versions, so a PDF can be traced back to the run that produced it.

Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import reportlab
from dotenv import load_dotenv
from loguru import logger

import vitae

load_dotenv()
CONSOLE_LEVEL = os.getenv("VITAE_LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


@dataclass
class BuildProvenance:
    """
    What a build session works on.

    Attributes:
        theme: Theme name
        data_dir: Resume data directory
        output_dir: Output root
        lang: Requested language ("" = every detected language)
    """

    theme: str
    data_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    lang: str = ""

    def lines(self) -> List[Tuple[str, str]]:
        entries = [("Theme", self.theme), ("Languages", self.lang or "all detected")]
        if self.data_dir is not None:
            entries.append(("Data", str(Path(self.data_dir).resolve())))
        if self.output_dir is not None:
            entries.append(("Output", str(Path(self.output_dir).resolve())))
        return entries


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: Optional[BuildProvenance] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Replace loguru's sinks with a session log file and the console.

    Args:
        context_name: Context identifier ("render", "publish"); names the log file
        log_dir: Directory for this logging session
        provenance: Build settings written to the log header
        console_level: Console threshold (defaults to VITAE_LOG_LEVEL, then INFO)

    Returns:
        Path to log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level or CONSOLE_LEVEL, colorize=True)

    log_provenance(context_name, provenance)
    return log_file


def log_provenance(context_name: str, provenance: Optional[BuildProvenance] = None) -> None:
    """Write the session header: command, environment and build settings."""
    logger.info("=" * 80)
    logger.info(f"vitae {vitae.__version__} | {context_name} session")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python {sys.version.split()[0]} | reportlab {reportlab.Version}")
    if provenance is not None:
        for key, value in provenance.lines():
            logger.info(f"{key}: {value}")
    logger.info("=" * 80)
