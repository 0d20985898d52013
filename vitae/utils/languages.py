"""Language code and input directory helpers shared by all contexts."""

import os
from pathlib import Path
from typing import Union

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
DEFAULT_LANG = os.getenv("DEFAULT_LANG", "en")


def get_lang(lang: str) -> str:
    """
    Extract the two-letter language code from a locale string.

    Examples:
        >>> get_lang("en_US.UTF-8")
        'en'
        >>> get_lang("es")
        'es'
    """
    logger.debug(f"Extracting language code from '{lang}'")
    if len(lang) > 2:
        return lang[:2]
    return lang


def is_default_lang(lang: str) -> bool:
    """True for the default language (or an empty code)."""
    return not lang or lang == DEFAULT_LANG


def validate_directories(data_dir: Union[str, Path]) -> None:
    """
    Check that the resume data directory exists and is a directory.

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    data_dir = Path(data_dir)
    if not data_dir.exists():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")
    if not data_dir.is_dir():
        raise NotADirectoryError(f"Data path is not a directory: {data_dir}")
