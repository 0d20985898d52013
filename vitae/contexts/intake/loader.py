"""
Resume Data Loader

Loads resume sections from YAML files and overlays per-language translations.

Directory layout:
    data/
        basic.yaml, professional.yaml, certificates.yaml,
        education.yaml, skills.yaml, social.yaml
        lang/
            es/professional.yaml   # overlays data/professional.yaml for "es"
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from vitae.contexts.intake.logger import _log_debug, _log_error, _log_info
from vitae.contexts.intake.resume_data_structure import ResumeData
from vitae.utils.languages import DEFAULT_LANG, is_default_lang, validate_directories

EXTENSIONS = ["yml", "yaml"]
SUPPORTED_FILES = ["basic", "professional", "certificates", "education", "skills", "social"]
LANG_DIR_NAME = "lang"


def _load_yaml(path: Path) -> Any:
    """Load a YAML file into plain containers, logging and re-raising failures."""
    try:
        with open(path, "r", encoding="utf-8") as file:
            return yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as e:
        _log_error(f"Failed to load YAML file {path}: {e}")
        raise


def deep_merge(base: Any, overlay: Any) -> Any:
    """
    Merge overlay over base without modifying either.

    Mappings merge key by key; any other overlay value replaces the base value.

    Examples:
        >>> deep_merge({"a": {"x": 1, "y": 2}, "b": [1]}, {"a": {"y": 3}, "b": [2]})
        {'a': {'x': 1, 'y': 3}, 'b': [2]}
    """
    if not (isinstance(base, dict) and isinstance(overlay, dict)):
        return overlay
    merged = dict(base)
    for key, value in overlay.items():
        merged[key] = deep_merge(merged[key], value) if key in merged else value
    return merged


def _is_empty(config) -> bool:
    return config is None or (isinstance(config, (dict, list, str)) and len(config) == 0)


def load_section(data_dir: Path, file_name: str, lang: str):
    """
    Load one section file, deep-merging the language overlay when present.

    Mappings merge key by key; lists and scalars from the overlay replace the base.

    Returns:
        Plain YAML containers, or None if the base file does not exist
    """
    base_path = data_dir / file_name
    if not base_path.exists():
        _log_debug(f"Base YAML file does not exist, skipping: {base_path}")
        return None

    _log_debug(f"Loading data from YAML file: {base_path}")
    section = _load_yaml(base_path)

    if is_default_lang(lang):
        return section

    overlay_path = data_dir / LANG_DIR_NAME / lang / file_name
    if not overlay_path.exists():
        return section

    _log_debug(f"Loading '{lang}' overlay from YAML file: {overlay_path}")
    overlay = _load_yaml(overlay_path)
    if _is_empty(overlay):
        return section

    return deep_merge(section, overlay)


def load_resume_data(data_dir: Union[str, Path], lang: str = DEFAULT_LANG) -> ResumeData:
    """
    Load resume data for a language.

    Both .yml and .yaml variants of each section file are read (in that order),
    later files overriding earlier ones.

    Args:
        data_dir: Directory containing the section YAML files
        lang: Language code; non-default languages apply lang/<code>/ overlays

    Returns:
        ResumeData instance

    Raises:
        FileNotFoundError: If data_dir does not exist
        ResumeDataError: If a section has an invalid structure
    """
    data_dir = Path(data_dir)
    validate_directories(data_dir)

    sections: Dict[str, Any] = {}
    for ext in EXTENSIONS:
        for name in SUPPORTED_FILES:
            section = load_section(data_dir, f"{name}.{ext}", lang)
            if _is_empty(section):
                continue
            previous = sections.get(name)
            if previous is not None:
                section = deep_merge(previous, section)
            sections[name] = section

    try:
        return ResumeData.from_dict(sections)
    except ValueError as e:
        _log_error(f"Invalid resume data in {data_dir} (lang={lang}): {e}")
        raise


def detect_languages(data_dir: Union[str, Path], target_lang: str = "") -> List[str]:
    """
    Determine which languages to render.

    If target_lang is set and not the default, only that language is returned.
    Otherwise the default language is followed by every lang/<code>/ directory.

    Examples:
        data/lang/es, data/lang/fr  ->  ["en", "es", "fr"]
    """
    if target_lang and not is_default_lang(target_lang):
        return [target_lang]

    languages = [DEFAULT_LANG]
    lang_dir = Path(data_dir) / LANG_DIR_NAME
    if lang_dir.is_dir():
        for entry in sorted(lang_dir.iterdir()):
            _log_debug(f"Language directory entry: {entry.name}")
            if entry.is_dir() and entry.name != DEFAULT_LANG:
                languages.append(entry.name)

    _log_info(f"Languages detected: {languages}")
    return languages
