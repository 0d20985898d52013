"""
Template Loader

Turns a template source into a Template in two steps:

1. Substitution: the source is rendered with Jinja2 against the resume data,
   the target language and the formatting helpers.
2. Parsing: the resolved text is parsed as YAML and validated against the
   grid document grammar.

Step 1 failures raise TemplateSyntaxError; step 2 failures raise
TemplateStructureError after logging the full resolved text.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import jinja2
import yaml

from vitae.contexts.intake.resume_data_structure import ResumeData
from vitae.contexts.templating.exceptions import (
    TemplateError,
    TemplateStructureError,
    TemplateSyntaxError,
)
from vitae.contexts.templating.logger import _log_debug, _log_error, log_resolved_text
from vitae.contexts.templating.registries import TemplateRegistry, create_environment
from vitae.contexts.templating.template_model import Template, parse_template
from vitae.utils.languages import DEFAULT_LANG

# Shared environment for in-memory sources (theme files go through TemplateRegistry)
_ENV = create_environment()


def template_context(data: ResumeData, lang: str) -> Dict[str, Any]:
    """Variables visible to a template."""
    return {"data": data, "lang": lang, "default_lang": DEFAULT_LANG}


def render_source(
    source: Union[str, jinja2.Template],
    data: ResumeData,
    lang: str = DEFAULT_LANG,
    template_path: Optional[Path] = None,
) -> str:
    """
    Substitute resume data into a template source.

    Args:
        source: Template text, or an already compiled Jinja2 template
        data: Resume data exposed to the template as `data`
        lang: Target language exposed as `lang`
        template_path: Source path, used in error messages

    Returns:
        Resolved text

    Raises:
        TemplateSyntaxError: Malformed directive, undefined name, or failing helper
    """
    try:
        template = _ENV.from_string(source) if isinstance(source, str) else source
        return template.render(**template_context(data, lang))
    except jinja2.TemplateSyntaxError as e:
        _log_error(f"Template syntax error at line {e.lineno}: {e.message}")
        raise TemplateSyntaxError(
            "Malformed template directive",
            template_path=template_path,
            original_error=e,
            lineno=e.lineno,
        ) from e
    except jinja2.UndefinedError as e:
        _log_error(f"Undefined name in template: {e}")
        raise TemplateSyntaxError(
            "Template references an undefined variable or helper",
            template_path=template_path,
            original_error=e,
        ) from e
    except TemplateError:
        raise
    except (TypeError, ValueError, AttributeError, KeyError, IndexError) as e:
        # A helper raised while being evaluated
        _log_error(f"Template helper failed: {type(e).__name__}: {e}")
        raise TemplateSyntaxError(
            "Template helper failed during substitution",
            template_path=template_path,
            original_error=e,
        ) from e


def parse_resolved(resolved: str, template_path: Optional[Path] = None) -> Template:
    """
    Parse resolved template text into a Template.

    Raises:
        TemplateStructureError: Not valid YAML, or does not follow the document grammar
    """
    try:
        # Blank text yields None, i.e. a template with no rows
        raw = yaml.safe_load(resolved)
    except yaml.YAMLError as e:
        _log_error(f"Resolved template is not valid YAML: {e}")
        log_resolved_text(resolved)
        raise TemplateStructureError(
            f"Resolved template is not valid YAML: {e}",
            template_path=template_path,
            snippet=resolved,
        ) from e

    try:
        template = parse_template(raw)
    except TemplateStructureError as e:
        _log_error(f"Resolved template does not describe a document: {e.message}")
        log_resolved_text(resolved)
        raise TemplateStructureError(
            e.message, location=e.location, template_path=template_path, snippet=resolved
        ) from e

    _log_debug(f"Parsed template: {len(template.rows)} rows, footer={template.footer is not None}")
    return template


def resolve(
    source: Union[str, jinja2.Template],
    data: ResumeData,
    lang: str = DEFAULT_LANG,
    template_path: Optional[Path] = None,
) -> Template:
    """Substitute data into a template source and parse the result."""
    resolved = render_source(source, data, lang, template_path)
    return parse_resolved(resolved, template_path)


def resolve_theme(
    registry: TemplateRegistry, theme: str, data: ResumeData, lang: str = DEFAULT_LANG
) -> Template:
    """
    Resolve a theme's resume template from a registry.

    Raises:
        FileNotFoundError: If the theme has no resume template
        TemplateSyntaxError: If the template cannot be compiled or substituted
        TemplateStructureError: If the resolved text is not a valid document
    """
    path = registry.get_template_path(theme)
    if not path.is_file():
        raise FileNotFoundError(f"Template file not found for theme '{theme}': {path}")

    try:
        compiled = registry.get_template(theme)
    except jinja2.TemplateSyntaxError as e:
        _log_error(f"Template syntax error at line {e.lineno}: {e.message}")
        raise TemplateSyntaxError(
            "Malformed template directive", template_path=path, original_error=e, lineno=e.lineno
        ) from e

    return resolve(compiled, data, lang, template_path=path)


def load_template(path: Path, data: ResumeData, lang: str = DEFAULT_LANG) -> Template:
    """
    Read a template file and resolve it against resume data.

    Raises:
        FileNotFoundError: If the template file doesn't exist
        TemplateSyntaxError: If substitution fails
        TemplateStructureError: If the resolved text is not a valid document
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Template file not found: {path}")

    _log_debug(f"Loading template: {path}")
    return resolve(path.read_text(encoding="utf-8"), data, lang, template_path=path)
