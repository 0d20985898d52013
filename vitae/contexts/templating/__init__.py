"""
Templating Context

Responsibilities:
- Defines the grid document model (rows, columns, footer)
- Substitutes resume data into theme templates (Jinja2)
- Parses and validates resolved template text
- Provides formatting helpers callable from templates

Owns: Template model and grammar, theme template loading, template helpers
Never: Measures or draws anything
"""

from vitae.contexts.templating.exceptions import (
    TemplateError,
    TemplateStructureError,
    TemplateSyntaxError,
)
from vitae.contexts.templating.registries import TemplateRegistry
from vitae.contexts.templating.template_loader import (
    load_template,
    parse_resolved,
    render_source,
    resolve,
    resolve_theme,
)
from vitae.contexts.templating.template_model import (
    Align,
    Col,
    Color,
    FontStyle,
    ImageProp,
    LineProp,
    Row,
    Template,
    TextProp,
    dump_template,
    parse_template,
)

__all__ = [
    # Resolution pipeline
    "render_source",
    "parse_resolved",
    "resolve",
    "resolve_theme",
    "load_template",
    "TemplateRegistry",
    # Document model
    "Template",
    "Row",
    "Col",
    "TextProp",
    "LineProp",
    "ImageProp",
    "Color",
    "FontStyle",
    "Align",
    "parse_template",
    "dump_template",
    # Errors
    "TemplateError",
    "TemplateSyntaxError",
    "TemplateStructureError",
]
