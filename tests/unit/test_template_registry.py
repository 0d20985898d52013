"""Unit tests for TemplateRegistry class."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from vitae.contexts.intake import ResumeData
from vitae.contexts.templating.exceptions import TemplateSyntaxError
from vitae.contexts.templating.registries import TEMPLATES_PATH, TemplateRegistry
from vitae.contexts.templating.template_loader import resolve_theme


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path == TEMPLATES_PATH
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_get_default_theme():
    """Test loading the bundled default theme."""
    registry = TemplateRegistry()
    template = registry.get_template("default")

    assert template is not None
    assert registry.is_cached("default")


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("default")
    template2 = registry.get_template("default")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing theme."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent_theme")


@pytest.mark.unit
def test_get_template_path():
    """Test getting template file path."""
    registry = TemplateRegistry()
    path = registry.get_template_path("default")

    assert isinstance(path, Path)
    assert path.name == "resume.yaml.jinja"
    assert path.parent.name == "default"


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry()

    registry.get_template("default")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0
    assert not registry.is_cached("default")


@pytest.mark.unit
def test_custom_templates_path(tmp_path):
    """Test themes resolve against a custom directory, with helpers registered."""
    (tmp_path / "mini").mkdir()
    (tmp_path / "mini" / "resume.yaml.jinja").write_text(
        "rows:\n  - height: 5\n    cols:\n      - width: 12\n"
        "        text: {content: \"{{ chunk([1, 2, 3], 2) | length }}\", size: 9}\n",
        encoding="utf-8",
    )
    registry = TemplateRegistry(tmp_path)

    template = resolve_theme(registry, "mini", ResumeData())
    assert template.rows[0].cols[0].text.content == "2"


@pytest.mark.unit
def test_resolve_theme_missing(tmp_path):
    """Test resolving a theme without a resume template."""
    with pytest.raises(FileNotFoundError):
        resolve_theme(TemplateRegistry(tmp_path), "absent", ResumeData())


@pytest.mark.unit
def test_resolve_theme_syntax_error(tmp_path):
    """Test compile errors in a theme are wrapped with the template path."""
    (tmp_path / "bad").mkdir()
    path = tmp_path / "bad" / "resume.yaml.jinja"
    path.write_text("{% if %}\n", encoding="utf-8")

    with pytest.raises(TemplateSyntaxError) as exc_info:
        resolve_theme(TemplateRegistry(tmp_path), "bad", ResumeData())
    assert exc_info.value.template_path == path


@pytest.mark.unit
def test_default_theme_resolves_for_empty_data():
    """Test the bundled theme copes with an empty resume."""
    template = resolve_theme(TemplateRegistry(), "default", ResumeData())

    assert template.rows
    assert template.footer is not None
