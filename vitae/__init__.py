"""
vitae - resume data to a paginated PDF and a static website

Reads YAML resume data and renders it through declarative, data-driven templates.

Architecture:
- Intake Context: Resume data loading and per-language overlays
- Templating Context: Template model, template resolution and formatting helpers
- Rendering Context: Grid layout engine, drawing surfaces and PDF output
- Publishing Context: Static website generation and asset copying
"""

__version__ = "0.1.0"
