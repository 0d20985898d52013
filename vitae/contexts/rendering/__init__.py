"""
Rendering Context

Responsibilities:
- Lays out template rows on pages (grid columns, page breaks, footer)
- Measures and wraps text
- Abstracts drawing behind a surface interface (PDF, recording)
- Writes one PDF per language

Owns: Page geometry, layout algorithm, drawing surfaces, PDF output
Never: Modifies template content or resume data
"""
