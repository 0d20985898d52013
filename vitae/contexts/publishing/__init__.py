"""
Publishing Context

Responsibilities:
- Renders the static website (one index.html per language)
- Copies static assets into the published site

Owns: Website layout of the output directory
Never: Produces PDFs or edits resume data
"""

from vitae.contexts.publishing.website_generator import (
    WebsiteGenerator,
    generate_multi_language_website,
)

__all__ = ["WebsiteGenerator", "generate_multi_language_website"]
