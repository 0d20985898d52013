"""
Formatting helpers available inside resume templates.

Pure functions deriving display values from resume data. They are registered
in the template environment under the names in HELPERS, e.g.:

    {{ get_email(data) }}
    {{ format_date(job.start_date, "%b %Y") }}
    {{ job.job_description | escape_yaml }}
"""

import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, List, Sequence, TypeVar, Union

from vitae.contexts.intake.resume_data_structure import Entity, ResumeData, parse_date

T = TypeVar("T")

PRESENT_LABEL = "Present"
DEFAULT_DATE_FORMAT = "%b %Y"

# Social entries that are contact details rather than profile links
CONTACT_NAMES = ("Phone", "Mobile")

YAML_ESCAPES = [("\\", "\\\\"), ('"', '\\"'), ("\n", "\\n")]


def get_social_value(data: ResumeData, *names: str) -> str:
    """
    Return the URL of the first social entry whose name matches one of names.

    Matching is case-insensitive; the first entry in data.social wins.
    Email values have a leading "mailto:" stripped.
    """
    wanted = [name.lower() for name in names]
    for social in data.social:
        social_name = social.name.lower()
        if social_name in wanted:
            if social_name == "email" and social.url.startswith("mailto:"):
                return social.url[len("mailto:"):]
            return social.url
    return ""


def get_email(data: ResumeData) -> str:
    return get_social_value(data, "Email")


def get_phone(data: ResumeData) -> str:
    return get_social_value(data, "Phone", "Mobile")


def is_contact_info(name: str) -> bool:
    return name.lower() in (n.lower() for n in CONTACT_NAMES)


def get_socials(data: ResumeData) -> List[Entity]:
    """Social entries excluding phone/mobile contact details."""
    return [s for s in data.social if not is_contact_info(s.name)]


def has_socials(data: ResumeData) -> bool:
    return bool(get_socials(data))


def chunk(values: Sequence[T], size: int) -> List[List[T]]:
    """
    Partition values into consecutive chunks of at most size items.

    Examples:
        >>> chunk([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
        >>> chunk([1, 2], 0)
        []
    """
    if size <= 0:
        return []
    values = list(values)
    return [values[i:i + size] for i in range(0, len(values), size)]


def format_date(value: Union[date, datetime, str, None], fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Format a date with a strftime pattern, or "Present" when absent.

    Examples:
        >>> format_date(date(2021, 3, 1))
        'Mar 2021'
        >>> format_date(None)
        'Present'
    """
    if value is None or value == "":
        return PRESENT_LABEL
    if isinstance(value, str):
        value = parse_date(value)
    return value.strftime(fmt or DEFAULT_DATE_FORMAT)


def format_current_date(fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return format_date(datetime.now(), fmt)


def join_names(items: Iterable[Any], sep: str = ", ") -> str:
    """Join the .name of each item (or the item itself for plain strings)."""
    return sep.join(item if isinstance(item, str) else item.name for item in items)


def format_skills(data: ResumeData) -> str:
    return join_names(data.skills)


def escape_yaml(value: Any) -> str:
    """
    Escape a string for embedding inside a double-quoted YAML scalar.

    Examples:
        >>> escape_yaml('Say "hi"\\nthere')
        'Say \\\\"hi\\\\"\\\\nthere'
    """
    text = "" if value is None else str(value)
    for old, new in YAML_ESCAPES:
        text = text.replace(old, new)
    return text


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def last_url_part(url: str) -> str:
    """
    Last path segment of a URL, then the part after its last colon.

    Examples:
        >>> last_url_part("https://github.com/janedoe")
        'janedoe'
        >>> last_url_part("mailto:jane@example.com")
        'jane@example.com'
    """
    return url.split("/")[-1].split(":")[-1]


def asset_path(path: str) -> str:
    """Absolute path for a path relative to the working directory."""
    return str(Path(os.getcwd()) / path)


def calculate_height(text: str, font_size: int, col_width: int) -> float:
    """Estimated row height (mm) for text in a column col_width grid units wide."""
    # Import here to avoid circular dependency
    from vitae.contexts.rendering.text_metrics import estimate_text_height

    return round(estimate_text_height(text, font_size, col_width), 2)


# Names exposed to templates as global functions
HELPERS = {
    "get_email": get_email,
    "get_phone": get_phone,
    "get_social_value": get_social_value,
    "has_socials": has_socials,
    "get_socials": get_socials,
    "is_contact_info": is_contact_info,
    "chunk": chunk,
    "chunk_socials": chunk,
    "format_date": format_date,
    "format_current_date": format_current_date,
    "format_skills": format_skills,
    "join_names": join_names,
    "escape_yaml": escape_yaml,
    "split_lines": split_lines,
    "last_url_part": last_url_part,
    "asset_path": asset_path,
    "calculate_height": calculate_height,
}

# Helpers that also read naturally as filters: {{ value | escape_yaml }}
FILTERS = {
    "escape_yaml": escape_yaml,
    "format_date": format_date,
    "last_url_part": last_url_part,
    "split_lines": split_lines,
    "join_names": join_names,
}
