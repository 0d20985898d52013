"""
Template Model

In-memory representation of a grid document: ordered rows of columns plus an
optional footer row repeated on every page.

Serialization grammar (YAML):

    rows:
      - height: 10
        cols:
          - width: 12
            text: {content: "Jane Doe", size: 18, style: bold, align: center}
    footer:
      height: 5
      cols:
        - width: 12
          line: {thickness: 0.2, color: {red: 200, green: 200, blue: 200}}

Each column holds exactly one of text / line / image, or nothing (a blank spacer).
Instances are immutable once parsed.
"""

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from vitae.contexts.templating.exceptions import TemplateStructureError

MIN_COL_WIDTH = 1
MAX_COL_WIDTH = 12


class FontStyle(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bolditalic"

    @property
    def bold(self) -> bool:
        return self in (FontStyle.BOLD, FontStyle.BOLD_ITALIC)

    @property
    def italic(self) -> bool:
        return self in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC)


# Accepted spellings besides the canonical enum values
FONT_STYLE_ALIASES = {
    "bold+italic": FontStyle.BOLD_ITALIC,
    "bold_italic": FontStyle.BOLD_ITALIC,
    "italicbold": FontStyle.BOLD_ITALIC,
}


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class Color:
    """RGB color, each channel 0-255."""

    red: int
    green: int
    blue: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


BLACK = Color(0, 0, 0)
LIGHT_GRAY = Color(200, 200, 200)


@dataclass(frozen=True)
class TextProp:
    content: str
    size: int
    style: FontStyle = FontStyle.NORMAL
    align: Align = Align.LEFT
    color: Optional[Color] = None
    hyperlink: Optional[str] = None


@dataclass(frozen=True)
class LineProp:
    thickness: float
    color: Optional[Color] = None


@dataclass(frozen=True)
class ImageProp:
    """
    Image column content.

    Attributes:
        path: Filesystem path to the image
        percent: Drawn width as a percentage of the column width (0 = full width)
        center: Center the image horizontally within the column
    """

    path: str
    percent: float = 0.0
    center: bool = False


ColContent = Union[TextProp, LineProp, ImageProp]

# Column keys naming a content variant, in grammar order
CONTENT_KEYS = ("text", "line", "image")


@dataclass(frozen=True)
class Col:
    """A grid-unit-wide slot holding at most one content variant."""

    width: int
    content: Optional[ColContent] = None

    @property
    def text(self) -> Optional[TextProp]:
        return self.content if isinstance(self.content, TextProp) else None

    @property
    def line(self) -> Optional[LineProp]:
        return self.content if isinstance(self.content, LineProp) else None

    @property
    def image(self) -> Optional[ImageProp]:
        return self.content if isinstance(self.content, ImageProp) else None

    @property
    def is_empty(self) -> bool:
        return self.content is None


@dataclass(frozen=True)
class Row:
    """Horizontal band with a declared height (mm) and ordered columns."""

    height: float
    cols: Tuple[Col, ...] = ()

    @property
    def width_units(self) -> int:
        return sum(col.width for col in self.cols)


@dataclass(frozen=True)
class Template:
    rows: Tuple[Row, ...] = ()
    footer: Optional[Row] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


# =============================================================================
# Parsing
# =============================================================================


def _require_mapping(raw: Any, location: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise TemplateStructureError(
            f"Expected a mapping, got {type(raw).__name__}", location=location
        )
    return raw


def _reject_unknown_keys(raw: Dict[str, Any], allowed, location: str) -> None:
    unknown = sorted(str(k) for k in raw if k not in allowed)
    if unknown:
        raise TemplateStructureError(
            f"Unknown field(s) {unknown}; expected only {list(allowed)}", location=location
        )


def _number(value: Any, location: str, minimum: Optional[float] = None,
            maximum: Optional[float] = None) -> float:
    # bool is a subclass of int but is never a valid number here
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TemplateStructureError(f"Expected a number, got {value!r}", location=location)
    value = float(value)
    if minimum is not None and value < minimum:
        raise TemplateStructureError(f"Must be >= {minimum}, got {value:g}", location=location)
    if maximum is not None and value > maximum:
        raise TemplateStructureError(f"Must be <= {maximum}, got {value:g}", location=location)
    return value


def _integer(value: Any, location: str, minimum: Optional[int] = None,
             maximum: Optional[int] = None) -> int:
    number = _number(value, location, minimum, maximum)
    if not number.is_integer():
        raise TemplateStructureError(f"Expected an integer, got {value!r}", location=location)
    return int(number)


def _optional_string(value: Any, location: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TemplateStructureError(f"Expected a string, got {value!r}", location=location)
    return value


def parse_color(raw: Any, location: str) -> Optional[Color]:
    if raw is None:
        return None
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("red", "green", "blue"), location)
    channels = {
        name: _integer(raw.get(name, 0), f"{location}.{name}", 0, 255)
        for name in ("red", "green", "blue")
    }
    return Color(**channels)


def parse_font_style(raw: Any, location: str) -> FontStyle:
    if raw is None or raw == "":
        return FontStyle.NORMAL
    if not isinstance(raw, str):
        raise TemplateStructureError(f"Expected a style name, got {raw!r}", location=location)
    key = raw.strip().lower()
    if key in FONT_STYLE_ALIASES:
        return FONT_STYLE_ALIASES[key]
    try:
        return FontStyle(key)
    except ValueError:
        valid = [s.value for s in FontStyle]
        raise TemplateStructureError(
            f"Unknown style '{raw}'; expected one of {valid}", location=location
        ) from None


def parse_align(raw: Any, location: str) -> Align:
    if raw is None or raw == "":
        return Align.LEFT
    if not isinstance(raw, str):
        raise TemplateStructureError(f"Expected an alignment, got {raw!r}", location=location)
    try:
        return Align(raw.strip().lower())
    except ValueError:
        valid = [a.value for a in Align]
        raise TemplateStructureError(
            f"Unknown align '{raw}'; expected one of {valid}", location=location
        ) from None


def parse_text(raw: Any, location: str) -> TextProp:
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("content", "size", "style", "align", "color", "hyperlink"), location)

    if "content" not in raw or raw["content"] is None:
        raise TemplateStructureError("Missing required field 'content'", location=location)
    content = raw["content"]
    if isinstance(content, (dict, list)):
        raise TemplateStructureError(
            f"Expected text content, got {type(content).__name__}", location=f"{location}.content"
        )
    if "size" not in raw:
        raise TemplateStructureError("Missing required field 'size'", location=location)

    return TextProp(
        content=str(content),
        size=_integer(raw["size"], f"{location}.size", minimum=1),
        style=parse_font_style(raw.get("style"), f"{location}.style"),
        align=parse_align(raw.get("align"), f"{location}.align"),
        color=parse_color(raw.get("color"), f"{location}.color"),
        hyperlink=_optional_string(raw.get("hyperlink"), f"{location}.hyperlink"),
    )


def parse_line(raw: Any, location: str) -> LineProp:
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("thickness", "color"), location)
    if "thickness" not in raw:
        raise TemplateStructureError("Missing required field 'thickness'", location=location)
    return LineProp(
        thickness=_number(raw["thickness"], f"{location}.thickness", minimum=0),
        color=parse_color(raw.get("color"), f"{location}.color"),
    )


def parse_image(raw: Any, location: str) -> ImageProp:
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("path", "percent", "center"), location)
    path = _optional_string(raw.get("path"), f"{location}.path")
    if path is None:
        raise TemplateStructureError("Missing required field 'path'", location=location)

    percent = raw.get("percent")
    center = raw.get("center", False)
    if center is None:
        center = False
    if not isinstance(center, bool):
        raise TemplateStructureError(
            f"Expected true/false, got {center!r}", location=f"{location}.center"
        )
    return ImageProp(
        path=path,
        percent=0.0 if percent is None else _number(percent, f"{location}.percent", 0, 100),
        center=center,
    )


CONTENT_PARSERS = {"text": parse_text, "line": parse_line, "image": parse_image}


def parse_col(raw: Any, location: str) -> Col:
    """
    Parse a column, enforcing that at most one content variant is declared.

    Raises:
        TemplateStructureError: On unknown keys, multiple variants or invalid width
    """
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("width",) + CONTENT_KEYS, location)

    if "width" not in raw:
        raise TemplateStructureError("Missing required field 'width'", location=location)
    width = _integer(raw["width"], f"{location}.width", MIN_COL_WIDTH, MAX_COL_WIDTH)

    declared = [key for key in CONTENT_KEYS if raw.get(key) is not None]
    if len(declared) > 1:
        raise TemplateStructureError(
            f"Column declares multiple content variants {declared}; expected at most one",
            location=location,
        )

    content = None
    if declared:
        key = declared[0]
        content = CONTENT_PARSERS[key](raw[key], f"{location}.{key}")
    return Col(width=width, content=content)


def parse_row(raw: Any, location: str) -> Row:
    raw = _require_mapping(raw, location)
    _reject_unknown_keys(raw, ("height", "cols"), location)
    if "height" not in raw:
        raise TemplateStructureError("Missing required field 'height'", location=location)

    cols = raw.get("cols") or []
    if not isinstance(cols, list):
        raise TemplateStructureError("'cols' must be a list", location=f"{location}.cols")

    return Row(
        height=_number(raw["height"], f"{location}.height", minimum=0),
        cols=tuple(parse_col(col, f"{location}.cols[{i}]") for i, col in enumerate(cols)),
    )


def parse_template(raw: Any) -> Template:
    """
    Build a Template from its parsed (plain container) serialization.

    An empty or None document is a valid template with no rows.

    Raises:
        TemplateStructureError: If the document does not follow the grammar
    """
    if raw is None:
        return Template()
    raw = _require_mapping(raw, "template")
    _reject_unknown_keys(raw, ("rows", "footer"), "template")

    rows = raw.get("rows") or []
    if not isinstance(rows, list):
        raise TemplateStructureError("'rows' must be a list", location="rows")

    footer = raw.get("footer")
    return Template(
        rows=tuple(parse_row(row, f"rows[{i}]") for i, row in enumerate(rows)),
        footer=parse_row(footer, "footer") if footer is not None else None,
    )


# =============================================================================
# Serialization
# =============================================================================


def _color_to_dict(color: Optional[Color]) -> Optional[Dict[str, int]]:
    if color is None:
        return None
    return {"red": color.red, "green": color.green, "blue": color.blue}


def _drop_none(mapping: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in mapping.items() if v is not None}


def col_to_dict(col: Col) -> Dict[str, Any]:
    out: Dict[str, Any] = {"width": col.width}
    content = col.content
    if isinstance(content, TextProp):
        out["text"] = _drop_none({
            "content": content.content,
            "size": content.size,
            "style": content.style.value,
            "align": content.align.value,
            "color": _color_to_dict(content.color),
            "hyperlink": content.hyperlink,
        })
    elif isinstance(content, LineProp):
        out["line"] = _drop_none(
            {"thickness": content.thickness, "color": _color_to_dict(content.color)}
        )
    elif isinstance(content, ImageProp):
        out["image"] = {"path": content.path, "percent": content.percent, "center": content.center}
    return out


def row_to_dict(row: Row) -> Dict[str, Any]:
    return {"height": row.height, "cols": [col_to_dict(col) for col in row.cols]}


def template_to_dict(template: Template) -> Dict[str, Any]:
    out: Dict[str, Any] = {"rows": [row_to_dict(row) for row in template.rows]}
    if template.footer is not None:
        out["footer"] = row_to_dict(template.footer)
    return out


def dump_template(template: Template) -> str:
    """Serialize a Template to YAML text that parses back to an equal Template."""
    return yaml.safe_dump(template_to_dict(template), sort_keys=False, allow_unicode=True)
