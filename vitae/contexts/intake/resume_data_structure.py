"""
Resume Data Structure

Defines the read-only resume data model consumed by the templating and publishing contexts.
Instances are built from plain containers (as produced by yaml.safe_load) via from_dict.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional


class ResumeDataError(ValueError):
    """Raised when resume data files do not match the expected structure."""

    pass


def parse_date(value: Any, field_name: str = "date") -> Optional[date]:
    """
    Parse a YAML date value.

    Accepts the date and datetime objects produced for unquoted YAML timestamps, as
    well as quoted ISO dates ("2021-03-01") and ISO datetimes ("2021-03-01T00:00:00Z").

    Returns:
        date, or None for missing/empty values

    Raises:
        ResumeDataError: If the value is not a recognizable date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ResumeDataError(f"Invalid {field_name}: {value!r} (expected YYYY-MM-DD)")


def _mapping(raw: Any, name: str) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ResumeDataError(f"'{name}' must be a mapping, got {type(raw).__name__}")
    return raw


def _sequence(raw: Any, name: str) -> List[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ResumeDataError(f"'{name}' must be a list, got {type(raw).__name__}")
    return raw


def _text(raw: Any) -> str:
    return "" if raw is None else str(raw)


@dataclass
class Logo:
    """Icon reference for an entity (e.g., library="brands", image="github")."""

    library: str = ""
    image: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "Logo":
        raw = _mapping(raw, "logo")
        return cls(library=_text(raw.get("library")), image=_text(raw.get("image")))


@dataclass
class Entity:
    """An organization or social/contact account."""

    name: str = ""
    url: str = ""
    logo: Logo = field(default_factory=Logo)

    @classmethod
    def from_dict(cls, raw: Any) -> "Entity":
        raw = _mapping(raw, "entity")
        return cls(
            name=_text(raw.get("name")),
            url=_text(raw.get("url")),
            logo=Logo.from_dict(raw.get("logo")),
        )


@dataclass
class BasicData:
    """Name and display block."""

    name: str = ""
    display_name: str = ""
    location: str = ""
    pronunciation: str = ""
    phrase: str = ""
    summary: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "BasicData":
        raw = _mapping(raw, "basic")
        return cls(**{name: _text(raw.get(name)) for name in cls.__dataclass_fields__})


@dataclass
class Job:
    """
    Work experience entry.

    Attributes:
        end_date: None means this is the current position
    """

    position: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    job_description: str = ""
    company: Entity = field(default_factory=Entity)

    @property
    def is_current(self) -> bool:
        return self.end_date is None

    @classmethod
    def from_dict(cls, raw: Any) -> "Job":
        raw = _mapping(raw, "job")
        return cls(
            position=_text(raw.get("position")),
            start_date=parse_date(raw.get("start_date"), "start_date"),
            end_date=parse_date(raw.get("end_date"), "end_date"),
            job_description=_text(raw.get("job_description")),
            company=Entity.from_dict(raw.get("company")),
        )


@dataclass
class ProfessionalData:
    """Professional block with the list of jobs."""

    title: str = ""
    years_of_experience: float = 0.0
    jobs: List[Job] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "ProfessionalData":
        raw = _mapping(raw, "professional")
        years = raw.get("years_of_experience") or 0
        try:
            years = float(years)
        except (TypeError, ValueError) as e:
            raise ResumeDataError(f"Invalid years_of_experience: {years!r}") from e
        return cls(
            title=_text(raw.get("title")),
            years_of_experience=years,
            jobs=[Job.from_dict(job) for job in _sequence(raw.get("jobs"), "jobs")],
        )


@dataclass
class Certificate:
    """Professional certification."""

    name: str = ""
    description: str = ""
    date: Optional[date] = None
    certificate_url: str = ""
    url: str = ""
    provider: Entity = field(default_factory=Entity)
    topics: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Certificate":
        raw = _mapping(raw, "certificate")
        return cls(
            name=_text(raw.get("name")),
            description=_text(raw.get("description")),
            date=parse_date(raw.get("date")),
            certificate_url=_text(raw.get("certificate_url")),
            url=_text(raw.get("url")),
            provider=Entity.from_dict(raw.get("provider")),
            topics=[_text(t) for t in _sequence(raw.get("topics"), "topics")],
        )


@dataclass
class Education:
    """Education entry."""

    title: str = ""
    date: Optional[date] = None
    url: str = ""
    level: str = ""
    provider: Entity = field(default_factory=Entity)
    description: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "Education":
        raw = _mapping(raw, "education")
        return cls(
            title=_text(raw.get("title")),
            date=parse_date(raw.get("date")),
            url=_text(raw.get("url")),
            level=_text(raw.get("level")),
            provider=Entity.from_dict(raw.get("provider")),
            description=_text(raw.get("description")),
        )


@dataclass
class Skill:
    """Skill with an optional 1-10 proficiency level."""

    name: str = ""
    description: str = ""
    level: int = 0
    logo: Logo = field(default_factory=Logo)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Skill":
        raw = _mapping(raw, "skill")
        level = raw.get("level") or 0
        if not isinstance(level, int) or isinstance(level, bool) or not 0 <= level <= 10:
            raise ResumeDataError(f"Invalid skill level for '{raw.get('name')}': {level!r}")
        return cls(
            name=_text(raw.get("name")),
            description=_text(raw.get("description")),
            level=level,
            logo=Logo.from_dict(raw.get("logo")),
            tags=[_text(t) for t in _sequence(raw.get("tags"), "tags")],
        )


@dataclass
class ResumeData:
    """
    Complete resume data for one language.

    Attributes:
        basic: Name/display block
        professional: Title, years of experience and jobs
        certificates: Certifications
        education: Education entries
        skills: Skills
        social: Named social/contact entities (Email, Phone, GitHub, ...)
    """

    basic: BasicData = field(default_factory=BasicData)
    professional: ProfessionalData = field(default_factory=ProfessionalData)
    certificates: List[Certificate] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    social: List[Entity] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ResumeData":
        """
        Build resume data from section containers keyed by section file name.

        Args:
            raw: Dict with any of basic, professional, certificates, education, skills, social

        Raises:
            ResumeDataError: If a section has the wrong shape or invalid values
        """
        raw = _mapping(raw, "resume")
        return cls(
            basic=BasicData.from_dict(raw.get("basic")),
            professional=ProfessionalData.from_dict(raw.get("professional")),
            certificates=[
                Certificate.from_dict(c) for c in _sequence(raw.get("certificates"), "certificates")
            ],
            education=[Education.from_dict(e) for e in _sequence(raw.get("education"), "education")],
            skills=[Skill.from_dict(s) for s in _sequence(raw.get("skills"), "skills")],
            social=[Entity.from_dict(s) for s in _sequence(raw.get("social"), "social")],
        )
