"""
Resume Data Structures

Defines the immutable resume record consumed by the rendering pipeline and its
parsing from the JSON shape produced by the editor.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

from atsresume.contexts.templating.exceptions import InputMalformedError

SCALAR_FIELDS = (
    "name",
    "title",
    "email",
    "phone_e164",
    "phone_display",
    "location",
    "summary",
    "linkedin_url",
    "github_url",
    "website_url",
)


@dataclass(frozen=True)
class SkillGroup:
    """
    Labelled group of skills, rendered comma-joined.

    Attributes:
        group: Group label (e.g., "Languages")
        items: Skill names, order preserved
    """

    group: str
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectLink:
    """Label and URL for a project link. The URL is emitted raw into href."""

    label: str
    url: str


@dataclass(frozen=True)
class Project:
    """
    Portfolio project entry.

    Attributes:
        title: Project title
        stack: Technology stack description
        bullets: Free-text bullet points
        links: Optional links (empty when the project has none)
    """

    title: str
    stack: str
    bullets: Tuple[str, ...] = ()
    links: Tuple[ProjectLink, ...] = ()


@dataclass(frozen=True)
class Experience:
    """
    Work experience entry.

    Attributes:
        role: Job title
        company: Organization
        date: Free-text date range (e.g., "2021 - Present")
        bullets: Free-text bullet points
    """

    role: str
    company: str
    date: str
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Education:
    """Degree/title, institution, and free-text date range."""

    title: str
    subtitle: str
    date: str


@dataclass(frozen=True)
class Language:
    """Spoken language with proficiency level and a free-text note."""

    name: str
    level: str
    note: str


@dataclass(frozen=True)
class ResumeData:
    """
    Root resume record. Constructed by the caller, never mutated by the pipeline.

    Attributes:
        name, title, email, location, summary: Header and summary text
        phone_e164: Dialable phone number (used in tel: links)
        phone_display: Human-readable phone number
        linkedin_url, github_url, website_url: Profile URLs (raw, attribute context)
        skills, projects, experience, education, languages: Ordered sections
    """

    name: str = ""
    title: str = ""
    email: str = ""
    phone_e164: str = ""
    phone_display: str = ""
    location: str = ""
    summary: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    website_url: str = ""
    skills: Tuple[SkillGroup, ...] = field(default_factory=tuple)
    projects: Tuple[Project, ...] = field(default_factory=tuple)
    experience: Tuple[Experience, ...] = field(default_factory=tuple)
    education: Tuple[Education, ...] = field(default_factory=tuple)
    languages: Tuple[Language, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeData":
        """
        Build a ResumeData from the editor's JSON shape.

        Missing scalars become "", missing or null arrays become empty.
        Only structural shape is checked, never content.

        Args:
            data: Parsed JSON object

        Returns:
            ResumeData instance

        Raises:
            InputMalformedError: If the structure does not match the expected shape
        """
        if not isinstance(data, Mapping):
            raise InputMalformedError(
                f"Resume must be a JSON object, got {type(data).__name__}"
            )

        scalars = {name: _scalar(data, name, "") for name in SCALAR_FIELDS}

        skills = tuple(
            SkillGroup(
                group=_scalar(entry, "group", path),
                items=_string_list(entry, "items", path),
            )
            for entry, path in _entries(data, "skills")
        )
        projects = tuple(
            Project(
                title=_scalar(entry, "title", path),
                stack=_scalar(entry, "stack", path),
                bullets=_string_list(entry, "bullets", path),
                links=tuple(
                    ProjectLink(
                        label=_scalar(link, "label", link_path),
                        url=_scalar(link, "url", link_path),
                    )
                    for link, link_path in _entries(entry, "links", path)
                ),
            )
            for entry, path in _entries(data, "projects")
        )
        experience = tuple(
            Experience(
                role=_scalar(entry, "role", path),
                company=_scalar(entry, "company", path),
                date=_scalar(entry, "date", path),
                bullets=_string_list(entry, "bullets", path),
            )
            for entry, path in _entries(data, "experience")
        )
        education = tuple(
            Education(
                title=_scalar(entry, "title", path),
                subtitle=_scalar(entry, "subtitle", path),
                date=_scalar(entry, "date", path),
            )
            for entry, path in _entries(data, "education")
        )
        languages = tuple(
            Language(
                name=_scalar(entry, "name", path),
                level=_scalar(entry, "level", path),
                note=_scalar(entry, "note", path),
            )
            for entry, path in _entries(data, "languages")
        )

        return cls(
            **scalars,
            skills=skills,
            projects=projects,
            experience=experience,
            education=education,
            languages=languages,
        )

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "ResumeData":
        """
        Parse a JSON document into a ResumeData.

        Accepts either a JSON object or a JSON string whose content is itself
        the JSON object (HTTP clients send both).

        Raises:
            InputMalformedError: If the body is not valid JSON or has the wrong shape
        """
        try:
            data = json.loads(raw)
            if isinstance(data, str):
                data = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InputMalformedError(f"Body is not valid JSON: {e}") from e
        except RecursionError as e:
            raise InputMalformedError("Body is nested too deeply to parse") from e

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the editor's JSON shape (lists instead of tuples)."""
        return json.loads(json.dumps(asdict(self)))


def _join_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def _scalar(data: Mapping, key: str, parent: str) -> str:
    """Read a scalar text field; missing or null is "", numbers/bools are stringified."""
    path = _join_path(parent, key)
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        raise InputMalformedError(
            f"Expected text, got {type(value).__name__}", field_path=path
        )
    return value if isinstance(value, str) else str(value)


def _string_list(data: Mapping, key: str, parent: str) -> Tuple[str, ...]:
    """Read an ordered list of text values (bullets, skill items)."""
    path = _join_path(parent, key)
    values = data.get(key)
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise InputMalformedError(
            f"Expected a list, got {type(values).__name__}", field_path=path
        )

    items = []
    for i, value in enumerate(values):
        if isinstance(value, (Mapping, list, tuple)):
            raise InputMalformedError(
                f"Expected text, got {type(value).__name__}", field_path=f"{path}[{i}]"
            )
        items.append("" if value is None else str(value))
    return tuple(items)


def _entries(data: Mapping, key: str, parent: str = ""):
    """Yield (entry, path) for each object in an array field."""
    path = _join_path(parent, key)
    values = data.get(key)
    if values is None:
        return
    if not isinstance(values, (list, tuple)):
        raise InputMalformedError(
            f"Expected a list, got {type(values).__name__}", field_path=path
        )

    for i, entry in enumerate(values):
        entry_path = f"{path}[{i}]"
        if not isinstance(entry, Mapping):
            raise InputMalformedError(
                f"Expected an object, got {type(entry).__name__}", field_path=entry_path
            )
        yield entry, entry_path
