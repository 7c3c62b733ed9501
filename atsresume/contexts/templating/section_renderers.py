"""
Section Renderers

One pure function per resume section, each turning an ordered collection of
entries into an HTML fragment. Entries render from per-entry Jinja2 templates in
template/sections/ and are joined with newlines; an empty collection renders as
an empty string so the compositor can substitute a blank.

Escaping: autoescape is off and every text value goes through the `sanitize`
filter (escape_html). URLs placed in href attributes are emitted raw.
"""

import os
from pathlib import Path
from typing import Dict, Sequence

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from atsresume.contexts.templating.resume_data_structure import (
    Education,
    Experience,
    Language,
    Project,
    SkillGroup,
)
from atsresume.contexts.templating.sanitizer import escape_html

load_dotenv()
SECTIONS_PATH = Path(
    os.getenv("ATSRESUME_SECTIONS_PATH", Path(__file__).parent / "template" / "sections")
)


class SectionTemplateRegistry:
    """
    Registry for loading and caching the per-entry fragment templates.

    Templates are stored in template/sections/{name}.html.jinja.
    """

    def __init__(self, sections_path: Path = None):
        if sections_path is None:
            sections_path = SECTIONS_PATH

        self.sections_path = Path(sections_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.sections_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Escaping is explicit via | sanitize so href values can stay raw
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["sanitize"] = escape_html

    def get_template(self, name: str) -> Template:
        """
        Get a fragment template by name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        template_path = f"{name}.html.jinja"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Section template '{name}' not found at {self.sections_path / template_path}"
            ) from e

        self._cache[name] = template
        return template

    def render(self, name: str, **context) -> str:
        return self.get_template(name).render(**context)

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()


_registry = SectionTemplateRegistry()


def render_skills_html(skills: Sequence[SkillGroup]) -> str:
    """
    Render skill groups as "label: item, item" lines.

    The items are comma-joined before sanitizing; escaping is a per-character
    replacement so this equals escaping each item individually.
    """
    return "\n".join(_registry.render("skill_group", skill=skill) for skill in skills)


def render_bullets_html(bullets: Sequence[str]) -> str:
    """Render bullet points as a single <ul class="bullets"> with one <li> per item."""
    if not bullets:
        return ""
    return _registry.render("bullets", bullets=bullets)


def render_projects_html(projects: Sequence[Project]) -> str:
    """
    Render projects with stack line, bullets, and an optional link list.

    Each link shows its URL twice: raw in href, sanitized as the visible text.
    """
    return "\n".join(
        _registry.render(
            "project", project=project, bullets_html=render_bullets_html(project.bullets)
        )
        for project in projects
    )


def render_experience_html(entries: Sequence[Experience]) -> str:
    """Render experience entries: role/company/date header followed by bullets."""
    return "\n".join(
        _registry.render("experience", entry=entry, bullets_html=render_bullets_html(entry.bullets))
        for entry in entries
    )


def render_education_html(entries: Sequence[Education]) -> str:
    """Render education entries as header-only items."""
    return "\n".join(_registry.render("education", entry=entry) for entry in entries)


def render_languages_html(languages: Sequence[Language]) -> str:
    """Render languages as "name — level" with the note in the date column."""
    return "\n".join(_registry.render("language", language=language) for language in languages)
