"""
Template Compositor

Turns a ResumeData into a self-contained HTML document: the stylesheet link is
replaced with an inline <style> block and every {{PLACEHOLDER}} token in the
skeleton is substituted in a single literal pass.
"""

import os
import re
import threading
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from atsresume.contexts.templating.exceptions import TemplateMismatchError
from atsresume.contexts.templating.logger import log_assets_loaded, log_composition
from atsresume.contexts.templating.resume_data_structure import ResumeData
from atsresume.contexts.templating.sanitizer import escape_html
from atsresume.contexts.templating.section_renderers import (
    render_education_html,
    render_experience_html,
    render_languages_html,
    render_projects_html,
    render_skills_html,
)

load_dotenv()
TEMPLATE_PATH = Path(
    os.getenv("ATSRESUME_TEMPLATE_PATH", Path(__file__).parent / "template")
)
TEMPLATE_FILENAME = "ats.html"
STYLESHEET_FILENAME = "style.css"
EXAMPLE_RESUME_FILENAME = "example_resume.yaml"

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")
STYLESHEET_LINK_PATTERN = re.compile(
    r"<link\b[^>]*\brel=[\"']stylesheet[\"'][^>]*>", re.IGNORECASE
)
URL_SCHEME_PATTERN = re.compile(r"^https?://")

TEXT_PLACEHOLDERS = ("NAME", "TITLE", "EMAIL", "PHONE_E164", "PHONE_DISPLAY", "LOCATION", "SUMMARY")
URL_PLACEHOLDERS = {"LINKEDIN": "linkedin_url", "GITHUB": "github_url", "WEBSITE": "website_url"}
SECTION_PLACEHOLDERS = (
    "SKILLS_HTML",
    "PROJECTS_HTML",
    "EXPERIENCE_HTML",
    "EDUCATION_HTML",
    "LANGUAGES_HTML",
)
REQUIRED_PLACEHOLDERS = (
    TEXT_PLACEHOLDERS
    + tuple(f"{prefix}_URL" for prefix in URL_PLACEHOLDERS)
    + tuple(f"{prefix}_TEXT" for prefix in URL_PLACEHOLDERS)
    + SECTION_PLACEHOLDERS
)


def strip_url_scheme(url: str) -> str:
    """Display form of a URL: leading http:// or https:// removed."""
    return URL_SCHEME_PATTERN.sub("", url, count=1)


def check_template(template_html: str, template_path: Optional[Path] = None) -> None:
    """
    Verify that a template is the resume skeleton.

    Raises:
        TemplateMismatchError: If placeholders or the stylesheet link are missing
    """
    missing = [
        f"{{{{{name}}}}}" for name in REQUIRED_PLACEHOLDERS if f"{{{{{name}}}}}" not in template_html
    ]
    if not STYLESHEET_LINK_PATTERN.search(template_html):
        missing.append('<link rel="stylesheet">')

    if missing:
        raise TemplateMismatchError(
            "Loaded template is not the resume template",
            missing=missing,
            template_path=template_path,
        )


def build_substitutions(resume: ResumeData) -> Dict[str, str]:
    """
    Map each placeholder name to its substitution value.

    Text fields are sanitized, URLs are raw (href) plus a scheme-less display
    form, and sections are the rendered fragments.
    """
    values = {name: escape_html(getattr(resume, name.lower())) for name in TEXT_PLACEHOLDERS}

    for prefix, attr in URL_PLACEHOLDERS.items():
        url = getattr(resume, attr)
        values[f"{prefix}_URL"] = url
        values[f"{prefix}_TEXT"] = strip_url_scheme(url)

    values["SKILLS_HTML"] = render_skills_html(resume.skills)
    values["PROJECTS_HTML"] = render_projects_html(resume.projects)
    values["EXPERIENCE_HTML"] = render_experience_html(resume.experience)
    values["EDUCATION_HTML"] = render_education_html(resume.education)
    values["LANGUAGES_HTML"] = render_languages_html(resume.languages)
    return values


def compose(resume: ResumeData, template_html: str, css: str) -> str:
    """
    Compose the final HTML document.

    Substitution is a single pass over the template: inserted values are never
    rescanned, so a value that literally contains a placeholder token is
    emitted as-is. Tokens without a mapping are left untouched.

    Args:
        resume: Resume record
        template_html: HTML skeleton with {{PLACEHOLDER}} tokens
        css: Stylesheet inlined in place of the <link rel="stylesheet"> element

    Returns:
        Self-contained HTML string

    Raises:
        TemplateMismatchError: If the template is not the resume skeleton
    """
    check_template(template_html)

    html = STYLESHEET_LINK_PATTERN.sub(lambda _: f"<style>{css}</style>", template_html, count=1)

    values = build_substitutions(resume)
    html = PLACEHOLDER_PATTERN.sub(lambda m: values.get(m.group(1), m.group(0)), html)

    log_composition(
        resume.name,
        {name: len(values[name]) for name in SECTION_PLACEHOLDERS},
        len(html),
    )
    return html


class AssetRegistry:
    """
    Process-wide holder for the template/stylesheet pair.

    Assets are read from disk once, guarded by a lock, checked against the
    expected placeholder set, and shared read-only afterwards.
    """

    def __init__(self, template_dir: Path = None):
        if template_dir is None:
            template_dir = TEMPLATE_PATH

        self.template_dir = Path(template_dir)
        self.template_path = self.template_dir / TEMPLATE_FILENAME
        self.css_path = self.template_dir / STYLESHEET_FILENAME

        self._lock = threading.Lock()
        self._template_html: Optional[str] = None
        self._css: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._template_html is not None

    def load(self) -> None:
        """
        Load and check the assets if not already loaded.

        Raises:
            FileNotFoundError: If an asset file is missing
            TemplateMismatchError: If the template is not the resume skeleton
        """
        if self.is_loaded:
            return

        with self._lock:
            if self.is_loaded:
                return

            template_html = self.template_path.read_text(encoding="utf-8")
            css = self.css_path.read_text(encoding="utf-8")
            check_template(template_html, template_path=self.template_path)

            self._css = css
            self._template_html = template_html

        log_assets_loaded(self.template_path, self.css_path, len(template_html), len(css))

    @property
    def template_html(self) -> str:
        self.load()
        return self._template_html

    @property
    def css(self) -> str:
        self.load()
        return self._css

    def compose(self, resume: ResumeData) -> str:
        return compose(resume, self.template_html, self.css)


_default_registry: Optional[AssetRegistry] = None
_default_registry_lock = threading.Lock()


def get_asset_registry() -> AssetRegistry:
    """Return the process-wide AssetRegistry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = AssetRegistry()
    return _default_registry


def build_html(resume: ResumeData, registry: AssetRegistry = None) -> str:
    """
    Render a resume into the final HTML document using the shared assets.

    Args:
        resume: Resume record
        registry: Asset source (default: process-wide registry)

    Returns:
        Self-contained HTML string
    """
    registry = registry or get_asset_registry()
    return registry.compose(resume)


def load_example_resume(path: Path = None) -> ResumeData:
    """Load the bundled example resume (or any YAML/JSON resume file)."""
    if path is None:
        path = TEMPLATE_PATH / EXAMPLE_RESUME_FILENAME
    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    return ResumeData.from_dict(data)
