"""
Templating Context

Responsibilities:
- Represents the resume record (immutable, order-preserving data model)
- Sanitizes untrusted text for HTML text nodes
- Renders the six resume sections into HTML fragments
- Composes fragments and scalar fields into the HTML skeleton with inline CSS

Owns: Resume data model, HTML escaping, template assets, HTML composition
Never: Lays out pages or produces PDF bytes
"""

from atsresume.contexts.templating.compositor import (
    AssetRegistry,
    build_html,
    compose,
    get_asset_registry,
    load_example_resume,
)
from atsresume.contexts.templating.exceptions import InputMalformedError, TemplateMismatchError
from atsresume.contexts.templating.preview import PreviewDebouncer
from atsresume.contexts.templating.resume_data_structure import (
    Education,
    Experience,
    Language,
    Project,
    ProjectLink,
    ResumeData,
    SkillGroup,
)
from atsresume.contexts.templating.sanitizer import escape_html
from atsresume.contexts.templating.section_renderers import (
    render_bullets_html,
    render_education_html,
    render_experience_html,
    render_languages_html,
    render_projects_html,
    render_skills_html,
)

__all__ = [
    # Data model
    "ResumeData",
    "SkillGroup",
    "Project",
    "ProjectLink",
    "Experience",
    "Education",
    "Language",
    # Sanitizer and section renderers
    "escape_html",
    "render_skills_html",
    "render_bullets_html",
    "render_projects_html",
    "render_experience_html",
    "render_education_html",
    "render_languages_html",
    # Composition
    "compose",
    "build_html",
    "AssetRegistry",
    "get_asset_registry",
    "load_example_resume",
    "PreviewDebouncer",
    # Errors
    "InputMalformedError",
    "TemplateMismatchError",
]
