"""Unit tests for the section renderers."""

import pytest
from jinja2 import TemplateNotFound

from atsresume.contexts.templating import (
    Education,
    Experience,
    Language,
    Project,
    ProjectLink,
    SkillGroup,
    render_bullets_html,
    render_education_html,
    render_experience_html,
    render_languages_html,
    render_projects_html,
    render_skills_html,
)
from atsresume.contexts.templating.section_renderers import SectionTemplateRegistry


@pytest.mark.unit
@pytest.mark.parametrize(
    "renderer",
    [
        render_skills_html,
        render_bullets_html,
        render_projects_html,
        render_experience_html,
        render_education_html,
        render_languages_html,
    ],
)
def test_empty_collections_render_empty(renderer):
    assert renderer([]) == ""
    assert renderer(()) == ""


@pytest.mark.unit
def test_skills_order_preserved():
    skills = [SkillGroup("Lang", ("Go", "Rust")), SkillGroup("Tools", ("Git",))]

    fragment = render_skills_html(skills)

    assert fragment == (
        '<div class="item"><div class="item-title">Lang:</div> Go, Rust</div>\n'
        '<div class="item"><div class="item-title">Tools:</div> Git</div>'
    )
    assert fragment.index("Lang") < fragment.index("Tools")
    assert fragment.index("Go") < fragment.index("Rust")


@pytest.mark.unit
def test_skills_escaped():
    fragment = render_skills_html([SkillGroup("R&D", ("C<T>", 'say "hi"'))])

    assert "R&amp;D:" in fragment
    assert "C&lt;T&gt;, say &quot;hi&quot;" in fragment


@pytest.mark.unit
def test_bullets_escaped_individually():
    fragment = render_bullets_html(["Built <script>alert(1)</script> tool", "A & B"])

    assert fragment == (
        '<ul class="bullets">'
        "<li>Built &lt;script&gt;alert(1)&lt;/script&gt; tool</li>"
        "<li>A &amp; B</li>"
        "</ul>"
    )


@pytest.mark.unit
def test_project_with_links():
    project = Project(
        title="A-0 <System>",
        stack="UNIVAC & tape",
        bullets=("Compiled",),
        links=(ProjectLink("Docs & notes", "https://example.com/a0?x=1&y=2"),),
    )

    fragment = render_projects_html([project])

    assert '<div class="item-title">A-0 &lt;System&gt;</div>' in fragment
    assert '<div class="tech-line">Stack: UNIVAC &amp; tape</div>' in fragment
    assert "<li>Compiled</li>" in fragment
    # Raw in href, sanitized as visible text
    assert (
        '<li>Docs &amp; notes: <a href="https://example.com/a0?x=1&y=2" target="_blank" '
        'rel="noopener noreferrer">https://example.com/a0?x=1&amp;y=2</a></li>'
    ) in fragment


@pytest.mark.unit
def test_project_without_links_has_no_link_list():
    fragment = render_projects_html([Project(title="FLOW-MATIC", stack="UNIVAC", bullets=("x",))])

    assert fragment.count('<ul class="bullets">') == 1
    assert "<a " not in fragment


@pytest.mark.unit
def test_projects_order_preserved():
    fragment = render_projects_html([Project("First", "a"), Project("Second", "b")])

    assert fragment.index("First") < fragment.index("Second")


@pytest.mark.unit
def test_experience_header_and_bullets():
    entry = Experience(role="Dev <lead>", company="A & B", date="2020 - 2024", bullets=("one", "two"))

    fragment = render_experience_html([entry])

    assert '<div class="item-title">Dev &lt;lead&gt;</div>' in fragment
    assert '<div class="item-subtitle">A &amp; B</div>' in fragment
    assert '<div class="item-date">2020 - 2024</div>' in fragment
    assert fragment.index("<li>one</li>") < fragment.index("<li>two</li>")


@pytest.mark.unit
def test_education():
    fragment = render_education_html([Education("PhD", "Yale", "1934"), Education("BA", "Vassar", "1928")])

    assert '<div class="item-title">PhD</div>' in fragment
    assert '<div class="item-subtitle">Yale</div>' in fragment
    assert fragment.index("PhD") < fragment.index("BA")
    assert "<ul" not in fragment


@pytest.mark.unit
def test_languages():
    fragment = render_languages_html([Language("English", "Native", 'says "hi"')])

    assert '<div class="item-title">English — Native</div>' in fragment
    assert '<div class="item-date">says &quot;hi&quot;</div>' in fragment


@pytest.mark.unit
def test_rendering_is_deterministic(full_resume):
    assert render_projects_html(full_resume.projects) == render_projects_html(full_resume.projects)


@pytest.mark.unit
def test_registry_caching():
    registry = SectionTemplateRegistry()

    template1 = registry.get_template("bullets")
    assert registry.is_cached("bullets")
    assert registry.get_template("bullets") is template1

    registry.clear_cache()
    assert not registry.is_cached("bullets")


@pytest.mark.unit
def test_registry_template_not_found():
    with pytest.raises(TemplateNotFound):
        SectionTemplateRegistry().get_template("nonexistent_section")
