"""Shared fixtures: sample resumes and a scriptable fake of the Playwright engine."""

import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError

from atsresume.contexts.templating import ResumeData

FAKE_PDF = b"%PDF-1.7\n% fake\n%%EOF\n"


@pytest.fixture
def minimal_resume_dict():
    """Minimal resume: a name, empty sections, empty URLs."""
    return {
        "name": "Ada Lovelace",
        "title": "",
        "email": "",
        "phone_e164": "",
        "phone_display": "",
        "location": "",
        "summary": "",
        "linkedin_url": "",
        "github_url": "",
        "website_url": "",
        "skills": [],
        "projects": [],
        "experience": [],
        "education": [],
        "languages": [],
    }


@pytest.fixture
def full_resume_dict():
    return {
        "name": "Grace <Hopper>",
        "title": "Rear Admiral & Programmer",
        "email": "grace@example.com",
        "phone_e164": "+15550100",
        "phone_display": "(555) 0100",
        "location": "Arlington, VA",
        "summary": 'Wrote the first "compiler".',
        "linkedin_url": "https://www.linkedin.com/in/grace",
        "github_url": "http://github.com/grace",
        "website_url": "grace.example.com",
        "skills": [
            {"group": "Lang", "items": ["Go", "Rust"]},
            {"group": "Tools", "items": ["Git"]},
        ],
        "projects": [
            {
                "title": "A-0 System",
                "stack": "UNIVAC I",
                "bullets": ["Built <script>alert(1)</script> tool"],
                "links": [{"label": "Docs", "url": "https://example.com/a0?x=1&y=2"}],
            },
            {"title": "FLOW-MATIC", "stack": "UNIVAC", "bullets": ["English-like syntax"]},
        ],
        "experience": [
            {
                "role": "Programmer",
                "company": "Eckert-Mauchly",
                "date": "1949 - 1952",
                "bullets": ["Led COBOL work", "Popularized \"debugging\""],
            }
        ],
        "education": [{"title": "PhD Mathematics", "subtitle": "Yale", "date": "1934"}],
        "languages": [{"name": "English", "level": "Native", "note": "First language"}],
    }


@pytest.fixture
def minimal_resume(minimal_resume_dict):
    return ResumeData.from_dict(minimal_resume_dict)


@pytest.fixture
def full_resume(full_resume_dict):
    return ResumeData.from_dict(full_resume_dict)


class FakeEngine:
    """
    Stand-in for playwright.async_api.async_playwright.

    Set fail_on to "launch", "load", or "print" to raise a PlaywrightError at
    that step, or to "driver" to raise OSError before any browser exists.
    print_delay_s keeps pages busy to exercise concurrency limits.
    """

    def __init__(self, pdf_bytes: bytes = FAKE_PDF, fail_on: str = None, print_delay_s: float = 0):
        self.pdf_bytes = pdf_bytes
        self.fail_on = fail_on
        self.print_delay_s = print_delay_s
        self.launches = 0
        self.closes = 0
        self.live = 0
        self.peak_live = 0
        self.launch_options = []
        self.set_content_calls = []
        self.pdf_options = []

    def __call__(self):
        if self.fail_on == "driver":
            raise OSError("driver missing")
        return _FakePlaywrightContext(self)


class _FakePlaywrightContext:
    def __init__(self, engine):
        self.engine = engine
        self.chromium = _FakeChromium(engine)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class _FakeChromium:
    def __init__(self, engine):
        self.engine = engine

    async def launch(self, **options):
        engine = self.engine
        engine.launch_options.append(options)
        if engine.fail_on == "launch":
            raise PlaywrightError("Executable doesn't exist")
        engine.launches += 1
        engine.live += 1
        engine.peak_live = max(engine.peak_live, engine.live)
        return _FakeBrowser(engine)


class _FakeBrowser:
    def __init__(self, engine):
        self.engine = engine

    async def new_page(self):
        return _FakePage(self.engine)

    async def close(self):
        self.engine.closes += 1
        self.engine.live -= 1


class _FakePage:
    def __init__(self, engine):
        self.engine = engine

    async def set_content(self, html, wait_until=None):
        self.engine.set_content_calls.append((html, wait_until))
        if self.engine.fail_on == "load":
            raise PlaywrightError("net::ERR_ABORTED")

    async def pdf(self, **options):
        self.engine.pdf_options.append(options)
        if self.engine.print_delay_s:
            await asyncio.sleep(self.engine.print_delay_s)
        if self.engine.fail_on == "print":
            raise PlaywrightError("Printing failed")
        return self.engine.pdf_bytes


@pytest.fixture
def fake_engine(monkeypatch):
    """Patch the exporter's Playwright entry point with a FakeEngine."""
    engine = FakeEngine()
    monkeypatch.setattr("atsresume.contexts.rendering.exporter.async_playwright", engine)
    return engine
