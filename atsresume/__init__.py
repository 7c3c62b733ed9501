"""
atsresume - ATS-friendly resume rendering

Converts structured resume data into a printable PDF through an intermediate,
self-contained HTML document.

Architecture:
- Templating Context: Sanitizing, section rendering, and template composition
- Rendering Context: Headless-browser PDF export and output validation
- Metrics Context: Distinct-client and PDF-produced counters
- API: HTTP entry points wiring the contexts together
"""

__version__ = "0.1.0"
