"""
Live preview rendering.

Editors call the compositor on every keystroke; PreviewDebouncer coalesces
calls that arrive within a short window so only the latest resume renders.

This is a library helper for in-process editors (one debouncer per editing
session). The HTTP /api/preview route renders each request immediately; a
remote editor debounces on its own side before calling it.
"""

import asyncio
from typing import Optional

from atsresume.contexts.templating.compositor import AssetRegistry, build_html
from atsresume.contexts.templating.logger import _log_debug, _log_error
from atsresume.contexts.templating.resume_data_structure import ResumeData

DEFAULT_DELAY_S = 0.3


class PreviewDebouncer:
    """
    Debounced HTML preview.

    Each request() supersedes the previous pending one. The superseded call
    resolves to None; the surviving call resolves to the rendered HTML, or ""
    when rendering fails (the failure is logged).

    Example:
        debouncer = PreviewDebouncer()
        html = await debouncer.request(resume)
    """

    def __init__(self, delay_s: float = DEFAULT_DELAY_S, registry: AssetRegistry = None):
        self.delay_s = delay_s
        self.registry = registry
        self._generation = 0
        self.render_count = 0

    async def request(self, resume: ResumeData) -> Optional[str]:
        self._generation += 1
        generation = self._generation

        await asyncio.sleep(self.delay_s)

        if generation != self._generation:
            _log_debug(f"Preview request {generation} superseded by {self._generation}")
            return None

        self.render_count += 1
        try:
            return build_html(resume, registry=self.registry)
        except Exception as e:
            _log_error(f"Preview render failed: {e}")
            return ""
