"""
PDF Export Module

Prints a self-contained HTML document to PDF with headless Chromium through
Playwright.

Each export launches a fresh browser and always closes it, whatever happens in
between:

    IDLE -> ENGINE_LAUNCHING -> CONTENT_LOADING -> CONTENT_LOADED -> PRINTING -> CLOSED

There is no retry. Exports are bounded by a per-exporter semaphore because every
export owns a full browser process. Exports are not cancellable mid-flight by
the engine itself; callers that need a deadline pass timeout_s, which cancels
the export task and lets the cleanup path close the browser.
"""

import asyncio
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from atsresume.contexts.rendering.exceptions import ExportFailedError
from atsresume.contexts.rendering.logger import (
    _log_debug,
    log_export_result,
    log_export_start,
    log_stage,
)

load_dotenv()

PAGE_FORMAT = "A4"
PDF_SIGNATURE = b"%PDF-"

# "networkidle" waits for late-loading resources (fonts, images) at the cost of
# latency; "load" returns as soon as the load event fires
CONTENT_READY_EVENTS = ("networkidle", "load")
CONTENT_READY = os.getenv("ATSRESUME_CONTENT_READY", "networkidle")
MAX_CONCURRENT_EXPORTS = int(os.getenv("ATSRESUME_MAX_CONCURRENT_EXPORTS", "4"))
CHROMIUM_PATH = os.getenv("ATSRESUME_CHROMIUM_PATH") or None
CHROMIUM_ARGS = os.getenv("ATSRESUME_CHROMIUM_ARGS", "").split()


class ExportStage(str, Enum):
    IDLE = "idle"
    ENGINE_LAUNCHING = "engine_launching"
    CONTENT_LOADING = "content_loading"
    CONTENT_LOADED = "content_loaded"
    PRINTING = "printing"
    CLOSED = "closed"


@dataclass
class ExportRun:
    """
    Progress of a single export call.

    Attributes:
        stage: Last stage entered (not reset to CLOSED on failure, so the
            failing stage stays visible)
        action: What the exporter was doing ("launch", "load content", "print")
    """

    stage: ExportStage = ExportStage.IDLE
    action: str = ""

    def enter(self, stage: ExportStage, action: str = "") -> None:
        self.stage = stage
        self.action = action
        log_stage(stage.value)


class DocumentExporter:
    """
    Bounded HTML-to-PDF exporter.

    Attributes:
        max_concurrent: Maximum simultaneous exports (browser processes)
        page_format: Paper format passed to the engine (CSS @page size wins)
        wait_until: Content-ready signal, "networkidle" or "load"
        live_engines: Browser instances currently open
        active_exports: Exports currently holding a slot
        peak_active_exports: Highest active_exports observed

    Example:
        exporter = DocumentExporter(max_concurrent=2)
        pdf_bytes = await exporter.export(html)
    """

    def __init__(
        self,
        max_concurrent: int = MAX_CONCURRENT_EXPORTS,
        page_format: str = PAGE_FORMAT,
        wait_until: str = CONTENT_READY,
        executable_path: Optional[str] = CHROMIUM_PATH,
        launch_args: Optional[List[str]] = None,
    ):
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")
        if wait_until not in CONTENT_READY_EVENTS:
            raise ValueError(
                f"Unsupported content-ready signal '{wait_until}'. "
                f"Valid signals: {CONTENT_READY_EVENTS}"
            )

        self.max_concurrent = max_concurrent
        self.page_format = page_format
        self.wait_until = wait_until
        self.executable_path = executable_path
        self.launch_args = list(CHROMIUM_ARGS if launch_args is None else launch_args)

        self._slots = asyncio.Semaphore(max_concurrent)
        self.live_engines = 0
        self.active_exports = 0
        self.peak_active_exports = 0

    def _launch_options(self) -> dict:
        options = {"headless": True, "args": self.launch_args}
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options

    async def export(self, html: str, timeout_s: Optional[float] = None) -> bytes:
        """
        Export HTML to PDF bytes.

        Args:
            html: Complete, self-contained HTML document
            timeout_s: Optional deadline for the engine work (slot wait excluded)

        Returns:
            PDF bytes (always starting with %PDF-)

        Raises:
            ExportFailedError: If launch, content load, or print fails, the
                deadline expires, or the engine returns something that is not a PDF
        """
        async with self._slots:
            self.active_exports += 1
            self.peak_active_exports = max(self.peak_active_exports, self.active_exports)
            run = ExportRun()
            start_time = time.time()
            log_export_start(len(html), self.page_format, self.wait_until, self.active_exports)

            try:
                if timeout_s is None:
                    pdf = await self._export_once(html, run)
                else:
                    try:
                        pdf = await asyncio.wait_for(self._export_once(html, run), timeout=timeout_s)
                    except asyncio.TimeoutError as e:
                        raise ExportFailedError(
                            f"PDF export exceeded {timeout_s}s deadline",
                            stage=run.stage.value,
                            cause=e,
                        ) from e
            except ExportFailedError as e:
                log_export_result(False, time.time() - start_time, error=e)
                raise
            finally:
                self.active_exports -= 1

            log_export_result(True, time.time() - start_time, pdf_size=len(pdf))
            return pdf

    async def _export_once(self, html: str, run: ExportRun) -> bytes:
        try:
            async with async_playwright() as playwright:
                run.enter(ExportStage.ENGINE_LAUNCHING, "launch")
                browser = await playwright.chromium.launch(**self._launch_options())
                self.live_engines += 1

                try:
                    run.enter(ExportStage.CONTENT_LOADING, "load content")
                    page = await browser.new_page()
                    await page.set_content(html, wait_until=self.wait_until)
                    run.enter(ExportStage.CONTENT_LOADED)

                    run.enter(ExportStage.PRINTING, "print")
                    pdf = await page.pdf(
                        format=self.page_format,
                        print_background=True,
                        prefer_css_page_size=True,
                    )
                finally:
                    try:
                        await browser.close()
                    finally:
                        self.live_engines -= 1
                        _log_debug(f"  Stage: {ExportStage.CLOSED.value}")
        except PlaywrightError as e:
            raise ExportFailedError(
                f"Rendering engine failed to {run.action or 'start'}",
                stage=run.stage.value,
                cause=e,
            ) from e
        except Exception as e:
            # Driver process or connection failures surface as plain Python errors
            raise ExportFailedError(
                f"Rendering engine driver failed during {run.action or 'startup'}",
                stage=run.stage.value,
                cause=e,
            ) from e

        if not pdf or not bytes(pdf).startswith(PDF_SIGNATURE):
            raise ExportFailedError(
                "Rendering engine returned data without a PDF signature",
                stage=run.stage.value,
            )

        return bytes(pdf)


_default_exporter: Optional[DocumentExporter] = None


def get_default_exporter() -> DocumentExporter:
    """Return the process-wide exporter, creating it on first use."""
    global _default_exporter
    if _default_exporter is None:
        _default_exporter = DocumentExporter()
    return _default_exporter


async def export_pdf(html: str, timeout_s: Optional[float] = None) -> bytes:
    """Export HTML to PDF bytes with the process-wide exporter."""
    return await get_default_exporter().export(html, timeout_s=timeout_s)
