"""Unit tests for debounced preview rendering."""

import asyncio
import dataclasses

import pytest

from atsresume.contexts.templating import AssetRegistry, PreviewDebouncer


@pytest.mark.unit
def test_rapid_calls_coalesce_to_latest(minimal_resume):
    latest = dataclasses.replace(minimal_resume, name="Latest Name")

    async def scenario():
        debouncer = PreviewDebouncer(delay_s=0.05)
        first = asyncio.create_task(debouncer.request(minimal_resume))
        await asyncio.sleep(0.01)
        second = asyncio.create_task(debouncer.request(latest))
        return debouncer, await first, await second

    debouncer, first_html, second_html = asyncio.run(scenario())

    assert first_html is None
    assert "Latest Name" in second_html
    assert debouncer.render_count == 1


@pytest.mark.unit
def test_calls_outside_window_both_render(minimal_resume):
    async def scenario():
        debouncer = PreviewDebouncer(delay_s=0.01)
        first = await debouncer.request(minimal_resume)
        second = await debouncer.request(minimal_resume)
        return debouncer, first, second

    debouncer, first_html, second_html = asyncio.run(scenario())

    assert first_html == second_html
    assert "Ada Lovelace" in first_html
    assert debouncer.render_count == 2


@pytest.mark.unit
def test_render_failure_yields_empty_html(tmp_path, minimal_resume):
    (tmp_path / "ats.html").write_text("<html>not the resume template</html>", encoding="utf-8")
    (tmp_path / "style.css").write_text("", encoding="utf-8")
    debouncer = PreviewDebouncer(delay_s=0, registry=AssetRegistry(tmp_path))

    assert asyncio.run(debouncer.request(minimal_resume)) == ""
