"""End-to-end tests: catalog fetch -> menu -> switch -> presentation.

Wires the real registry, coordinator, synchronizer and extension loader via
create_kernel_selector, with the notebook server replaced by
httpx.MockTransport and the session by FakeSession.
"""

import textwrap

import pytest
from unittest.mock import MagicMock

from fixtures.catalog import CatalogServer, make_catalog, make_kernelspec_dict
from fixtures.mocks.session_mocks import FakeSession
from kernel_selector.bootstrap import KernelSelector, create_kernel_selector
from kernel_selector.errors import SessionAlreadyStartingError


pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_fetch_menu_switch_indicator(bus, session, settings, mock_logger):
    server = CatalogServer(make_catalog(
        make_kernelspec_dict("B", "Beta"),
        make_kernelspec_dict("A", "Alpha"),
    ))

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()

        assert [e.display_name for e in selector.menu_entries] == ["Alpha", "Beta"]

        assert await selector.select("B") is True

    assert selector.presentation.indicator_text == "Beta"
    assert selector.current_selection == "B"
    assert session.started == ["B"]


@pytest.mark.asyncio
async def test_document_receives_selector(session, settings, mock_logger):
    document = MagicMock()

    selector = create_kernel_selector(
        session, settings=settings, document=document, logger=mock_logger
    )

    document.set_kernel_selector.assert_called_once_with(selector)
    assert isinstance(selector, KernelSelector)


@pytest.mark.asyncio
async def test_document_without_hook(session, settings, mock_logger):
    selector = create_kernel_selector(
        session, settings=settings, document=object(), logger=mock_logger
    )
    assert selector.current_selection is None


@pytest.mark.asyncio
async def test_full_switch_with_resolution_and_resources(bus, session, settings, mock_logger):
    server = CatalogServer()

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()

        await selector.select("ir")
        presentation = selector.presentation
        assert presentation.stylesheet_href == "/kernelspecs/ir/kernel.css"
        assert presentation.indicator_text == "R"
        assert presentation.logo.src == "/kernelspecs/ir/logo-64x64.png"
        assert presentation.logo.visible

        # Generic "python" resolves to "python3" on the server
        await selector.select("python")
        assert presentation.indicator_text == "Python"
        assert presentation.stylesheet_href == "/kernelspecs/python/kernel.css"
        assert not presentation.logo.visible

        session.kernel_created()
        assert selector.current_selection == "python3"
        assert presentation.indicator_text == "Python 3"
        assert presentation.logo.src == "/kernelspecs/python3/logo-64x64.png"


@pytest.mark.asyncio
async def test_failed_switch_keeps_indicator(bus, session, settings, mock_logger):
    server = CatalogServer()

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()
        await selector.select("python3")

        session.error = SessionAlreadyStartingError()
        assert await selector.select("ir") is False

    assert selector.presentation.indicator_text == "Python 3"
    assert selector.current_selection == "python3"


@pytest.mark.asyncio
async def test_catalog_failure_leaves_empty_menu(bus, session, settings, mock_logger):
    server = CatalogServer(status_code=500)

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()

        assert selector.menu_entries == ()
        assert selector.registry.last_error
        assert await selector.select("python3") is False

    assert session.started == []


@pytest.mark.asyncio
async def test_extension_loaded_after_switch(bus, settings, mock_logger, tmp_path):
    marker = tmp_path / "marker"
    server = CatalogServer(make_catalog(
        make_kernelspec_dict("ir", "R", resources={"kernel.js": "/kernelspecs/ir/kernel.js"}),
    ))
    server.files["http://nb.test/kernelspecs/ir/kernel.js"] = textwrap.dedent(f"""
        from pathlib import Path

        def onload():
            Path({str(marker)!r}).write_text("ir")
        """)
    session = FakeSession(bus)

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()

        assert await selector.select("ir") is True
        await selector.coordinator.wait_for_extensions()

    assert marker.read_text() == "ir"


@pytest.mark.asyncio
async def test_broken_extension_does_not_affect_switch(bus, settings, mock_logger):
    server = CatalogServer(make_catalog(
        make_kernelspec_dict("ir", "R", resources={"kernel.js": "/kernelspecs/ir/kernel.js"}),
    ))
    server.files["http://nb.test/kernelspecs/ir/kernel.js"] = "require(['base/js/namespace'], function(IPython) {});"
    session = FakeSession(bus)

    async with server.client() as client:
        selector = create_kernel_selector(
            session, settings=settings, bus=bus, client=client, logger=mock_logger
        )
        await selector.start()
        assert await selector.select("ir") is True
        await selector.coordinator.wait_for_extensions()

    assert selector.current_selection == "ir"
    assert selector.presentation.indicator_text == "R"
    events = [c[0][0] for c in mock_logger.warning.call_args_list]
    assert "kernel_extension_load_failed" in events
