"""ExtensionLoader - best-effort loading of per-kernel extension modules.

A kernel spec may declare a ``kernel.js`` resource: Python source that is
fetched, executed as a fresh module and, if it defines ``onload``, initialized
by calling ``onload()`` with no arguments (awaited when it returns an
awaitable).

Loading is fire-and-forget from the switch coordinator's point of view.
Every failure (fetch, syntax, execution, missing ``onload``) is logged as a
warning and reported through the boolean result; nothing is raised to the
caller.
"""

import asyncio
import importlib.util
import inspect
import re
from pathlib import Path
from types import ModuleType
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx

from kernel_selector.errors import ExtensionLoadError
from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import LoggerProtocol
from kernel_selector.urls import resolve_url

ENTRY_POINT = "onload"

_MODULE_NAME_PATTERN = re.compile(r"[^0-9a-zA-Z_]+")


def module_name_for(url: str) -> str:
    """Derive an identifier-safe module name from an extension URL."""
    return "kernel_extension_" + _MODULE_NAME_PATTERN.sub("_", url).strip("_")


class ExtensionLoader:
    """Fetches and initializes kernel extension modules.

    Usage:
        loader = ExtensionLoader(base_url="http://localhost:8888/")
        task = loader.schedule("/kernelspecs/ir/kernel.js")
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        logger: Optional[LoggerProtocol] = None,
    ):
        self._base_url = base_url
        self._client = client
        self._timeout = timeout
        self._logger = get_component_logger("extension_loader", logger)

    def schedule(self, url: str) -> "asyncio.Task[bool]":
        """Start loading ``url`` as an independent task.

        Must be called from a running event loop.
        """
        return asyncio.get_running_loop().create_task(
            self.load(url), name=f"kernel-extension:{url}"
        )

    async def load(self, url: str) -> bool:
        """Load and initialize an extension module.

        Returns:
            True if the module ran and its ``onload`` completed.
        """
        try:
            module = await self._load_module(url)
        except ExtensionLoadError as e:
            self._logger.warning("kernel_extension_load_failed", url=url, error=e.message)
            return False

        entry_point = getattr(module, ENTRY_POINT, None)
        if not callable(entry_point):
            self._logger.warning(
                "kernel_extension_missing_onload",
                url=url,
                message="kernel.js does not define onload(); undefined behavior, not recommended",
            )
            return False

        try:
            result = entry_point()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.warning("kernel_extension_onload_failed", url=url, error=str(e))
            return False

        self._logger.info("kernel_extension_loaded", url=url)
        return True

    async def _load_module(self, url: str) -> ModuleType:
        source = await self._fetch_source(url)

        try:
            code = compile(source, url, "exec")
        except SyntaxError as e:
            raise ExtensionLoadError(url, f"syntax error: {e}") from e

        spec = importlib.util.spec_from_loader(module_name_for(url), loader=None, origin=url)
        module = importlib.util.module_from_spec(spec)
        try:
            exec(code, module.__dict__)
        except Exception as e:
            raise ExtensionLoadError(url, f"{type(e).__name__}: {e}") from e
        return module

    async def _fetch_source(self, url: str) -> str:
        try:
            target = resolve_url(self._base_url, url)
            parts = urlsplit(target)
        except ValueError as e:
            raise ExtensionLoadError(url, f"invalid URL: {e}") from e

        if parts.scheme in ("http", "https"):
            try:
                return await self._get(target)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise ExtensionLoadError(url, str(e) or type(e).__name__) from e

        if parts.scheme in ("", "file"):
            path = Path(unquote(parts.path)) if parts.scheme == "file" else Path(target)
            try:
                return await asyncio.to_thread(path.read_text, encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ExtensionLoadError(url, str(e)) from e

        raise ExtensionLoadError(url, f"unsupported URL scheme: {parts.scheme!r}")

    async def _get(self, url: str) -> str:
        if self._client is not None:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.text

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text


__all__ = ["ENTRY_POINT", "ExtensionLoader", "module_name_for"]
