"""SpecRegistry - fetches, caches and orders kernel specifications.

The catalog lives at ``<base_url>/api/kernelspecs`` and returns:

    {"default": "python3",
     "kernelspecs": {"python3": {"name": "python3",
                                 "spec": {"display_name": "Python 3", ...},
                                 "resources": {"logo-64x64": "/kernelspecs/..."}}}}

A refresh either replaces the whole registry (specs and menu entries) or
leaves it exactly as it was. Failures are logged and recorded in
``last_error``; they are never raised to the caller and never retried.
"""

from functools import cmp_to_key
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import httpx
from pydantic import ValidationError

from kernel_selector.errors import CatalogError
from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import KernelSpec, LoggerProtocol, MenuEntry
from kernel_selector.urls import url_join_encode

CATALOG_PATH = "api/kernelspecs"


def compare_display_names(a: str, b: str) -> int:
    """Three-way, case-sensitive comparison of display names."""
    if a == b:
        return 0
    elif a > b:
        return 1
    else:
        return -1


def build_menu_entries(kernelspecs: Iterable[KernelSpec]) -> Tuple[MenuEntry, ...]:
    """Order specs by display name; equal names keep their catalog order."""
    ordered = sorted(
        kernelspecs,
        key=cmp_to_key(lambda x, y: compare_display_names(x.display_name, y.display_name)),
    )
    return tuple(MenuEntry(name=ks.name, display_name=ks.display_name) for ks in ordered)


def parse_catalog(data: Any) -> Dict[str, KernelSpec]:
    """Validate a catalog payload into a name -> KernelSpec mapping.

    Raises:
        CatalogError: payload shape or any entry is invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("kernelspecs"), dict):
        raise CatalogError("catalog payload has no 'kernelspecs' mapping")

    kernelspecs: Dict[str, KernelSpec] = {}
    for key, entry in data["kernelspecs"].items():
        if not isinstance(entry, dict):
            raise CatalogError(f"kernelspec {key!r} is not an object")
        try:
            kernelspecs[key] = KernelSpec.from_catalog_entry(key, entry)
        except ValidationError as e:
            raise CatalogError(f"kernelspec {key!r} is invalid: {e}") from e
    return kernelspecs


class SpecRegistry:
    """In-memory catalog of kernel specifications.

    Usage:
        registry = SpecRegistry("http://localhost:8888/")
        await registry.refresh()
        for entry in registry.menu_entries:
            print(entry.display_name)
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        logger: Optional[LoggerProtocol] = None,
    ):
        """Initialize the registry.

        Args:
            base_url: Notebook server base URL.
            client: Shared AsyncClient. If None, one is created per refresh.
            timeout: Request timeout in seconds for created clients.
            logger: Logger instance.
        """
        self._base_url = base_url
        self._client = client
        self._timeout = timeout
        self._logger = get_component_logger("spec_registry", logger)
        self._kernelspecs: Dict[str, KernelSpec] = {}
        self._menu_entries: Tuple[MenuEntry, ...] = ()
        self._loaded = False
        self.last_error: Optional[str] = None

    @property
    def catalog_url(self) -> str:
        return url_join_encode(self._base_url, CATALOG_PATH)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def kernelspecs(self) -> Mapping[str, KernelSpec]:
        """Read-only view of the current catalog."""
        return MappingProxyType(self._kernelspecs)

    @property
    def menu_entries(self) -> Tuple[MenuEntry, ...]:
        return self._menu_entries

    @property
    def loaded(self) -> bool:
        """True once a refresh has succeeded."""
        return self._loaded

    def get(self, name: str) -> Optional[KernelSpec]:
        return self._kernelspecs.get(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._kernelspecs)

    def __contains__(self, name: object) -> bool:
        return name in self._kernelspecs

    def __len__(self) -> int:
        return len(self._kernelspecs)

    async def refresh(self) -> None:
        """Fetch the catalog and replace the registry.

        On any failure the previous registry is kept.
        """
        url = self.catalog_url
        self._logger.debug("kernelspecs_fetching", url=url)

        try:
            data = await self._fetch(url)
            kernelspecs = parse_catalog(data)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, CatalogError) as e:
            # ValueError covers JSON decode errors
            self.last_error = str(e) or type(e).__name__
            self._logger.warning(
                "kernelspecs_fetch_failed",
                url=url,
                error=self.last_error,
                kept=len(self._kernelspecs),
            )
            return

        menu_entries = build_menu_entries(kernelspecs.values())

        # Swap both at once
        self._kernelspecs, self._menu_entries = kernelspecs, menu_entries
        self._loaded = True
        self.last_error = None

        self._logger.info(
            "kernelspecs_loaded",
            count=len(kernelspecs),
            names=[entry.name for entry in menu_entries],
        )

    async def _fetch(self, url: str) -> Any:
        if self._client is not None:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()


__all__ = [
    "CATALOG_PATH",
    "SpecRegistry",
    "build_menu_entries",
    "compare_display_names",
    "parse_catalog",
]
