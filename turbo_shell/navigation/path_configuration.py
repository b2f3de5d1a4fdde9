# turbo_shell/navigation/path_configuration.py
# Description: Loads path rules and settings from the backend and the bundled file
#
# Each source yields a rule list and a settings object. Rule lists are
# concatenated in source order and settings are merged in the same order, so a
# later source wins on collisions. A source that cannot be reached or parsed is
# logged and skipped.
#
# Imports
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import httpx
from loguru import logger

from ..Constants import SOURCE_BUNDLED, SOURCE_SERVER
from ..config import (
    get_bundled_configuration_path,
    get_cli_setting,
    get_path_configuration_source_order,
    turbo_url,
)
from ..session.errors import TurboShellError
from .path_rules import PathRule, PropertyMap, parse_rules, resolve

logger = logger.bind(module="path_configuration")

#######################################################################################################################
#
# Classes:

class PathConfigurationError(TurboShellError):
    """A configuration source could not be fetched or parsed."""
    pass


@dataclass(frozen=True)
class PathConfigurationSource:
    """Where a rule document comes from."""
    kind: str
    location: str

    @classmethod
    def server(cls, url: Union[httpx.URL, str]) -> "PathConfigurationSource":
        return cls(SOURCE_SERVER, str(url))

    @classmethod
    def file(cls, path: Union[Path, str]) -> "PathConfigurationSource":
        return cls(SOURCE_BUNDLED, str(path))

    def __str__(self) -> str:
        return f"{self.kind}:{self.location}"


class PathConfiguration:
    """Ordered rule list and merged settings from several sources."""

    def __init__(
        self,
        sources: Sequence[PathConfigurationSource],
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        """
        Args:
            sources: Sources in precedence order (later wins)
            client: HTTP client for server sources; one is created on demand otherwise
            timeout: Seconds allowed for each server fetch
        """
        self.sources = list(sources)
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._rules: Tuple[PathRule, ...] = ()
        self._settings: Dict[str, Any] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def rules(self) -> Tuple[PathRule, ...]:
        return self._rules

    @property
    def settings(self) -> Dict[str, Any]:
        return dict(self._settings)

    async def load(self, force: bool = False) -> Tuple[PathRule, ...]:
        """
        Fetch every source once and cache the result.

        Args:
            force: Fetch again even if already loaded

        Returns:
            The concatenated rule list
        """
        if self._loaded and not force:
            return self._rules

        rules: List[PathRule] = []
        settings: Dict[str, Any] = {}
        succeeded = 0
        for source in self.sources:
            try:
                document = await self._read_source(source)
            except PathConfigurationError as e:
                logger.warning(f"Skipping path configuration source {source}: {e}")
                continue
            succeeded += 1
            source_rules = parse_rules(document.get("rules"), origin=str(source))
            rules.extend(source_rules)
            source_settings = document.get("settings")
            if isinstance(source_settings, dict):
                settings.update(source_settings)
            elif source_settings is not None:
                logger.warning(f"'settings' in {source} is not an object; ignoring it")
            logger.debug(f"Loaded {len(source_rules)} rules from {source}")

        if succeeded == 0 and self.sources:
            logger.error("No path configuration source could be loaded; every visit gets empty properties")

        self._rules = tuple(rules)
        self._settings = settings
        self._loaded = True
        logger.info(f"Path configuration ready: {len(self._rules)} rules from {succeeded}/{len(self.sources)} sources")
        return self._rules

    async def refresh(self) -> Tuple[PathRule, ...]:
        """Re-fetch every source."""
        return await self.load(force=True)

    def properties_for(self, url: Union[httpx.URL, str]) -> PropertyMap:
        """Merged properties for ``url``. Empty until the configuration is loaded."""
        if not self._loaded:
            logger.debug(f"Path configuration not loaded yet; no properties for {url}")
        return resolve(url, self._rules)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _read_source(self, source: PathConfigurationSource) -> Dict[str, Any]:
        if source.kind == SOURCE_SERVER:
            text = await self._fetch(source.location)
        elif source.kind == SOURCE_BUNDLED:
            try:
                text = Path(source.location).read_text(encoding="utf-8")
            except OSError as e:
                raise PathConfigurationError(f"could not read file: {e}") from e
        else:
            raise PathConfigurationError(f"unknown source kind '{source.kind}'")
        return _parse_document(text)

    async def _fetch(self, url: str) -> str:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        try:
            response = await self._client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PathConfigurationError(f"server responded with {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PathConfigurationError(f"request failed: {e!r}") from e
        return response.text


def configured_sources(base_url: str) -> List[PathConfigurationSource]:
    """Sources named in [path_configuration].sources, in that order."""
    server_path = get_cli_setting("path_configuration", "server_path", "/turbo.json")
    sources = []
    for name in get_path_configuration_source_order():
        if name == SOURCE_SERVER:
            sources.append(PathConfigurationSource.server(turbo_url(server_path, base_url=base_url)))
        else:
            sources.append(PathConfigurationSource.file(get_bundled_configuration_path()))
    return sources


def _parse_document(text: str) -> Dict[str, Any]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise PathConfigurationError(f"malformed JSON: {e}") from e
    if not isinstance(document, dict):
        raise PathConfigurationError("document is not a JSON object")
    return document

#
# End of path_configuration.py
#######################################################################################################################
