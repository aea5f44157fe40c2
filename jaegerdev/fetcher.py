import asyncio
import logging

import httpx

from jaegerdev.models import BackendConfig

log = logging.getLogger("jaegerdev.fetcher")

# Newer query services expose everything on one endpoint
UNIFIED_PATH = "/api/ui/config"

# Older ones serve each piece separately
LEGACY_PATHS = {
    "ui_config": "/api/config",
    "storage_capabilities": "/api/capabilities",
    "version": "/api/version",
}

DEFAULT_TIMEOUT = 1.0  # seconds, per request


def _as_object(value):
    return value if isinstance(value, dict) else None


class ConfigFetcher:
    """Pulls UI config, storage capabilities and version from a running query service.

    fetch() never raises. Anything that goes wrong shows up as None fields
    on the returned BackendConfig.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, transport=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get_json(self, client: httpx.AsyncClient, path: str):
        """GET one endpoint under the deadline. Returns the decoded body or None."""
        try:
            resp = await asyncio.wait_for(client.get(path), timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (asyncio.TimeoutError, TimeoutError):
            log.debug(f"{path} timed out after {self.timeout}s")
        except httpx.HTTPStatusError as e:
            log.debug(f"{path} returned {e.response.status_code}")
        except httpx.HTTPError as e:
            log.debug(f"{path} failed: {e!r}")
        except ValueError as e:
            log.debug(f"{path} returned invalid JSON: {e}")
        return None

    async def _fetch_unified(self, client) -> BackendConfig | None:
        body = _as_object(await self._get_json(client, UNIFIED_PATH))
        if body is None:
            return None
        return BackendConfig(
            ui_config=_as_object(body.get("uiConfig")),
            storage_capabilities=_as_object(body.get("storageCapabilities")),
            version=_as_object(body.get("version")),
        )

    async def _fetch_legacy(self, client) -> BackendConfig:
        # Each call settles on its own; one failing never cancels the others
        results = await asyncio.gather(
            *(self._get_json(client, path) for path in LEGACY_PATHS.values())
        )
        values = {field: _as_object(r) for field, r in zip(LEGACY_PATHS, results)}
        return BackendConfig(**values)

    async def fetch(self) -> BackendConfig:
        try:
            async with self._client() as client:
                config = await self._fetch_unified(client)
                if config is not None:
                    log.info(f"Fetched config from {self.base_url}{UNIFIED_PATH}")
                    return config

                config = await self._fetch_legacy(client)
        except Exception as e:
            log.warning(f"Config fetch from {self.base_url} failed: {e}")
            return BackendConfig.empty()

        if config.is_empty():
            log.warning(f"Backend at {self.base_url} unreachable, using built-in defaults")
        else:
            found = [f for f in LEGACY_PATHS if getattr(config, f) is not None]
            log.info(f"Fetched config from legacy endpoints ({', '.join(found)})")
        return config
