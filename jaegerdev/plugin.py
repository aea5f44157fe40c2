"""Dev config injection: make the dev server's index.html look like the one the
query service renders, with the config of a live backend plus local overrides.
"""

import logging

from jaegerdev import events, overrides
from jaegerdev.cache import ConfigCache
from jaegerdev.config import resolve_path
from jaegerdev.fetcher import ConfigFetcher
from jaegerdev.inject import inject
from jaegerdev.reload import ReloadNotifier
from jaegerdev.resolver import resolve

log = logging.getLogger("jaegerdev.plugin")


class DevConfigPlugin:
    def __init__(self, fetcher: ConfigFetcher, cache: ConfigCache, config_js_path, config_json_path):
        self.fetcher = fetcher
        self.cache = cache
        self.config_js_path = config_js_path
        self.config_json_path = config_json_path
        self.last_source: str | None = None

    @classmethod
    def from_config(cls, cfg, transport=None):
        return cls(
            fetcher=ConfigFetcher(
                cfg["backend"]["base_url"],
                timeout=cfg["backend"]["timeout_seconds"],
                transport=transport,
            ),
            cache=ConfigCache(ttl_ms=cfg["cache"]["ttl_seconds"] * 1000),
            config_js_path=resolve_path(cfg["overrides"]["config_js"]),
            config_json_path=resolve_path(cfg["overrides"]["config_json"]),
        )

    def apply_config(self, cfg):
        """Pick up changed backend and cache settings without a restart."""
        self.fetcher.base_url = cfg["backend"]["base_url"].rstrip("/")
        self.fetcher.timeout = cfg["backend"]["timeout_seconds"]
        self.cache.ttl_ms = cfg["cache"]["ttl_seconds"] * 1000
        self.cache.invalidate()

    async def transform_index_html(self, html: str) -> str:
        base = await self.cache.get(self.fetcher.fetch)
        local = overrides.load(self.config_js_path, self.config_json_path)
        resolved = resolve(base, local)
        log.info(f"Injected UI config from {resolved.source}")
        self.last_source = resolved.source
        return inject(html, resolved)

    def on_override_change(self, path):
        events.broadcast("full-reload", path=str(path))

    def reload_notifier(self) -> ReloadNotifier:
        return ReloadNotifier([self.config_js_path, self.config_json_path], self.on_override_change)
