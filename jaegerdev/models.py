"""Value types passed between the fetch, cache, resolve and inject stages."""

from dataclasses import dataclass

CONFIG_JS_NAME = "jaeger-ui.config.js"
CONFIG_JSON_NAME = "jaeger-ui.config.json"

SOURCE_BACKEND = "backend"
SOURCE_DEFAULTS = "defaults"
SOURCE_PATCH = CONFIG_JSON_NAME
SOURCE_BACKEND_AND_PATCH = f"backend + {CONFIG_JSON_NAME}"


@dataclass(frozen=True)
class BackendConfig:
    """What the query service returned. Each field is None when its call failed."""
    ui_config: dict | None = None
    storage_capabilities: dict | None = None
    version: dict | None = None

    @classmethod
    def empty(cls) -> "BackendConfig":
        return cls()

    def is_empty(self) -> bool:
        return self.ui_config is None and self.storage_capabilities is None and self.version is None


@dataclass(frozen=True)
class CacheEntry:
    value: BackendConfig
    fetched_at_ms: float
    generation: int


@dataclass(frozen=True)
class OverrideSet:
    full_override_source: str | None = None
    json_patch: dict | None = None

    def found(self) -> list[str]:
        names = []
        if self.full_override_source is not None:
            names.append(CONFIG_JS_NAME)
        if self.json_patch is not None:
            names.append(CONFIG_JSON_NAME)
        return names


@dataclass(frozen=True)
class ResolvedConfig:
    ui_config: dict | None
    source: str
    storage_capabilities: dict | None = None
    version: dict | None = None


@dataclass(frozen=True)
class FullOverrideDirective:
    """The local JS file replaces the UI config outright."""
    source_text: str
    storage_capabilities: dict | None = None
    version: dict | None = None

    @property
    def source(self) -> str:
        return CONFIG_JS_NAME
