from jaegerdev.models import (
    SOURCE_BACKEND,
    SOURCE_BACKEND_AND_PATCH,
    SOURCE_DEFAULTS,
    SOURCE_PATCH,
    BackendConfig,
    FullOverrideDirective,
    OverrideSet,
    ResolvedConfig,
)

# (base present, patch present) -> provenance label
_SOURCE_LABELS = {
    (False, False): SOURCE_DEFAULTS,
    (True, False): SOURCE_BACKEND,
    (False, True): SOURCE_PATCH,
    (True, True): SOURCE_BACKEND_AND_PATCH,
}


def _merge(base, patch: dict | None):
    if patch is None:
        return base
    if not isinstance(base, dict):
        return dict(patch)
    # Shallow: patch keys win, untouched base keys survive
    return {**base, **patch}


def resolve(base: BackendConfig, overrides: OverrideSet) -> ResolvedConfig | FullOverrideDirective:
    """Combine the backend config with local overrides.

    Precedence: jaeger-ui.config.js > jaeger-ui.config.json merged over the
    backend uiConfig > the host's built-in defaults (ui_config=None).
    Storage capabilities and version always come straight from the backend.
    """
    if overrides.full_override_source is not None:
        return FullOverrideDirective(
            source_text=overrides.full_override_source,
            storage_capabilities=base.storage_capabilities,
            version=base.version,
        )

    has_base = base.ui_config is not None
    has_patch = overrides.json_patch is not None
    return ResolvedConfig(
        ui_config=_merge(base.ui_config, overrides.json_patch),
        source=_SOURCE_LABELS[(has_base, has_patch)],
        storage_capabilities=base.storage_capabilities,
        version=base.version,
    )
