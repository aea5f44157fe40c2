import os
import time
import yaml
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
_runtime_overrides = {}

# Environment variables that replace a config key when set
_ENV_KEYS = {
    "JAEGER_QUERY_URL": "backend.base_url",
}

def set_override(key_path, value):
    """Set a runtime config override using dot-notation key path.
    e.g. set_override('backend.base_url', 'http://localhost:16687')
    """
    _runtime_overrides[key_path] = value
    _config_cache["data"] = None

def get_overrides():
    """Return a copy of current runtime overrides."""
    return dict(_runtime_overrides)

def clear_overrides():
    """Clear all runtime overrides."""
    _runtime_overrides.clear()
    _config_cache["data"] = None

def _set_path(cfg, key_path, value):
    keys = key_path.split(".")
    d = cfg
    for k in keys[:-1]:
        if k not in d:
            d[k] = {}
        d = d[k]
    d[keys[-1]] = value

def _apply_overrides(cfg):
    """Merge env and runtime overrides into config dict. Runtime wins."""
    for env_name, key_path in _ENV_KEYS.items():
        value = os.environ.get(env_name)
        if value:
            _set_path(cfg, key_path, value)
    for key_path, value in _runtime_overrides.items():
        _set_path(cfg, key_path, value)
    return cfg

def resolve_path(p):
    """Relative config paths are relative to the project root."""
    p = Path(p)
    return p if p.is_absolute() else BASE_DIR / p

# ── Cached config loading ─────────────────────────────────────────────
_config_cache = {"data": None, "loaded_at": 0}
_CONFIG_TTL = 30  # seconds

def load_config():
    now = time.monotonic()
    if _config_cache["data"] is not None and (now - _config_cache["loaded_at"]) < _CONFIG_TTL:
        return _config_cache["data"]
    with open(BASE_DIR / "config.yaml") as f:
        cfg = yaml.safe_load(f)
    result = _apply_overrides(cfg)
    _config_cache["data"] = result
    _config_cache["loaded_at"] = now
    return result
