"""Local developer override files.

Two optional files next to the project root can replace or patch the UI
config the backend serves:

  jaeger-ui.config.js    full override; its body becomes a UIConfig() function
  jaeger-ui.config.json  JSON object merged over the backend's uiConfig

Both are re-read on every render. They are small and editing them is the
whole point of the dev loop.
"""

import json
import logging
from pathlib import Path

from jaegerdev.models import OverrideSet

log = logging.getLogger("jaegerdev.overrides")


def _read_full_override(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.warning(f"Could not read {path}, ignoring it: {e}")
        return None


def _read_json_patch(path: Path) -> dict | None:
    if not path.is_file():
        return None
    try:
        patch = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        log.warning(f"Could not read {path}, ignoring it: {e}")
        return None
    except json.JSONDecodeError as e:
        log.warning(f"Malformed JSON in {path} (line {e.lineno}, col {e.colno}): {e.msg}")
        return None
    if not isinstance(patch, dict):
        log.warning(f"{path} must contain a JSON object, got {type(patch).__name__}")
        return None
    return patch


def load(full_override_path, json_patch_path) -> OverrideSet:
    """Read whichever override files exist. Never raises for bad file contents."""
    overrides = OverrideSet(
        full_override_source=_read_full_override(Path(full_override_path)),
        json_patch=_read_json_patch(Path(json_patch_path)),
    )
    found = overrides.found()
    if found:
        log.debug(f"Local overrides found: {', '.join(found)}")
    return overrides
