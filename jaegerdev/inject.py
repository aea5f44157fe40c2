"""Literal marker substitution in the Jaeger UI index.html.

The query service renders config into the page by search-and-replace on a
handful of fixed statements. This module does the same replacements so the
dev server page looks like the one production serves. Each marker is
replaced at most once; a marker missing from the template is skipped.
"""

import json

from jaegerdev.models import FullOverrideDirective, ResolvedConfig

CONFIG_FUNCTION_MARKER = "// JAEGER_CONFIG_JS"
CONFIG_MARKER = "JAEGER_CONFIG = DEFAULT_CONFIG;"
CAPABILITIES_MARKER = "JAEGER_STORAGE_CAPABILITIES = DEFAULT_STORAGE_CAPABILITIES;"
VERSION_MARKER = "JAEGER_VERSION = DEFAULT_VERSION;"


# Same escaping Go's json.Marshal applies, so a value can't close the <script>
_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def to_script_json(value) -> str:
    encoded = json.dumps(value)
    for char, escaped in _HTML_ESCAPES.items():
        encoded = encoded.replace(char, escaped)
    return encoded


def _assign(marker: str, value) -> str:
    name = marker.split(" = ", 1)[0]
    return f"{name} = {to_script_json(value)};"


def _replace(html: str, marker: str, replacement: str) -> str:
    return html.replace(marker, replacement, 1)


def config_function(source_text: str) -> str:
    return f"function UIConfig() {{\n{source_text}\n}}"


def inject(html: str, resolved: ResolvedConfig | FullOverrideDirective) -> str:
    if resolved.storage_capabilities is not None:
        html = _replace(html, CAPABILITIES_MARKER, _assign(CAPABILITIES_MARKER, resolved.storage_capabilities))
    if resolved.version is not None:
        html = _replace(html, VERSION_MARKER, _assign(VERSION_MARKER, resolved.version))

    if isinstance(resolved, FullOverrideDirective):
        return _replace(html, CONFIG_FUNCTION_MARKER, config_function(resolved.source_text))

    if resolved.ui_config is not None:
        html = _replace(html, CONFIG_MARKER, _assign(CONFIG_MARKER, resolved.ui_config))
    return html
