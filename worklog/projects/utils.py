# -*- coding: utf-8 -*-
"""Turn ``project[tasks_attributes][k][title]`` style form keys into dicts."""
from __future__ import annotations
from typing import Any, Dict
import re

_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_PART_RE = re.compile(r"\[([^\[\]]*)\]")


def parse_bracket_params(data) -> Dict[str, Any]:
    """
    Nest flat form keys. Keys without brackets are kept as-is; for repeated
    keys the last value wins.
    """
    out: Dict[str, Any] = {}
    items = data.lists() if hasattr(data, "lists") else ((k, [v]) for k, v in data.items())
    for raw_key, values in items:
        value = values[-1] if values else ""
        m = _KEY_RE.match(raw_key)
        if not m:
            out[raw_key] = value
            continue
        parts = [m.group(1)] + _PART_RE.findall(m.group(2))
        node = out
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[parts[-1]] = value
    return out


def unwrap_project_payload(data) -> Dict[str, Any]:
    """Accept JSON bodies and HTML-form bodies, with or without a ``project`` root."""
    if hasattr(data, "lists"):
        data = parse_bracket_params(data)
    else:
        data = dict(data)
    inner = data.get("project")
    return dict(inner) if isinstance(inner, dict) else data
