"""
ExportRegistry — resource key → configured export action.

Hosts register one action per resource at start-up; the HTTP layer
looks actions up by key.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from resource_export.services.export.action import ExportResourceAction


class ExportRegistry:

    def __init__(self) -> None:
        self._actions: Dict[str, ExportResourceAction] = {}

    def register(self, key: str, action: ExportResourceAction) -> ExportResourceAction:
        self._actions[key] = action
        return action

    def get(self, key: str) -> Optional[ExportResourceAction]:
        return self._actions.get(key)

    def keys(self) -> List[str]:
        return sorted(self._actions)

    def clear(self) -> None:
        self._actions.clear()


# ── Singleton ────────────────────────────────────────────────────
export_registry = ExportRegistry()
