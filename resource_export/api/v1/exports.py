"""
Export API endpoints — List, describe and run registered export actions.

Routes:
  GET  /exports                   → registered resources and action names
  GET  /exports/{resource}/fields → action metadata + field descriptors
  POST /exports/{resource}        → run the export (field bag in body)

A run always answers 200 with either ``{"download", "name"}`` or
``{"danger"}``; the host renders a link or an error banner.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from resource_export.services.export.action import ExportResourceAction
from resource_export.services.export.registry import ExportRegistry, export_registry

router = APIRouter(prefix="/exports", tags=["exports"])


# ── Pydantic models ──────────────────────────────────────────────

class ExportRunRequest(BaseModel):
    """Body for POST /exports/{resource}."""

    model_config = ConfigDict(populate_by_name=True)

    columns: Optional[Any] = Field(
        None, description="JSON list (string) or list of column names",
    )
    date_from: Optional[str] = Field(None, alias="from", description="YYYY-MM-DD")
    date_to: Optional[str] = Field(None, alias="to", description="YYYY-MM-DD")

    def to_bag(self) -> Dict[str, Any]:
        return {"columns": self.columns, "from": self.date_from, "to": self.date_to}


# ── Dependencies ─────────────────────────────────────────────────

def get_registry() -> ExportRegistry:
    return export_registry


def _require_action(registry: ExportRegistry, resource: str) -> ExportResourceAction:
    action = registry.get(resource)
    if action is None:
        raise HTTPException(
            status_code=404, detail=f"No export registered for '{resource}'"
        )
    return action


# ── Endpoints ────────────────────────────────────────────────────

@router.get("")
def list_exports(registry: ExportRegistry = Depends(get_registry)) -> List[Dict[str, str]]:
    return [
        {"resource": key, "name": registry.get(key).name()}
        for key in registry.keys()
    ]


@router.get("/{resource}/fields")
def export_fields(
    resource: str,
    registry: ExportRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    return _require_action(registry, resource).to_dict()


@router.post("/{resource}")
def run_export(
    resource: str,
    req: ExportRunRequest,
    registry: ExportRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """
    Run the export synchronously.

    Declared sync so FastAPI runs it in the threadpool; the export does
    blocking DB and file I/O.
    """
    action = _require_action(registry, resource)
    return action.handle(req.to_bag()).to_dict()
