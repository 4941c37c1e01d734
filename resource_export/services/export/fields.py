"""
Action fields — invocation input parsing and field descriptors.

``ExportFields`` validates the field bag the host sends when the action
runs (``columns``, ``from``, ``to``).  ``ActionField`` describes the
inputs the host should render before running it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resource_export.core.errors import InvalidFieldsError


# ─────────────────────────────────────────────────────────────
#  INVOCATION INPUT
# ─────────────────────────────────────────────────────────────

class ExportFields(BaseModel):
    """Field values supplied for one export run."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    columns: Optional[str] = Field(
        None, description="JSON list of column names (user selection only)",
    )
    date_from: Optional[date] = Field(None, alias="from")
    date_to: Optional[date] = Field(None, alias="to")

    @field_validator("columns", mode="before")
    @classmethod
    def _columns_as_json(cls, value: Any) -> Any:
        # Hosts that already decoded the multiselect send a list.
        if isinstance(value, (list, tuple)):
            return json.dumps(list(value))
        if value == "":
            return None
        return value

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip()).date()
        return value

    @classmethod
    def from_bag(cls, fields: Union["ExportFields", Mapping[str, Any], None]) -> "ExportFields":
        """Build from a raw field bag, raising ``InvalidFieldsError``."""
        if isinstance(fields, cls):
            return fields
        try:
            return cls.model_validate(dict(fields or {}))
        except ValidationError as exc:
            raise InvalidFieldsError(
                "Invalid action fields: "
                + "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
            ) from exc


# ─────────────────────────────────────────────────────────────
#  FIELD DESCRIPTORS
# ─────────────────────────────────────────────────────────────

@dataclass
class ActionField:
    """One input rendered by the host before the action runs."""
    component: str           # "heading" | "multiselect" | "date-range"
    name: str
    attributes: List[str] = field(default_factory=list)
    options: Dict[str, str] = field(default_factory=dict)
    placeholder: Optional[str] = None
    rules: List[str] = field(default_factory=list)
    reorderable: bool = False
    as_html: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "component": self.component,
            "name": self.name,
            "attributes": self.attributes,
        }
        if self.options:
            out["options"] = [
                {"value": value, "label": label}
                for value, label in self.options.items()
            ]
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        if self.rules:
            out["rules"] = self.rules
        if self.reorderable:
            out["reorderable"] = True
        if self.as_html:
            out["as_html"] = True
        return out


def heading(text: str, as_html: bool = False) -> ActionField:
    return ActionField(component="heading", name=text, as_html=as_html)


def multiselect(
    name: str,
    attribute: str,
    options: Dict[str, str],
    placeholder: Optional[str] = None,
    required: bool = False,
    reorderable: bool = False,
) -> ActionField:
    return ActionField(
        component="multiselect",
        name=name,
        attributes=[attribute],
        options=options,
        placeholder=placeholder,
        rules=["required"] if required else [],
        reorderable=reorderable,
    )


def date_range(name: str, attributes: List[str]) -> ActionField:
    return ActionField(component="date-range", name=name, attributes=list(attributes))
