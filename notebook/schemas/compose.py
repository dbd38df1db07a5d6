"""Serialization of composed read views."""

from typing import Any

from pydantic import BaseModel


def to_payload(view: BaseModel) -> dict[str, Any]:
    """Serialize a composed view, omitting every absent value at any depth.

    Empty collections are kept: an empty ``restaurants`` list is a value, not an
    absent field.
    """
    return view.model_dump(mode="json", exclude_none=True)
