"""Pydantic model for the Problem response schema."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Problem(BaseModel):
    """Model of the RFC7807 Problem response schema.

    Extension members are allowed alongside the standard fields.
    """

    model_config = ConfigDict(extra='allow')

    type: str = 'about:blank'
    title: Optional[str] = None
    status: Optional[int] = None
    detail: Optional[str] = None
    instance: Optional[str] = None
