"""Spending account that outgoings are assigned to."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import new_id


class Account(SQLModel):
    """A named pot that funds are allocated into."""

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=128)
    description: str = Field(default="", max_length=255)
    color_tag: str = Field(default="#6366f1", max_length=32)
    icon: Optional[str] = Field(default=None, max_length=64)
