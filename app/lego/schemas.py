"""
Pydantic schema definitions for the LEGO catalog.

``Theme`` and ``LegoSet`` are the read models handed out by the store;
they are built from the SQLAlchemy rows while the session is still
open, so callers never touch lazy-loaded attributes. ``NewSet`` is the
JSON body accepted by the API when creating a set.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Theme(BaseModel):
    """A named category grouping sets."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None


class LegoSet(BaseModel):
    """A single catalog set.

    ``theme`` is the joined theme row, or ``None`` when ``theme_id`` is
    empty or points at a theme that does not exist.
    """

    model_config = ConfigDict(from_attributes=True)

    set_num: str
    name: Optional[str] = None
    year: Optional[int] = None
    num_parts: Optional[int] = None
    theme_id: Optional[int] = None
    img_url: Optional[str] = None
    theme: Optional[Theme] = None


class NewSet(BaseModel):
    """Body of ``POST /api/lego/sets``.

    Numeric fields accept either integers or numeric strings; the store
    performs the coercion so that form posts and JSON posts behave the
    same way.
    """

    set_num: Optional[str] = Field(default=None, description="Set number (primary key)")
    name: Optional[str] = None
    year: Optional[Union[int, str]] = None
    num_parts: Optional[Union[int, str]] = None
    theme_id: Optional[Union[int, str]] = None
    img_url: Optional[str] = None
