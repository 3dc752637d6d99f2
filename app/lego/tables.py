"""SQLAlchemy table definitions for themes and sets."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class ThemeRow(Base):
    __tablename__ = "Themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<ThemeRow id={self.id} name={self.name}>"


class SetRow(Base):
    __tablename__ = "Sets"

    set_num: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    num_parts: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # Plain column, no FOREIGN KEY constraint: a set may point at a theme
    # that does not exist.
    theme_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    img_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    theme: Mapped[Optional[ThemeRow]] = relationship(
        ThemeRow,
        primaryjoin="foreign(SetRow.theme_id) == ThemeRow.id",
        viewonly=True,
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<SetRow set_num={self.set_num} name={self.name}>"
