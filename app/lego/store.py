"""
Data-access layer for the LEGO catalog.

``CatalogStore`` owns the SQLAlchemy engine, creates the two tables on
startup, seeds them when the database is empty, and exposes the read
and write operations used by the routers. Each operation runs a single
statement inside its own session and returns pydantic models, so no
ORM object ever leaves this module.

Database failures are translated into the exceptions defined in
``errors``; the original SQLAlchemy exception is kept as ``__cause__``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.engine import URL
from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import contains_eager, sessionmaker

from .errors import (
    CatalogError,
    ConstraintViolationError,
    InvalidSetDataError,
    NotFoundError,
    StoreConnectionError,
)
from .schemas import LegoSet, Theme
from .tables import Base, SetRow, ThemeRow


logger = logging.getLogger(__name__)

SEED_THEMES = [
    {"id": 100, "name": "Classic Town"},
    {"id": 200, "name": "Technic"},
    {"id": 300, "name": "Star Wars"},
    {"id": 400, "name": "City"},
]

SEED_SETS = [
    {
        "set_num": "001",
        "name": "Starter Set",
        "year": 2020,
        "theme_id": 100,
        "num_parts": 50,
        "img_url": "https://fakeimg.pl/300x300?text=Starter",
    },
]

INTEGER_FIELDS = ("year", "num_parts", "theme_id")


def _first_violation(exc: SQLAlchemyError) -> str:
    """Return the first line of the driver's error message."""
    orig = getattr(exc, "orig", None)
    text = str(orig if orig is not None else exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__


def _to_int(field: str, value: Any) -> Optional[int]:
    """Coerce a loosely typed form value to ``int``.

    ``None`` and blank strings mean "not provided" and map to ``None``.
    """
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ConstraintViolationError(
            f"{field} must be an integer, got {text!r}"
        ) from None


class CatalogStore:
    """Relational store for themes and sets.

    Parameters
    ----------
    database_url : str or URL
        SQLAlchemy database URL.
    echo : bool
        Echo emitted SQL to the log.
    **engine_options
        Extra keyword arguments for ``sqlalchemy.create_engine`` (for
        example ``connect_args`` or ``poolclass``).
    """

    def __init__(self, database_url: str | URL, *, echo: bool = False, **engine_options: Any) -> None:
        self.engine = create_engine(database_url, echo=echo, **engine_options)
        self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings) -> "CatalogStore":
        return cls(
            settings.database_url,
            echo=settings.sql_echo,
            connect_args=dict(settings.connect_args),
        )

    @contextmanager
    def _errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except CatalogError:
            raise
        except (IntegrityError, DataError) as exc:
            message = _first_violation(exc)
            logger.error("%s rejected by the database: %s", operation, message)
            raise ConstraintViolationError(message) from exc
        except (OperationalError, InterfaceError) as exc:
            message = _first_violation(exc)
            logger.error("%s could not reach the database: %s", operation, message)
            raise StoreConnectionError(message) from exc
        except SQLAlchemyError as exc:
            message = _first_violation(exc)
            logger.error("%s failed: %s", operation, message)
            raise CatalogError(message) from exc

    # ------------------------------------------------------------------
    # Lifecycle

    def initialize(self) -> None:
        """Create missing tables and insert the seed data into an empty store.

        Seeding is guarded by a theme count, not an upsert, so two
        processes initializing the same empty database at once can both
        insert.
        """
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            message = _first_violation(exc)
            logger.error("schema creation failed: %s", message)
            raise StoreConnectionError(message) from exc

        with self._errors("initialize"), self._sessions.begin() as session:
            theme_count = session.scalar(select(func.count()).select_from(ThemeRow))
            if theme_count:
                return
            session.add_all(ThemeRow(**theme) for theme in SEED_THEMES)
            for data in SEED_SETS:
                if session.get(SetRow, data["set_num"]) is None:
                    session.add(SetRow(**data))
        logger.info("Initial data inserted into database (themes & sets).")

    def close(self) -> None:
        self.engine.dispose()

    # ------------------------------------------------------------------
    # Reads

    def list_sets(self) -> List[LegoSet]:
        with self._errors("list_sets"), self._sessions() as session:
            rows = session.scalars(select(SetRow).order_by(SetRow.set_num)).all()
            return [LegoSet.model_validate(row) for row in rows]

    def list_themes(self) -> List[Theme]:
        with self._errors("list_themes"), self._sessions() as session:
            rows = session.scalars(select(ThemeRow).order_by(ThemeRow.name)).all()
            return [Theme.model_validate(row) for row in rows]

    def get_set_by_num(self, set_num: str) -> LegoSet:
        with self._errors("get_set_by_num"), self._sessions() as session:
            row = session.scalars(
                select(SetRow).where(SetRow.set_num == set_num)
            ).first()
            if row is None:
                raise NotFoundError("Unable to find requested set")
            return LegoSet.model_validate(row)

    def find_sets_by_theme(self, theme: str) -> List[LegoSet]:
        """Sets whose theme name contains ``theme``, ignoring case.

        ``theme`` goes into the ILIKE pattern as-is, so ``%`` and ``_``
        behave as wildcards.
        """
        stmt = (
            select(SetRow)
            .join(SetRow.theme)
            .options(contains_eager(SetRow.theme))
            .where(ThemeRow.name.ilike(f"%{theme}%"))
            .order_by(SetRow.set_num)
        )
        with self._errors("find_sets_by_theme"), self._sessions() as session:
            rows = session.scalars(stmt).all()
            if not rows:
                raise NotFoundError("Unable to find requested sets")
            return [LegoSet.model_validate(row) for row in rows]

    # ------------------------------------------------------------------
    # Writes

    def create_set(self, data: Optional[Mapping[str, Any]]) -> None:
        if not data or not data.get("set_num"):
            raise InvalidSetDataError("Invalid set data: set_num is required")

        row = SetRow(
            set_num=str(data["set_num"]),
            name=data.get("name"),
            img_url=data.get("img_url"),
            **{field: _to_int(field, data.get(field)) for field in INTEGER_FIELDS},
        )
        with self._errors("create_set"), self._sessions.begin() as session:
            session.add(row)
        logger.info("Added set %s", row.set_num)

    def delete_set_by_num(self, set_num: str) -> None:
        with self._errors("delete_set_by_num"), self._sessions.begin() as session:
            result = session.execute(delete(SetRow).where(SetRow.set_num == set_num))
            if result.rowcount == 0:
                raise NotFoundError("Set not found")
        logger.info("Deleted set %s", set_num)
