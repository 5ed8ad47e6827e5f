# backend/homelist/db/orm_registry.py
from __future__ import annotations

from typing import TYPE_CHECKING
from sqlalchemy.orm import declarative_base

# Single Base for every ORM model
Base = declarative_base()

if TYPE_CHECKING:  # pragma: no cover
    from homelist.models.apartment import Apartment  # noqa: F401

def import_all_models() -> None:
    """
    Load the model modules so their mappers register on Base.metadata.
    - Called from alembic env and from the test fixtures before create_all.
    - Imported lazily here to avoid import cycles.
    """
    import importlib

    for mod in (
        "homelist.models.apartment",
    ):
        importlib.import_module(mod)

__all__ = ["Base", "import_all_models"]
