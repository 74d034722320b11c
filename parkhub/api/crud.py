"""Shared handler helpers: lookup-or-404, partial update, delete-or-404."""
from typing import Any, Iterable, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.database import Base

M = TypeVar("M", bound=Base)


async def get_or_404(db: AsyncSession, model: Type[M], pk_column: Any, pk: str, detail: str) -> M:
    result = await db.execute(select(model).where(pk_column == pk))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(status_code=404, detail=detail)
    return obj


def apply_update(
    obj: Any, data: BaseModel, required: Iterable[str] = (), exclude: Iterable[str] = ()
) -> list[str]:
    """
    Copy the fields the client actually sent. An omitted field stays unchanged,
    an explicit null clears a nullable column. Null on a column listed in
    `required` is a 400.
    """
    required = set(required)
    changed = []
    for field in sorted(data.model_fields_set - set(exclude)):
        value = getattr(data, field)
        if value is None and field in required:
            raise HTTPException(status_code=400, detail=f"Field '{field}' cannot be null")
        setattr(obj, field, value)
        changed.append(field)
    return changed


async def delete_or_404(db: AsyncSession, model: Type[M], pk_column: Any, pk: str, detail: str) -> None:
    result = await db.execute(delete(model).where(pk_column == pk))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail=detail)


def dump_all(schema: Type[BaseModel], rows: Iterable[Any]) -> list[dict]:
    """ORM rows -> JSON-ready dicts, the form kept in the cache."""
    return [schema.model_validate(r).model_dump(mode="json") for r in rows]
