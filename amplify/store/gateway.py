"""Amplify: Record Store Gateway.

Async create/read/update/aggregate over the managed store's collections.
Each call is a single request against the store: no client-side joins and
no retries. Provider failures surface as StoreError; a missing key surfaces
as NotFound.
"""

import time
from typing import Any, Dict, List, Mapping, Optional, Type

from sqlalchemy import case, func, inspect as sa_inspect, select as sa_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from amplify.core.errors import NotFound, StoreError
from amplify.core.logging import get_logger
from amplify.models.records import COLLECTIONS
from amplify.store.aggregates import Aggregate

logger = get_logger("store.gateway")


class RecordStore:
    """Gateway over the six record collections."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    # ── Helpers ──

    def _table(self, collection: str) -> Type[SQLModel]:
        table = COLLECTIONS.get(collection)
        if table is None:
            raise StoreError(
                f"Unknown collection '{collection}'", payload={"collection": collection}
            )
        return table

    def _column(self, table: Type[SQLModel], collection: str, field: str):
        columns = sa_inspect(table).columns
        if field not in columns:
            raise StoreError(
                f"Unknown column '{field}' on {collection}",
                payload={"collection": collection, "column": field},
            )
        return columns[field]

    def _where(self, table: Type[SQLModel], collection: str, filters: Mapping[str, Any]):
        return [self._column(table, collection, k) == v for k, v in filters.items()]

    def _failure(self, operation: str, collection: str, exc: Exception) -> StoreError:
        payload = str(getattr(exc, "orig", None) or exc)
        logger.error(
            f"Store {operation} on {collection} failed: {payload}",
            extra={"operation": f"store.{operation}", "entity_id": collection},
        )
        return StoreError(f"{operation} on {collection} failed", payload=payload)

    def _session(self) -> AsyncSession:
        return AsyncSession(self.engine, expire_on_commit=False)

    # ── Operations ──

    async def insert_one(self, collection: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert ``record`` and return the stored row, store-assigned fields included."""
        table = self._table(collection)
        for field in record:
            self._column(table, collection, field)
        row = table(**record)
        start = time.perf_counter()
        try:
            async with self._session() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except (SQLAlchemyError, OSError) as e:
            raise self._failure("insert", collection, e) from e
        logger.debug(
            f"Inserted into {collection}",
            extra={
                "operation": "store.insert",
                "entity_id": row.id,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return row.model_dump()

    async def get_one(self, collection: str, key: str) -> Dict[str, Any]:
        table = self._table(collection)
        try:
            async with self._session() as session:
                row = await session.get(table, key)
        except (SQLAlchemyError, OSError) as e:
            raise self._failure("get", collection, e) from e
        if row is None:
            raise NotFound(collection, key)
        return row.model_dump()

    async def update_one(self, collection: str, key: str, patch: Mapping[str, Any]) -> None:
        """Apply ``patch`` to one row. Atomic per row; nothing spans rows."""
        table = self._table(collection)
        for field in patch:
            self._column(table, collection, field)
        try:
            async with self._session() as session:
                row = await session.get(table, key)
                if row is None:
                    raise NotFound(collection, key)
                for field, value in patch.items():
                    setattr(row, field, value)
                session.add(row)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._failure("update", collection, e) from e

    async def select(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Rows matching every ``filters`` key/value pair."""
        table = self._table(collection)
        stmt = select(table).where(*self._where(table, collection, filters or {}))
        if order_by:
            column = self._column(table, collection, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit:
            stmt = stmt.limit(limit)
        try:
            async with self._session() as session:
                rows = (await session.exec(stmt)).all()
        except (SQLAlchemyError, OSError) as e:
            raise self._failure("select", collection, e) from e
        return [row.model_dump() for row in rows]

    async def aggregate(
        self,
        collection: str,
        filters: Mapping[str, Any],
        spec: Mapping[str, Aggregate],
    ) -> Dict[str, Any]:
        """Run one group-free aggregate query; always returns exactly one row."""
        table = self._table(collection)
        columns = []
        for name, agg in spec.items():
            if agg.kind == "count":
                expr = func.count()
            elif agg.kind == "count_where":
                column = self._column(table, collection, agg.field)
                expr = func.count(case((column == agg.value, 1)))
            elif agg.kind == "count_present":
                expr = func.count(self._column(table, collection, agg.field))
            elif agg.kind == "sum":
                expr = func.coalesce(func.sum(self._column(table, collection, agg.field)), 0)
            else:
                raise StoreError(f"Unsupported aggregate '{agg.kind}'", payload={"aggregate": name})
            columns.append(expr.label(name))

        stmt = (
            sa_select(*columns)
            .select_from(table.__table__)
            .where(*self._where(table, collection, filters))
        )
        try:
            async with self.engine.connect() as conn:
                row = (await conn.execute(stmt)).one()
        except (SQLAlchemyError, OSError) as e:
            raise self._failure("aggregate", collection, e) from e
        return dict(row._mapping)
