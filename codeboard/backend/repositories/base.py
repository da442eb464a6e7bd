"""
Base Repository.

Base class for all repositories with common CRUD operations plus the
sorting and page-slicing helpers shared by list queries.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import NotFoundError
from codeboard.backend.core.logging import get_logger
from codeboard.backend.core.pagination import Page, PageParams, resolve_sort_field
from codeboard.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses set the model class, a display name used in NotFound
    errors, and the fields callers may sort by:

        class NoteRepository(BaseRepository[Note]):
            model = Note
            resource_name = "Note"
            sortable_fields = frozenset({"id", "title", "created_at"})
    """

    model: type[ModelType]
    resource_name: str = "Resource"
    sortable_fields: frozenset[str] = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _select(self) -> Select:
        """Base SELECT for this model; subclasses may add loader options."""
        return select(self.model)

    def _default_order(self) -> tuple[Any, ...]:
        """Newest first, ties broken by insertion order."""
        return (self.model.created_at.desc(), self.model.id.asc())

    def _order_by(self, params: PageParams) -> tuple[Any, ...]:
        """
        Build ORDER BY clauses from page parameters.

        Raises:
            ValidationError: If the sort field is not sortable
        """
        field = resolve_sort_field(params.sort_by, self.sortable_fields)
        column = getattr(self.model, field)
        primary = column.desc() if params.descending else column.asc()
        return (primary, self.model.id.asc())

    async def _fetch_all(self, stmt: Select) -> list[ModelType]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _fetch_page(self, stmt: Select, params: PageParams) -> Page[ModelType]:
        """Count the filtered rows, then fetch one sorted slice."""
        order = self._order_by(params)
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()

        items = await self._fetch_all(
            stmt.order_by(None).order_by(*order).limit(params.size).offset(params.offset)
        )
        return Page(items=items, page=params.page, size=params.size, total_elements=total)

    async def _fetch_sorted(
        self,
        stmt: Select,
        params: PageParams | None,
    ) -> list[ModelType] | Page[ModelType]:
        """Flat sorted list, or a page when the caller asked for one."""
        if params is not None and params.paged:
            return await self._fetch_page(stmt, params)
        order = self._order_by(params) if params is not None else self._default_order()
        return await self._fetch_all(stmt.order_by(*order))

    async def get_by_id(self, id: int) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)

        if instance is None:
            raise NotFoundError(self.resource_name, id)

        return instance

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            self._select().where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self, params: PageParams | None = None) -> list[ModelType] | Page[ModelType]:
        """Get all records, newest first unless params say otherwise."""
        return await self._fetch_sorted(self._select(), params)

    async def add(self, instance: ModelType) -> ModelType:
        """Persist a new instance and assign its id."""
        self.session.add(instance)
        await self.session.flush()
        logger.debug("Record added", extra={"model": self.resource_name, "id": instance.id})
        return instance

    async def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Total number of records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()
