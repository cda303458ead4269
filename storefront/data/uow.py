"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.domain.value_objects import ExecutionID

from .repositories import (
    SqlAlchemyInventoryRepository,
    SqlAlchemyMaintenanceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProductRepository,
)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None

        # Lazy-loaded repositories
        self._orders: Optional[SqlAlchemyOrderRepository] = None
        self._payments: Optional[SqlAlchemyPaymentRepository] = None
        self._inventory: Optional[SqlAlchemyInventoryRepository] = None
        self._products: Optional[SqlAlchemyProductRepository] = None
        self._maintenance: Optional[SqlAlchemyMaintenanceRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close. Commit stays explicit."""
        if exc_type is not None:
            await self._session.rollback()
        await self._session.close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository."""
        if self._orders is None:
            self._orders = SqlAlchemyOrderRepository(self._require_session())
        return self._orders

    @property
    def payments(self) -> SqlAlchemyPaymentRepository:
        if self._payments is None:
            self._payments = SqlAlchemyPaymentRepository(self._require_session())
        return self._payments

    @property
    def inventory(self) -> SqlAlchemyInventoryRepository:
        if self._inventory is None:
            self._inventory = SqlAlchemyInventoryRepository(self._require_session())
        return self._inventory

    @property
    def products(self) -> SqlAlchemyProductRepository:
        if self._products is None:
            self._products = SqlAlchemyProductRepository(self._require_session())
        return self._products

    @property
    def maintenance(self) -> SqlAlchemyMaintenanceRepository:
        if self._maintenance is None:
            self._maintenance = SqlAlchemyMaintenanceRepository(self._require_session())
        return self._maintenance

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self._require_session().commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self._require_session().rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
