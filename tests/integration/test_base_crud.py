"""
Test suite for BaseCRUD generic database operations.

Tests basic CRUD functionality: create, read, update, soft delete, exists.
Uses AsyncSession mocks to verify the calls issued to SQLAlchemy.

System role: Verification of generic database layer foundation
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from planner_mcp.boundary.db.CRUD.base_crud import BaseCRUD
from planner_mcp.boundary.db.models import UnitModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance for testing."""
    return BaseCRUD(UnitModel, "unit_id")


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    @pytest.mark.asyncio
    async def test_create_should_add_instance_to_session(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test create adds instance and flushes/refreshes."""
        # Arrange
        mock_session.add = MagicMock()

        # Act
        unit = await base_crud.create(mock_session, title="Forces", subject="Physics")

        # Assert
        mock_session.add.assert_called_once_with(unit)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(unit)
        assert unit.title == "Forces"

    @pytest.mark.asyncio
    async def test_create_should_flush_before_refresh(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test flush is called before refresh so defaults are populated."""
        # Arrange
        call_order = []

        async def flush_effect() -> None:
            call_order.append("flush")

        async def refresh_effect(obj: Any) -> None:
            call_order.append("refresh")

        mock_session.add = MagicMock()
        mock_session.flush = AsyncMock(side_effect=flush_effect)
        mock_session.refresh = AsyncMock(side_effect=refresh_effect)

        # Act
        await base_crud.create(mock_session, title="Forces", subject="Physics")

        # Assert
        assert call_order == ["flush", "refresh"]


class TestBaseCRUDRead:
    """Test suite for BaseCRUD read methods."""

    @pytest.mark.asyncio
    async def test_get_by_id_returns_none_when_missing(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        # Arrange
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute = AsyncMock(return_value=result)

        # Act
        unit = await base_crud.get_by_id(mock_session, "missing")

        # Assert
        assert unit is None
        mock_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_exists_is_true_when_key_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = "u1"
        mock_session.execute = AsyncMock(return_value=result)

        assert await base_crud.exists(mock_session, "u1") is True


class TestBaseCRUDUpdate:
    """Test suite for BaseCRUD.update_by_id()."""

    @pytest.mark.asyncio
    async def test_update_missing_record_skips_flush(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        # Arrange
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute = AsyncMock(return_value=result)

        # Act
        updated = await base_crud.update_by_id(mock_session, "missing", title="x")

        # Assert
        assert updated is None
        mock_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_soft_delete_reports_rowcount(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        result = MagicMock()
        result.rowcount = 0
        mock_session.execute = AsyncMock(return_value=result)

        assert await base_crud.soft_delete_by_id(mock_session, "missing") is False
