"""
Pytest configuration and fixtures.
Provides an async SQLite-backed session and an in-memory region store.
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import topology.models  # noqa: F401  registers models with Base
from topology.db.base import Base
from topology.db.repositories.base_repository import BaseRepository
from topology.db.repositories.memory_region_store import InMemoryRegionStore
from topology.models.customer import Customer
from topology.models.provider import Provider
from topology.schemas.region import ProviderSummary


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_db_session():
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    # Create test engine
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    
    # Create tables
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    # Create sessionmaker
    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    
    # Create session
    async with test_session_maker() as session:
        yield session
    
    # Cleanup
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def owners(test_db_session):
    """
    Two customers, each with one provider, committed to the test database.
    Returns a dict of the created rows.
    """
    customer_repo = BaseRepository(Customer, test_db_session)
    provider_repo = BaseRepository(Provider, test_db_session)
    
    customer = await customer_repo.create(name="Acme")
    other_customer = await customer_repo.create(name="Globex")
    provider = await provider_repo.create(customer_id=customer.id, code="aws", name="AWS prod")
    other_provider = await provider_repo.create(customer_id=other_customer.id, code="aws", name="AWS dev")
    await test_db_session.commit()
    
    return {
        "customer": customer,
        "provider": provider,
        "other_customer": other_customer,
        "other_provider": other_provider,
    }


@pytest.fixture(scope="function")
def memory_store():
    """Empty in-memory region store."""
    return InMemoryRegionStore()


@pytest.fixture(scope="function")
def memory_owners(memory_store):
    """Two providers owned by different customers, registered with memory_store."""
    customer_id = uuid.uuid4()
    other_customer_id = uuid.uuid4()
    provider = memory_store.add_provider(
        ProviderSummary(id=uuid.uuid4(), customer_id=customer_id, code="gcp", name="GCP prod")
    )
    other_provider = memory_store.add_provider(
        ProviderSummary(id=uuid.uuid4(), customer_id=other_customer_id, code="gcp", name="GCP dev")
    )
    return {
        "customer_id": customer_id,
        "provider": provider,
        "other_customer_id": other_customer_id,
        "other_provider": other_provider,
    }
