"""Test fixtures: in-memory SQLite database, temp storage root, FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from nasbox.api.deps import get_file_service
from nasbox.config import settings
from nasbox.database import get_db
from nasbox.main import create_app
from nasbox.models.base import Base
from nasbox.services import auth_service
from nasbox.services.file_service import FileService
from nasbox.storage import PathResolver, StorageRoot


@pytest.fixture
def storage_root(tmp_path):
    """Empty storage root inside a temp dir (siblings stay outside it)."""
    root = tmp_path / "nas_root"
    root.mkdir()
    return root


@pytest.fixture
def resolver(storage_root):
    return PathResolver(StorageRoot(str(storage_root)))


@pytest.fixture
def file_service(resolver):
    return FileService(resolver)


@pytest_asyncio.fixture
async def db_session():
    """Provide an async in-memory SQLite session for tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, file_service: FileService):
    """Provide an async test client with overridden DB and storage dependencies."""
    app = create_app()

    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_file_service] = lambda: file_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def alice(db_session: AsyncSession, file_service: FileService):
    """Registered user 'alice' with an empty home directory."""
    user = await auth_service.create_user(db_session, "alice", "wonderland")
    file_service.ensure_home(user.username)
    return user


@pytest_asyncio.fixture
async def logged_in_client(client: AsyncClient, db_session: AsyncSession, alice):
    """Test client carrying a live session cookie for alice."""
    session = await auth_service.create_session(db_session, alice.username)
    client.cookies.set(settings.session_cookie_name, session.id)
    return client
