from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from portfolio_advisor.infrastructure.cache.memory_cache import CacheTTL, MemoryCache
from portfolio_advisor.infrastructure.db import models  # noqa: F401
from portfolio_advisor.infrastructure.db.database import Base, get_db
from portfolio_advisor.infrastructure.market_data.limiter import RequestLimiter
from portfolio_advisor.main import include_routers
from portfolio_advisor.services.advisor_service import AdvisorService
from portfolio_advisor.services.backtest_service import BacktestService
from portfolio_advisor.services.history_service import HistoryRecorder
from portfolio_advisor.services.indicator_service import IndicatorService
from portfolio_advisor.services.market_data_service import MarketDataService
from portfolio_advisor.services.portfolio_service import PortfolioSelectionService
from portfolio_advisor.services.universe_service import UniverseService
from tests.fakes import STOCK_SYMBOLS, FakeClock, FakeGateway


# -------------------------------------------------------------------
# Fixtures
# -------------------------------------------------------------------

@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def market_data(gateway, cache) -> MarketDataService:
    return MarketDataService(
        gateway=gateway,
        cache=cache,
        limiter=RequestLimiter(max_concurrency=5),
        ttl=CacheTTL(),
    )


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def history(session_factory) -> HistoryRecorder:
    return HistoryRecorder(session_factory)


@pytest.fixture()
def advisor(market_data, cache, history) -> AdvisorService:
    universe = UniverseService(market_data, top_k=5, symbols=STOCK_SYMBOLS)
    return AdvisorService(
        cache=cache,
        indicators=IndicatorService(market_data),
        portfolios=PortfolioSelectionService(market_data, universe),
        backtests=BacktestService(market_data, symbols=STOCK_SYMBOLS),
        history=history,
    )


@pytest.fixture()
async def app(advisor, db_session) -> AsyncGenerator[FastAPI, None]:
    app = FastAPI()
    include_routers(app)
    app.state.advisor = advisor

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    await advisor.history.drain()


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
