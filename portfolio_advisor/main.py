"""
FastAPI Main Application with Scheduler
Wires cache, market data, selection services and persistence into one app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import async_sessionmaker

from portfolio_advisor.api.routes import admin, backtest, health, market, performance, portfolio
from portfolio_advisor.config import Settings, settings
from portfolio_advisor.core.logging import get_logger, setup_logging
from portfolio_advisor.infrastructure.cache.memory_cache import CacheTTL, MemoryCache
from portfolio_advisor.infrastructure.db.database import async_session_factory, close_db, init_db
from portfolio_advisor.infrastructure.market_data.limiter import RequestLimiter
from portfolio_advisor.infrastructure.market_data.types import MarketDataGateway
from portfolio_advisor.infrastructure.market_data.yfinance_provider import YFinanceProvider
from portfolio_advisor.scheduler.scheduler import shutdown_scheduler, start_scheduler
from portfolio_advisor.services.advisor_service import AdvisorService
from portfolio_advisor.services.backtest_service import BacktestService
from portfolio_advisor.services.history_service import HistoryRecorder
from portfolio_advisor.services.indicator_service import IndicatorService
from portfolio_advisor.services.market_data_service import MarketDataService
from portfolio_advisor.services.portfolio_service import PortfolioSelectionService
from portfolio_advisor.services.universe_service import UniverseService

logger = get_logger(__name__)


def build_advisor(
    config: Settings,
    cache: MemoryCache,
    gateway: MarketDataGateway,
    session_factory: async_sessionmaker,
) -> AdvisorService:
    """Assemble the service graph around one shared cache"""
    market_data = MarketDataService(
        gateway=gateway,
        cache=cache,
        limiter=RequestLimiter.from_settings(config),
        ttl=CacheTTL.from_settings(config),
    )
    universe = UniverseService(market_data, top_k=config.UNIVERSE_TOP_K)
    return AdvisorService(
        cache=cache,
        indicators=IndicatorService(market_data, benchmark_symbol=config.BENCHMARK_SYMBOL),
        portfolios=PortfolioSelectionService(market_data, universe),
        backtests=BacktestService(market_data, lookback_months=config.BACKTEST_LOOKBACK_MONTHS),
        history=HistoryRecorder(session_factory, enabled=config.PERSISTENCE_ENABLED),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    setup_logging(settings.LOG_LEVEL)

    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info(f"🚀 Starting Portfolio Advisor ({settings.APP_ENV})")
    logger.info("=" * 60)

    # 1. Initialize database
    logger.info("📊 Step 1/3: Initializing database...")
    await init_db()
    logger.info("✅ Database initialized")

    # 2. Cache + services
    logger.info("🏗️  Step 2/3: Initializing cache and services...")
    cache = MemoryCache(cleanup_interval_seconds=settings.CACHE_CLEANUP_INTERVAL_SECONDS)
    await cache.start()
    advisor = build_advisor(
        settings,
        cache,
        YFinanceProvider.from_settings(settings),
        async_session_factory,
    )
    app.state.advisor = advisor
    logger.info("✅ Services initialized")
    logger.info(f"   📈 Benchmark: {settings.BENCHMARK_SYMBOL}, universe top {settings.UNIVERSE_TOP_K}")

    # 3. Scheduler
    logger.info("⏰ Step 3/3: Starting background jobs...")
    scheduler_started = False
    if settings.SCHEDULER_ENABLED:
        try:
            start_scheduler(advisor)
            scheduler_started = True
        except Exception as e:
            logger.error(f"❌ Failed to start scheduler: {e}")
    else:
        logger.info("⏰ Scheduler disabled")

    logger.info(f"🎯 API Server: http://{settings.API_HOST}:{settings.API_PORT} (docs at /docs)")

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("🛑 Shutting down Portfolio Advisor...")

    if scheduler_started:
        shutdown_scheduler()

    await advisor.history.drain()
    await cache.stop()

    logger.info("📊 Closing database connections...")
    await close_db()
    logger.info("👋 Portfolio Advisor shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Portfolio Advisor",
        description="Market regime detection and momentum portfolio selection",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    include_routers(app)
    return app


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router, tags=["Health"])
    app.include_router(market.router, prefix="/api/v1/market", tags=["Market"])
    app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
    app.include_router(backtest.router, prefix="/api/v1/backtest", tags=["Backtest"])
    app.include_router(performance.router, prefix="/api/v1/performance", tags=["Performance"])
    app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portfolio_advisor.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
