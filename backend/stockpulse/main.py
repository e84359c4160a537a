import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockpulse.api.endpoints import analysis, auth, stock, stocks
from stockpulse.config import get_settings
from stockpulse.exceptions import StockPulseError

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from stockpulse.database import Base, engine
    import stockpulse.models  # noqa: F401  registers tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
    yield
    await engine.dispose()


async def stockpulse_error_handler(request: Request, exc: StockPulseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    app = FastAPI(title="StockPulse API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StockPulseError, stockpulse_error_handler)

    app.include_router(auth.router)
    app.include_router(stock.router)
    app.include_router(stocks.router)
    app.include_router(analysis.router)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "StockPulse"}

    return app


app = create_app()
