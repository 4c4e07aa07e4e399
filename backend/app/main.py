"""Barra - cocktail recommender API."""
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create tables and load the catalog
    from app.database import Base, engine, SessionLocal
    from app.services.catalog_loader import load_liquor_bases

    # Import all models so they're registered with Base
    from app import models  # noqa: F401

    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        load_liquor_bases(db)
    finally:
        db.close()

    yield


app = FastAPI(
    title=settings.app_name,
    description="Cocktail recommendations with cookie-based sessions",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


# Import and include routers
from app.api import auth, catalog, expert, preferences, users  # noqa: E402
from app.api.errors import register_error_handlers  # noqa: E402

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(catalog.router)
app.include_router(preferences.router)
app.include_router(expert.router)
