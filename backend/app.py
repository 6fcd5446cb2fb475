"""
FastAPI application for the External PR Viewer.

The store lives on app.state and is shared by all routes. On startup the
first fetch is kicked off in a background thread so the API answers
immediately with status "loading" and fills in as pages arrive.
"""

import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routes import router
from utils.config_loader import load_config
from utils.logger import setup_logger
from viewer.state import PullRequestStore

logger = setup_logger(name=__name__)


def start_background_load(store: PullRequestStore) -> int:
    """Begin a new fetch generation and run it on a daemon thread."""
    generation = store.begin_load()
    thread = threading.Thread(
        target=store.load,
        args=(generation,),
        name=f"pr-fetch-{generation}",
        daemon=True,
    )
    thread.start()
    return generation


def create_app(
    store: Optional[PullRequestStore] = None,
    autoload: bool = True,
    cors_origins: Optional[list[str]] = None
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        store: Store to serve. Built from load_config() when omitted.
        autoload: Start fetching PRs as soon as the app starts
        cors_origins: Browser origins allowed to call the API. Taken from
            config when the store is built from it; no CORS headers when empty.
    """
    if store is None:
        config = load_config()
        setup_logger(config.log_level, name=__name__)
        store = PullRequestStore.from_config(config)
        if cors_origins is None:
            cors_origins = config.cors_origins

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if autoload:
            logger.info(f"Starting initial fetch for {app.state.store.repository.full_name}")
            start_background_load(app.state.store)
        yield

    app = FastAPI(
        title="External PR Viewer API",
        description="Open pull requests from one GitHub repository, minus excluded authors",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["*"],
        )
        logger.info(f"CORS enabled for {', '.join(cors_origins)}")

    app.include_router(router)

    logger.info("FastAPI app initialized")
    return app
