import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db, seed_demo_data
from errors import install_error_handlers
from routes.auth import router as auth_router
from routes.events import router as events_router
from routes.feed import router as feed_router
from routes.groups import router as groups_router
from routes.health import router as health_router
from routes.posts import router as posts_router
from routes.profile import router as profile_router
from routes.search import router as search_router
from routes.users import router as users_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema exists before the first request is served
    init_db()
    if settings.seed_demo_data:
        seed_demo_data()
    logger.info("Earth Link API ready")
    yield


app = FastAPI(title="Earth Link API", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(events_router)
app.include_router(groups_router)
app.include_router(feed_router)
app.include_router(search_router)
app.include_router(health_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=3001, reload=True)
