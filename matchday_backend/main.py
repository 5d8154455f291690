import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from matchday_backend.core.config import LOG_LEVEL
from matchday_backend.core.database import init_db
from matchday_backend.seed.seed_all import seed_all

# --- Routers ---
from matchday_backend.routes.auth_routes import router as auth_router
from matchday_backend.routes.player_routes import router as player_router
from matchday_backend.routes.game_routes import router as game_router
from matchday_backend.routes.vote_routes import router as vote_router
from matchday_backend.routes.stats_routes import router as stats_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Matchday")


@app.on_event("startup")
async def on_startup():
    # 1️⃣ Init DB tables async
    await init_db()

    # 2️⃣ Bootstrap accounts / demo data in sync mode
    seed_all()


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Infrastructure failures: logged and reported as 500, never as a domain error."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "internal server error"})


@app.get("/health")
def health():
    return {"status": "ok"}


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(player_router, prefix="/players", tags=["Players"])
app.include_router(game_router, prefix="/games", tags=["Games"])
app.include_router(vote_router, prefix="/votes", tags=["Votes"])
app.include_router(stats_router, prefix="/stats", tags=["Stats"])
