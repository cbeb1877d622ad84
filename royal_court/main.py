from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from royal_court.config import settings


def create_app() -> FastAPI:
    app = FastAPI(title="Royal Court", version="0.1.0")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    from royal_court.api.game import router as game_router

    app.include_router(game_router)

    @app.get("/")
    async def root():
        return {"status": "ok", "game": "Royal Court"}

    return app


app = create_app()
