"""Entry point for the Royal Court game server."""
import logging

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from royal_court.config import get_settings

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if __name__ == "__main__":
    uvicorn.run("royal_court.main:app", host=settings.HOST, port=settings.PORT)
