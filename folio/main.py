import logging

from fastapi import FastAPI

from . import config
from .routers import posts


logging.basicConfig(
    level=getattr(logging, config.log_level(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="Folio")

app.include_router(posts.router)


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
