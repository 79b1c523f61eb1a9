"""the beautiful world start from here."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from gh_mention.logger import setup_logging
from gh_mention.routers import gh

setup_logging()

app = FastAPI(title="GitHub mentions → Slack")


@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "ok"


app.include_router(gh.router)
