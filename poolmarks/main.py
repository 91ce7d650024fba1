from __future__ import annotations

from fastapi import FastAPI

from poolmarks.api.sessions import router as sessions_router
from poolmarks.api.stats import router as stats_router
from poolmarks.config import configure_logging, settings

configure_logging(settings)

app = FastAPI(title="Pool Marks API")
app.include_router(sessions_router)
app.include_router(stats_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
