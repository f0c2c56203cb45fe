from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fairdeck_backend.api.routes import router
from fairdeck_backend.config import config
from fairdeck_backend.engine.models import ENGINE_VERSION


app = FastAPI(title="Fairdeck Backend", version=ENGINE_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}
