import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.calendar import router as calendar_router
from app.api.v1.nlp import router as nlp_router
from app.api.v1.voice import router as voice_router
from app.core.config import settings
from app.wiring.dependencies import load_knowledge_base

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("call_sid", "intent", "language", "service", "confidence", "event_id", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    kb = load_knowledge_base()
    logging.getLogger(__name__).info(
        "Knowledge base loaded",
        extra={"reason": f"services={len(kb.services)} business={settings.BUSINESS_NAME}"},
    )
    yield


app = FastAPI(title="Salon Assistant", version="1.0.0", lifespan=lifespan)

app.include_router(nlp_router, prefix="/api/nlp", tags=["nlp"])
app.include_router(voice_router, prefix="/api/voice", tags=["voice"])
app.include_router(calendar_router, prefix="/api/calendar", tags=["calendar"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
