from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# silence HTTP library debug logs
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import (
    averages, config, marks, promotions, rankings, repeaters, statistics,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (front-end origins from settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency header (X-Latency-Ms)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (consistent JSON error body)
add_error_handlers(app)

# ✅ /v1 prefix routers
app.include_router(marks.router,       prefix="/v1")
app.include_router(averages.router,    prefix="/v1")
app.include_router(rankings.router,    prefix="/v1")
app.include_router(repeaters.router,   prefix="/v1")
app.include_router(promotions.router,  prefix="/v1")
app.include_router(statistics.router,  prefix="/v1")
app.include_router(config.router,      prefix="/v1")

# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ root
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
