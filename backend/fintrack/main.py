import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fintrack.api.auth_routes import router as auth_router
from fintrack.api.errors import register_exception_handlers
from fintrack.api.routes import router as api_router
from fintrack.api.transaction_routes import router as transaction_router
from fintrack.core.config import get_settings
from fintrack.core.logging import setup_logging

# Reads .env from the project root on first call
settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(title="FinTrack API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)
app.include_router(auth_router)
app.include_router(transaction_router)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
