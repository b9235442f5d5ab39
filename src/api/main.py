"""
FastAPI application entry point.
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST
from src.api.routes import signals, assets, health
from src.core.exceptions import SignalNotFoundError, StorageError, ValidationError
from src.utils.logging import get_logger
from src.utils.metrics import render_metrics

logger = get_logger(__name__)

app = FastAPI(
    title="Signal Monitor API",
    description="Stores, lists and summarizes robot trading signals",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(signals.router, prefix="/signals", tags=["Signals"])
app.include_router(assets.router, prefix="/assets", tags=["Assets"])

# Error mapping
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "errors": exc.errors}
    )

@app.exception_handler(SignalNotFoundError)
async def not_found_handler(request: Request, exc: SignalNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Request failed on storage", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=503,
        content={"detail": "Signal storage unavailable, please retry"}
    )

@app.get("/metrics")
def metrics():
    """Prometheus metrics."""
    return Response(content=render_metrics(), media_type=CONTENT_TYPE_LATEST)

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Signal Monitor API",
        "version": "1.0.0",
        "docs": "/docs"
    }

if __name__ == "__main__":
    import uvicorn
    from config.settings import get_settings

    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
