"""Smart Recipe Finder - HTTP service.

Single entry point for the recipe finder API:
- POST /api/recipes searches Spoonacular and attaches a Gemini suggestion
  (rule-based fallback when Gemini is unavailable)
- /api/saved-recipes/* manages the saved-recipes collection
- Every request is logged with a request id, method, path, status and duration

Run with: python app.py
"""

import time

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.routes import health_router, router
from src.utils.config import config
from src.utils.logger import generate_request_id, logger, set_request_id

app = FastAPI(
    title="Smart Recipe Finder API",
    description="Recipe search by ingredients with AI cooking suggestions",
    version="1.0.0",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Assign a request id and log each request with its status and duration."""
    request_id = generate_request_id()
    set_request_id(request_id)
    start = time.perf_counter()

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.0f}ms)")
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/query validation failures in the {"error": ...} shape used by every route."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request"})


app.include_router(router)
app.include_router(health_router)

logger.info("✓ Smart Recipe Finder API configured")


if __name__ == "__main__":
    logger.info(f"Starting server on http://{config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
