from contextlib import asynccontextmanager
from pathlib import Path

import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from promptvideo.api.routes import ENHANCED_PROMPT_ENCODING_HEADER, ENHANCED_PROMPT_HEADER
from promptvideo.api.routes import router as api_router
from promptvideo.config import settings
from promptvideo.logging_config import configure_logging
from promptvideo.services.http_clients import reset_clients

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    reset_clients()


app = FastAPI(title="Prompt to Video", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[ENHANCED_PROMPT_HEADER, ENHANCED_PROMPT_ENCODING_HEADER],
)

app.include_router(api_router)

frontend_path = Path(__file__).parent / "frontend"

app.mount("/static", StaticFiles(directory=str(frontend_path)), name="static")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/", include_in_schema=False)
async def serve_index():
    return FileResponse(frontend_path / "index.html")


if __name__ == "__main__":
    uvicorn.run("promptvideo.app:app", host=settings.app_host, port=settings.app_port)
