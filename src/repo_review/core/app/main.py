import logging
import os
import sys

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repo_review.core.app.api.routes import get_commentary_agent, router
from repo_review.core.errors import AnalysisError, UnhandledFailure

import uvicorn

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="repo-review - GitHub Repository Review Service")

# Enable CORS for the browser front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """Map analysis errors to their status code and static message."""
    if exc.status_code >= 500:
        logger.error("Request to %s failed: %s", request.url.path, exc.detail or exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything that escapes a route or dependency still answers with the error body."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=UnhandledFailure.status_code, content={"error": UnhandledFailure.message})


@app.get("/health")
async def health(agent=Depends(get_commentary_agent)):
    """
    Liveness check; also reports whether LLM commentary is enabled.
    """
    return {"status": "ok", "llm": agent is not None}


if __name__ == "__main__":
    uvicorn.run("repo_review.core.app.main:app", host="0.0.0.0", port=8000, reload=True)
