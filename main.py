"""Top-level ASGI entrypoint for GCP Cloud Run.

This module exposes the FastAPI `app` object so platforms that expect
`main:app` can import it. Cloud Scheduler calls the /tasks/* endpoints.

It also provides a convenient local runner when executed directly.
"""
import logging

from starlette.middleware.cors import CORSMiddleware

from backend.src.api import app  # expose the FastAPI app at module level
from backend.src.config import FRONTEND_ORIGINS, PORT

log = logging.getLogger("bootstrap")

app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


if __name__ == "__main__":
    import uvicorn

    log.info(f"Starting local server on port {PORT}")
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, log_level="info")
