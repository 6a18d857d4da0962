# main.py

import asyncio
import contextlib
import logging
from queue import Queue
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Request
from fastapi.responses import StreamingResponse
from fastapi.middleware.cors import CORSMiddleware

import processing
from utils import log, setup_logger
from config import TARGET_TERM, POLL_INTERVAL_MINUTES
from schemas import GradeRecord, ScrapeStatus

# --- Real-time Logging Setup ---
# A thread-safe queue to hold log records
log_queue = Queue()

class EndpointFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Dashboards poll /status; keep those requests out of the access log
        return record.getMessage().find("/status") == -1

logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the polling loop on startup; stop it and close the HTTP clients on shutdown."""
    setup_logger(log_queue)
    log.info("Starting Workday Grade Scraper...")
    poller = asyncio.create_task(processing.run_forever(POLL_INTERVAL_MINUTES, TARGET_TERM))
    yield
    log.info("Application shutting down: stopping scraper and closing clients...")
    poller.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await poller
    await processing.api_client.close()
    await processing.relay_client.close()

app = FastAPI(
    title="Workday Grade Scraper",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


async def log_streamer():
    """Yields log records from the queue as they become available."""
    while True:
        try:
            # Use asyncio.to_thread to run the blocking get() in a separate thread
            record = await asyncio.to_thread(log_queue.get)
            yield f"data: {record}\n\n"
        except Exception:
            break

@app.get("/stream-logs")
async def stream_logs(request: Request):
    """Streams log data using Server-Sent Events (SSE)."""
    return StreamingResponse(log_streamer(), media_type="text/event-stream")


@app.get("/status", response_model=ScrapeStatus)
async def get_status():
    return processing.scrape_status

@app.get("/grades", response_model=List[GradeRecord])
async def get_grades():
    """Returns the records found by the most recent successful fetch."""
    return processing.latest_records

@app.post("/run", response_model=List[GradeRecord])
async def run_now():
    """Runs one scrape immediately, outside the polling schedule."""
    return await processing.run_scrape_cycle(TARGET_TERM)

@app.get("/")
async def root():
    return {
        "message": "Workday Grade Scraper",
        "version": app.version,
        "term": TARGET_TERM,
        "docs_url": "/docs"
    }
