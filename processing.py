# processing.py

import asyncio
from datetime import datetime
from pathlib import Path
from typing import List

from config import TARGET_TERM, POLL_INTERVAL_MINUTES, GRADES_LOG_FILE, GRADES_CSV_FILE
from utils import log
from api_client import WorkdayClient
from extractor import extract_grades
from reporting import RelayClient, append_grades_csv, append_log_entry
from schemas import GradeRecord, ScrapeStatus

api_client = WorkdayClient()
relay_client = RelayClient()

scrape_status = ScrapeStatus(status="Idle", details="No scrape has run yet.", term=TARGET_TERM)
latest_records: List[GradeRecord] = []


async def _report(records: List[GradeRecord], term: str, fetched_at: datetime):
    await asyncio.to_thread(append_log_entry, records, term, Path(GRADES_LOG_FILE))
    try:
        await asyncio.to_thread(append_grades_csv, records, Path(GRADES_CSV_FILE), term, fetched_at)
    except OSError as e:
        log.error(f"Error writing grades history {GRADES_CSV_FILE}: {e}")
    await relay_client.send(records)


async def run_scrape_cycle(term: str = TARGET_TERM) -> List[GradeRecord]:
    """Runs one fetch -> extract -> report pass and returns the records it found."""
    global latest_records
    scrape_status.status, scrape_status.details = "Running", f"Fetching grades for {term}."

    data = await api_client.fetch_document()
    fetched_at = datetime.now()
    scrape_status.last_run_at = fetched_at

    if data is None:
        log.warning("Failed to fetch data, skipping this interval.")
        scrape_status.status, scrape_status.details = "Failed", "Could not fetch the grades document."
        scrape_status.last_error = "fetch failed"
        return []

    result = extract_grades(data, term)
    if not result.ok:
        log.warning(f"Grade extraction stopped early ({result.error}); keeping {len(result.records)} record(s).")

    latest_records = result.records
    scrape_status.last_record_count = len(result.records)
    scrape_status.last_error = result.error
    scrape_status.status = "Completed" if result.ok else "Partial"
    scrape_status.details = f"Found {len(result.records)} course(s) for {term}."
    log.info(scrape_status.details)

    await _report(result.records, term, fetched_at)
    scrape_status.runs_completed += 1
    return result.records


async def run_forever(interval_minutes: float = POLL_INTERVAL_MINUTES, term: str = TARGET_TERM):
    """Runs a scrape immediately and then every `interval_minutes` until cancelled."""
    log.info(f"Scraper is running. Updating every {interval_minutes} minutes.")
    while True:
        try:
            await run_scrape_cycle(term)
        except Exception as e:
            log.exception(f"Scrape cycle failed with a critical error: {e}")
            scrape_status.status, scrape_status.details = "Failed", f"A critical error occurred: {str(e)}"
        await asyncio.sleep(interval_minutes * 60)
