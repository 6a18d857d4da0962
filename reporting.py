# reporting.py

import httpx
import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import CSV_COLUMN_ORDER, SPROUT_RELAY_URL, SERVICE_ID, API_TIMEOUT
from schemas import GradeRecord
from utils import log


def format_log_entry(records: List[GradeRecord], term: str, timestamp: str) -> str:
    entry = f"--- Log Entry: {timestamp} ---\n"
    if not records:
        entry += f"No grades found for {term}.\n"
    for record in records:
        entry += f"Course: {record.course.ljust(40)} | Grade: {record.grade}\n"
    return entry + "\n"

def append_log_entry(records: List[GradeRecord], term: str, log_path: Path, timestamp: Optional[str] = None) -> bool:
    """Appends a human-readable entry to the grades log. Returns False if the file could not be written."""
    timestamp = timestamp or datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = format_log_entry(records, term, timestamp)
    try:
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError as e:
        log.error(f"Error writing to grades log {log_path}: {e}")
        return False
    log.info(f"Grades log updated with {len(records)} course(s).")
    return True

def append_grades_csv(records: List[GradeRecord], output_path: Path, term: str, fetched_at: datetime):
    if not records: return
    df = pd.DataFrame([r.model_dump() for r in records]).rename(columns={"course": "COURSE", "grade": "GRADE"})
    df["FETCHED_AT"] = fetched_at.isoformat(timespec="seconds")
    df["TERM"] = term
    df = df[CSV_COLUMN_ORDER]
    df.to_csv(output_path, mode='a', header=not output_path.exists(), index=False, encoding='utf-8')
    log.info(f"Appended {len(records)} row(s) to {output_path}")


def build_relay_payload(service_id: str, records: List[GradeRecord]) -> dict:
    return {
        "service_id": service_id,
        "level": "info",
        "title": f"{len(records)} Grades Fetched",
        "message": "<br>".join(f"{r.course}: <strong>{r.grade}</strong>" for r in records),
    }

class RelayClient:
    """Forwards run summaries to the Sprout logging relay. Delivery is best effort."""
    def __init__(self, url: str = SPROUT_RELAY_URL, service_id: str = SERVICE_ID,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.service_id = service_id
        self._client = httpx.AsyncClient(timeout=API_TIMEOUT, transport=transport)

    @property
    def enabled(self) -> bool:
        return bool(self.url and self.service_id)

    async def send(self, records: List[GradeRecord]) -> bool:
        if not self.enabled:
            return False
        try:
            response = await self._client.post(self.url, json=build_relay_payload(self.service_id, records))
            response.raise_for_status()
        except httpx.HTTPError as e:
            log.warning(f"Could not forward grades to the logging relay: {e}")
            return False
        return True

    async def close(self):
        if not self._client.is_closed:
            await self._client.aclose()
