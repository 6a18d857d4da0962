# config.py

import os
from dotenv import load_dotenv

load_dotenv()

# --- Workday Source Configuration ---
WORKDAY_URL = os.getenv("WORKDAY_URL", "")
WORKDAY_COOKIE = os.getenv("WORKDAY_COOKIE", "")
WORKDAY_CLIENT_VERSION = os.getenv("WORKDAY_CLIENT_VERSION", "2025.1.0")
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
ACCEPT_HEADER = "application/json, text/javascript, */*; q=0.01"

API_TIMEOUT = int(os.getenv("API_TIMEOUT", 60))
API_MAX_RETRIES = int(os.getenv("API_MAX_RETRIES", 3))
EXPONENTIAL_BACKOFF_FACTOR = float(os.getenv("EXPONENTIAL_BACKOFF_FACTOR", 1.5))

# --- Scraper Configuration ---
TARGET_TERM = os.getenv("TARGET_TERM", "Fall Semester 2025")
POLL_INTERVAL_MINUTES = float(os.getenv("POLL_INTERVAL_MINUTES", 5))

# --- Sprout Logging Relay ---
SPROUT_RELAY_URL = os.getenv("SPROUT_RELAY_URL", "")
SERVICE_ID = os.getenv("SERVICE_ID", "")

GRADES_LOG_FILE = os.getenv("GRADES_LOG_FILE", "grades_log.txt")
GRADES_CSV_FILE = os.getenv("GRADES_CSV_FILE", "grades_history.csv")

LOG_FILE = os.getenv("LOG_FILE", "app_log.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Document Tree Configuration ---
# Labels can be localized or renamed; the property names are the durable fallback.
COURSEWORK_LABEL = "Coursework"
COURSEWORK_PROPERTY_NAME = "wd:Student_Period_Record_GPA__Updated__Subview"
ENROLLMENTS_LABEL = "Enrollments"

COURSE_COLUMN_LABEL = "Course"
COURSE_PROPERTY_NAME = "wd:Course_Listing_Secured--IS"
GRADE_COLUMN_LABEL = "Grade"
GRADE_PROPERTY_NAME = "wd:Student_Grade__Singular_--IS"

WIDGET_PANEL_LIST = "panelList"
WIDGET_FIELD_SET = "fieldSet"
WIDGET_GRID = "grid"

MISSING_GRADE = "N/A"

# --- Column Order Configuration ---
CSV_COLUMN_ORDER = [
    "FETCHED_AT",
    "TERM",
    "COURSE",
    "GRADE",
]
