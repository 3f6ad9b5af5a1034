import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

TERM_START_DATE = os.getenv("TERM_START_DATE", "2025-09-01")
MAX_TEACHING_WEEKS = 18

SEQUENTIAL_APPROVAL = bool(int(os.getenv("SEQUENTIAL_APPROVAL", "0")))

LOG_LEVEL = "WARNING"
LOG_FILE = ""
