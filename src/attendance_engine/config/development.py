import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# Term start (YYYY-MM-DD); teaching weeks are counted from this date
TERM_START_DATE = os.getenv("TERM_START_DATE", "")
MAX_TEACHING_WEEKS = int(os.getenv("MAX_TEACHING_WEEKS", "18"))

# If enabled, approvers must act in ordinal order
SEQUENTIAL_APPROVAL = bool(int(os.getenv("SEQUENTIAL_APPROVAL", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")
