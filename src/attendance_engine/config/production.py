import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

TERM_START_DATE = os.getenv("TERM_START_DATE", "")
MAX_TEACHING_WEEKS = int(os.getenv("MAX_TEACHING_WEEKS", "18"))

SEQUENTIAL_APPROVAL = bool(int(os.getenv("SEQUENTIAL_APPROVAL", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/app.log")
