import os

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

# Calendar used to decide what "today" is when the caller does not pass a date
TIMEZONE = os.getenv("TIMEZONE", "UTC")

EXPORT_DIR = os.getenv("EXPORT_DIR", "exports")
