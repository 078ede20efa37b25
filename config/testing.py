import os

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

TIMEZONE = os.getenv("TIMEZONE", "UTC")

EXPORT_DIR = os.getenv("EXPORT_DIR", "exports")
