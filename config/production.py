import os

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/lesson_balance.log")

TIMEZONE = os.getenv("TIMEZONE", "UTC")

EXPORT_DIR = os.getenv("EXPORT_DIR", "exports")
