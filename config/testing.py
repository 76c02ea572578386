import os

SECRET_KEY = "test-secret"

DEVICES_FILE = os.getenv("DEVICES_FILE", "config/devices.json")
ATTENDANCE_LOG_DIR = os.getenv("ATTENDANCE_LOG_DIR", "tests/.logs")
ISSUER_SETTINGS_FILE = os.getenv("ISSUER_SETTINGS_FILE", "tests/.instance/issuer.json")

TOKEN_EXPIRY_MINUTES = 5

ISSUER_ENABLED = True
COOKIE_SECURE = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
