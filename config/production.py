import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEVICES_FILE = os.getenv("DEVICES_FILE", "config/devices.json")
ATTENDANCE_LOG_DIR = os.getenv("ATTENDANCE_LOG_DIR", "logs")
ISSUER_SETTINGS_FILE = os.getenv("ISSUER_SETTINGS_FILE", "instance/issuer.json")

TOKEN_EXPIRY_MINUTES = int(os.getenv("TOKEN_EXPIRY_MINUTES", "5"))

# The issuer pages expose the device passkey; enable only on the kiosk host.
ISSUER_ENABLED = bool(int(os.getenv("ISSUER_ENABLED", "0")))
COOKIE_SECURE = bool(int(os.getenv("COOKIE_SECURE", "1")))

DEBUG = bool(int(os.getenv("DEBUG", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
