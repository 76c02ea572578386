import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# deviceId -> passkey mapping used to verify tokens
DEVICES_FILE = os.getenv("DEVICES_FILE", "config/devices.json")
# Monthly attendance logs: valid_YYYY-MM.log / invalid_YYYY-MM.log
ATTENDANCE_LOG_DIR = os.getenv("ATTENDANCE_LOG_DIR", "logs")
ISSUER_SETTINGS_FILE = os.getenv("ISSUER_SETTINGS_FILE", "instance/issuer.json")

TOKEN_EXPIRY_MINUTES = int(os.getenv("TOKEN_EXPIRY_MINUTES", "5"))

ISSUER_ENABLED = bool(int(os.getenv("ISSUER_ENABLED", "1")))
COOKIE_SECURE = bool(int(os.getenv("COOKIE_SECURE", "0")))

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
