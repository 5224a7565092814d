# src/config.py

import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Carrega .env da raiz do projeto (se existir)
load_dotenv(os.path.join(BASE_DIR, ".env"))

# ID do coletor
ID_COLLECTOR = os.getenv("ID_COLLECTOR", "default")

OPENWEATHER_CONFIG = {
    "api_key": os.getenv("OPENWEATHER_API_KEY", ""),
    "base_url": os.getenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org"),
    "timeout": float(os.getenv("WEATHER_TIMEOUT", "10")),
}

# Cache de UV em segundos (0 desliga)
UV_CACHE_TTL = int(os.getenv("UV_CACHE_TTL", "1800"))

SQLITE_CONFIG = {
    "path": os.getenv("ANALYSIS_DB_PATH", os.path.join(BASE_DIR, "analysis.db"))
}

EXPORT_FOLDER = os.getenv("EXPORT_FOLDER", os.path.join(BASE_DIR, "exports"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY")
