from dotenv import load_dotenv
import os

load_dotenv()


class Settings:
    REVIEWS_API_URL = os.getenv("REVIEWS_API_URL", "http://localhost:8080/api")
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 10))

    STORAGE_PATH = os.getenv("STORAGE_PATH", "data/local-storage.json")

    # spreadsheet webhook, mirroring is off when unset
    MIRROR_URL = os.getenv("MIRROR_URL") or None

    OTEL_EXPORTER_ENDPOINT = os.getenv("OTEL_EXPORTER_ENDPOINT") or None
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
