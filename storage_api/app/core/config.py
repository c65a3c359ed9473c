"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first so that local development does not require exporting
variables by hand.  Defaults are provided for every field except the
ones that only make sense per deployment (the MongoDB connection
string should always be set in production).
"""

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Storage API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level for the pymongo/motor loggers and whether uvicorn logs each request.
    mongo_log_level: str = os.getenv("MONGO_LOG_LEVEL", "WARNING")
    access_log: bool = os.getenv("ACCESS_LOG", "true").lower() in {"1", "true", "yes"}

    # MongoDB connection string and database name.  ``DB_NAME`` falls
    # back to the name the collections have always lived under.
    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "databaseManagement")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Comma‑separated list of allowed origins, ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
