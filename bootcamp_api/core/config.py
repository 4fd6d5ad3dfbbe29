"""
Application settings loaded from the environment.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime configuration for the API and its collaborators."""

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "devcamper"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 30
    default_page_limit: int = 100
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    geocoder_api_key: str = ""
    geocoder_url: str = "https://www.mapquestapi.com/geocoding/v1/address"
    geocoder_timeout: float = 10.0

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional path to a dotenv file loaded before reading

        Returns:
            Populated Settings instance
        """
        load_dotenv(env_file)
        defaults = cls()

        return cls(
            mongo_uri=os.getenv("MONGO_URI", defaults.mongo_uri),
            mongo_database=os.getenv("MONGO_DATABASE", defaults.mongo_database),
            jwt_secret=os.getenv("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", defaults.jwt_algorithm),
            jwt_expire_minutes=int(
                os.getenv("JWT_EXPIRE_MINUTES", str(defaults.jwt_expire_minutes))
            ),
            default_page_limit=int(
                os.getenv("DEFAULT_PAGE_LIMIT", str(defaults.default_page_limit))
            ),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            api_host=os.getenv("API_HOST", defaults.api_host),
            api_port=int(os.getenv("API_PORT", str(defaults.api_port))),
            geocoder_api_key=os.getenv("GEOCODER_API_KEY", defaults.geocoder_api_key),
            geocoder_url=os.getenv("GEOCODER_URL", defaults.geocoder_url),
            geocoder_timeout=float(
                os.getenv("GEOCODER_TIMEOUT", str(defaults.geocoder_timeout))
            ),
        )
