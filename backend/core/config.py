import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    """Runtime configuration read from the environment (and a local .env file).

    Keyword arguments override the environment, which keeps tests isolated
    from whatever the developer has exported.
    """

    def __init__(self, **overrides):
        self.port: int = int(os.getenv("PORT", "5000"))
        self.host: str = os.getenv("HOST", "0.0.0.0")

        # Presence of DATABASE_URL switches the process to the SQL store
        self.database_url: Optional[str] = os.getenv("DATABASE_URL") or None
        self.database_echo: bool = _env_bool("DATABASE_ECHO")
        self.database_ssl: bool = _env_bool("DATABASE_SSL")

        self.device_key: str = os.getenv("DEVICE_KEY", "CHANGE_ME_DEVICE_KEY")
        self.web_origin: str = os.getenv("WEB_ORIGIN", "*")

        self.store_timeout: float = float(os.getenv("STORE_TIMEOUT", "10"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def use_database(self) -> bool:
        return bool(self.database_url)

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.web_origin.split(",") if o.strip()] or ["*"]


settings = Settings()
