from functools import lru_cache
from ipaddress import IPv4Network, ip_network

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "shodan-scan-relay"
    ENVIRONMENT: str = "local"

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # Comma-separated; "*" allows any origin
    CORS_ORIGINS: str = "*"

    # External APIs
    SHODAN_API_KEY: str = ""
    SHODAN_BASE_URL: str = "https://api.shodan.io"
    SHODAN_TIMEOUT_SECONDS: float = 30.0

    # Comma-separated CIDRs a target must fall into. Empty disables the check.
    SCAN_ALLOWLIST: str = ""

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def scan_allowlist(self) -> list[IPv4Network]:
        return [
            ip_network(cidr.strip(), strict=False)
            for cidr in self.SCAN_ALLOWLIST.split(",")
            if cidr.strip()
        ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
