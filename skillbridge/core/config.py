"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./skillbridge.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7


class CreditSettings(BaseModel):
    starting_balance: int = Field(default=100, ge=0)
    session_cost: int = Field(default=25, gt=0)


class MeetingSettings(BaseModel):
    default_duration_minutes: int = Field(default=60, gt=0)
    provider: str = "jitsi"
    provider_base_url: str = "https://meet.jit.si"
    room_prefix: str = "skillbridge"


class RatingSettings(BaseModel):
    min_rating: int = 1
    max_rating: int = 5


class ChatSettings(BaseModel):
    max_message_length: int = Field(default=2000, gt=0)
    default_page_size: int = Field(default=100, gt=0)
    max_page_size: int = Field(default=500, gt=0)


class WebSocketSettings(BaseModel):
    heartbeat_interval: int = 30
    timeout: int = 300


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "SkillBridge API"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    credits: CreditSettings = CreditSettings()
    meetings: MeetingSettings = MeetingSettings()
    ratings: RatingSettings = RatingSettings()
    chat: ChatSettings = ChatSettings()
    websocket: WebSocketSettings = WebSocketSettings()
    logging: LoggingSettings = LoggingSettings()

    cors_origins: list[str] = ["*"]

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def starting_balance(self) -> int:
        return self.credits.starting_balance

    @property
    def session_cost(self) -> int:
        return self.credits.session_cost

    @property
    def default_session_duration(self) -> int:
        return self.meetings.default_duration_minutes

    @property
    def ws_heartbeat_interval(self) -> int:
        return self.websocket.heartbeat_interval

    @property
    def ws_timeout(self) -> int:
        return self.websocket.timeout


@lru_cache()
def get_settings() -> Settings:
    return Settings()
