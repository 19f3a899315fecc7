"""
Configuration management with schema validation.
Single source of truth for Elnursery configuration.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigError

# Load environment variables
load_dotenv()

SETTINGS_FILE = Path(os.getenv("ELNURSERY_SETTINGS", "config/settings.yaml"))


class AppSettings(BaseModel):
    name: str = "Elnursery"
    version: str = "1.0.0"
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


class DatabaseSettings(BaseModel):
    uri: Optional[str] = None
    host: str = "localhost:27017"
    name: str = "elnursery"
    replica_set: Optional[str] = "demo"

    def connection_uri(self) -> str:
        """Explicit URI wins; otherwise build one from host and replica set."""
        if self.uri:
            return self.uri
        uri = f"mongodb://{self.host}/{self.name}"
        if self.replica_set:
            uri += f"?replicaSet={self.replica_set}"
        return uri


class AuthSettings(BaseModel):
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_expiry_hours: int = Field(default=24, ge=1)
    cookie_name: str = "token"
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)


class BootstrapSettings(BaseModel):
    admin_email: Optional[str] = None
    admin_name: str = "Owner"


class EmailSettings(BaseModel):
    api_key: Optional[str] = None
    domain: Optional[str] = None
    sender: str = "Elnursery Platform"
    base_url: str = "https://api.mailgun.net/v3"
    timeout_seconds: int = 30


class CorsSettings(BaseModel):
    origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()] or ["*"]
        return value


class MaintenanceSettings(BaseModel):
    enabled: bool = True
    schedule_time: str = "00:00"
    retention_months: int = Field(default=3, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "console"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    bootstrap: BootstrapSettings = Field(default_factory=BootstrapSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    maintenance: MaintenanceSettings = Field(default_factory=MaintenanceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class ConfigManager:
    """Singleton configuration manager"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.settings_path = SETTINGS_FILE
        self._settings: Optional[Settings] = None

        self._initialized = True

    def _substitute_env_vars(self, value: Any) -> Any:
        """Recursively substitute ${VAR} and ${VAR:default} with environment values"""
        if isinstance(value, str):
            if value.startswith("${") and value.endswith("}"):
                var_expr = value[2:-1]
                if ":" in var_expr:
                    var_name, default = var_expr.split(":", 1)
                    resolved = os.getenv(var_name.strip(), default.strip())
                else:
                    resolved = os.getenv(var_expr)
                # Empty means "unset" so pydantic defaults apply
                return resolved if resolved != "" else None
        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]
        return value

    def _drop_unset(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {k: self._drop_unset(v) for k, v in value.items() if v is not None}
        return value

    def load_settings(self, path: Optional[Path] = None) -> Settings:
        """Load and validate settings.yaml"""
        settings_path = Path(path) if path else self.settings_path
        if not settings_path.exists():
            raise ConfigError(f"Settings file not found: {settings_path}")

        try:
            with open(settings_path, "r", encoding="utf-8") as f:
                raw_data: Dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid settings file {settings_path}: {str(e)}")

        processed_data = self._drop_unset(self._substitute_env_vars(raw_data))
        try:
            self._settings = Settings(**processed_data)
        except ValueError as e:
            raise ConfigError(f"Invalid settings in {settings_path}: {str(e)}")
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return self.load_settings()
        return self._settings


# Global instance
config_manager = ConfigManager()
