"""Configuration management for mariadb-deploy."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_CURRENT_ENV = os.getenv("ENV", "dev")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env.common", f".env.{_CURRENT_ENV}"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ##### Logging #####
    LOG_LEVEL: str = "INFO"
    LOG_JSON_FORMAT: bool = False
    # Mask passwords in debug output of built client commands
    LOG_REDACT_PASSWORDS: bool = True

    ##### Client #####
    MYSQL_BIN: str = "/usr/bin/mysql"

    ##### Server #####
    MARIADB_VERSION: str = "10.3"
    MARIADB_SYSTEMD_UNIT_PATH: str = "/etc/systemd/system/mariadb@.service"

    ##### Repositories #####
    MARIADB_YUM_BASE_URL: str = "http://yum.mariadb.org"
    MARIADB_APT_BASE_URL: str = "http://downloads.mariadb.com/MariaDB/mariadb"
    MARIADB_GPG_KEY_URL: str = "https://yum.mariadb.org/RPM-GPG-KEY-MariaDB"


settings = Settings()
