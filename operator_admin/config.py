"""operator_admin 설정 (Pydantic Settings)"""

from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 설정 파일이 로드되지 않았을 때 사용하는 기본 SQLite 파일 (프로젝트 루트)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DATABASE_PATH = PROJECT_ROOT / "operator_admin.db"

# 환경 변수 이름은 모두 이 접두어로 시작합니다. (예: OPERATOR_ADMIN_DATABASE_URL, OPERATOR_ADMIN_LOG_LEVEL)
ENV_PREFIX = "OPERATOR_ADMIN_"
DATABASE_URL_ENV = f"{ENV_PREFIX}DATABASE_URL"

Driver = Literal["postgresql", "sqlite"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
IsolationLevel = Literal["READ COMMITTED", "READ UNCOMMITTED", "REPEATABLE READ", "SERIALIZABLE", "AUTOCOMMIT"]


class ConfigError(Exception):
    """설정 값이 유효하지 않거나 설정 파일을 읽을 수 없을 때"""
    pass


class DBConfig(BaseModel):
    """
    데이터베이스 연결 설정입니다.

    isolation_level은 SQLAlchemy 엔진에 그대로 전달됩니다. PostgreSQL에서는
    'READ COMMITTED'를 사용하며, 관계 일괄 교체(set_relations)가 같은 소유자에 대해
    동시에 실행되면 나중에 커밋한 트랜잭션의 관계 집합이 최종 상태가 됩니다.
    """
    model_config = ConfigDict(extra="forbid")

    driver: Driver = "postgresql"
    database: str = ""
    username: str = ""
    password: str = ""
    host: str = "localhost"
    port: int = Field(default=5432, gt=0, le=65535)
    isolation_level: Optional[IsolationLevel] = "READ COMMITTED"

    @model_validator(mode="after")
    def _check_required(self) -> "DBConfig":
        if not self.database:
            raise ValueError("database cannot be empty")
        if self.driver == "sqlite":
            return self
        if not self.username:
            raise ValueError("username cannot be empty")
        if not self.host:
            raise ValueError("host cannot be empty")
        return self

    def data_source_name(self) -> str:
        """SQLAlchemy create_engine에 전달할 연결 URL을 생성합니다."""
        if self.driver == "sqlite":
            return f"sqlite:///{self.database}"
        return (
            f"{self.driver}://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


def _default_db() -> DBConfig:
    return DBConfig(driver="sqlite", database=str(DEFAULT_DATABASE_PATH), isolation_level=None)


class Config(BaseSettings):
    """
    애플리케이션 설정입니다.

    환경 변수에서 읽을 때는 OPERATOR_ADMIN_ 접두어를 사용하며, db 섹션의 개별 값은
    OPERATOR_ADMIN_DB__HOST처럼 '__'로 구분해 지정할 수 있습니다.
    """
    db: DBConfig = Field(default_factory=_default_db)
    log_level: LogLevel = "INFO"
    # 연결 URL을 직접 지정하면 db 섹션보다 우선합니다.
    database_url: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="forbid",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("database_url", mode="before")
    @classmethod
    def _blank_url_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def data_source_name(self) -> str:
        return self.database_url or self.db.data_source_name()

    def isolation_level(self) -> Optional[str]:
        """
        엔진에 적용할 트랜잭션 격리 수준을 반환합니다.
        연결 URL이 직접 지정된 경우에는 URL의 드라이버로 판단합니다.
        """
        if not self.database_url:
            return self.db.isolation_level
        driver = self.database_url.split(":", 1)[0].split("+", 1)[0]
        return "READ COMMITTED" if driver == "postgresql" else None


_config: Optional[Config] = None


def parse_config(data: Dict[str, Any]) -> Config:
    """
    딕셔너리를 Config 객체로 변환하고 검증합니다. 환경 변수는 읽지 않습니다.

    Raises:
        ConfigError: 알 수 없는 키가 있거나 값이 유효하지 않을 때.
    """
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config: {e}") from e


def load_config(path) -> Config:
    """
    JSON 설정 파일을 읽어 프로세스 전역 설정으로 등록합니다.

    Args:
        path: 설정 파일 경로. 형식은 {"db": {...}, "log_level": "INFO"} 입니다.

    Returns:
        로드된 Config 객체.

    Raises:
        ConfigError: 파일을 읽을 수 없거나 내용이 유효하지 않을 때.
    """
    global _config
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read config file '{path}': {e}") from e
    try:
        _config = Config.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config file '{path}': {e}") from e
    return _config


def get_config() -> Config:
    """
    현재 설정을 반환합니다. 로드된 설정 파일이 없으면 환경 변수에서 만들고,
    환경 변수도 없으면 프로젝트 루트의 SQLite 파일을 사용합니다.
    """
    global _config
    if _config is None:
        try:
            _config = Config()
        except ValidationError as e:
            raise ConfigError(f"invalid environment configuration: {e}") from e
    return _config


def reset_config() -> None:
    global _config
    _config = None
