from dataclasses import dataclass, field
from typing import List, Optional
import os

import dotenv

from nurse_roster.exceptions import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.8


@dataclass(frozen=True)
class Settings:
    """근무표 생성 서비스 설정."""
    google_api_key: str
    model_name: str = DEFAULT_MODEL  # 생성 모델 이름
    temperature: float = DEFAULT_TEMPERATURE  # 다양한 근무표를 위해 다소 높게 설정
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ])


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    .env 및 환경 변수에서 설정을 읽는다.
    GOOGLE_API_KEY(또는 API_KEY)가 없으면 ConfigurationError를 발생시킨다.
    """
    dotenv.load_dotenv(env_file)

    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
    if not api_key:
        raise ConfigurationError("GOOGLE_API_KEY 환경 변수가 설정되지 않았습니다.")

    raw_temperature = os.getenv("ROSTER_TEMPERATURE")
    try:
        temperature = float(raw_temperature) if raw_temperature else DEFAULT_TEMPERATURE
    except ValueError as e:
        raise ConfigurationError(f"ROSTER_TEMPERATURE 값이 올바르지 않습니다: {raw_temperature}") from e

    origins = os.getenv("ROSTER_CORS_ORIGINS")
    kwargs = {}
    if origins:
        kwargs["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

    return Settings(
        google_api_key=api_key,
        model_name=os.getenv("ROSTER_MODEL", DEFAULT_MODEL),
        temperature=temperature,
        **kwargs,
    )
