# tokenscope/core/config.py
from dotenv import load_dotenv
load_dotenv(".env")
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional

class Settings(BaseSettings):
    # model_config 会自动加载 .env 文件
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # 应用配置 (会自动转换类型)
    APP_ENV: str = "production"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # --- Tokenization Session ---
    # 输入静默多久之后才视为 "settled" 并触发重新分词
    DEBOUNCE_SECONDS: float = Field(0.4, gt=0, description="Quiet window of the debounce gate, in seconds.")
    # 复制成功后 "copied" 标记保持的时长
    COPIED_INDICATOR_SECONDS: float = Field(2.0, gt=0, description="How long the 'copied' indicator stays on after a copy.")
    DEFAULT_MODEL: str = "gpt-3.5-turbo"

    # tiktoken 不认识的 gpt-* 模型：为 None 时视为分词失败（结果为空），否则使用该 encoding
    TIKTOKEN_FALLBACK_ENCODING: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

settings = Settings()
