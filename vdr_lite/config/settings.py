from pydantic_settings import BaseSettings, SettingsConfigDict

from vdr_lite.config import constants


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_model_name: str = "gpt-4.1-mini"
    llm_base_url: str = ""
    llm_temperature: float = 0.0

    max_file_size_bytes: int = constants.MAX_FILE_SIZE_BYTES
    max_files: int = constants.MAX_FILES
    max_text_length: int = constants.MAX_TEXT_LENGTH
    max_concurrent_files: int = constants.MAX_CONCURRENT_FILES

    doc_max_tokens: int = constants.DOC_MAX_TOKENS
    summary_max_tokens: int = constants.SUMMARY_MAX_TOKENS
    doc_timeout_seconds: float = constants.DOC_TIMEOUT_SECONDS
    summary_timeout_seconds: float = constants.SUMMARY_TIMEOUT_SECONDS
    total_timeout_seconds: float = constants.TOTAL_TIMEOUT_SECONDS

    retry_max_attempts: int = constants.RETRY_MAX_ATTEMPTS
    retry_base_delay_seconds: float = constants.RETRY_BASE_DELAY_SECONDS
    retry_max_delay_seconds: float = constants.RETRY_MAX_DELAY_SECONDS

    output_dir: str = "./output"
