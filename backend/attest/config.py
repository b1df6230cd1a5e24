from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Attest API"
    app_env: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    cors_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True
    log_level: str = "INFO"
    request_id_header: str = "X-Request-ID"

    # Binary renderers run off the event loop and are abandoned after this many seconds.
    render_timeout_seconds: float = 30.0
    text_lines_per_page: int = 54
    text_line_width: int = 78
    pdf_font_name: str = "Times-Roman"
    pdf_font_size: float = 12.0
    docx_font_name: str = "Times New Roman"
    docx_font_size_pt: int = 12

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
