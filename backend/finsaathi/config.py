from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SQLSERVER_CONN_STRING: str = ""
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    PAYOFF_HORIZON_MONTHS: int = 600
    AMORTIZATION_MAX_MONTHS: int = 480
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
