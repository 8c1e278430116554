from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "PrintCost AR"
    DEFAULT_CURRENCY: str = "ARS"
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    AI_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
