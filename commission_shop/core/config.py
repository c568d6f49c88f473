from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"  # "memory" | "json" | "supabase"

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICE_KEY: str | None = None
    SUPABASE_STORAGE_BUCKET: str = "gallery-images"
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    ADMIN_API_TOKEN: str | None = None

    CART_MAX_SESSIONS: int = 1000

    BUSINESS_NAME: str = "k0kho"
    WHATSAPP_PHONE: str = "56976420228"
    DEFAULT_CURRENCY: str = "CLP"


settings = Settings()
