from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimates.db"
    COMPANY_NAME: str = "Marine Pump Systems"
    LOG_LEVEL: str = "INFO"

    # Catalog. Empty means the bundled price list
    CATALOG_PATH: str = ""
    BASE_CURRENCY: str = "NOK"

    # Operator-entered exchange rates (NOK per unit of currency)
    DEFAULT_USD_RATE: float = 10.5
    DEFAULT_EUR_RATE: float = 11.5

    # Rollup defaults (percent)
    DEFAULT_ADMIN_PCT: float = 10.0
    DEFAULT_AGENT_COMMISSION_PCT: float = 0.0
    DEFAULT_PROFIT_MARGIN_PCT: float = 35.0
    DEFAULT_BOTTOM_MARKUP_PCT: float = 20.0

    # Commissioning engineer day rate, Norway list price
    EXTRA_DAY_RATE: float = 17050.0

    # Upper bound on fix-up passes per edit
    MAX_FIXUP_PASSES: int = 5

    class Config:
        env_file = ".env"


settings = Settings()
