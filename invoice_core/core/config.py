from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Standard KSA VAT rate, percent
    VAT_RATE: Decimal = Decimal("15")

    # Amount-in-words caption
    CURRENCY_NAME: str = "Riyals"

    # QR signing material; placeholder signer when unset
    ZATCA_PRIVATE_KEY_PATH: str | None = None
    ZATCA_CERTIFICATE_PATH: str | None = None


settings = Settings()
