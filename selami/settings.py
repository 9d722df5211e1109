import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    API_KEY: str = os.getenv("API_KEY", "")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Wallet account that receives every Selami (read once per wizard session)
    RECEIVER_IDENTIFIER: str = os.getenv("RECEIVER_IDENTIFIER", "01331707930")

    # Deep-link targets for the wallet app
    WALLET_SCHEME: str = os.getenv("WALLET_SCHEME", "bkash")
    WALLET_ANDROID_PACKAGE: str = os.getenv("WALLET_ANDROID_PACKAGE", "com.bka.jms.app")
    DEEP_LINK_FALLBACK_MS: int = int(os.getenv("DEEP_LINK_FALLBACK_MS", "500"))

    # Transient UI timers
    CLIPBOARD_FLAG_MS: int = int(os.getenv("CLIPBOARD_FLAG_MS", "2000"))
    CONFIRMATION_DELAY_MS: int = int(os.getenv("CONFIRMATION_DELAY_MS", "2000"))

    # Celebration burst sequence (decorative)
    CELEBRATION_DURATION_MS: int = int(os.getenv("CELEBRATION_DURATION_MS", "5000"))
    CELEBRATION_INTERVAL_MS: int = int(os.getenv("CELEBRATION_INTERVAL_MS", "250"))

    # Off by default: the form only requires a non-empty amount.
    STRICT_AMOUNT_VALIDATION: bool = os.getenv("STRICT_AMOUNT_VALIDATION", "false").lower() == "true"

    # Effects waiting for the browser to pick them up
    EFFECT_OUTBOX_LIMIT: int = int(os.getenv("EFFECT_OUTBOX_LIMIT", "200"))

    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"

settings = Settings()
