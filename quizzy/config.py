import os

from dotenv import load_dotenv

load_dotenv()


def _int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class Settings:

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./quizzy.db")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-key")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    # IANA name used to decide which calendar day an attempt falls on
    TIMEZONE = os.getenv("TIMEZONE", "UTC")

    RECENT_ATTEMPTS_LIMIT = _int("RECENT_ATTEMPTS_LIMIT", 10)
    TREND_WINDOW_DAYS = _int("TREND_WINDOW_DAYS", 30)
    ACTIVITY_WINDOW_DAYS = _int("ACTIVITY_WINDOW_DAYS", 365)
    PASS_MARK = _int("PASS_MARK", 60)
    TOP_PERFORMER_MARK = _int("TOP_PERFORMER_MARK", 80)
    DEFAULT_NEGATIVE_MARK_VALUE = float(os.getenv("DEFAULT_NEGATIVE_MARK_VALUE", "0.25"))


settings = Settings()
