import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'budgetplanner.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Single reference timezone for "today", month boundaries and recurring wall-clock times
    PLANNER_TIMEZONE = os.getenv("PLANNER_TIMEZONE", "UTC")
    PLANNER_LOCALE = os.getenv("PLANNER_LOCALE", "en")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    PLANNER_TIMEZONE = "UTC"
    PLANNER_LOCALE = "en"
