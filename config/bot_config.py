# config/bot_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5/"


@dataclass
class BotConfig:
    telegram_token: str
    weather_api_key: str
    weather_base_url: str = OPENWEATHER_BASE_URL
    units: str = "metric"
    api_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            weather_api_key=os.getenv("OPENWEATHER_API_KEY", ""),
            weather_base_url=os.getenv("OPENWEATHER_BASE_URL", OPENWEATHER_BASE_URL),
            units=os.getenv("WEATHER_UNITS", "metric"),
            api_timeout=float(os.getenv("API_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO")
        )
