# core/models/recent_search.py
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RecentSearch:
    """Запись истории поиска. timestamp — миллисекунды epoch."""
    city: str
    country_code: str
    timestamp: int = field(default_factory=_now_ms)

    @property
    def key(self) -> Tuple[str, str]:
        """Пара (город, страна) — по ней история дедуплицируется."""
        return self.city, self.country_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "countryCode": self.country_code,
            "timestamp": self.timestamp
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecentSearch":
        return cls(
            city=data["city"],
            country_code=data.get("countryCode", ""),
            timestamp=int(data.get("timestamp", 0))
        )
