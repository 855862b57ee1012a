"""Advisory output models: per-slot predictions and the per-city result."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConditionStatus:
    status: str
    description: str


@dataclass(frozen=True)
class DailyAdvisory:
    time: str  # HH:MM, local to the city
    temperature: int  # Celsius
    conditions: tuple[ConditionStatus, ...]
    advice: str

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "temperature": self.temperature,
            "weather": [
                {"status": c.status, "description": c.description}
                for c in self.conditions
            ],
            "advice": self.advice,
        }


@dataclass
class CityAdvisoryResult:
    message: str
    status: int
    data: dict[str, list[DailyAdvisory]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200

    def slot_count(self) -> int:
        return sum(len(slots) for slots in self.data.values())

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "status": self.status,
            "data": {
                day: [slot.to_dict() for slot in slots]
                for day, slots in self.data.items()
            },
        }
