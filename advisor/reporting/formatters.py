"""Output formatters for city advisories."""

import json

from advisor.models.advisory import CityAdvisoryResult


def format_advisory_text(city: str, result: CityAdvisoryResult) -> str:
    """Plain text advisory for terminal output."""
    if not result.ok:
        return f"{city}: {result.message} (status {result.status})"

    lines = [f"=== Weather advisory for {city} ==="]
    for day, slots in result.data.items():
        lines.append(f"{day}:")
        for slot in slots:
            weather = ", ".join(c.description for c in slot.conditions) or "n/a"
            lines.append(
                f"  {slot.time}  {slot.temperature:>3d}°C  {weather} | {slot.advice.strip()}"
            )
    return "\n".join(lines)


def format_advisory_json(result: CityAdvisoryResult) -> str:
    """JSON body as served by the HTTP API."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
