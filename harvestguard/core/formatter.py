"""Output formatters for evaluation results."""

import json

from harvestguard.store.models import Advisory, WeatherReading, utcnow


class FarmerFormatter:
    """Markdown advisory list for farmers and extension officers."""

    def format(self, farmer_id: str, weather: WeatherReading, advisories: list[Advisory]) -> str:
        lines = [
            f"**HarvestGuard: {'Action Needed' if advisories else 'All Clear'}**",
            f"**Farmer:** {farmer_id} | **Time:** {weather.captured_at.strftime('%Y-%m-%d %H:%M')} UTC",
            "",
            "**CONDITIONS:**",
            f"- Temperature: {weather.temperature:.1f}°C",
            f"- Humidity: {weather.humidity:.0f}%",
            f"- Rainfall: {weather.rainfall_mm:.1f}mm",
            f"- Wind: {weather.wind_speed_ms:.1f} m/s",
        ]
        if weather.rain_chance is not None:
            lines.append(f"- Rain chance: {weather.rain_chance:.0f}%")
        lines.append("")

        if advisories:
            lines.append("**ADVISORIES:**")
            for i, a in enumerate(advisories, 1):
                level = f" / {a.level}" if a.level else ""
                lines.append(f"{i}. [{a.severity.upper()}{level}] **{a.title}**")
                lines.append(f"   {a.message}")
                for action in a.actions:
                    lines.append(f"   - {action}")
                lines.append("")
        else:
            lines.append("**No significant risk.**")

        return "\n".join(lines)


class JsonFormatter:
    """JSON with full details."""

    def format(self, farmer_id: str, weather: WeatherReading, advisories: list[Advisory]) -> dict:
        return {
            "farmer_id": farmer_id,
            "generated_at": utcnow().isoformat(),
            "weather": weather.to_dict(),
            "advisories": [a.to_dict() for a in advisories],
        }

    def to_json(self, farmer_id: str, weather: WeatherReading, advisories: list[Advisory]) -> str:
        return json.dumps(self.format(farmer_id, weather, advisories), indent=2, ensure_ascii=False, default=str)


def format_output(farmer_id: str, weather: WeatherReading, advisories: list[Advisory], style: str = "farmer") -> str:
    if style == "json":
        return JsonFormatter().to_json(farmer_id, weather, advisories)
    return FarmerFormatter().format(farmer_id, weather, advisories)
