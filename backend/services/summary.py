import logging
from typing import Optional

import httpx

from config import OLLAMA_MODEL, OLLAMA_TIMEOUT, OLLAMA_URL
from models import LogRecord, WeeklyStats, WeekWindow
from services.dates import parse_date
from services.scoring import KEY_NUTRIENTS

logger = logging.getLogger(__name__)


class SummaryUnavailable(Exception):
    pass


def _fmt(value) -> str:
    return f"{value:g}" if value is not None else "0"


def build_day_prompt(record: LogRecord) -> str:
    """单日总结的提示词"""
    nutrition = ", ".join(record.nutrition) if record.nutrition else "None logged"
    key_nutrients = ", ".join(KEY_NUTRIENTS)
    return (
        f"You are a kind and observant wellness assistant. The user logged their day on {record.date}.\n"
        "1. Point out 2-3 things they did well.\n"
        "2. Gently mention what they may have missed, especially sleep, sunlight, hydration or mental reset.\n"
        f"3. If any of {key_nutrients} is missing from their nutrition, raise it kindly; "
        "if all three are there, acknowledge it.\n"
        "4. Finish with one small, encouraging tip for tomorrow.\n\n"
        "Log:\n"
        f"- Sunlight: {_fmt(record.sunlight_minutes)} minutes\n"
        f"- Water: {_fmt(record.water_liters)} liters\n"
        f"- Nutrition: {nutrition}\n"
        f"- Movement: {_fmt(record.movement_minutes)} minutes\n"
        f"- Sleep: {_fmt(record.sleep_hours)} hours\n"
        f"- Social interaction: {'Yes' if record.social else 'No'}\n"
        f"- Mental reset: {_fmt(record.mental_reset_minutes)} minutes\n"
        f"- Mood: {record.mood or 'Not specified'}\n\n"
        "Respond in a warm and friendly tone."
    )


def build_week_prompt(window: WeekWindow, stats: WeeklyStats) -> str:
    """一周总结的提示词；本周没有数据时只给鼓励"""
    if not stats.has_data:
        return (
            "You are a kind and encouraging wellness assistant. The user has not logged any "
            "wellness data this week yet. Write a short, warm message about starting the habit "
            "and the benefits of logging a little every day."
        )

    def present(flag: bool) -> str:
        return "Yes" if flag else "Missing"

    lines = []
    for slot in window.days:
        if not slot.has_log:
            continue
        r = slot.log
        day = parse_date(slot.date).strftime("%a %b %d")
        nutrition = ", ".join(r.nutrition) if r.nutrition else "None"
        lines.append(
            f"{day}: sunlight {_fmt(r.sunlight_minutes)}min, water {_fmt(r.water_liters)}L, "
            f"movement {_fmt(r.movement_minutes)}min, sleep {_fmt(r.sleep_hours)}h, "
            f"social {'Yes' if r.social else 'No'}, mental reset {_fmt(r.mental_reset_minutes)}min, "
            f"nutrition {nutrition}, mood {r.mood or 'Not specified'}, petals {slot.petals}/7"
        )

    return (
        "You are a thoughtful wellness coach reviewing a full week of data. "
        f"The user logged {stats.days_logged} out of 7 days ({window.range_label}).\n"
        "Cover their consistency, 3-4 strengths, 2-3 gentle areas for growth, the presence of "
        "Tryptophan, Greens and Healthy Fats across the week, links between sleep, mood and "
        "movement, and 2-3 achievable goals for next week.\n\n"
        "Weekly summary:\n"
        f"- Days logged: {stats.days_logged}/7\n"
        f"- Average sunlight: {stats.avg_sunlight_minutes:.1f} minutes/day\n"
        f"- Average water: {stats.avg_water_liters:.1f} liters/day\n"
        f"- Average movement: {stats.avg_movement_minutes:.1f} minutes/day\n"
        f"- Average sleep: {stats.avg_sleep_hours:.1f} hours/day\n"
        f"- Average mental reset: {stats.avg_mental_reset_minutes:.1f} minutes/day\n"
        f"- Social connection: {stats.social_days}/{stats.days_logged} days\n"
        f"- Nutrition variety: {stats.nutrition_variety} unique items\n"
        f"- Tryptophan: {present(stats.has_tryptophan)}, Greens: {present(stats.has_greens)}, "
        f"Healthy Fats: {present(stats.has_healthy_fats)}\n"
        f"- Petals earned this week: {stats.total_activities}\n\n"
        "Daily breakdown:\n" + "\n".join(lines) + "\n\n"
        "Recommended minimums: sunlight 10min, water 2L, movement 30min, sleep 7h, mental reset 5min.\n"
        "Respond in a warm, encouraging and insightful tone."
    )


class OllamaClient:
    """调用本地 Ollama 的 /api/generate"""

    def __init__(
        self,
        base_url: str = OLLAMA_URL,
        model: str = OLLAMA_MODEL,
        timeout: float = OLLAMA_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.transport = transport

    async def generate(self, prompt: str) -> str:
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(f"{self.base_url}/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Summary request to %s failed: %s", self.base_url, e)
            raise SummaryUnavailable(
                f"Unable to reach the wellness assistant. Make sure Ollama is running with the {self.model} model."
            ) from e

        text = (data.get("response") or "").strip() if isinstance(data, dict) else ""
        if not text:
            raise SummaryUnavailable("Empty response from the wellness assistant")
        return text


def get_summary_client() -> OllamaClient:
    return OllamaClient()
