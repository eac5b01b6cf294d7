"""Prioritized action items for crop advisories."""

from dataclasses import dataclass
from typing import Optional

from harvestguard.store.models import CropBatchState, WeatherReading

MIN_ACTIONS = 2
MAX_ACTIONS = 5


@dataclass
class ActionItem:
    priority: int
    en: str
    bn: str

    def text(self, language: str) -> str:
        return self.bn if language == "bn" else self.en


MONITOR_CROP = ActionItem(30, "Monitor the crop's condition regularly", "ফসলের অবস্থা নিয়মিত পর্যবেক্ষণ করুন")
WATCH_FORECAST = ActionItem(35, "Keep watching the weather forecast", "আবহাওয়ার পূর্বাভাস পর্যবেক্ষণ করুন")


def storage_actions(crop: CropBatchState, weather: WeatherReading, level: str) -> list[ActionItem]:
    actions = []

    if level == "Critical":
        actions.append(ActionItem(100, "URGENT: Dry the crop immediately", "জরুরি: ফসল অবিলম্বে শুকিয়ে নিন"))

    if weather.humidity > 80 and weather.temperature > 30:
        actions.append(ActionItem(
            90, "Inspect the crop regularly to prevent mold", "ছাঁচ প্রতিরোধে ফসল নিয়মিত পরীক্ষা করুন",
        ))

    if weather.humidity > 80:
        actions.append(ActionItem(
            85, "Turn on fans and increase ventilation in the store", "গুদামে ফ্যান চালু করুন এবং বায়ুচলাচল বাড়ান",
        ))

    if weather.rainfall_mm > 20 and crop.storage_method == "open_space":
        actions.append(ActionItem(
            95, "Cover the crop quickly or move it to a safe place", "ফসল তাড়াতাড়ি ঢেকে রাখুন বা নিরাপদ স্থানে সরান",
        ))
        actions.append(ActionItem(80, "Arrange drainage for standing water", "পানি নিষ্কাশনের ব্যবস্থা করুন"))

    if weather.temperature > 35:
        actions.append(ActionItem(
            70, "Shade the store to bring its temperature down", "গুদামের তাপমাত্রা কমাতে ছায়ার ব্যবস্থা করুন",
        ))

    if weather.wind_speed_ms > 10:
        actions.append(ActionItem(
            75, "Close store doors and windows securely", "গুদামের দরজা-জানালা ভালোভাবে বন্ধ করুন",
        ))

    actions.append(MONITOR_CROP)
    actions.append(ActionItem(40, "Control moisture in the store", "গুদামে আর্দ্রতা নিয়ন্ত্রণ করুন"))
    return actions


def growing_actions(crop: CropBatchState, weather: WeatherReading, level: str) -> list[ActionItem]:
    actions = []

    if level == "Critical":
        actions.append(ActionItem(100, "URGENT: Act now to protect the crop", "জরুরি: ফসল রক্ষায় তাৎক্ষণিক ব্যবস্থা নিন"))

    if weather.rainfall_mm > 50:
        actions.append(ActionItem(90, "Drain standing water from the field", "জমিতে পানি নিষ্কাশনের ব্যবস্থা করুন"))
        actions.append(ActionItem(85, "Delay harvesting by a few days", "ফসল কাটা কয়েক দিন বিলম্বিত করুন"))

    if weather.temperature > 35:
        actions.append(ActionItem(
            88, "Irrigate regularly and keep the soil moist", "নিয়মিত সেচ দিন এবং মাটির আর্দ্রতা বজায় রাখুন",
        ))
        actions.append(ActionItem(75, "Provide shade where possible", "সম্ভব হলে ছায়ার ব্যবস্থা করুন"))

    if weather.wind_speed_ms > 10:
        actions.append(ActionItem(87, "Stake the crop", "ফসল খুঁটি দিয়ে বেঁধে রাখুন"))
        actions.append(ActionItem(70, "Remove damaged plants", "ক্ষতিগ্রস্ত গাছ সরিয়ে ফেলুন"))

    if weather.humidity > 80 and weather.temperature > 30:
        actions.append(ActionItem(80, "Consider spraying a fungicide", "ছত্রাকনাশক স্প্রে করার কথা বিবেচনা করুন"))

    actions.append(ActionItem(30, "Check crop health regularly", "ফসলের স্বাস্থ্য নিয়মিত পরীক্ষা করুন"))
    actions.append(WATCH_FORECAST)
    return actions


def generate_action_items(
    crop: Optional[CropBatchState],
    weather: Optional[WeatherReading],
    level: str,
    language: str = "bn",
) -> list[str]:
    """Between two and five unique actions, most urgent first."""
    if crop is None or weather is None:
        items = [MONITOR_CROP, WATCH_FORECAST]
    elif crop.is_harvested:
        items = storage_actions(crop, weather, level)
    else:
        items = growing_actions(crop, weather, level)

    # sorted() is stable, so equal priorities keep insertion order
    texts = []
    for item in sorted(items, key=lambda a: a.priority, reverse=True):
        text = item.text(language)
        if text not in texts:
            texts.append(text)

    texts = texts[:MAX_ACTIONS]
    for filler in (MONITOR_CROP, WATCH_FORECAST):
        if len(texts) >= MIN_ACTIONS:
            break
        if filler.text(language) not in texts:
            texts.append(filler.text(language))
    return texts
