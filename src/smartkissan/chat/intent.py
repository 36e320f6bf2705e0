"""Keyword-based intent classification.

A message is assigned the first category, in ``INTENT_KEYWORDS`` order,
that has a keyword occurring anywhere in the message (case-insensitive).
Keywords cover English, Hindi and Kannada.
"""

from .models import IntentCategory

INTENT_KEYWORDS: dict[IntentCategory, tuple[str, ...]] = {
    IntentCategory.WEATHER: (
        "weather", "rain", "temperature", "forecast", "humid", "wind", "storm",
        "monsoon", "sunny", "cloud", "climate", "drought",
        "मौसम", "बारिश", "वर्षा", "तापमान", "बादल", "आंधी", "हवा",
        "ಹವಾಮಾನ", "ಮಳೆ", "ತಾಪಮಾನ", "ಗಾಳಿ", "ಮೋಡ",
    ),
    IntentCategory.CROP: (
        "crop", "seed", "sow", "plant", "harvest", "soil", "fertilizer",
        "fertiliser", "irrigation", "yield", "grow", "cultivat",
        "फसल", "बीज", "बुवाई", "मिट्टी", "खाद", "सिंचाई", "उपज", "खेती",
        "ಬೆಳೆ", "ಬೀಜ", "ಬಿತ್ತನೆ", "ಮಣ್ಣು", "ಗೊಬ್ಬರ", "ನೀರಾವರಿ", "ಇಳುವರಿ", "ಕೃಷಿ",
    ),
    IntentCategory.MARKET: (
        "price", "market", "mandi", "sell", "buy", "cost", "msp",
        "कीमत", "दाम", "बाजार", "बाज़ार", "मंडी", "बेच",
        "ಬೆಲೆ", "ಮಾರುಕಟ್ಟೆ", "ಮಂಡಿ", "ಮಾರಾಟ",
    ),
    IntentCategory.PEST: (
        "pest", "insect", "disease", "bug", "worm", "fung", "blight", "aphid",
        "locust", "infest",
        "कीट", "कीड़", "रोग", "बीमारी", "फफूंद",
        "ಕೀಟ", "ರೋಗ", "ಹುಳು",
    ),
}


def classify_intent(text: str) -> IntentCategory:
    """Classify a user message into an intent category.

    Args:
        text: Raw user message

    Returns:
        The first matching category, or ``IntentCategory.GENERAL``
    """
    normalized = text.casefold()
    for category, keywords in INTENT_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return category
    return IntentCategory.GENERAL
