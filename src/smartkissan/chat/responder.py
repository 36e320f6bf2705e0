"""Synthetic assistant replies.

Used when the chat backend is unreachable or too slow. Replies come from a
static per-language, per-category table; a language without an entry for a
category falls back to the English entry.
"""

from .models import IntentCategory

DEFAULT_LANGUAGE = "en"

GREETINGS: dict[str, str] = {
    "en": "Hello! I am your farming assistant. How can I help you today?",
    "hi": "नमस्ते! मैं आपका खेती सहायक हूं। आज मैं आपकी क्या मदद कर सकता हूं?",
    "kn": "ನಮಸ್ಕಾರ! ನಾನು ನಿಮ್ಮ ಕೃಷಿ ಸಹಾಯಕ. ಇಂದು ನಾನು ನಿಮಗೆ ಹೇಗೆ ಸಹಾಯ ಮಾಡಲಿ?",
}

# Weather questions without a known location
NO_LOCATION_REPLIES: dict[str, str] = {
    "en": (
        "I need your location to give you a weather update. Please enable "
        "location access in Settings or set your farm location."
    ),
    "hi": (
        "मौसम की जानकारी देने के लिए मुझे आपका स्थान चाहिए। कृपया सेटिंग्स में "
        "स्थान की अनुमति दें या अपने खेत का स्थान सेट करें।"
    ),
    "kn": (
        "ಹವಾಮಾನ ಮಾಹಿತಿ ನೀಡಲು ನಿಮ್ಮ ಸ್ಥಳ ಬೇಕು. ದಯವಿಟ್ಟು ಸೆಟ್ಟಿಂಗ್‌ಗಳಲ್ಲಿ ಸ್ಥಳ "
        "ಅನುಮತಿ ನೀಡಿ ಅಥವಾ ನಿಮ್ಮ ಜಮೀನಿನ ಸ್ಥಳವನ್ನು ಹೊಂದಿಸಿ."
    ),
}

SYNTHETIC_REPLIES: dict[str, dict[IntentCategory, str]] = {
    "en": {
        IntentCategory.WEATHER: (
            "I couldn't reach the live weather service for {location}. Please check "
            "the Weather page for the latest forecast, and avoid spraying if rain is "
            "expected within 24 hours."
        ),
        IntentCategory.CROP: (
            "For crop selection, consider your soil type, the current season and "
            "water availability. Rice and cotton suit warm, humid conditions; wheat "
            "and mustard do well in the cooler Rabi season. A soil test before "
            "sowing helps choose the right fertilizer."
        ),
        IntentCategory.MARKET: (
            "Mandi prices change daily. Compare rates at nearby markets before "
            "selling, and check the Market page for price trends. Storing produce "
            "for a few weeks can help when prices are low after harvest."
        ),
        IntentCategory.PEST: (
            "Inspect the undersides of leaves for insects or spots. Remove badly "
            "affected plants, and try neem-based sprays first. If damage spreads, "
            "contact your local Krishi Vigyan Kendra for the right pesticide and dose."
        ),
        IntentCategory.GENERAL: (
            "I'm your farming assistant. Ask me about weather, crop selection, "
            "market prices or pest control, and I'll do my best to help."
        ),
    },
    "hi": {
        IntentCategory.WEATHER: (
            "{location} के लिए लाइव मौसम सेवा से संपर्क नहीं हो सका। कृपया नवीनतम "
            "पूर्वानुमान के लिए मौसम पेज देखें, और 24 घंटे में बारिश की संभावना हो "
            "तो छिड़काव न करें।"
        ),
        IntentCategory.CROP: (
            "फसल चुनते समय मिट्टी का प्रकार, मौजूदा मौसम और पानी की उपलब्धता का "
            "ध्यान रखें। धान और कपास गर्म, नम मौसम में अच्छे होते हैं; गेहूं और "
            "सरसों ठंडे रबी मौसम में अच्छी उपज देते हैं। बुवाई से पहले मिट्टी की "
            "जांच सही खाद चुनने में मदद करती है।"
        ),
        IntentCategory.MARKET: (
            "मंडी के भाव रोज़ बदलते हैं। बेचने से पहले आस-पास की मंडियों के भाव की "
            "तुलना करें और कीमतों के रुझान के लिए बाज़ार पेज देखें। कटाई के बाद भाव "
            "कम हों तो कुछ हफ्ते भंडारण करना फायदेमंद हो सकता है।"
        ),
        IntentCategory.PEST: (
            "पत्तियों के निचले हिस्से में कीड़े या धब्बे देखें। बुरी तरह प्रभावित "
            "पौधों को हटा दें और पहले नीम आधारित छिड़काव आज़माएं। नुकसान बढ़े तो सही "
            "कीटनाशक और मात्रा के लिए अपने नज़दीकी कृषि विज्ञान केंद्र से संपर्क करें।"
        ),
        IntentCategory.GENERAL: (
            "मैं आपका खेती सहायक हूं। मौसम, फसल चयन, मंडी भाव या कीट नियंत्रण के "
            "बारे में पूछें, मैं मदद करने की पूरी कोशिश करूंगा।"
        ),
    },
    "kn": {
        IntentCategory.WEATHER: (
            "{location} ಗಾಗಿ ನೇರ ಹವಾಮಾನ ಸೇವೆಯನ್ನು ತಲುಪಲು ಸಾಧ್ಯವಾಗಲಿಲ್ಲ. ಇತ್ತೀಚಿನ "
            "ಮುನ್ಸೂಚನೆಗಾಗಿ ಹವಾಮಾನ ಪುಟವನ್ನು ನೋಡಿ, ಮತ್ತು 24 ಗಂಟೆಗಳಲ್ಲಿ ಮಳೆ "
            "ನಿರೀಕ್ಷಿತವಾಗಿದ್ದರೆ ಸಿಂಪಡಣೆ ಮಾಡಬೇಡಿ."
        ),
        IntentCategory.CROP: (
            "ಬೆಳೆ ಆಯ್ಕೆ ಮಾಡುವಾಗ ಮಣ್ಣಿನ ಪ್ರಕಾರ, ಪ್ರಸ್ತುತ ಹಂಗಾಮು ಮತ್ತು ನೀರಿನ "
            "ಲಭ್ಯತೆಯನ್ನು ಗಮನಿಸಿ. ಭತ್ತ ಮತ್ತು ಹತ್ತಿ ಬಿಸಿ, ತೇವಾಂಶದ ವಾತಾವರಣಕ್ಕೆ "
            "ಸೂಕ್ತ; ಗೋಧಿ ಮತ್ತು ಸಾಸಿವೆ ತಂಪಾದ ರಬಿ ಹಂಗಾಮಿನಲ್ಲಿ ಚೆನ್ನಾಗಿ ಬೆಳೆಯುತ್ತವೆ."
        ),
        IntentCategory.MARKET: (
            "ಮಂಡಿ ದರಗಳು ಪ್ರತಿದಿನ ಬದಲಾಗುತ್ತವೆ. ಮಾರಾಟ ಮಾಡುವ ಮೊದಲು ಹತ್ತಿರದ "
            "ಮಾರುಕಟ್ಟೆಗಳ ದರಗಳನ್ನು ಹೋಲಿಸಿ ಮತ್ತು ಬೆಲೆ ಪ್ರವೃತ್ತಿಗಾಗಿ ಮಾರುಕಟ್ಟೆ "
            "ಪುಟವನ್ನು ನೋಡಿ."
        ),
        IntentCategory.PEST: (
            "ಎಲೆಗಳ ಕೆಳಭಾಗದಲ್ಲಿ ಕೀಟಗಳು ಅಥವಾ ಕಲೆಗಳಿವೆಯೇ ಎಂದು ಪರಿಶೀಲಿಸಿ. ಹೆಚ್ಚು "
            "ಬಾಧಿತ ಗಿಡಗಳನ್ನು ತೆಗೆದುಹಾಕಿ ಮತ್ತು ಮೊದಲು ಬೇವು ಆಧಾರಿತ ಸಿಂಪಡಣೆ ಬಳಸಿ. "
            "ಹಾನಿ ಹೆಚ್ಚಾದರೆ ಹತ್ತಿರದ ಕೃಷಿ ವಿಜ್ಞಾನ ಕೇಂದ್ರವನ್ನು ಸಂಪರ್ಕಿಸಿ."
        ),
        IntentCategory.GENERAL: (
            "ನಾನು ನಿಮ್ಮ ಕೃಷಿ ಸಹಾಯಕ. ಹವಾಮಾನ, ಬೆಳೆ ಆಯ್ಕೆ, ಮಾರುಕಟ್ಟೆ ಬೆಲೆ ಅಥವಾ ಕೀಟ "
            "ನಿಯಂತ್ರಣದ ಬಗ್ಗೆ ಕೇಳಿ, ನಾನು ಸಹಾಯ ಮಾಡಲು ಪ್ರಯತ್ನಿಸುತ್ತೇನೆ."
        ),
    },
}


def greeting(language: str) -> str:
    """Opening assistant message for a fresh transcript."""
    return GREETINGS.get(language, GREETINGS[DEFAULT_LANGUAGE])


def synthetic_reply(
    category: IntentCategory,
    language: str = DEFAULT_LANGUAGE,
    location: str | None = None,
) -> str:
    """Pick a canned reply for a category and language.

    Args:
        category: Classified intent of the user message
        language: Language code ("en", "hi", "kn")
        location: Place label; weather replies use a separate variant when absent

    Returns:
        Reply text in the requested language, or English when the language
        has no entry for the category
    """
    if category is IntentCategory.WEATHER and not location:
        return NO_LOCATION_REPLIES.get(language, NO_LOCATION_REPLIES[DEFAULT_LANGUAGE])

    replies = SYNTHETIC_REPLIES.get(language, {})
    template = replies.get(category) or SYNTHETIC_REPLIES[DEFAULT_LANGUAGE][category]
    return template.format(location=location or "")
