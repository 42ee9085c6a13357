"""Simple two-language (ko/en) translation helper."""

LANGS = ("en", "ko")

_STRINGS: dict[str, dict[str, str]] = {
    "label_sunsets": {
        "ko": "일몰",
        "en": "Sunsets",
    },
    "label_sunrises": {
        "ko": "일출",
        "en": "Sunrises",
    },
    "error_prefix": {
        "ko": "오류",
        "en": "error",
    },
    "error_location": {
        "ko": "위치를 확인할 수 없어요: {error}",
        "en": "Could not resolve location: {error}",
    },
    "error_plot_days": {
        "ko": "그래프에는 이틀 이상이 필요해요 (week, month, year, next N, last N 중에서 골라보세요)",
        "en": "A plot needs at least two days (try week, month, year, next N or last N)",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
