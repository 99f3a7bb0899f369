from __future__ import annotations

DEFAULT_WEB_SOURCES = [  # 기본 감시 대상 웹 매체
    "https://www.aljazeera.net/",
    "https://alkofiya.tv/ar",
    "https://seraj.tv/",
]

DEFAULT_TELEGRAM_SOURCES = [  # 기본 감시 대상 텔레그램 채널 핸들
    "anas1020304050",
    "dcdgaza",
    "gazaalannet",
    "GazaNewsNow",
    "MOHMediaGaza",
    "QudsPressAgency",
]

DEFAULT_KEYWORDS = [  # 감시 지역(가자시티 서부) 지명 키워드
    "تل الهوا", "تل الهوى", "الرمال الجنوبي", "حي الرمال", "حي الرمال الجنوبي",
    "الشيخ عجلين", "المينا", "ميناء غزة", "الجندي المجهول", "دوار الخور",
    "مفترق الخور", "مفترق الأزهر", "الأزهر", "دوار حيدر", "حيدر عبد الشافي",
    "دوار أبو مازن", "مفترق أبو مازن", "كيرفور", "دوار المالية", "دوار الدحدوح",
    "كاظم البحر", "النابلسي", "دوار النابلسي", "شارع البحر", "مفترق المالية",
    "مفترق الدحدوح",
]

TELEGRAM_WEB_URL = "https://t.me/s/{handle}"  # 텔레그램 채널 웹 미리보기 주소

# 거절 사유 코드 (운영 로그에 그대로 노출)
REASON_MALFORMED_TIMESTAMP = "MalformedTimestamp"
REASON_TOO_OLD = "TooOld"
REASON_FUTURE_DATED = "FutureDated"
REASON_TIME_INCONSISTENT = "TimeInconsistent"
REASON_DUPLICATE = "Duplicate"
REASON_BLACKLISTED = "Blacklisted"
REASON_PROVIDER_ERROR = "ProviderError"

FRESHNESS_REASONS = frozenset({
    REASON_MALFORMED_TIMESTAMP,
    REASON_TOO_OLD,
    REASON_FUTURE_DATED,
    REASON_TIME_INCONSISTENT,
})
DEDUPE_REASONS = frozenset({REASON_DUPLICATE, REASON_BLACKLISTED})
