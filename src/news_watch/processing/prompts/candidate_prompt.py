"""Prompt template for search-grounded breaking news extraction."""

from jinja2 import Template

CANDIDATE_PROMPT = Template(
    """
Extract news from the following sources:
Web: {{ web_sources | join(', ') }}
Telegram (view as web): {{ telegram_urls | join(', ') }}

CRITICAL RULES:
1. Only return news published in the LAST {{ max_age_minutes }} MINUTES.
2. Today's date is {{ today }} (current time {{ now_iso }}).
3. Use Google Search grounding to access the actual content of these URLs.
4. For each news item, extract: Title, Full Text, Exact Publish Time, Source URL, and Source Name.
5. ONLY return items containing these keywords: {{ keywords | join(', ') }}.
6. For Telegram: Only Original Posts (exclude forwards, replies, edited).

Return the result in JSON array format:
[{
  "title": string,
  "content": string,
  "source": string,
  "url": string,
  "publishTime": "ISO String",
  "serverTimestamp": "ISO String",
  "isTelegram": boolean,
  "matchedKeywords": string[]
}]
""".strip()
)

RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "content": {"type": "STRING"},
            "source": {"type": "STRING"},
            "url": {"type": "STRING"},
            "publishTime": {"type": "STRING"},
            "serverTimestamp": {"type": "STRING"},
            "isTelegram": {"type": "BOOLEAN"},
            "matchedKeywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        },
        "required": [
            "title",
            "content",
            "source",
            "url",
            "publishTime",
            "serverTimestamp",
            "isTelegram",
            "matchedKeywords",
        ],
    },
}
