"""
Best-effort labels for chatbot conversations whose stored summary,
sentiment or topics are missing.

Everything here is pure: the same transcript always gives the same labels
and malformed input degrades to the fallback values instead of raising.
"""
from typing import Dict, List

from Bookly.booking_analytics.phrase_rules import (
    SENTIMENT_RULES,
    SUMMARY_RULES,
    TOPIC_KEYWORDS,
    compile_phrases,
    compile_rules,
)

NOT_AVAILABLE = "N/A"

_summary_rules = compile_rules(SUMMARY_RULES)
_sentiment_rules = compile_rules(SENTIMENT_RULES)
_topic_regex = compile_phrases(TOPIC_KEYWORDS)


def _messages_from(transcript, sender) -> List[Dict]:
    if not isinstance(transcript, list):
        return []
    return [msg for msg in transcript if isinstance(msg, dict) and msg.get("sender") == sender]


def _preview(msg) -> str:
    preview = msg.get("preview")
    return preview if isinstance(preview, str) else ""


def infer_summary(transcript) -> str:
    bot_msgs = list(reversed(_messages_from(transcript, "bot")))

    for _, regex in _summary_rules:
        for msg in bot_msgs:
            if regex.search(_preview(msg)):
                return _preview(msg)

    return _preview(bot_msgs[0]) if bot_msgs else ""


def infer_sentiment(transcript) -> str:
    bot_msgs = list(reversed(_messages_from(transcript, "bot")))

    for category, regex in _sentiment_rules:
        if any(regex.search(_preview(msg)) for msg in bot_msgs):
            return category

    return NOT_AVAILABLE


def infer_topics(transcript) -> List[str]:
    if not isinstance(transcript, list):
        return [NOT_AVAILABLE]

    user_msgs = _messages_from(transcript, "user")

    found = next((msg for msg in user_msgs if _topic_regex.search(_preview(msg))), None)
    if found:
        matches = [m.group(0).strip() for m in _topic_regex.finditer(_preview(found))]
        if matches:
            return matches
        return [_preview(found)]

    if user_msgs:
        return [_preview(user_msgs[0])]
    return [NOT_AVAILABLE]


# Resolved fields: the row's own value when present, the inferred one otherwise

def resolve_summary(row) -> str:
    return row.get("summary") or infer_summary(row.get("transcript"))


def resolve_sentiment(row) -> str:
    return row.get("sentiment") or infer_sentiment(row.get("transcript"))


def resolve_topics(row) -> List[str]:
    topics = row.get("topics")
    if isinstance(topics, list) and topics:
        return topics
    return infer_topics(row.get("transcript"))


def last_message(row) -> str:
    transcript = row.get("transcript")
    if not isinstance(transcript, list) or not transcript or not isinstance(transcript[-1], dict):
        return ""
    return _preview(transcript[-1])


def resolve_row(row) -> Dict:
    """Table-ready view of a conversation row."""
    return {
        "id": row.get("id"),
        "conversationId": row.get("conversationId"),
        "updatedAt": row.get("updatedAt"),
        "topics": resolve_topics(row),
        "summary": resolve_summary(row),
        "sentiment": resolve_sentiment(row),
        "lastMessage": last_message(row),
    }
