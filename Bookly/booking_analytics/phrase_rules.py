"""
Phrase sets used to read chatbot transcripts.

Every set is a list of regular-expression fragments matched case-insensitively.
Rule lists are ordered: the first category whose phrases match wins.
"""
import re

# Bot replies, scanned newest first, that make a good one-line summary
SUMMARY_RULES = [
    ("booking_confirmed", [
        r"has been (successfully )?booked",
        r"has been confirmed",
        r"has been scheduled",
        r"booking is successful",
        r"successfully booked",
        r"look forward to seeing you",
        r"appointment.*has been (successfully )?booked",
    ]),
    ("booking_unavailable", [
        r"couldn[’']?t confirm",
        r"not available",
        r"would you like me to check",
    ]),
    ("closing", [
        r"thank you",
        r"we look forward",
        r"feel free to let me know",
    ]),
]

SENTIMENT_RULES = [
    ("positive", [
        r"successfully",
        r"confirmed",
        r"look forward",
        r"thank you",
        r"happy",
        r"great",
        r"wonderful",
        r"glad",
    ]),
    ("negative", [
        r"couldn[’']?t",
        r"not available",
        r"unfortunately",
        r"sorry",
        r"fail",
        r"unable",
        r"problem",
        r"issue",
    ]),
    ("neutral", [
        r"please confirm",
        r"could you",
        r"would you",
        r"let me know",
        r"need more information",
        r"waiting",
    ]),
]

# Service vocabulary looked for in customer messages
TOPIC_KEYWORDS = [
    r"booking",
    r"service",
    r"facial",
    r"massage",
    r"treatment",
    r"appointment",
    r"consultant",
    r"pro",
    r"skin",
    r"hydrat",
    r"bright",
    r"dermaplaning",
]

# Final bot message of a conversation that ended in a booking (English and Vietnamese)
BOOKING_SUCCESS_PHRASES = [
    r"confirm(ed|ation)?",
    r"successfully booked",
    r"has been booked",
    r"appointment (is |has been )?booked",
    r"booking is successful",
    r"has been scheduled",
    r"look forward to seeing you",
    r"thank(s| you) for (your )?booking",
    r"đặt lịch thành công",
    r"đã được đặt",
    r"đã xác nhận",
    r"cảm ơn bạn đã đặt lịch",
]


def compile_phrases(phrases):
    return re.compile("|".join(f"(?:{phrase})" for phrase in phrases), re.IGNORECASE)


def compile_rules(rules):
    return [(category, compile_phrases(phrases)) for category, phrases in rules]
