from Bookly.booking_analytics.phrase_rules import BOOKING_SUCCESS_PHRASES, compile_phrases

_booking_success_regex = compile_phrases(BOOKING_SUCCESS_PHRASES)


def is_booking_confirmed(record) -> bool:
    """True when the last message of the conversation reads like a confirmed booking."""
    transcript = record.get("transcript") if isinstance(record, dict) else None
    if not isinstance(transcript, list) or not transcript:
        return False

    last = transcript[-1]
    preview = last.get("preview") if isinstance(last, dict) else None
    if not isinstance(preview, str) or not preview:
        return False

    return bool(_booking_success_regex.search(preview))


def confirmed_bookings(records):
    return [record for record in records if is_booking_confirmed(record)]
