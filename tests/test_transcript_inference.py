"""
Tests for the transcript inference helpers that fill in summary,
sentiment and topics for conversations stored without them.
"""
import pytest

from Bookly.booking_analytics.transcript_inference import (
    NOT_AVAILABLE,
    infer_sentiment,
    infer_summary,
    infer_topics,
    last_message,
    resolve_row,
    resolve_sentiment,
    resolve_summary,
    resolve_topics,
)
from conftest import conversation, transcript


class TestInferSummary:

    def test_no_bot_messages_gives_empty_summary(self):
        assert infer_summary(transcript(("user", "Hi, I want a facial"))) == ""
        assert infer_summary([]) == ""

    def test_non_list_transcript_gives_empty_summary(self):
        assert infer_summary(None) == ""
        assert infer_summary("not a transcript") == ""

    def test_booking_confirmation_wins_over_later_closing(self):
        messages = transcript(
            ("user", "Book a massage tomorrow"),
            ("bot", "Your appointment has been successfully booked for 10am."),
            ("user", "Thanks"),
            ("bot", "Thank you, feel free to let me know if you need anything."),
        )
        assert infer_summary(messages) == "Your appointment has been successfully booked for 10am."

    def test_unavailability_used_when_nothing_confirmed(self):
        messages = transcript(
            ("bot", "Sorry, that slot is not available."),
            ("bot", "Thank you for your patience."),
        )
        assert infer_summary(messages) == "Sorry, that slot is not available."

    def test_latest_matching_message_is_preferred(self):
        messages = transcript(
            ("bot", "Your booking has been confirmed."),
            ("bot", "Your new booking has been scheduled for Friday."),
        )
        assert infer_summary(messages) == "Your new booking has been scheduled for Friday."

    def test_falls_back_to_most_recent_bot_message(self):
        messages = transcript(
            ("bot", "Hello! How can I help?"),
            ("user", "What are your opening hours?"),
            ("bot", "We open at 9am every day."),
        )
        assert infer_summary(messages) == "We open at 9am every day."


class TestInferSentiment:

    def test_no_bot_messages_is_not_available(self):
        assert infer_sentiment(transcript(("user", "hello"))) == NOT_AVAILABLE
        assert infer_sentiment(None) == NOT_AVAILABLE

    def test_positive_confirmation(self):
        messages = transcript(
            ("user", "Please book me in"),
            ("bot", "Your appointment has been successfully booked"),
        )
        assert infer_sentiment(messages) == "positive"

    def test_positive_takes_precedence_over_negative(self):
        messages = transcript(
            ("bot", "Sorry, 9am is not available."),
            ("bot", "Great, 11am works. See you then!"),
        )
        assert infer_sentiment(messages) == "positive"

    def test_negative(self):
        messages = transcript(("bot", "Unfortunately we are unable to book that slot."))
        assert infer_sentiment(messages) == "negative"

    def test_neutral_clarification(self):
        messages = transcript(("bot", "Could you tell me your preferred time?"))
        assert infer_sentiment(messages) == "neutral"

    def test_unmatched_bot_messages(self):
        assert infer_sentiment(transcript(("bot", "Our address is 12 Main St."))) == NOT_AVAILABLE

    def test_is_case_insensitive(self):
        assert infer_sentiment(transcript(("bot", "BOOKING CONFIRMED"))) == "positive"

    def test_missing_preview_does_not_raise(self):
        messages = [{"sender": "bot"}, {"sender": "bot", "preview": None}]
        assert infer_sentiment(messages) == NOT_AVAILABLE


class TestInferTopics:

    def test_extracts_every_keyword_of_first_matching_message(self):
        messages = transcript(
            ("user", "hello"),
            ("user", "I'd like a Facial and a massage"),
            ("user", "also a skin treatment"),
        )
        assert infer_topics(messages) == ["Facial", "massage"]

    def test_first_user_message_when_no_keyword(self):
        messages = transcript(("user", "What time do you close?"), ("user", "ok"))
        assert infer_topics(messages) == ["What time do you close?"]

    def test_not_available_without_user_messages(self):
        assert infer_topics(transcript(("bot", "Welcome!"))) == [NOT_AVAILABLE]
        assert infer_topics(None) == [NOT_AVAILABLE]

    def test_ignores_bot_messages(self):
        messages = transcript(("bot", "We offer facial services"), ("user", "how much?"))
        assert infer_topics(messages) == ["how much?"]


class TestResolvedFields:

    def test_own_fields_win(self):
        row = conversation(
            1,
            messages=[("bot", "Sorry, not available")],
            summary="Stored summary",
            sentiment="neutral",
            topics=["hydrafacial"],
        )
        assert resolve_summary(row) == "Stored summary"
        assert resolve_sentiment(row) == "neutral"
        assert resolve_topics(row) == ["hydrafacial"]

    def test_missing_fields_are_inferred(self):
        row = conversation(
            2,
            messages=[("user", "Book a massage"), ("bot", "Your massage has been successfully booked")],
            summary=None,
            sentiment="",
            topics=[],
        )
        assert resolve_summary(row) == "Your massage has been successfully booked"
        assert resolve_sentiment(row) == "positive"
        assert resolve_topics(row) == ["massage"]

    def test_resolve_row_view(self):
        row = conversation(3, messages=[("user", "hi"), ("bot", "How can I help?")])
        view = resolve_row(row)

        assert view == {
            "id": 3,
            "conversationId": "conv_3",
            "updatedAt": "2024-05-01T10:00:00.000Z",
            "topics": ["hi"],
            "summary": "How can I help?",
            "sentiment": NOT_AVAILABLE,
            "lastMessage": "How can I help?",
        }

    @pytest.mark.parametrize("value", [None, [], "oops", [None]])
    def test_last_message_of_malformed_transcript(self, value):
        assert last_message({"transcript": value}) == ""

    def test_inference_is_deterministic(self):
        messages = transcript(("user", "facial please"), ("bot", "Your facial has been confirmed"))
        first = (infer_summary(messages), infer_sentiment(messages), infer_topics(messages))
        second = (infer_summary(messages), infer_sentiment(messages), infer_topics(messages))
        assert first == second
