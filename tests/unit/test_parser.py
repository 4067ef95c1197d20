"""
TEST DOC: Story Reply Parser

WHAT: Tests for parse_story_reply.
WHY: LLM output is untrusted text; malformed replies must fail loudly.
HOW: Feed raw strings and check the parsed reply or MalformedReplyError.

CASES:
- Plain JSON object
- JSON wrapped in a ```json fence

EDGE CASES:
- Empty and whitespace-only text
- Prose instead of JSON
- JSON that is not an object
- Prose around a JSON object
"""

import json

import pytest

from ai_adventure.story.errors import MalformedReplyError
from ai_adventure.story.parser import parse_story_reply, strip_code_fence


class TestStripCodeFence:
    """Tests for fence removal."""

    def test_no_fence(self):
        """Unfenced text is only trimmed."""
        assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'

    def test_json_fence(self):
        """A ```json fence is removed."""
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        """A fence without a language is removed."""
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_inside_text_kept(self):
        """A fence that does not wrap the whole text is left alone."""
        text = 'Here you go:\n```json\n{"a": 1}\n```'
        assert strip_code_fence(text) == text


class TestParseStoryReply:
    """Tests for parse_story_reply."""

    def test_plain_json(self, wake_up_reply):
        """A bare JSON object parses."""
        reply = parse_story_reply(json.dumps(wake_up_reply))
        assert reply.to_wire() == wake_up_reply

    def test_fenced_json(self, wake_up_reply):
        """A JSON object in a code fence parses."""
        raw = f"```json\n{json.dumps(wake_up_reply, indent=2)}\n```"
        assert parse_story_reply(raw).story_text == "You wake up..."

    @pytest.mark.parametrize("raw", ["", "   \n  "])
    def test_empty(self, raw):
        """Empty output is malformed."""
        with pytest.raises(MalformedReplyError, match="empty"):
            parse_story_reply(raw)

    def test_prose(self):
        """Plain prose is malformed."""
        with pytest.raises(MalformedReplyError, match="not valid JSON"):
            parse_story_reply("You wake up in a dark room.")

    def test_prose_around_json(self, wake_up_reply):
        """JSON is not dug out of surrounding prose."""
        raw = f"Sure! {json.dumps(wake_up_reply)}"
        with pytest.raises(MalformedReplyError):
            parse_story_reply(raw)

    @pytest.mark.parametrize("raw", ['["a", "b"]', '"text"', "42", "null"])
    def test_not_an_object(self, raw):
        """JSON values other than objects are malformed."""
        with pytest.raises(MalformedReplyError, match="JSON object"):
            parse_story_reply(raw)

    def test_schema_mismatch(self):
        """An object missing fields is malformed."""
        with pytest.raises(MalformedReplyError, match="story schema"):
            parse_story_reply('{"storyText": "Hello"}')

    def test_error_chains_cause(self):
        """The underlying decode error is kept as the cause."""
        with pytest.raises(MalformedReplyError) as exc_info:
            parse_story_reply("{not json")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
