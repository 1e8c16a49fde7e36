from types import SimpleNamespace

import pytest

from services.openai.response_parser import (
    extract_message_text,
    extract_usage,
    normalize_keywords,
    parse_labelled_response,
)
from utils.errors import ParseError


class TestParseLabelledResponse:
    """Tests for the labelled title/description/keys/categoryId convention."""

    def test_spec_example(self):
        text = (
            'title="Sunset over mountain ridge, scenic view" description="..." '
            'keys=[sunset,mountain,sky] categoryId="5"'
        )
        result = parse_labelled_response(text)

        assert result.title == "Sunset over mountain ridge, scenic view"
        assert result.description == "..."
        assert result.keywords == "sunset,mountain,sky"
        assert result.category_id == 5

    def test_values_are_trimmed_and_spacing_around_equals_is_allowed(self):
        text = 'title = "  Quiet harbor at dawn  "  description =" Boats rest. " keys = [ boat , harbor ] categoryId = " 21 "'
        result = parse_labelled_response(text)

        assert result.title == "Quiet harbor at dawn"
        assert result.description == "Boats rest."
        assert result.keywords == "boat,harbor"
        assert result.category_id == 21

    def test_one_field_per_line_with_surrounding_prose(self):
        text = (
            "Here is the analysis:\n"
            'title="Chef plating dessert in restaurant kitchen"\n'
            'description="A chef carefully finishes a plated dessert."\n'
            'keys=["chef", "dessert",\n "kitchen", "food"]\n'
            'categoryId="7"\n'
            "Let me know if you need anything else."
        )
        result = parse_labelled_response(text)

        assert result.title == "Chef plating dessert in restaurant kitchen"
        assert result.description == "A chef carefully finishes a plated dessert."
        assert result.keywords == "chef,dessert,kitchen,food"
        assert result.category_id == 7

    def test_nested_quotes_inside_title(self):
        text = 'title="The "Big" Apple skyline at night" description="City lights." keys=[city] categoryId="2"'
        result = parse_labelled_response(text)

        assert result.title == 'The "Big" Apple skyline at night'
        assert result.description == "City lights."

    def test_labels_are_case_insensitive_and_category_quotes_optional(self):
        text = 'Title="Red fox" Description="A fox in snow." Keys=[fox,snow] CategoryId=1'
        result = parse_labelled_response(text)

        assert result.title == "Red fox"
        assert result.category_id == 1

    @pytest.mark.parametrize(
        "text",
        [
            'title="Red fox", description="A fox in snow.", keys=[fox,snow], categoryId="1"',
            'title="Red fox"; description="A fox in snow."; keys=[fox,snow]; categoryId="1"',
            '**title="Red fox"** **description="A fox in snow."** **keys=[fox,snow]** **categoryId="1"**',
            '- title="Red fox",\n- description="A fox in snow.",\n- keys=[fox,snow],\n- categoryId="1".',
            '*title="Red fox"* `description="A fox in snow."` keys=[fox,snow] categoryId=1',
        ],
    )
    def test_punctuation_and_markdown_between_fields(self, text):
        result = parse_labelled_response(text)

        assert result.title == "Red fox"
        assert result.description == "A fox in snow."
        assert result.keywords == "fox,snow"
        assert result.category_id == 1

    @pytest.mark.parametrize(
        "text",
        [
            'title="Red fox description="A fox in snow." keys=[fox] categoryId="1"',
            'title="Red fox" description="A fox in snow. | keys=[fox] | categoryId="1" |',
        ],
    )
    def test_unterminated_value_raises(self, text):
        with pytest.raises(ParseError):
            parse_labelled_response(text)

    @pytest.mark.parametrize(
        "missing, text",
        [
            ("title", 'description="d" keys=[a] categoryId="1"'),
            ("description", 'title="t" keys=[a] categoryId="1"'),
            ("keys", 'title="t" description="d" categoryId="1"'),
            ("categoryId", 'title="t" description="d" keys=[a]'),
        ],
    )
    def test_missing_field_raises(self, missing, text):
        with pytest.raises(ParseError) as excinfo:
            parse_labelled_response(text)
        assert missing in str(excinfo.value)

    def test_empty_values_count_as_missing(self):
        with pytest.raises(ParseError):
            parse_labelled_response('title="  " description="d" keys=[a] categoryId="1"')
        with pytest.raises(ParseError):
            parse_labelled_response('title="t" description="d" keys=[ , "" ] categoryId="1"')

    def test_non_numeric_category_raises(self):
        with pytest.raises(ParseError):
            parse_labelled_response('title="t" description="d" keys=[a] categoryId="Nature"')

    def test_json_reply_is_not_accepted(self):
        text = '{"title": "t", "description": "d", "keywords": "a,b", "categoryId": 5}'
        with pytest.raises(ParseError):
            parse_labelled_response(text)


class TestNormalizeKeywords:
    def test_cleans_whitespace_quotes_and_empties(self):
        assert normalize_keywords(' sunset , "mountain",, sky ,') == "sunset,mountain,sky"

    def test_preserves_order_and_duplicates(self):
        assert normalize_keywords("b, a, b, Living room") == "b,a,b,Living room"

    @pytest.mark.parametrize(
        "raw",
        ['"a", " b ",c', ' " x" ,y ,, "', "single", ""],
    )
    def test_idempotent(self, raw):
        once = normalize_keywords(raw)
        assert normalize_keywords(once) == once


class TestResponseAccessors:
    def test_extract_message_text(self):
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="hello"))])
        assert extract_message_text(response) == "hello"

    def test_extract_message_text_from_content_parts(self):
        parts = [{"type": "text", "text": "title="}, {"type": "text", "text": '"x"'}]
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=parts))])
        assert extract_message_text(response) == 'title="x"'

    def test_extract_message_text_without_choices(self):
        assert extract_message_text(SimpleNamespace(choices=[])) == ""
        assert extract_message_text(SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])) == ""

    def test_extract_usage(self):
        response = SimpleNamespace(usage=SimpleNamespace(prompt_tokens=3, completion_tokens=4))
        assert extract_usage(response) == {"input_tokens": 3, "output_tokens": 4}
        assert extract_usage(SimpleNamespace()) == {"input_tokens": None, "output_tokens": None}
