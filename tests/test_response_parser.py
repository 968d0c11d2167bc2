import json

from processing.response_parser import parse_analysis_response, strip_code_fences

VALID_PAYLOAD = {
    "genre_detected": "Fantasy",
    "tone_detected": "Epic",
    "key_entities": ["Kara", "The Ember Crown"],
    "narrative_bridge": "Kara stands before the sealed gate.",
    "directions": [
        {"name": "The Gate Path", "description": "Kara breaks the seal."},
        {"name": "The Oath Path", "description": "Kara swears to the crown."},
        {"name": "The Ash Path", "description": "The crown burns Kara's hand."},
    ],
}


def test_parse_valid_payload():
    result = parse_analysis_response(json.dumps(VALID_PAYLOAD))
    assert result is not None
    assert result.genre == "Fantasy"
    assert result.tone == "Epic"
    assert result.key_entities == ["Kara", "The Ember Crown"]
    assert result.narrative_bridge == "Kara stands before the sealed gate."
    assert [d.name for d in result.directions] == [
        "The Gate Path",
        "The Oath Path",
        "The Ash Path",
    ]
    assert result.source == "ai"


def test_fenced_payload_parses_like_plain_payload():
    raw = json.dumps(VALID_PAYLOAD)
    plain = parse_analysis_response(raw)
    assert parse_analysis_response(f"```json\n{raw}\n```") == plain
    assert parse_analysis_response(f"```\n{raw}\n```") == plain
    assert parse_analysis_response(f"  ```JSON {raw} ```  ") == plain


def test_strip_code_fences_leaves_plain_text():
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_fewer_than_three_directions_rejected():
    assert (
        parse_analysis_response('{"directions":[{"name":"A","description":"B"}]}')
        is None
    )


def test_more_than_three_directions_truncated_in_order():
    payload = dict(VALID_PAYLOAD)
    payload["directions"] = [
        {"name": f"N{i}", "description": f"D{i}"} for i in range(1, 6)
    ]
    result = parse_analysis_response(json.dumps(payload))
    assert result is not None
    assert [d.name for d in result.directions] == ["N1", "N2", "N3"]


def test_string_directions_get_positional_names():
    raw = json.dumps({"directions": ["go north", "go south", "stay"]})
    result = parse_analysis_response(raw)
    assert result is not None
    assert [d.name for d in result.directions] == ["Path 1", "Path 2", "Path 3"]
    assert result.directions[2].description == "stay"


def test_unusable_directions_are_skipped():
    raw = json.dumps(
        {
            "directions": [
                {"description": "first"},
                "second",
                5,
                {"name": "No description"},
                None,
                {"name": "Third", "description": "third"},
            ]
        }
    )
    result = parse_analysis_response(raw)
    assert result is not None
    assert [(d.name, d.description) for d in result.directions] == [
        ("Path 1", "first"),
        ("Path 2", "second"),
        ("Third", "third"),
    ]


def test_missing_fields_use_defaults():
    raw = json.dumps({"directions": VALID_PAYLOAD["directions"]})
    result = parse_analysis_response(raw)
    assert result is not None
    assert result.genre == "Drama"
    assert result.tone == "Neutral"
    assert result.narrative_bridge == ""
    assert result.key_entities == []


def test_entities_deduplicated_and_capped():
    payload = dict(VALID_PAYLOAD)
    payload["key_entities"] = ["Kara", "Kara", " Joren ", "", 7] + [
        f"Name{i}" for i in range(10)
    ]
    result = parse_analysis_response(json.dumps(payload))
    assert result is not None
    assert result.key_entities[:3] == ["Kara", "Joren", "Name0"]
    assert len(result.key_entities) == 8


def test_blank_or_missing_input_returns_none():
    assert parse_analysis_response(None) is None
    assert parse_analysis_response("") is None
    assert parse_analysis_response("   \n") is None


def test_malformed_input_returns_none():
    assert parse_analysis_response("not json at all") is None
    assert parse_analysis_response("[1, 2, 3]") is None
    assert parse_analysis_response('{"directions": "three of them"}') is None
    assert parse_analysis_response("{}") is None


def test_wrong_field_type_rejected():
    payload = dict(VALID_PAYLOAD, genre_detected=42)
    assert parse_analysis_response(json.dumps(payload)) is None


def test_deeply_nested_input_returns_none():
    assert parse_analysis_response("[" * 200000) is None
