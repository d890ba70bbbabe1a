import json

import pytest

from pydiffer import seqmatcher_json
from pydiffer.seqmatcher import Differ, Match, Span, Tag


def test_tag_to_python():
    assert seqmatcher_json.to_python(Tag.REPLACE) == "replace"
    assert seqmatcher_json.tag_from_python("insert") is Tag.INSERT

def test_match_to_python():
    assert seqmatcher_json.to_python(Match(1, 2, 3)) == {"a_start": 1, "b_start": 2, "length": 3}

def test_span_to_python():
    assert seqmatcher_json.to_python(Span.delete(0, 1, 0, 0)) == {
        "tag": "delete", "a_start": 0, "a_end": 1, "b_start": 0, "b_end": 0,
    }

def test_span_with_plain_string_tag():
    assert seqmatcher_json.to_python(Span('equal', 0, 1, 0, 1))["tag"] == "equal"

def test_dumps_spans_is_json_array():
    spans = Differ("qabxcd", "abycdf").spans()
    data = json.loads(seqmatcher_json.dumps(spans))
    assert [item["tag"] for item in data] == ["delete", "equal", "replace", "equal", "insert"]
    assert data[1] == {"tag": "equal", "a_start": 1, "a_end": 3, "b_start": 0, "b_end": 2}

def test_loads_spans():
    spans = Differ([1, 2, 3, 4, 5, 6], [2, 3, 5, 7]).spans()
    loaded = seqmatcher_json.loads_spans(seqmatcher_json.dumps(spans, indent=2))
    assert loaded == spans
    assert all(isinstance(span.tag, Tag) for span in loaded)

def test_loads_matches():
    text = '[{"a_start": 0, "b_start": 0, "length": 2}, {"a_start": 5, "b_start": 4, "length": 0}]'
    assert seqmatcher_json.loads_matches(text) == [Match(0, 0, 2), Match(5, 4, 0)]

def test_to_python_rejects_other_objects():
    with pytest.raises(ValueError):
        seqmatcher_json.to_python({"a_start": 0})

@pytest.mark.parametrize("text, message", [
    ('not json', "Invalid JSON"),
    ('{"a_start": 0}', "Expected a JSON array"),
    ('[{"a_start": 0, "b_start": 0}]', "Missing key 'length'"),
    ('[{"a_start": 0, "b_start": "1", "length": 2}]', "must be an integer"),
    ('[{"a_start": true, "b_start": 0, "length": 2}]', "must be an integer"),
    ('[{"a_start": 0, "b_start": -1, "length": 2}]', "must not be negative"),
    ('[[0, 0, 2]]', "Match must be an object"),
])
def test_loads_matches_rejects(text, message):
    with pytest.raises(ValueError, match=message):
        seqmatcher_json.loads_matches(text)

@pytest.mark.parametrize("text, message", [
    ('[{"a_start": 0, "a_end": 1, "b_start": 0, "b_end": 0}]', "Missing key 'tag'"),
    ('[{"tag": "swap", "a_start": 0, "a_end": 1, "b_start": 0, "b_end": 0}]', "Unknown tag"),
    ('[{"tag": "equal", "a_start": 2, "a_end": 1, "b_start": 0, "b_end": 0}]', "reversed"),
    ('["equal"]', "Span must be an object"),
])
def test_loads_spans_rejects(text, message):
    with pytest.raises(ValueError, match=message):
        seqmatcher_json.loads_spans(text)
