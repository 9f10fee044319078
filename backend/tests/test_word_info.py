import pytest

from app.llm import parse_word_info

LOCAL = {"Origin": "http://localhost:3000"}


def test_word_info_parses_reply(client, completions):
    completions.content = "Definition: happy and cheerful\nSynonyms: glad, joyful , merry"
    r = client.get("/word-info", params={"word": "jolly"}, headers=LOCAL)
    assert r.status_code == 200
    assert r.json() == {
        "word": "jolly",
        "definition": "happy and cheerful",
        "synonyms": ["glad", "joyful", "merry"],
    }
    assert '"jolly"' in completions.calls[0]["messages"][0]["content"]


def test_missing_word_is_400(client, completions):
    r = client.get("/word-info", headers=LOCAL)
    assert r.status_code == 400
    assert r.json() == {"error": "No word provided"}
    assert completions.calls == []


def test_upstream_failure_is_500(client, completions):
    completions.error = RuntimeError("boom")
    r = client.get("/word-info", params={"word": "x"}, headers=LOCAL)
    assert r.status_code == 500
    assert r.json() == {"error": "Error fetching word information"}


@pytest.mark.parametrize(
    "reply, definition, synonyms",
    [
        ("", "Definition not found", ["No synonyms found"]),
        ("just some prose without colons", "Definition not found", ["No synonyms found"]),
        ("1. Definition: a fruit", "a fruit", ["No synonyms found"]),
        ("\n1. Definition: a fruit\n\n2. Synonyms: pome\n", "a fruit", ["pome"]),
        ("Definition: x\nSynonyms:", "x", ["No synonyms found"]),
    ],
)
def test_parse_word_info_fallbacks(reply, definition, synonyms):
    assert parse_word_info(reply) == (definition, synonyms)
