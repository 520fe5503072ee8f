"""
Tests for the Free Dictionary API client.
"""

from unittest.mock import AsyncMock

from word_explorer.infrastructure.sources.dictionary import DictionaryClient, DictionaryResult
from word_explorer.models import SourceTag


class TestDictionaryClientFetch:
    async def test_fetch_parses_first_entry(self, dictionary_payload):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=dictionary_payload)

        result = await client.fetch("ephemeral")

        client._make_request.assert_awaited_once_with("/en/ephemeral")
        assert [d.text for d in result.definitions] == [
            "Lasting for a short period of time.",
            "Existing for only one day.",
            "Something which lasts for a short period of time.",
        ]
        assert [d.part_of_speech for d in result.definitions] == ["adjective", "adjective", "noun"]
        assert result.definitions[0].examples == ("fashions are ephemeral",)
        assert result.definitions[1].examples == ()
        assert result.etymology.startswith("late 16th century")
        assert result.record_count == 3

    async def test_attribution(self, dictionary_payload):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=dictionary_payload)

        result = await client.fetch("ephemeral")

        for d in result.definitions:
            assert d.attribution.source is SourceTag.DICTIONARYAPI
            assert d.attribution.url == "https://en.wiktionary.org/wiki/ephemeral"

    async def test_phonetics_without_text_skipped(self, dictionary_payload):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=dictionary_payload)

        result = await client.fetch("ephemeral")

        assert len(result.phonetics) == 1
        assert result.phonetics[0].text == "/ɪˈfɛm(ə)ɹəl/"
        assert result.phonetics[0].audio.endswith(".mp3")

    async def test_term_is_url_quoted(self):
        client = DictionaryClient(lang="en")
        client._make_request = AsyncMock(return_value=None)

        await client.fetch("ice cream")

        client._make_request.assert_awaited_once_with("/en/ice%20cream")

    async def test_not_found_is_empty(self):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=None)

        result = await client.fetch("qwzx")

        assert result == DictionaryResult.empty()
        assert result.phonetics == ()

    async def test_unexpected_shape_is_empty(self):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value={"title": "No Definitions Found"})

        assert await client.fetch("qwzx") == DictionaryResult.empty()


class TestDictionaryParseEntry:
    def test_malformed_definitions_skipped(self):
        entry = {
            "meanings": [
                "not a dict",
                {"partOfSpeech": "verb", "definitions": [{"example": "no text"}, {"definition": "To go."}]},
            ]
        }
        result = DictionaryClient.parse_entry(entry)
        assert [d.text for d in result.definitions] == ["To go."]
        assert result.definitions[0].attribution.url is None

    def test_missing_origin(self):
        result = DictionaryClient.parse_entry({"meanings": []})
        assert result.etymology is None
        assert result.phonetics == ()


class TestDictionaryMalformedPayload:
    async def test_meanings_not_a_list(self):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=[{"meanings": 5}])

        result = await client.fetch("qwzx")

        assert result == DictionaryResult.empty()

    async def test_phonetics_not_a_list(self):
        client = DictionaryClient()
        client._make_request = AsyncMock(return_value=[{"meanings": [], "phonetics": 7}])

        result = await client.fetch("qwzx")

        assert result.phonetics == ()
        assert result.definitions == ()

    async def test_nested_definitions_not_a_list(self):
        client = DictionaryClient()
        client._make_request = AsyncMock(
            return_value=[{"meanings": [{"partOfSpeech": "noun", "definitions": "oops"}]}]
        )

        assert (await client.fetch("qwzx")).definitions == ()

    def test_source_urls_as_string_ignored(self):
        entry = {
            "sourceUrls": "https://en.wiktionary.org/wiki/x",
            "meanings": [{"partOfSpeech": "noun", "definitions": [{"definition": "A letter."}]}],
        }
        result = DictionaryClient.parse_entry(entry)
        assert result.definitions[0].attribution.url is None

    def test_non_string_fields_dropped(self):
        entry = {
            "sourceUrls": [42],
            "origin": ["not", "text"],
            "phonetics": [{"text": 3}, {"text": "/eks/", "audio": False}],
            "meanings": [
                {
                    "partOfSpeech": 1,
                    "definitions": [{"definition": 9}, {"definition": "A letter.", "example": {"x": 1}}],
                }
            ],
        }
        result = DictionaryClient.parse_entry(entry)

        assert result.etymology is None
        assert [(p.text, p.audio) for p in result.phonetics] == [("/eks/", None)]
        assert len(result.definitions) == 1
        definition = result.definitions[0]
        assert definition.text == "A letter."
        assert definition.part_of_speech is None
        assert definition.examples == ()
        assert definition.attribution.url is None
