"""Tests for the quote client and the round loader."""
import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from cryptoquote.client import QuoteClient, RoundLoader
from cryptoquote.client.round_loader import USER_ERROR_MESSAGE
from cryptoquote.exceptions import FetchError
from cryptoquote.models import EncryptedQuote, GameOptions
from cryptoquote.services.puzzle_service import PuzzleEngine

PAYLOAD = {"text": "XYZ", "author": "Tester", "map": {"A": "X", "B": "Y", "C": "Z"}}


def mock_response(body):
    resp = MagicMock()
    resp.read.return_value = body.encode("utf-8")
    resp.__enter__ = lambda s: s
    resp.__exit__ = MagicMock(return_value=False)
    return resp


def http_error(status, body):
    return urllib.error.HTTPError(
        "http://test/quotes", status, "error", {}, io.BytesIO(body.encode("utf-8"))
    )


class TestQuoteClient:
    def test_repr(self):
        assert repr(QuoteClient("http://test/")) == "QuoteClient(http://test)"

    def test_fetches_with_cache_buster(self):
        seen = {}

        def fake_urlopen(request, timeout=None):
            seen["url"] = request.full_url
            return mock_response(json.dumps(PAYLOAD))

        with patch("urllib.request.urlopen", fake_urlopen):
            quote = QuoteClient("http://test").get_encrypted_quote()

        assert seen["url"].startswith("http://test/quotes?dt=")
        assert quote.text == "XYZ"
        assert quote.map == PAYLOAD["map"]

    def test_network_failure(self):
        def fail(request, timeout=None):
            raise urllib.error.URLError("Connection refused")

        with patch("urllib.request.urlopen", fail):
            with pytest.raises(FetchError, match="Connection refused"):
                QuoteClient("http://test").get_encrypted_quote()

    def test_server_error_message(self):
        def fail(request, timeout=None):
            raise http_error(500, json.dumps({"success": False, "error": "generator down"}))

        with patch("urllib.request.urlopen", fail):
            with pytest.raises(FetchError, match="generator down"):
                QuoteClient("http://test").get_encrypted_quote()

    def test_server_error_without_body(self):
        def fail(request, timeout=None):
            raise http_error(502, "<html>bad gateway</html>")

        with patch("urllib.request.urlopen", fail):
            with pytest.raises(FetchError, match="Getting quotes failed"):
                QuoteClient("http://test").get_encrypted_quote()

    def test_invalid_payload(self):
        with patch("urllib.request.urlopen", lambda request, timeout=None: mock_response('{"text": 1}')):
            with pytest.raises(FetchError):
                QuoteClient("http://test").get_encrypted_quote()

    def test_against_flask_app(self, client):
        """The client understands what the server sends."""
        def fake_urlopen(request, timeout=None):
            path = request.full_url.replace("http://test", "")
            return mock_response(client.get(path).get_data(as_text=True))

        with patch("urllib.request.urlopen", fake_urlopen):
            quote = QuoteClient("http://test").get_encrypted_quote()

        engine = PuzzleEngine()
        state = engine.init(quote)
        assert state.fields_count > 0


class TestRoundLoader:
    def make_loader(self, quote_client=None):
        quote_client = quote_client or MagicMock(spec=QuoteClient)
        return RoundLoader(quote_client, PuzzleEngine(GameOptions(lives=3)))

    def test_start_new_game(self, make_encrypted):
        loader = self.make_loader()
        loader.client.get_encrypted_quote.return_value = make_encrypted("XYZ", {"X": "A", "Y": "B", "Z": "C"})
        assert loader.start_new_game() is True
        assert loader.is_loading is False
        assert loader.engine.state.max_lives == 3
        assert loader.last_error is None

    def test_failure_keeps_previous_state(self, make_encrypted):
        loader = self.make_loader()
        loader.client.get_encrypted_quote.return_value = make_encrypted("XYZ", {"X": "A", "Y": "B", "Z": "C"})
        loader.start_new_game()
        previous = loader.engine.state

        loader.client.get_encrypted_quote.side_effect = FetchError("offline")
        assert loader.start_new_game() is False
        assert loader.engine.state is previous
        assert loader.last_error == USER_ERROR_MESSAGE
        assert loader.is_loading is False

    def test_failure_from_empty_state(self):
        loader = self.make_loader()
        loader.client.get_encrypted_quote.side_effect = FetchError("offline")
        assert loader.start_new_game() is False
        assert loader.engine.state is None

    def test_unusable_quote_is_a_failure(self, make_encrypted):
        loader = self.make_loader()
        bad = make_encrypted("XYW", {"X": "A", "Y": "B"})
        loader.client.get_encrypted_quote.return_value = bad
        assert loader.start_new_game() is False
        assert loader.engine.state is None
        assert loader.last_error == USER_ERROR_MESSAGE

    def test_stale_response_is_discarded(self, make_encrypted):
        loader = self.make_loader()
        first = loader.begin_round()
        second = loader.begin_round()
        assert second > first

        newer = make_encrypted("XY", {"X": "A", "Y": "B"})
        older = make_encrypted("Z", {"Z": "C"})
        assert loader.resolve(second, newer) is True
        assert loader.resolve(first, older) is False
        assert loader.engine.state.text == "XY"

    def test_stale_failure_is_ignored(self, make_encrypted):
        loader = self.make_loader()
        first = loader.begin_round()
        second = loader.begin_round()
        loader.resolve(second, make_encrypted("XY", {"X": "A", "Y": "B"}))
        assert loader.fail(first, FetchError("late")) is False
        assert loader.last_error is None

    def test_cancel(self, make_encrypted):
        loader = self.make_loader()
        round_id = loader.begin_round()
        assert loader.is_loading
        loader.cancel()
        assert not loader.is_loading
        assert loader.resolve(round_id, make_encrypted("XY", {"X": "A", "Y": "B"})) is False
        assert loader.engine.state is None


class TestMalformedMaps:
    @pytest.mark.parametrize("mapping", [
        {"A": ["X"]},
        {"A": "XY"},
        {"1": "X"},
        {"A": None},
        {"A": "X", "a": "Y"},
    ])
    def test_client_reports_fetch_error(self, mapping):
        body = json.dumps({"text": "X", "author": "a", "map": mapping})
        with patch("urllib.request.urlopen", lambda request, timeout=None: mock_response(body)):
            with pytest.raises(FetchError):
                QuoteClient("http://test").get_encrypted_quote()

    def test_loader_surfaces_user_error(self):
        body = json.dumps({"text": "X", "author": "a", "map": {"A": ["X"]}})
        loader = RoundLoader(QuoteClient("http://test"))
        with patch("urllib.request.urlopen", lambda request, timeout=None: mock_response(body)):
            assert loader.start_new_game() is False
        assert loader.last_error == USER_ERROR_MESSAGE
        assert loader.engine.state is None
        assert loader.is_loading is False

    def test_loader_rejects_unhashable_map_values(self):
        """A quote built without from_dict still fails as a load error."""
        quote_client = MagicMock(spec=QuoteClient)
        quote_client.get_encrypted_quote.return_value = EncryptedQuote(text="X", author="a", map={"A": ["X"]})
        loader = RoundLoader(quote_client)
        assert loader.start_new_game() is False
        assert loader.last_error == USER_ERROR_MESSAGE

    def test_from_dict_uppercases_letters(self):
        quote = EncryptedQuote.from_dict({"text": "x", "author": "a", "map": {"a": "x"}})
        assert quote.map == {"A": "X"}
