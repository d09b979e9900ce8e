"""Tests for the HTTP endpoints."""
import json

import pytest

from cryptoquote import create_app
from cryptoquote.config import QUOTES, TestingConfig
from cryptoquote.exceptions import EmptyCatalogError
from cryptoquote.services.cipher_service import decrypt, invert_mapping
from cryptoquote.services.game_service import GAME_NOT_FOUND, ROUND_OVER, get_game_service
from cryptoquote.utils.game_logger import game_logger

CATALOG_TEXTS = {quote["text"].upper() for quote in QUOTES}


def solution_for(game_id):
    """Peek at the server-side solution of a session."""
    return get_game_service().games[game_id].state.solution_map


def start_game(client, **body):
    response = client.post("/api/games", json=body)
    assert response.status_code == 200
    data = response.get_json()
    return data["game_id"], data["state"]


class TestQuotes:
    @pytest.mark.parametrize("method", ["get", "post"])
    def test_returns_encrypted_quote(self, client, method):
        response = getattr(client, method)("/quotes?dt=2026-10-19T00:00:00Z")
        assert response.status_code == 200
        assert response.content_type.startswith("application/json")
        data = response.get_json()
        assert set(data) == {"text", "author", "map"}

    def test_map_is_plaintext_to_ciphertext(self, client):
        for _ in range(10):
            data = client.get("/quotes").get_json()
            plaintext = decrypt(data["text"], invert_mapping(data["map"]))
            assert plaintext in CATALOG_TEXTS
            assert set(data["map"]) == {char for char in plaintext if char.isalpha() and char.isascii()}

    def test_generation_failure_is_500(self, client, monkeypatch):
        from cryptoquote.services.cipher_service import get_cipher_service

        def boom():
            raise RuntimeError("generator down")

        monkeypatch.setattr(get_cipher_service(), "generate", boom)
        response = client.get("/quotes")
        assert response.status_code == 500
        assert response.get_json()["success"] is False


class TestGames:
    def test_new_game_hides_solution(self, client):
        game_id, state = start_game(client)
        assert game_id
        assert state["lives"] == 5
        assert "solution_map" not in state
        assert "decrypted_text" not in state
        assert all(value == "" for value in state["inputs"].values())

    def test_custom_lives(self, client):
        _, state = start_game(client, lives=2)
        assert state["max_lives"] == 2

    @pytest.mark.parametrize("lives", [0, -1, "3", True])
    def test_invalid_lives(self, client, lives):
        response = client.post("/api/games", json={"lives": lives})
        assert response.status_code == 400

    def test_get_state(self, client):
        game_id, _ = start_game(client)
        response = client.get(f"/api/games/{game_id}")
        assert response.status_code == 200
        assert response.get_json()["success"] is True

    def test_unknown_game(self, client):
        assert client.get("/api/games/nope").status_code == 404
        assert client.post("/api/games/nope/decrypt").status_code == 404
        assert client.post("/api/games/nope/guess", json={"letter": "A", "value": "B"}).status_code == 404
        assert client.delete("/api/games/nope").status_code == 404

    def test_guess_propagates(self, client):
        game_id, state = start_game(client)
        letter = next(iter(state["inputs"]))
        response = client.post(f"/api/games/{game_id}/guess", json={"letter": letter.lower(), "value": "q"})
        assert response.status_code == 200
        new_state = response.get_json()["state"]
        assert new_state["inputs"][letter] == "Q"
        for word in new_state["fields"]:
            for character in word["characters"]:
                if character["cipher_letter"] == letter:
                    assert character["user_value"] == "Q"

    @pytest.mark.parametrize("body", [{}, {"letter": "A"}, {"value": "A"}])
    def test_guess_requires_letter_and_value(self, client, body):
        game_id, _ = start_game(client)
        assert client.post(f"/api/games/{game_id}/guess", json=body).status_code == 400

    def test_invalid_guess(self, client):
        game_id, state = start_game(client)
        letter = next(iter(state["inputs"]))
        response = client.post(f"/api/games/{game_id}/guess", json={"letter": letter, "value": "12"})
        assert response.status_code == 400

    def test_solve_round(self, client):
        game_id, _ = start_game(client)
        for cipher, plain in solution_for(game_id).items():
            client.post(f"/api/games/{game_id}/guess", json={"letter": cipher, "value": plain})
        response = client.post(f"/api/games/{game_id}/decrypt")
        state = response.get_json()["state"]
        assert state["is_solved"] is True
        assert state["is_game_over"] is True
        assert state["lives"] == 5

        again = client.post(f"/api/games/{game_id}/decrypt")
        assert again.status_code == 409
        guess = client.post(f"/api/games/{game_id}/guess", json={"letter": cipher, "value": plain})
        assert guess.status_code == 409

    def test_lose_round(self, client):
        game_id, _ = start_game(client, lives=1)
        cipher, plain = next(iter(solution_for(game_id).items()))
        wrong = "A" if plain != "A" else "B"
        client.post(f"/api/games/{game_id}/guess", json={"letter": cipher, "value": wrong})
        state = client.post(f"/api/games/{game_id}/decrypt").get_json()["state"]
        assert state["lives"] == 0
        assert state["is_lost"] is True

    def test_delete(self, client):
        game_id, _ = start_game(client)
        assert client.delete(f"/api/games/{game_id}").status_code == 200
        assert client.get(f"/api/games/{game_id}").status_code == 404


class TestGuessValidation:
    def test_unknown_game(self, client):
        assert get_game_service().is_valid_guess("nope", "A", "B") == (False, GAME_NOT_FOUND)

    def test_valid_and_invalid_values(self, client):
        game_id, state = start_game(client)
        letter = next(iter(state["inputs"]))
        service = get_game_service()
        assert service.is_valid_guess(game_id, letter, "Q") == (True, "")
        assert service.is_valid_guess(game_id, letter, "") == (True, "")
        assert service.is_valid_guess(game_id, letter, "QQ")[0] is False
        assert service.is_valid_guess(game_id, "?", "Q")[0] is False

    def test_finished_round(self, client):
        game_id, _ = start_game(client)
        for cipher, plain in solution_for(game_id).items():
            client.post(f"/api/games/{game_id}/guess", json={"letter": cipher, "value": plain})
        client.post(f"/api/games/{game_id}/decrypt")
        assert get_game_service().is_valid_guess(game_id, cipher, plain) == (False, ROUND_OVER)
        response = client.post(f"/api/games/{game_id}/guess", json={"letter": cipher, "value": plain})
        assert response.status_code == 409
        assert response.get_json()["error"] == ROUND_OVER

    def test_invalid_guess_leaves_state(self, client):
        game_id, state = start_game(client)
        letter = next(iter(state["inputs"]))
        response = client.post(f"/api/games/{game_id}/guess", json={"letter": letter, "value": "12"})
        assert response.status_code == 400
        assert get_game_service().get_game_state(game_id).inputs[letter] == ""


class TestSessionRemovedMidRequest:
    def test_guess_returns_404(self, client, monkeypatch):
        game_id, state = start_game(client)
        letter = next(iter(state["inputs"]))
        monkeypatch.setattr(get_game_service(), "make_guess", lambda *args: None)
        response = client.post(f"/api/games/{game_id}/guess", json={"letter": letter, "value": "Q"})
        assert response.status_code == 404
        assert response.get_json()["success"] is False

    def test_decrypt_returns_404(self, client, monkeypatch):
        game_id, _ = start_game(client)
        monkeypatch.setattr(get_game_service(), "decrypt", lambda *args: None)
        response = client.post(f"/api/games/{game_id}/decrypt")
        assert response.status_code == 404
        assert response.get_json()["success"] is False

class TestHealth:
    def test_health(self, client):
        start_game(client)
        data = client.get("/api/health").get_json()
        assert data["status"] == "healthy"
        assert data["active_games"] == 1
        assert data["catalog_size"] == len(QUOTES)

    def test_health_reports_no_log_details(self, client):
        data = client.get("/api/health").get_json()
        assert set(data) == {"status", "active_games", "catalog_size"}


class TestLogSanitizer:
    def test_strips_solution_data(self):
        sanitized = game_logger._sanitize_response_data({
            "text": "XYZ",
            "author": "a",
            "map": {"A": "X"},
            "state": {"lives": 5, "inputs": {"X": "A", "Y": ""}, "solution_map": {"X": "A"}},
        })
        assert "map" not in sanitized
        assert sanitized["text"] == "XYZ"
        assert sanitized["state"]["filled_inputs"] == 1
        assert "solution_map" not in sanitized["state"]

    def test_non_dict_payload(self):
        assert game_logger._sanitize_response_data(["x"]) == {"data_type": "list"}


class TestStartup:
    def test_empty_catalog_file_is_fatal(self, tmp_path):
        path = tmp_path / "quotes.json"
        path.write_text(json.dumps({"quotes": []}))

        class EmptyConfig(TestingConfig):
            QUOTES_FILE = str(path)

        with pytest.raises(EmptyCatalogError):
            create_app(EmptyConfig)

    def test_catalog_file(self, tmp_path, rng):
        path = tmp_path / "quotes.json"
        path.write_text(json.dumps([{"text": "Custom quote", "author": "Me"}]))

        class FileConfig(TestingConfig):
            QUOTES_FILE = str(path)

        client = create_app(FileConfig, rng).test_client()
        data = client.get("/quotes").get_json()
        assert data["author"] == "Me"
        assert decrypt(data["text"], invert_mapping(data["map"])) == "CUSTOM QUOTE"
