"""
Puzzle Service

Contains the puzzle state engine: field layout, letter-scoped guesses,
decrypt validation and the life counter.

The module-level functions are pure: each returns a new GameState and
leaves its input untouched. PuzzleEngine is the state container that
callers hold for the lifetime of a session.
"""

import copy
import string
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import ALPHABET, DEFAULT_LIVES
from ..exceptions import InvalidGuessError, RoundOverError
from ..models.game import CharacterField, FieldKind, GameOptions, GameState, WordField
from ..models.quote import EncryptedQuote, normalize_mapping
from .cipher_service import decrypt, invert_mapping

JOIN_CHARACTERS = "-'"


def classify_character(char: str) -> FieldKind:
    """Classifies a character, checked in priority order letter, number, space, join, symbol."""
    if char in string.ascii_letters:
        return FieldKind.LETTER
    if char in string.digits:
        return FieldKind.NUMBER
    if char.isspace():
        return FieldKind.SPACE
    if char in JOIN_CHARACTERS:
        return FieldKind.JOIN
    return FieldKind.SYMBOL


def build_fields(text: str) -> Tuple[List[WordField], int]:
    """
    Splits text on single spaces and lays out one CharacterField per character.

    Every word gets a trailing space-kind field whose index is the position
    of the separator that follows it.

    Returns:
        Tuple of (word fields, number of letter fields)
    """
    fields: List[WordField] = []
    offset = 0
    field_counter = 0

    for word_index, word in enumerate(text.split(" ")):
        characters = []
        for position, char in enumerate(word):
            kind = classify_character(char)
            field_index = -1
            if kind is FieldKind.LETTER:
                field_index = field_counter
                field_counter += 1
            characters.append(CharacterField(
                index=offset + position,
                field_index=field_index,
                kind=kind,
                cipher_letter=char
            ))

        characters.append(CharacterField(
            index=offset + len(word),
            field_index=-1,
            kind=FieldKind.SPACE,
            cipher_letter=""
        ))

        fields.append(WordField(index=word_index, word=word, characters=characters))
        offset += len(word) + 1

    return fields, field_counter


def init_game(encrypted: EncryptedQuote, options: Optional[GameOptions] = None) -> GameState:
    """
    Creates the state for a new round from an encrypted quote.

    Args:
        encrypted: Wire payload with a plaintext -> ciphertext map
        options: Round options; lives defaults to DEFAULT_LIVES

    Returns:
        Fresh GameState

    Raises:
        ValueError: If lives is not positive, or the map holds anything but
            letter pairs, is not injective or does not cover every letter
            of the ciphertext
    """
    options = options or GameOptions()
    lives = DEFAULT_LIVES if options.lives is None else options.lives
    if lives < 1:
        raise ValueError("Lives must be at least 1")

    text = encrypted.text.upper()
    solution_map = invert_mapping(normalize_mapping(encrypted.map))

    missing = sorted({char for char in text if char in ALPHABET and char not in solution_map})
    if missing:
        raise ValueError(f"Map does not cover cipher letters: {''.join(missing)}")

    fields, fields_count = build_fields(text)

    inputs: Dict[str, str] = {}
    for word in fields:
        for character in word.characters:
            if character.is_letter:
                inputs.setdefault(character.cipher_letter, "")

    return GameState(
        lives=lives,
        max_lives=lives,
        text=text,
        author=encrypted.author,
        solution_map=solution_map,
        decrypted_text=decrypt(text, solution_map),
        fields=fields,
        inputs=inputs,
        fields_count=fields_count,
        length=len(text),
        options=GameOptions(lives=lives)
    )


def is_valid_guess(state: GameState, cipher_letter: str, value: str) -> Tuple[bool, str]:
    """
    Validates a guess against the current round.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(cipher_letter, str) or cipher_letter not in state.inputs:
        return False, f"'{cipher_letter}' is not a cipher letter of this quote"

    if not isinstance(value, str):
        return False, "Guess must be a string"

    if value != "" and (len(value) != 1 or value not in ALPHABET):
        return False, "Guess must be a single letter A-Z or empty"

    return True, ""


def set_guess(state: GameState, cipher_letter: str, value: str, strict: bool = True) -> GameState:
    """
    Sets the guess for a cipher letter across every occurrence.

    Args:
        state: Current round state
        cipher_letter: Ciphertext letter being guessed
        value: Uppercase letter, or "" to clear
        strict: Raise on rejected guesses instead of ignoring them

    Returns:
        New GameState, or the same state when a lenient guess is rejected

    Raises:
        RoundOverError: Round already solved or lost (strict only)
        InvalidGuessError: Malformed guess (strict only)
    """
    if state.is_game_over:
        if strict:
            raise RoundOverError("Round is already over")
        return state

    is_valid, error = is_valid_guess(state, cipher_letter, value)
    if not is_valid:
        if strict:
            raise InvalidGuessError(error)
        return state

    new_state = copy.deepcopy(state)
    new_state.inputs[cipher_letter] = value
    for character in new_state.letter_fields():
        if character.cipher_letter == cipher_letter:
            character.user_value = value

    return new_state


def validate(state: GameState, strict: bool = True) -> GameState:
    """
    Checks every filled field against the solution and settles the round.

    Empty fields stay neutral. Any mismatch costs one life; the round is
    lost once lives reach zero and solved only when every cipher letter
    holds its correct plaintext letter.

    Raises:
        RoundOverError: Round already solved or lost (strict only)
    """
    if state.is_game_over:
        if strict:
            raise RoundOverError("Round is already over")
        return state

    new_state = copy.deepcopy(state)
    has_error = False

    for character in new_state.letter_fields():
        if character.user_value == "":
            character.is_error = False
            character.is_correct = False
        elif character.user_value == new_state.solution_map.get(character.cipher_letter):
            character.is_error = False
            character.is_correct = True
        else:
            character.is_error = True
            character.is_correct = False
            has_error = True

    new_state.is_solved = all(
        new_state.solution_map.get(letter) == value for letter, value in new_state.inputs.items()
    )

    if has_error:
        new_state.lives -= 1

    new_state.is_lost = has_error and new_state.lives <= 0

    return new_state


def _enabled_letter_fields(fields: List[WordField]) -> List[CharacterField]:
    return [
        character
        for word in fields
        for character in word.characters
        if character.is_letter and not character.is_correct
    ]


def next_field_index(fields: List[WordField], position: int) -> Optional[int]:
    """Returns the field_index of the first enabled letter field after position, or None."""
    for character in _enabled_letter_fields(fields):
        if character.field_index > position:
            return character.field_index
    return None


def previous_field_index(fields: List[WordField], position: int) -> Optional[int]:
    """Returns the field_index of the last enabled letter field before position, or None."""
    result = None
    for character in _enabled_letter_fields(fields):
        if character.field_index >= position:
            break
        result = character.field_index
    return result


class PuzzleEngine:
    """
    State container for a single puzzle session.

    All mutation goes through init, set_guess and validate. A solved or
    lost round only changes again after init starts a new one.
    """

    def __init__(self, options: Optional[GameOptions] = None, strict: bool = True):
        self.options = options or GameOptions()
        self.strict = strict
        self.state: Optional[GameState] = None

    @property
    def initialized(self) -> bool:
        return self.state is not None

    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("No round has been started")
        return self.state

    def init(self, encrypted: EncryptedQuote, options: Optional[GameOptions] = None) -> GameState:
        """Starts a new round, replacing any previous state."""
        if options is not None:
            self.options = options
        self.state = init_game(encrypted, self.options)
        return self.state

    def set_guess(self, cipher_letter: str, value: str) -> GameState:
        self.state = set_guess(self._require_state(), cipher_letter, value, strict=self.strict)
        return self.state

    def validate(self) -> GameState:
        self.state = validate(self._require_state(), strict=self.strict)
        return self.state

    def reset(self) -> None:
        """Discards the current round."""
        self.state = None

    def next_field(self, position: int) -> Optional[int]:
        return next_field_index(self._require_state().fields, position)

    def previous_field(self, position: int) -> Optional[int]:
        return previous_field_index(self._require_state().fields, position)
