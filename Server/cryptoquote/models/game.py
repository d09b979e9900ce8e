"""
Game Data Models

Contains all puzzle-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FieldKind(Enum):
    """Character classification used to lay out the puzzle."""
    LETTER = "letter"
    NUMBER = "number"
    SPACE = "space"
    JOIN = "join"
    SYMBOL = "symbol"


@dataclass
class CharacterField:
    """A single character of the ciphertext."""
    index: int
    field_index: int  # -1 unless kind is LETTER
    kind: FieldKind
    cipher_letter: str
    is_error: bool = False
    is_correct: bool = False
    user_value: str = ""

    @property
    def is_letter(self) -> bool:
        return self.kind is FieldKind.LETTER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "field_index": self.field_index,
            "kind": self.kind.value,
            "cipher_letter": self.cipher_letter,
            "is_error": self.is_error,
            "is_correct": self.is_correct,
            "user_value": self.user_value,
        }


@dataclass
class WordField:
    """A space-delimited word of the ciphertext."""
    index: int
    word: str
    characters: List[CharacterField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "word": self.word,
            "characters": [character.to_dict() for character in self.characters],
        }


@dataclass
class GameOptions:
    """Options accepted when a round starts."""
    lives: Optional[int] = None


@dataclass
class GameState:
    """
    Puzzle state for one round.

    `solution_map` (cipher letter -> plaintext letter) and `decrypted_text`
    are never part of the render view returned by `to_dict`.
    """
    lives: int
    max_lives: int
    text: str
    author: str
    solution_map: Dict[str, str]
    decrypted_text: str
    fields: List[WordField]
    inputs: Dict[str, str]
    fields_count: int
    length: int
    options: GameOptions = field(default_factory=GameOptions)
    is_solved: bool = False
    is_lost: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.is_solved or self.is_lost

    def letter_fields(self) -> List[CharacterField]:
        """Letter-kind fields in text order."""
        return [character for word in self.fields for character in word.characters if character.is_letter]

    def to_dict(self) -> Dict[str, Any]:
        """Render view of the state. Safe to send to the player."""
        return {
            "lives": self.lives,
            "max_lives": self.max_lives,
            "text": self.text,
            "author": self.author,
            "inputs": dict(self.inputs),
            "fields": [word.to_dict() for word in self.fields],
            "fields_count": self.fields_count,
            "length": self.length,
            "is_solved": self.is_solved,
            "is_lost": self.is_lost,
            "is_game_over": self.is_game_over,
        }

    def to_debug_dict(self) -> Dict[str, Any]:
        """Full state including the solution, for test harnesses only."""
        data = self.to_dict()
        data["solution_map"] = dict(self.solution_map)
        data["decrypted_text"] = self.decrypted_text
        return data
