"""PassForge -- password generation with AI strength analysis.

Core functions for building passwords from a configurable set of character
classes.  Strength analysis lives in :mod:`passforge.analyzer`.
"""

import secrets
from dataclasses import dataclass

from passforge.analyzer import (
    AnalysisError,
    StrengthResult,
    analyze_strength,
    strength_label,
)


# ── Character classes ──────────────────────────────────────────────────────

UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?/~"

# Fixed order: earlier classes win the guaranteed slots when length is tight.
CHARACTER_CLASSES = {
    "uppercase": UPPERCASE,
    "lowercase": LOWERCASE,
    "numbers": NUMBERS,
    "symbols": SYMBOLS,
}

MIN_LENGTH = 8
MAX_LENGTH = 64
DEFAULT_LENGTH = 16


class ValidationError(ValueError):
    """Raised when a generation request cannot produce a password."""


# ── Configuration ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GenerationConfig:
    """Length and enabled character classes for one password."""

    length: int = DEFAULT_LENGTH
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True

    def __post_init__(self) -> None:
        if not MIN_LENGTH <= self.length <= MAX_LENGTH:
            raise ValidationError(
                f"Password length must be between {MIN_LENGTH} and {MAX_LENGTH}"
            )

    def enabled_sets(self) -> list[str]:
        """Return the character sets of every enabled class, in fixed order."""
        flags = {
            "uppercase": self.include_uppercase,
            "lowercase": self.include_lowercase,
            "numbers": self.include_numbers,
            "symbols": self.include_symbols,
        }
        return [CHARACTER_CLASSES[name] for name, on in flags.items() if on]


# ── Password generation ────────────────────────────────────────────────────


def _shuffle(chars: list[str]) -> None:
    # Fisher-Yates shuffle with cryptographic randomness
    for i in range(len(chars) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        chars[i], chars[j] = chars[j], chars[i]


def build_password(length: int, sets: list[str]) -> str:
    """Build a password of *length* characters drawn from *sets*.

    One character from each set is guaranteed while room remains, in the
    order given.  The rest is sampled from the union of all sets and the
    result is shuffled.  Uses :mod:`secrets` throughout.
    """
    alphabet = "".join(sets)
    if not alphabet:
        raise ValidationError("no character set selected")

    chars: list[str] = []
    for charset in sets:
        if len(chars) < length:
            chars.append(secrets.choice(charset))

    chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
    _shuffle(chars)
    return "".join(chars)


def generate_password(config: GenerationConfig | None = None) -> str:
    """Generate a cryptographically secure random password for *config*.

    Guarantees at least one character from each enabled character class.
    Raises :class:`ValidationError` when no class is enabled.
    """
    config = config or GenerationConfig()
    return build_password(config.length, config.enabled_sets())


__all__ = [
    "AnalysisError",
    "CHARACTER_CLASSES",
    "DEFAULT_LENGTH",
    "GenerationConfig",
    "LOWERCASE",
    "MAX_LENGTH",
    "MIN_LENGTH",
    "NUMBERS",
    "StrengthResult",
    "SYMBOLS",
    "UPPERCASE",
    "ValidationError",
    "analyze_strength",
    "build_password",
    "generate_password",
    "strength_label",
]
