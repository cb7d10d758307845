from dataclasses import dataclass
from typing import Any

from snaplink.constants import ShortcodeDefaults
from snaplink.exceptions import BadConfigurationError


@dataclass(frozen=True)
class ShortenerSettings:
    """Shortcode allocation parameters.

    Attributes:
        code_length (int):
            Number of symbols per shortcode.
        alphabet (str):
            Symbols shortcodes are drawn from (no duplicates).
        max_attempts (int):
            Random draws per shorten request before CodeSpaceExhaustedError.
    """

    code_length: int = ShortcodeDefaults.LENGTH
    alphabet: str = ShortcodeDefaults.ALPHABET
    max_attempts: int = ShortcodeDefaults.MAX_ATTEMPTS

    def __post_init__(self):
        if not isinstance(self.code_length, int) or isinstance(self.code_length, bool) or self.code_length < 1:
            raise BadConfigurationError(f'code_length must be a positive integer (given value: {self.code_length!r}).')
        if not isinstance(self.alphabet, str) or not self.alphabet:
            raise BadConfigurationError(f'alphabet must be a non-empty string (given value: {self.alphabet!r}).')
        if len(set(self.alphabet)) != len(self.alphabet):
            raise BadConfigurationError(f'alphabet must not repeat symbols (given value: {self.alphabet!r}).')
        if not isinstance(self.max_attempts, int) or isinstance(self.max_attempts, bool) or self.max_attempts < 1:
            raise BadConfigurationError(f'max_attempts must be a positive integer (given value: {self.max_attempts!r}).')

    @property
    def code_space(self) -> int:
        return len(self.alphabet) ** self.code_length

    @classmethod
    def from_config(cls, section: dict[str, Any] | None) -> 'ShortenerSettings':
        """Build settings from the AppConfig 'shortener' section, unset keys fall back to defaults."""
        section = section or {}
        unknown = set(section) - {'code_length', 'alphabet', 'max_attempts'}
        if unknown:
            raise BadConfigurationError(f'Unknown shortener settings: {", ".join(sorted(unknown))}')
        return cls(**section)
