"""
Tests for the token dictionary and language detection primitives.
"""

import pytest
import sys
import os
from dataclasses import FrozenInstanceError, asdict

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from interac.tokens import TOKENS, TOKEN_KEYS
from interac.language import starts_with_token, contains_token, token_starts_line


class TestTokenDictionary:
    """Test the per-language marker records."""

    def test_languages_in_priority_order(self):
        """English is declared before French."""
        assert tuple(t.language for t in TOKENS) == ('en', 'fr')

    def test_every_language_has_every_key(self):
        """No partial dictionaries."""
        for tokens in TOKENS:
            markers = asdict(tokens)
            markers.pop('language')
            assert tuple(markers.keys()) == TOKEN_KEYS
            assert all(markers.values())

    def test_expected_keys(self):
        """Exactly the six documented markers exist."""
        assert set(TOKEN_KEYS) == {
            'greeting', 'message', 'reference', 'subject_start', 'automatic_deposit', 'sent'
        }

    def test_markers_are_lowercase(self):
        """Markers are compared against lowercased text."""
        for tokens in TOKENS:
            for key in TOKEN_KEYS:
                marker = getattr(tokens, key)
                assert marker == marker.lower()

    def test_tokens_are_immutable(self):
        """Records cannot be mutated at runtime."""
        with pytest.raises(FrozenInstanceError):
            TOKENS[0].greeting = 'hello'


class TestStartsWithToken:
    """Test prefix matching."""

    def test_english_greeting(self):
        assert starts_with_token("hi sample landlord,", 'greeting') == 'en'

    def test_french_greeting(self):
        assert starts_with_token("bonjour sample landlord,", 'greeting') == 'fr'

    def test_subject_start(self):
        assert starts_with_token("interac e-transfer: a money transfer", 'subject_start') == 'en'
        assert starts_with_token("virement interac : un virement", 'subject_start') == 'fr'

    def test_marker_not_at_start(self):
        """A marker elsewhere in the text is not a prefix match."""
        assert starts_with_token("fwd: interac e-transfer: a money transfer", 'subject_start') is None

    def test_no_match(self):
        assert starts_with_token("hello there", 'subject_start') is None

    def test_empty_text(self):
        assert starts_with_token("", 'greeting') is None

    def test_case_sensitive_input(self):
        """Callers must lowercase; upper-case text does not match."""
        assert starts_with_token("HI SAMPLE LANDLORD", 'greeting') is None

    def test_priority_when_both_match(self):
        """The shared "message" marker resolves to the first declared language."""
        assert starts_with_token("message: april rent", 'message') == 'en'

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown token key"):
            starts_with_token("hi", 'farewell')


class TestContainsToken:
    """Test substring matching."""

    def test_english_auto_deposit(self):
        text = "the money has been automatically deposited into your account"
        assert contains_token(text, 'automatic_deposit') == 'en'

    def test_french_auto_deposit(self):
        text = "les fonds ont été déposés automatiquement"
        assert contains_token(text, 'automatic_deposit') == 'fr'

    def test_english_wins_when_both_present(self):
        text = "automatically deposited / déposé automatiquement"
        assert contains_token(text, 'automatic_deposit') == 'en'

    def test_absent(self):
        assert contains_token("please click the link to deposit", 'automatic_deposit') is None


class TestTokenStartsLine:
    """Test line scanning."""

    def test_returns_original_line(self):
        lines = ["Hi SAMPLE LANDLORD,", "Message: April rent"]
        assert token_starts_line(lines, 'message') == "Message: April rent"

    def test_first_matching_line(self):
        lines = ["Message: first", "Message: second"]
        assert token_starts_line(lines, 'message') == "Message: first"

    def test_language_priority_before_line_order(self):
        """An English match on a later line beats a French match on an earlier one."""
        lines = ["Référence : FR-1", "Reference Number: EN-1"]
        assert token_starts_line(lines, 'reference') == "Reference Number: EN-1"

    def test_french_reference(self):
        lines = ["Bonjour SAMPLE LANDLORD,", "Référence : CA5678efgh"]
        assert token_starts_line(lines, 'reference') == "Référence : CA5678efgh"

    def test_no_line(self):
        assert token_starts_line(["Hi", "Thanks"], 'reference') is None

    def test_empty_lines(self):
        assert token_starts_line([], 'message') is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
