"""
Tests for input cleaning and command validation

Tests cover:
- Trimming and case folding
- Idempotence of cleaning
- Command membership after cleaning
- Validator behaviour for the interactive prompt
"""
import pytest
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError

from notion_mail.cli.sanitize import (
    COMMANDS,
    INVALID_COMMAND_MESSAGE,
    REQUIRED_FIELD_MESSAGE,
    Command,
    CommandValidator,
    RequiredValidator,
    clean,
    is_valid_command,
    validate_command,
)

SAMPLES = ["", "   ", "tristan", "TrIsTAn", "  TrI  sTAn     ", " AbC ", "\tREAD\n", "ünïCÖDE"]


class TestClean:
    """Tests for clean()"""

    def test_strips_and_lowercases(self):
        assert clean(" AbC ") == "abc"

    def test_keeps_inner_whitespace(self):
        assert clean("  TrI  sTAn     ") == "tri  stan"

    def test_whitespace_only_becomes_empty(self):
        assert clean("          ") == ""
        assert clean("") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        assert clean(clean(text)) == clean(text)


class TestCommandValidation:
    """Tests for command membership checks"""

    def test_command_set(self):
        assert COMMANDS == {"send", "read", "help", "delete", "exit"}

    @pytest.mark.parametrize("text", ["exit", "  exit", "  exIT  ", "SEND", " read\t", "Delete", "help"])
    def test_valid_commands(self, text):
        assert is_valid_command(text) is True
        assert validate_command(text) is True

    @pytest.mark.parametrize("text", ["", "          ", "INVALIDexit", "  ex  IT  ", "quit", "sendx"])
    def test_invalid_commands(self, text):
        assert is_valid_command(text) is False
        assert validate_command(text) == INVALID_COMMAND_MESSAGE

    @pytest.mark.parametrize("text", SAMPLES + ["exit", " Read "])
    def test_validity_is_membership_after_cleaning(self, text):
        assert is_valid_command(text) == (clean(text) in COMMANDS)

    def test_rejection_message_lists_commands(self):
        for command in Command:
            assert command.value in INVALID_COMMAND_MESSAGE


class TestCommandValidator:
    """Tests for the prompt_toolkit validator"""

    def test_accepts_known_command(self):
        CommandValidator().validate(Document("  SeNd "))

    def test_rejects_unknown_command(self):
        with pytest.raises(ValidationError) as exc_info:
            CommandValidator().validate(Document("launch"))
        assert exc_info.value.message == INVALID_COMMAND_MESSAGE


class TestRequiredValidator:
    """Tests for RequiredValidator"""

    def test_accepts_text(self):
        RequiredValidator().validate(Document("  Bob "))

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_rejects_blank(self, text):
        with pytest.raises(ValidationError) as exc_info:
            RequiredValidator().validate(Document(text))
        assert exc_info.value.message == REQUIRED_FIELD_MESSAGE
