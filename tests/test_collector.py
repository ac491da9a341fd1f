"""Unit tests for answer collection (create_nrtgmp.collector).

Tests cover:
- Question order and the conditional dialect question
- Cancellation at each question
- RichPrompter confirm/select on top of rich.prompt (mocked)
"""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from create_nrtgmp.collector import (
    DIALECT_CHOICES,
    PromptCancelled,
    RichPrompter,
    collect_answers,
)
from create_nrtgmp.models import Dialect


class TestCollectAnswers:
    @pytest.mark.unit
    def test_all_yes_with_default_dialect(self, scripted_prompter):
        prompter = scripted_prompter(confirms=[True, True], selects=[None])
        answers = collect_answers(prompter)
        assert answers.key == (True, True, Dialect.POSTGRES)
        assert prompter.asked == [
            "Do you want MongoDB?",
            "Do you want Sequelize?",
            "Select Dialect of Sequelize:",
        ]

    @pytest.mark.unit
    def test_selected_dialect_returned(self, scripted_prompter):
        prompter = scripted_prompter(confirms=[False, True], selects=[Dialect.MSSQL])
        answers = collect_answers(prompter)
        assert answers.key == (False, True, Dialect.MSSQL)

    @pytest.mark.unit
    def test_dialect_not_asked_without_sequelize(self, scripted_prompter):
        prompter = scripted_prompter(confirms=[True, False])
        answers = collect_answers(prompter)
        assert answers.relational_dialect is None
        assert "Select Dialect of Sequelize:" not in prompter.asked

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "confirms, selects",
        [
            (["cancel"], []),
            ([True, "cancel"], []),
            ([True, True], ["cancel"]),
        ],
    )
    def test_cancel_at_any_question(self, scripted_prompter, cancel_answer, confirms, selects):
        confirms = [cancel_answer if c == "cancel" else c for c in confirms]
        selects = [cancel_answer if s == "cancel" else s for s in selects]
        prompter = scripted_prompter(confirms=confirms, selects=selects)
        with pytest.raises(PromptCancelled):
            collect_answers(prompter)

    @pytest.mark.unit
    def test_dialect_choices_cover_every_dialect(self):
        assert [value for _, value in DIALECT_CHOICES] == list(Dialect)
        assert DIALECT_CHOICES[0] == ("PostgreSQL", Dialect.POSTGRES)


class TestRichPrompter:
    @pytest.fixture
    def prompter(self) -> RichPrompter:
        return RichPrompter(console=Console(file=io.StringIO()))

    @pytest.mark.unit
    def test_confirm_delegates_to_rich(self, prompter):
        with patch("create_nrtgmp.collector.Confirm.ask", return_value=False) as ask:
            assert prompter.confirm("Do you want MongoDB?") is False
        ask.assert_called_once()
        assert ask.call_args.kwargs["default"] is True

    @pytest.mark.unit
    @pytest.mark.parametrize("error", [KeyboardInterrupt, EOFError])
    def test_confirm_interrupt_cancels(self, prompter, error):
        with patch("create_nrtgmp.collector.Confirm.ask", side_effect=error):
            with pytest.raises(PromptCancelled):
                prompter.confirm("Do you want MongoDB?")

    @pytest.mark.unit
    def test_select_maps_number_to_value(self, prompter):
        with patch("create_nrtgmp.collector.Prompt.ask", return_value="4") as ask:
            assert prompter.select("Pick", DIALECT_CHOICES) is Dialect.SQLITE
        assert ask.call_args.kwargs["choices"] == ["1", "2", "3", "4", "5"]
        assert ask.call_args.kwargs["default"] == "1"

    @pytest.mark.unit
    def test_select_default_index(self, prompter):
        with patch("create_nrtgmp.collector.Prompt.ask", return_value="2") as ask:
            prompter.select("Pick", DIALECT_CHOICES, default_index=1)
        assert ask.call_args.kwargs["default"] == "2"

    @pytest.mark.unit
    def test_select_interrupt_cancels(self, prompter):
        with patch("create_nrtgmp.collector.Prompt.ask", side_effect=KeyboardInterrupt):
            with pytest.raises(PromptCancelled):
                prompter.select("Pick", DIALECT_CHOICES)

    @pytest.mark.unit
    def test_select_without_choices_raises(self, prompter):
        with pytest.raises(ValueError):
            prompter.select("Pick", [])
