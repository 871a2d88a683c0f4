"""Testes do rascunho de agendamento."""

from __future__ import annotations

from datetime import date

from app.domain.booking import BookingDraft


def test_empty_draft_lists_every_required_field() -> None:
    assert BookingDraft().missing_fields() == ("reason", "branch", "date", "time")


def test_zero_ids_count_as_selected() -> None:
    draft = BookingDraft(reason_id=0, branch_id=0, date=date(2026, 3, 16), time="08:00")

    assert draft.missing_fields() == ()


def test_with_changes_keeps_original_untouched() -> None:
    draft = BookingDraft(reason_id=10)

    changed = draft.with_changes(time="09:00")

    assert draft.time is None
    assert changed.missing_fields() == ("branch", "date")
