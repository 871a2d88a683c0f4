"""Formatação de horários para exibição (12h com AM/PM)."""

from __future__ import annotations


def format_time_for_display(value: str | None) -> str:
    """Converte `HH:MM` (24h) para `h:MM AM|PM`.

    Vazio vira string vazia; valores sem `:` ou fora de faixa voltam
    inalterados.
    """
    if not value:
        return ""
    cleaned = value.strip()
    if ":" not in cleaned:
        return value

    hours_text, minutes_text = cleaned.split(":")[:2]
    try:
        hours = int(hours_text)
        minutes = int(minutes_text)
    except ValueError:
        return value
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return value

    suffix = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"


__all__ = ["format_time_for_display"]
