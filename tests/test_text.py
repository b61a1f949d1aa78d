import pytest

from expense_import.text import normalize_text


def test_lowercases_and_strips_accents():
    assert normalize_text("SECRETARIA DA SAÚDE") == "secretaria da saude"
    assert normalize_text("Cartão de Crédito") == "cartao de credito"


def test_trims_and_collapses_whitespace():
    assert normalize_text("  Educação \t  Física\n") == "educacao fisica"


def test_empty_and_none():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""
    assert normalize_text("   ") == ""


def test_non_string_cells():
    assert normalize_text(12.5) == "12.5"


@pytest.mark.parametrize("value", [
    "Administração Geral",
    "  PIX  ",
    "TÁXI/UBER",
    "Lava-Rápido   do   Zé",
    "Ñandú",
    "",
])
def test_idempotent(value):
    once = normalize_text(value)
    assert normalize_text(once) == once
