import pytest

from expense_import.matching import Accepted, FieldMatcher, Rejected, match
from expense_import.rules import (
    BANCOS,
    BANK_ALIASES,
    CATEGORIAS,
    CONTRACT_ALIASES,
    CONTRATOS,
    FORMAS_PAGAMENTO,
    PAYMENT_METHOD_ALIASES,
)


def test_contract_alias():
    result = match("secretaria de economia", CONTRATOS, CONTRACT_ALIASES)
    assert result == Accepted("SECRETARIA DA ECONOMIA")
    assert result.via_alias


def test_payment_method_exact():
    assert match("PIX", FORMAS_PAGAMENTO) == Accepted("PIX")


def test_payment_method_trailing_whitespace():
    assert match("pix ", FORMAS_PAGAMENTO) == Accepted("PIX")


def test_unmapped_contract_is_rejected():
    assert match("Administração Geral", CONTRATOS, CONTRACT_ALIASES) == Rejected("Administração Geral")


def test_unrelated_category_is_rejected():
    assert match("xyz-unrelated", CATEGORIAS) == Rejected("xyz-unrelated")


@pytest.mark.parametrize("canonical,aliases", [
    (CONTRATOS, CONTRACT_ALIASES),
    (CATEGORIAS, None),
    (FORMAS_PAGAMENTO, PAYMENT_METHOD_ALIASES),
    (BANCOS, BANK_ALIASES),
])
def test_every_canonical_value_matches_itself(canonical, aliases):
    matcher = FieldMatcher(canonical, aliases)
    for entry in canonical:
        result = matcher.match(entry)
        assert result == Accepted(entry)
        assert not result.via_alias


@pytest.mark.parametrize("value", ["educação", "EDUCACAO", "Educação"])
def test_case_and_accent_insensitive(value):
    assert match(value, ["EDUCAÇÃO", "SAÚDE"]) == Accepted("EDUCAÇÃO")


def test_short_values_never_match_partially():
    assert match("bb", CONTRATOS) == Rejected("bb")
    assert match("ar", CATEGORIAS) == Rejected("ar")
    assert match("pi", FORMAS_PAGAMENTO) == Rejected("pi")


def test_short_values_still_match_exactly_or_by_alias():
    assert match("Bb", ["BB", "BB SALINAS"]) == Accepted("BB")
    assert match("BB", BANCOS, BANK_ALIASES) == Accepted("BANCO DO BRASIL")


def test_partial_match_in_both_directions():
    # value inside a canonical entry
    assert match("salinas", CONTRATOS) == Accepted("BB SALINAS")
    # canonical entry inside the value
    assert match("combustível gasolina", CATEGORIAS) == Accepted("COMBUSTÍVEL")


def test_list_order_breaks_ties():
    assert match("mato grosso", CONTRATOS) == Accepted("BB MATO GROSSO")
    assert match("mato grosso", list(reversed(CONTRATOS))) == Accepted("BB MATO GROSSO LOTE 2")


def test_exact_beats_partial():
    assert match("impostos", CATEGORIAS) == Accepted("IMPOSTOS")
    assert match("imposto", CONTRATOS) == Accepted("IMPOSTO")


def test_alias_wins_over_partial_match():
    canonical = ["POSTO DE SAÚDE CENTRAL", "SECRETARIA DA SAÚDE"]
    aliases = {"saude": "SECRETARIA DA SAÚDE"}

    assert match("Saúde", canonical) == Accepted("POSTO DE SAÚDE CENTRAL")
    assert match("Saúde", canonical, aliases) == Accepted("SECRETARIA DA SAÚDE")


def test_alias_to_missing_target_is_rejected():
    canonical = ["BB SALINAS", "ECONOMIA GERAL"]
    assert match("economia", canonical, CONTRACT_ALIASES) == Rejected("economia")


def test_accented_alias_keys_are_normalized():
    assert match("SAUDE", CONTRATOS, CONTRACT_ALIASES) == Accepted("SECRETARIA DA SAÚDE")
    assert match("administracao", CONTRATOS, CONTRACT_ALIASES) == Accepted("SECRETARIA DA ADMINISTRAÇÃO")


@pytest.mark.parametrize("value", [None, "", "   "])
def test_no_value_present(value):
    assert match(value, CATEGORIAS) is None


def test_missing_canonical_list_is_a_caller_error():
    with pytest.raises(ValueError):
        FieldMatcher(None)


def test_alias_spelling_of_its_own_target_is_not_an_alias_hit():
    result = match("Secretaria da Saude", CONTRATOS, CONTRACT_ALIASES)
    assert result == Accepted("SECRETARIA DA SAÚDE")
    assert not result.via_alias
