import pytest

from expense_import.columns import ImportField, classify_header, detect_columns


@pytest.mark.parametrize("header,expected", [
    ("Categoria", ImportField.CATEGORY),
    ("CONTRATO", ImportField.CONTRACT),
    ("Forma de Pagamento", ImportField.PAYMENT_METHOD),
    ("Método", ImportField.PAYMENT_METHOD),
    ("Banco Emissor", ImportField.BANK),
    ("Emissor", ImportField.BANK),
    ("Data do pagamento", ImportField.PAYMENT_DATE),
    ("Data do contrato", ImportField.PAYMENT_DATE),
    ("Valor do pagamento", ImportField.VALUE),
    ("Descrição da categoria", ImportField.ITEM),
    ("Valor (R$)", ImportField.VALUE),
    ("Descrição", ImportField.ITEM),
    ("NOME", ImportField.ITEM),
    ("Observações", None),
    ("", None),
    (None, None),
])
def test_classify_header(header, expected):
    assert classify_header(header) == expected


def test_first_field_in_checking_order_claims_ambiguous_header():
    assert classify_header("Banco de pagamento") == ImportField.PAYMENT_METHOD


def test_later_header_wins_for_same_field():
    columns = detect_columns(["Item", "Categoria", "Valor", "categoria do gasto"])
    assert columns.indexes[ImportField.CATEGORY] == 3
    assert columns.cell(["x", "TRANSPORTE", "1", "ALIMENTAÇÃO"], ImportField.CATEGORY) == "ALIMENTAÇÃO"


def test_unmatched_headers_are_ignored():
    columns = detect_columns(["Observações", "Item", "Valor"])
    assert set(columns.indexes) == {ImportField.ITEM, ImportField.VALUE}
    assert columns.missing_required() == []


def test_missing_required_columns():
    columns = detect_columns(["Categoria", "Contrato"])
    assert columns.missing_required() == [ImportField.ITEM, ImportField.VALUE]


def test_cell_outside_short_row_is_none():
    columns = detect_columns(["Item", "Valor", "Banco"])
    assert columns.cell(["Almoço", "10"], ImportField.BANK) is None


def test_describe_uses_original_header_text():
    columns = detect_columns([" Descrição ", "Valor"])
    assert columns.describe() == {"item": "Descrição", "value": "Valor"}


def test_value_column_named_after_payment():
    columns = detect_columns(["Item", "Valor do pagamento", "Forma de pagamento", "Data do contrato"])
    assert columns.indexes == {
        ImportField.ITEM: 0,
        ImportField.VALUE: 1,
        ImportField.PAYMENT_METHOD: 2,
        ImportField.PAYMENT_DATE: 3,
    }
    assert columns.missing_required() == []
