import json

from expense_import.cli import main

CSV = (
    "Item,Valor,Categoria,Contrato,Banco\n"
    "Pedágio rodovia,12.50,PEDÁGIO,saude,ALELO\n"
    "Brinquedo,15.00,Brinquedos,IMPOSTO,\n"
)


def test_analyze_reports_problems(tmp_path, capsys):
    path = tmp_path / "despesas.csv"
    path.write_text(CSV, encoding="utf-8")

    assert main(["analyze", str(path)]) == 1

    out = capsys.readouterr().out
    assert "imported: 1" in out
    assert 'Linha 3: Categoria "Brinquedos" não reconhecida' in out
    assert 'Linha 2: contrato "saude" → "SECRETARIA DA SAÚDE"' in out


def test_analyze_prints_records(tmp_path, capsys):
    path = tmp_path / "ok.csv"
    path.write_text(CSV.splitlines()[0] + "\n" + CSV.splitlines()[1] + "\n", encoding="utf-8")

    assert main(["analyze", str(path), "--records"]) == 0

    lines = capsys.readouterr().out.splitlines()
    start = lines.index("[")
    end = lines.index("]", start)
    records = json.loads("\n".join(lines[start:end + 1]))
    assert records[0]["contractNumber"] == "SECRETARIA DA SAÚDE"
    assert records[0]["value"] == "12.50"


def test_analyze_missing_file(tmp_path):
    assert main(["analyze", str(tmp_path / "nope.xlsx")]) == 2
