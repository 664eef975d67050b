import os, tempfile
from report.report import df_clientes, df_investimentos, pct_ou_traco, salvar_csv, grafico_png, html_relatorio, pdf_relatorio

def _fake_linhas():
    base = {"id": "1", "tipo": "CDB", "modalidade": "Pré Fixado", "titulo": "", "taxa": "12,00% a.a.",
            "data_aporte": "2024-01-02", "data_vencimento": "2025-01-02", "dias_corridos": 366,
            "dias_uteis": 262, "taxa_efetiva": 0.1242, "aliquota_ir": 17.5, "valor_iof": 0.0}
    return [
        dict(base, cliente="A", valor_aporte=100.0, montante_bruto=112.42, rendimento_bruto=12.42,
             valor_ir=2.17, rendimento_liquido=10.25, patrimonio_liquido=110.25),
        dict(base, id="2", cliente="B", valor_aporte=100.0, montante_bruto=100.0, rendimento_bruto=0.0,
             valor_ir=0.0, rendimento_liquido=0.0, patrimonio_liquido=100.0, dias_corridos=0, dias_uteis=0,
             aliquota_ir=0.0),
    ]

def test_df_investimentos_colunas():
    df = df_investimentos(_fake_linhas())
    assert list(df["Cliente"]) == ["A", "B"]
    assert "Rent. Líquida (R$)" in df.columns
    assert "id" not in df.columns

def test_df_clientes():
    linhas = _fake_linhas() + [dict(_fake_linhas()[0], id="3")]
    df = df_clientes(linhas)
    assert list(df["Cliente"]) == ["A", "B"]
    assert list(df["Investimentos"]) == [2, 1]
    assert list(df["Valor Aplicado (R$)"]) == [200.0, 100.0]
    assert list(df["Patrimônio Projetado (R$)"]) == [220.5, 100.0]

def test_relatorios_arquivos():
    with tempfile.TemporaryDirectory() as d:
        csv_p = os.path.join(d, "r.csv")
        png = os.path.join(d, "g.png")
        html = os.path.join(d, "r.html")
        pdf  = os.path.join(d, "r.pdf")
        linhas = _fake_linhas()
        salvar_csv(csv_p, linhas)
        grafico_png(png, linhas)
        html_relatorio(html, linhas, png, csv_p)
        pdf_relatorio(pdf, linhas, png)
        for p in (csv_p, png, html, pdf):
            assert os.path.exists(p) and os.path.getsize(p) > 0
        with open(csv_p, encoding="utf-8") as f:
            conteudo = f.read().splitlines()
        assert conteudo[0].startswith("Cliente;Valor Aporte (R$)")
        assert "12,42" in conteudo[1]

def test_pct_ou_traco():
    assert pct_ou_traco(10.5) == "10.50%"
    assert pct_ou_traco(0.0) == "0.00%"
    assert pct_ou_traco(None) == "-"
