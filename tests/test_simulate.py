from dataclasses import replace
from datetime import date
from finance.modelos import InvestimentoInput, Modalidade
from simulate import calcular_carteira, consolidar_por_cliente, totais_carteira, feriados_carteira

def _carteira():
    return [
        InvestimentoInput(valor_aporte=10000.0, data_aporte="2024-01-02", data_vencimento="2025-01-02",
                          modalidade=Modalidade.PRE_FIXADO, taxa_pre_fixado=10.0, id="1", cliente_nome="Ana"),
        InvestimentoInput(valor_aporte=5000.0, data_aporte="2024-01-02", data_vencimento="2024-01-20",
                          modalidade=Modalidade.POS_FIXADO, taxa_pos_cdi=100.0, selic_atual=10.0, id="2",
                          cliente_nome="Bruno"),
        InvestimentoInput(valor_aporte=3000.0, data_aporte="2024-01-02", data_vencimento="2025-01-02",
                          modalidade=Modalidade.IPCA, ipca_atual=4.0, id="3", cliente_nome="Caio"),
    ]

def test_feriados_carteira():
    f = feriados_carteira(_carteira())
    assert date(2024, 12, 25) in f and date(2025, 1, 1) in f
    assert feriados_carteira([]) == set()

def test_calcular_carteira_linhas():
    linhas = calcular_carteira(_carteira(), feriados=set())
    assert [l["id"] for l in linhas] == ["1", "2", "3"]
    ana, bruno, caio = linhas
    assert ana["dias_uteis"] == 262
    assert ana["taxa"] == "10,00% a.a."
    assert bruno["valor_iof"] > 0
    # IPCA+ sem spread: linha zerada, mas presente
    assert caio["rendimento_bruto"] == 0.0 and caio["dias_corridos"] == 0
    assert caio["patrimonio_liquido"] == 3000.0
    for l in linhas:
        assert abs(l["patrimonio_liquido"] - (l["valor_aporte"] + l["rendimento_liquido"])) < 0.005

def test_feriados_nacionais_por_padrao():
    com = calcular_carteira(_carteira()[:1])
    sem = calcular_carteira(_carteira()[:1], feriados=set())
    assert com[0]["dias_uteis"] == 253
    assert sem[0]["dias_uteis"] == 262

def test_totais():
    linhas = calcular_carteira(_carteira(), feriados=set())
    tot = totais_carteira(linhas)
    assert tot["valor_aporte"] == 18000.0
    assert abs(tot["rendimento_liquido"] - sum(l["rendimento_liquido"] for l in linhas)) < 0.005

def test_consolidar_por_cliente():
    carteira = _carteira() + [
        InvestimentoInput(valor_aporte=2000.0, data_aporte="2024-01-02", data_vencimento="2025-01-02",
                          modalidade=Modalidade.PRE_FIXADO, taxa_pre_fixado=12.0, id="4",
                          cliente_id="c-ana", cliente_nome="Ana"),
    ]
    carteira[0] = replace(carteira[0], cliente_id="c-ana")
    linhas = calcular_carteira(carteira, feriados=set())
    por_cliente = consolidar_por_cliente(linhas)
    assert set(por_cliente) == {"c-ana", "Bruno", "Caio"}
    ana = por_cliente["c-ana"]
    assert ana["cliente"] == "Ana" and ana["investimentos"] == 2
    assert ana["valor_aplicado"] == 12000.0
    liquido_ana = linhas[0]["rendimento_liquido"] + linhas[3]["rendimento_liquido"]
    assert abs(ana["patrimonio_projetado"] - (12000.0 + liquido_ana)) < 0.005
    # linha zerada entra pelo valor aplicado
    assert por_cliente["Caio"]["patrimonio_projetado"] == 3000.0
    assert consolidar_por_cliente([]) == {}
