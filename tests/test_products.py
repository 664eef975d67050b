import pytest
from finance.erros import ErroCalculo, MissingRateFieldError, ModalidadeInvalidaError
from finance.modelos import InvestimentoInput, Modalidade
from finance.products import resolver_taxa_anual, descricao_taxa, taxa_pos_cdi_aa, taxa_ipca_aa

def _inv(modalidade, **kw):
    return InvestimentoInput(valor_aporte=1000.0, data_aporte="2024-01-02",
                             data_vencimento="2025-01-02", modalidade=modalidade, **kw)

def test_prefixado():
    assert abs(resolver_taxa_anual(_inv(Modalidade.PRE_FIXADO, taxa_pre_fixado=12.0)) - 0.12) < 1e-12

def test_pos_cdi_percentual():
    inv = _inv(Modalidade.POS_FIXADO, taxa_pos_cdi=110.0, selic_atual=10.0)
    assert abs(resolver_taxa_anual(inv) - 0.11) < 1e-12
    assert abs(taxa_pos_cdi_aa(100.0, 13.75) - 0.1375) < 1e-12

def test_ipca_soma_sem_compor():
    inv = _inv(Modalidade.IPCA, taxa_ipca=6.0, ipca_atual=4.0)
    assert abs(resolver_taxa_anual(inv) - 0.10) < 1e-12
    assert abs(taxa_ipca_aa(6.0, 4.0) - 0.10) < 1e-12

def test_modalidade_por_texto():
    assert resolver_taxa_anual(_inv("Pré Fixado", taxa_pre_fixado=10.0)) == 0.10
    assert Modalidade.from_str("pos fixado") is Modalidade.POS_FIXADO
    assert Modalidade.from_str("IPCA") is Modalidade.IPCA
    with pytest.raises(ModalidadeInvalidaError):
        Modalidade.from_str("Debênture")

@pytest.mark.parametrize("modalidade,kw", [
    (Modalidade.PRE_FIXADO, {"taxa_pos_cdi": 100.0, "selic_atual": 10.0}),
    (Modalidade.POS_FIXADO, {"selic_atual": 10.0}),
    (Modalidade.POS_FIXADO, {"taxa_pos_cdi": 100.0}),
    (Modalidade.IPCA, {"ipca_atual": 4.0}),
])
def test_taxa_ausente_nao_vira_zero(modalidade, kw):
    with pytest.raises(MissingRateFieldError) as exc:
        resolver_taxa_anual(_inv(modalidade, **kw))
    assert exc.value.modalidade is modalidade

def test_taxa_negativa():
    with pytest.raises(ErroCalculo):
        resolver_taxa_anual(_inv(Modalidade.PRE_FIXADO, taxa_pre_fixado=-1.0))

def test_descricao_taxa():
    assert descricao_taxa(_inv(Modalidade.PRE_FIXADO, taxa_pre_fixado=12.0)) == "12,00% a.a."
    assert descricao_taxa(_inv(Modalidade.POS_FIXADO, taxa_pos_cdi=110.0)) == "110,00% do CDI"
    assert descricao_taxa(_inv(Modalidade.IPCA, taxa_ipca=6.5)) == "IPCA + 6,50% a.a."
    assert descricao_taxa(_inv(Modalidade.IPCA)) == "-"
    assert descricao_taxa(_inv("xyz")) == "-"
