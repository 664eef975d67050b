# finance/products.py
from __future__ import annotations
from typing import Optional

from .erros import ErroCalculo, MissingRateFieldError
from .modelos import InvestimentoInput, Modalidade


def _exigir(valor: Optional[float], modalidade: Modalidade, campo: str) -> float:
    if valor is None:
        raise MissingRateFieldError(modalidade, campo)
    try:
        valor = float(valor)
    except (TypeError, ValueError):
        raise ErroCalculo(f"Taxa inválida em {campo}: {valor!r}") from None
    if valor < 0:
        raise ErroCalculo(f"Taxa negativa em {campo}: {valor}")
    return valor


def taxa_prefixado_aa(taxa_pre_fixado: float) -> float:
    """% a.a. -> fração a.a."""
    return taxa_pre_fixado / 100.0


def taxa_pos_cdi_aa(percentual_cdi: float, cdi_aa_pct: float) -> float:
    """Ex.: 110% do CDI com CDI de 10% a.a. -> 0.11"""
    return (percentual_cdi / 100.0) * (cdi_aa_pct / 100.0)


def taxa_ipca_aa(spread_aa_pct: float, ipca_aa_pct: float) -> float:
    """
    IPCA + spread somados (não compostos): (IPCA + spread) / 100.
    """
    return (ipca_aa_pct + spread_aa_pct) / 100.0


def resolver_taxa_anual(inv: InvestimentoInput) -> float:
    """
    Taxa nominal anual (fração) aplicável ao investimento, conforme a modalidade.
    Campo obrigatório ausente -> MissingRateFieldError (nunca assume zero).
    """
    modalidade = Modalidade.from_str(inv.modalidade)
    if modalidade is Modalidade.PRE_FIXADO:
        return taxa_prefixado_aa(_exigir(inv.taxa_pre_fixado, modalidade, "taxa_pre_fixado"))
    if modalidade is Modalidade.POS_FIXADO:
        percentual = _exigir(inv.taxa_pos_cdi, modalidade, "taxa_pos_cdi")
        return taxa_pos_cdi_aa(percentual, _exigir(inv.selic_atual, modalidade, "selic_atual"))
    spread = _exigir(inv.taxa_ipca, modalidade, "taxa_ipca")
    return taxa_ipca_aa(spread, _exigir(inv.ipca_atual, modalidade, "ipca_atual"))


def _pct_br(x: float) -> str:
    return f"{float(x):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def descricao_taxa(inv: InvestimentoInput) -> str:
    """Rótulo da taxa para listagens; '-' quando não há como descrever."""
    try:
        modalidade = Modalidade.from_str(inv.modalidade)
    except ErroCalculo:
        return "-"
    try:
        return _descricao(modalidade, inv)
    except (TypeError, ValueError):
        return "-"


def _descricao(modalidade: Modalidade, inv: InvestimentoInput) -> str:
    if modalidade is Modalidade.PRE_FIXADO and inv.taxa_pre_fixado is not None:
        return f"{_pct_br(inv.taxa_pre_fixado)}% a.a."
    if modalidade is Modalidade.POS_FIXADO and inv.taxa_pos_cdi is not None:
        return f"{_pct_br(inv.taxa_pos_cdi)}% do CDI"
    if modalidade is Modalidade.IPCA and inv.taxa_ipca is not None:
        return f"IPCA + {_pct_br(inv.taxa_ipca)}% a.a."
    return "-"
