# finance/tvm.py
from __future__ import annotations
from typing import Tuple

DIAS_UTEIS_ANO = 252


def aa_to_ad(i_aa: float, base: int = DIAS_UTEIS_ANO) -> float:
    """Converte taxa efetiva ao ano para efetiva ao dia útil: (1+i)^(1/252) - 1"""
    return (1.0 + i_aa) ** (1.0 / base) - 1.0


def taxa_periodo(i_aa: float, dias_uteis: int, base: int = DIAS_UTEIS_ANO) -> float:
    """
    Taxa efetiva do período em convenção de dias úteis:
    (1 + i_aa)^(dias_uteis/base) - 1. Zero dias úteis -> nenhuma rentabilidade.
    """
    if dias_uteis <= 0:
        return 0.0
    return (1.0 + i_aa) ** (dias_uteis / base) - 1.0


def compor(vp: float, i_aa: float, dias_uteis: int, base: int = DIAS_UTEIS_ANO) -> Tuple[float, float]:
    """Retorna (taxa_efetiva, montante_bruto) com montante = VP*(1 + taxa_efetiva)."""
    taxa = taxa_periodo(i_aa, dias_uteis, base)
    return taxa, vp * (1.0 + taxa)
