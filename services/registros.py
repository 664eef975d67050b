# services/registros.py
"""Conversão entre os registros gravados (colunas em minúsculas) e InvestimentoInput."""
from __future__ import annotations
import math
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from finance.datas import parse_data
from finance.erros import ErroCalculo
from finance.modelos import InvestimentoInput, Modalidade


def _num(v: Any) -> Any:
    # registros vindos do banco/CSV trazem None, NaN ou string vazia para "sem taxa";
    # texto não numérico segue adiante e vira erro de cálculo daquela linha
    if v is None:
        return None
    if isinstance(v, str):
        v = v.strip().replace(",", ".")
        if not v:
            return None
    try:
        v = float(v)
    except ValueError:
        return v
    return None if math.isnan(v) else v


def _txt(v: Any) -> Optional[str]:
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return None
    return str(v)


def from_registro(row: Mapping[str, Any]) -> InvestimentoInput:
    return InvestimentoInput(
        id=_txt(row.get("id")),
        cliente_id=_txt(row.get("clienteid")),
        cliente_nome=_txt(row.get("clientenome")) or "",
        tipo_investimento=_txt(row.get("tipoinvestimento")) or "",
        titulo=_txt(row.get("titulo")),
        modalidade=_txt(row.get("modalidade")) or "",
        valor_aporte=_num(row.get("valoraporte")),
        data_aporte=_txt(row.get("dataaporte")) or "",
        data_vencimento=_txt(row.get("datavencimento")) or "",
        selic_atual=_num(row.get("selicatual")),
        ipca_atual=_num(row.get("ipcaatual")),
        taxa_pre_fixado=_num(row.get("taxaprefixado")),
        taxa_pos_cdi=_num(row.get("taxaposcdi")),
        taxa_ipca=_num(row.get("taxaipca")),
    )


def _data_iso(v) -> str:
    return v.isoformat() if isinstance(v, date) else str(v)


def to_registro(inv: InvestimentoInput) -> Dict[str, Any]:
    modalidade = inv.modalidade
    if isinstance(modalidade, Modalidade):
        modalidade = modalidade.value
    return {
        "id": inv.id,
        "clienteid": inv.cliente_id,
        "clientenome": inv.cliente_nome,
        "tipoinvestimento": inv.tipo_investimento,
        "titulo": inv.titulo,
        "modalidade": modalidade,
        "valoraporte": inv.valor_aporte,
        "dataaporte": _data_iso(inv.data_aporte),
        "datavencimento": _data_iso(inv.data_vencimento),
        "selicatual": inv.selic_atual,
        "ipcaatual": inv.ipca_atual,
        "taxaprefixado": inv.taxa_pre_fixado,
        "taxaposcdi": inv.taxa_pos_cdi,
        "taxaipca": inv.taxa_ipca,
    }


def validar_dados_investimento(valor_aporte, data_aporte, data_vencimento) -> Optional[str]:
    """Mensagem para o usuário quando os dados básicos não permitem cadastro; None se ok."""
    try:
        valor = float(valor_aporte)
    except (TypeError, ValueError):
        return "Valor do aporte inválido."
    if not valor > 0:
        return "O valor do aporte deve ser maior que zero."
    try:
        aporte = parse_data(data_aporte)
        vencimento = parse_data(data_vencimento)
    except ErroCalculo:
        return "Datas inválidas. Use AAAA-MM-DD ou DD/MM/AAAA."
    if vencimento <= aporte:
        return "A data de vencimento deve ser posterior à data do aporte."
    return None


def carregar_csv(path) -> List[InvestimentoInput]:
    """
    Lê um CSV com as colunas do cadastro (valoraporte, dataaporte, datavencimento,
    modalidade, taxaprefixado, taxaposcdi, taxaipca, selicatual, ipcaatual, ...).
    Aceita ',' ou ';' como separador.
    """
    df = pd.read_csv(path, sep=None, engine="python", dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]
    return [from_registro(r) for r in df.to_dict(orient="records")]
