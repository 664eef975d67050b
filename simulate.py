# simulate.py
from __future__ import annotations
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from config import settings
from finance.datas import feriados_periodo, parse_data
from finance.erros import ErroCalculo
from finance.modelos import InvestimentoInput, Modalidade
from finance.products import descricao_taxa
from finance.rentabilidade import calcular_lote


def feriados_carteira(investimentos: Iterable[InvestimentoInput]) -> Set[date]:
    """Feriados nacionais de todos os anos cobertos pelas datas válidas da carteira."""
    anos = set()
    for inv in investimentos:
        for d in (inv.data_aporte, inv.data_vencimento):
            try:
                anos.add(parse_data(d).year)
            except ErroCalculo:
                continue
    if not anos:
        return set()
    return feriados_periodo(date(min(anos), 1, 1), date(max(anos), 12, 31))


def _modalidade_txt(m) -> str:
    return m.value if isinstance(m, Modalidade) else str(m or "")


def calcular_carteira(investimentos: List[InvestimentoInput],
                      feriados: Optional[Iterable[date]] = None) -> List[Dict]:
    """
    Uma linha por investimento com dados do cadastro + cálculo de rentabilidade.
    Sem `feriados` explícitos, usa o calendário nacional se configurado.
    """
    if feriados is None:
        feriados = feriados_carteira(investimentos) if settings.usar_feriados_nacionais else set()
    linhas = []
    for inv, calc in calcular_lote(investimentos, feriados):
        try:
            valor_aporte = float(inv.valor_aporte)
        except (TypeError, ValueError):
            valor_aporte = 0.0
        linha = {
            "id": inv.id,
            "cliente_id": inv.cliente_id,
            "cliente": inv.cliente_nome,
            "tipo": inv.tipo_investimento,
            "modalidade": _modalidade_txt(inv.modalidade),
            "titulo": inv.titulo or "",
            "taxa": descricao_taxa(inv),
            "valor_aporte": valor_aporte,
            "data_aporte": str(inv.data_aporte),
            "data_vencimento": str(inv.data_vencimento),
        }
        linha.update(calc.as_dict())
        linha["patrimonio_liquido"] = round(valor_aporte + calc.rendimento_liquido, 2)
        linhas.append(linha)
    return linhas


def totais_carteira(linhas: List[Dict]) -> Dict[str, float]:
    campos = ("valor_aporte", "rendimento_bruto", "valor_ir", "valor_iof", "rendimento_liquido", "patrimonio_liquido")
    return {c: round(sum(l[c] for l in linhas), 2) for c in campos}


def consolidar_por_cliente(linhas: List[Dict]) -> Dict[str, Dict]:
    """
    Por cliente: valor aplicado e patrimônio projetado (aporte + rendimento líquido).
    Chave: id do cliente, ou o nome quando o registro não traz id.
    """
    out: Dict[str, Dict] = {}
    for l in linhas:
        chave = l.get("cliente_id") or l["cliente"] or "-"
        c = out.setdefault(chave, {"cliente": l["cliente"] or "-", "investimentos": 0,
                                   "valor_aplicado": 0.0, "patrimonio_projetado": 0.0})
        c["investimentos"] += 1
        c["valor_aplicado"] = round(c["valor_aplicado"] + l["valor_aporte"], 2)
        c["patrimonio_projetado"] = round(c["patrimonio_projetado"] + l["valor_aporte"] + l["rendimento_liquido"], 2)
    return out
