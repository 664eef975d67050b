# finance/rentabilidade.py
"""Cálculo de rentabilidade de um investimento de renda fixa até o vencimento.

Duas camadas:
- calcular_rentabilidade: devolve Resultado (cálculo ou erro), sem lançar
  os erros de validação;
- calcular_seguro: sempre devolve um CalculoRentabilidade; em caso de falha
  registra o motivo no log e devolve o resultado zerado, para que listagens e
  exportações continuem exibindo a linha.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

from config import settings
from .datas import contar_dias, parse_data
from .erros import ErroCalculo, InvalidDateRangeError, ValorAporteInvalidoError
from .modelos import CalculoRentabilidade, InvestimentoInput, Resultado
from .products import resolver_taxa_anual
from .taxes import aplicar_impostos, centavos
from .tvm import compor

logger = logging.getLogger(__name__)


def _valor_aporte(inv: InvestimentoInput) -> float:
    try:
        valor = float(inv.valor_aporte)
    except (TypeError, ValueError):
        raise ValorAporteInvalidoError(f"Valor de aporte inválido: {inv.valor_aporte!r}") from None
    if not valor > 0:
        raise ValorAporteInvalidoError(f"Valor de aporte deve ser positivo: {valor}")
    return valor


def _data_base_ir(aporte: date, vencimento: date, data_referencia: Optional[Union[date, str]]) -> date:
    if data_referencia is not None:
        ref = parse_data(data_referencia)
        if ref < aporte:
            raise InvalidDateRangeError(f"Data de referência ({ref.isoformat()}) anterior ao aporte")
        return ref
    if settings.base_dias_ir == "hoje":
        # aporte futuro: ainda não há dias corridos
        return max(aporte, min(date.today(), vencimento))
    return vencimento


def _calcular(inv: InvestimentoInput, feriados: Iterable[date],
              data_referencia: Optional[Union[date, str]], metodo_iof: str) -> CalculoRentabilidade:
    vp = _valor_aporte(inv)
    aporte = parse_data(inv.data_aporte)
    vencimento = parse_data(inv.data_vencimento)
    dias_corridos, dias_uteis = contar_dias(aporte, vencimento, feriados)

    i_aa = resolver_taxa_anual(inv)
    taxa_efetiva, montante = compor(vp, i_aa, dias_uteis, settings.dias_uteis_ano)
    rendimento_bruto = centavos(montante - vp)

    ref = _data_base_ir(aporte, vencimento, data_referencia)
    impostos = aplicar_impostos(rendimento_bruto, (ref - aporte).days, metodo_iof)

    return CalculoRentabilidade(
        dias_corridos=dias_corridos,
        dias_uteis=dias_uteis,
        taxa_efetiva=taxa_efetiva,
        montante_bruto=centavos(montante),
        rendimento_bruto=rendimento_bruto,
        aliquota_ir=impostos.aliquota_ir,
        valor_ir=impostos.valor_ir,
        valor_iof=impostos.valor_iof,
        rendimento_liquido=impostos.rendimento_liquido,
    )


def calcular_rentabilidade(inv: InvestimentoInput, feriados: Iterable[date] = (),
                           data_referencia: Optional[Union[date, str]] = None,
                           metodo_iof: Optional[str] = None) -> Resultado:
    """
    Calcula dias corridos/úteis, rendimento bruto, IOF, IR e rendimento líquido.

    `feriados`: conjunto de datas não úteis (vazio é válido).
    `data_referencia`: data até a qual contam os dias das faixas de IR/IOF;
    por padrão o vencimento (ou hoje, conforme settings.base_dias_ir).
    Erros de validação voltam em Resultado.erro.
    """
    try:
        calculo = _calcular(inv, feriados, data_referencia, metodo_iof or settings.metodo_iof)
    except ErroCalculo as e:
        return Resultado(erro=e)
    return Resultado(calculo=calculo)


def calcular_seguro(inv: InvestimentoInput, feriados: Iterable[date] = (),
                    data_referencia: Optional[Union[date, str]] = None,
                    metodo_iof: Optional[str] = None) -> CalculoRentabilidade:
    try:
        res = calcular_rentabilidade(inv, feriados, data_referencia, metodo_iof)
    except Exception:
        logger.exception("Erro inesperado ao calcular rentabilidade (investimento %s)", inv.id)
        return CalculoRentabilidade.zerado(_aporte_ou_zero(inv))
    return _ou_zerado(inv, res)


def _ou_zerado(inv: InvestimentoInput, res: Resultado) -> CalculoRentabilidade:
    if res.ok:
        return res.calculo
    logger.warning("Erro ao calcular rentabilidade (investimento %s): %s", inv.id, res.erro)
    return CalculoRentabilidade.zerado(_aporte_ou_zero(inv))


def _aporte_ou_zero(inv: InvestimentoInput) -> float:
    try:
        return float(inv.valor_aporte)
    except (TypeError, ValueError):
        return 0.0


def calcular_lote(investimentos: Iterable[InvestimentoInput],
                  feriados: Iterable[date] = ()) -> List[Tuple[InvestimentoInput, CalculoRentabilidade]]:
    """Versão segura aplicada a cada investimento; um registro ruim não interrompe o lote."""
    feriados = frozenset(feriados)
    out = []
    falhas = 0
    for inv in investimentos:
        try:
            res = calcular_rentabilidade(inv, feriados)
        except Exception:
            logger.exception("Erro inesperado ao calcular rentabilidade (investimento %s)", inv.id)
            res = Resultado(erro=ErroCalculo("erro inesperado"))
        falhas += not res.ok
        out.append((inv, _ou_zerado(inv, res)))
    logger.info("Rentabilidade calculada para %d investimentos (%d com erro)", len(out), falhas)
    return out
