# finance/datas.py
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Iterable, Tuple, Set, Union

import numpy as np
from dateutil.easter import easter

from .erros import InvalidDateRangeError

FORMATOS_DATA = ("%Y-%m-%d", "%d/%m/%Y")


def parse_data(valor: Union[date, datetime, str]) -> date:
    """Aceita date/datetime, 'AAAA-MM-DD' ou 'DD/MM/AAAA'."""
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if isinstance(valor, str):
        txt = valor.strip()[:10]
        for fmt in FORMATOS_DATA:
            try:
                return datetime.strptime(txt, fmt).date()
            except ValueError:
                continue
    raise InvalidDateRangeError(f"Data inválida: {valor!r}")


def contar_dias(inicio: date, fim: date, feriados: Iterable[date] = ()) -> Tuple[int, int]:
    """
    Retorna (dias_corridos, dias_uteis) entre `inicio` e `fim`.
    - dias corridos: fim - inicio (o dia do aporte não conta)
    - dias úteis: dias em (inicio, fim] que não são sábado, domingo nem feriado
    """
    if fim <= inicio:
        raise InvalidDateRangeError(
            f"Vencimento ({fim.isoformat()}) deve ser posterior ao aporte ({inicio.isoformat()})"
        )
    dias_corridos = (fim - inicio).days
    hol = np.array(sorted(set(feriados)), dtype="datetime64[D]")
    # busday_count conta [begin, end); deslocando um dia obtemos (inicio, fim]
    dias_uteis = np.busday_count(
        np.datetime64(inicio + timedelta(days=1), "D"),
        np.datetime64(fim + timedelta(days=1), "D"),
        holidays=hol,
    )
    return dias_corridos, int(dias_uteis)


def feriados_nacionais(ano: int) -> Set[date]:
    """
    Feriados nacionais usados pelo mercado (calendário ANBIMA):
    datas fixas + Carnaval (seg/ter), Sexta-feira Santa e Corpus Christi.
    Consciência Negra (20/11) a partir de 2024 (Lei 14.759/2023).
    """
    pascoa = easter(ano)
    out = {
        date(ano, 1, 1),
        pascoa - timedelta(days=48),   # Carnaval (segunda)
        pascoa - timedelta(days=47),   # Carnaval (terça)
        pascoa - timedelta(days=2),    # Sexta-feira Santa
        date(ano, 4, 21),
        date(ano, 5, 1),
        pascoa + timedelta(days=60),   # Corpus Christi
        date(ano, 9, 7),
        date(ano, 10, 12),
        date(ano, 11, 2),
        date(ano, 11, 15),
        date(ano, 12, 25),
    }
    if ano >= 2024:
        out.add(date(ano, 11, 20))
    return out


def feriados_periodo(inicio: date, fim: date) -> Set[date]:
    out: Set[date] = set()
    for ano in range(inicio.year, fim.year + 1):
        out |= feriados_nacionais(ano)
    return out
