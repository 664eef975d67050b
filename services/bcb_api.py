# services/bcb_api.py
from __future__ import annotations
import logging
import requests
from typing import Tuple, List
from datetime import datetime

from config import settings

logger = logging.getLogger(__name__)

SGS_BASE = "https://api.bcb.gov.br/dados/serie/bcdata.sgs.{code}/dados"

# Códigos SGS
SGS_SELIC_OVERNIGHT = 4189   # Selic Over (% a.a.)
SGS_CDI_OVERNIGHT = 4392     # CDI Over (% a.a.)
SGS_SELIC_META = 432         # Meta Selic (% a.a.)
SGS_IPCA_MENSAL = 433        # IPCA var. mensal (% ao mês)


def _valor_br(v) -> float:
    return float(str(v).replace(",", "."))


def _get_sgs_last_n_values(code: int, n: int) -> List[Tuple[str, float]]:
    url = f"{SGS_BASE.format(code=code)}/ultimos/{n}?formato=json"
    logger.debug("Consultando SGS %s", url)
    r = requests.get(url, timeout=settings.bcb_timeout)
    r.raise_for_status()
    data = r.json()
    if not data:
        raise RuntimeError(f"Série {code} sem dados.")
    return [(item["data"], _valor_br(item["valor"])) for item in data]


def _get_sgs_last_value(code: int) -> Tuple[float, str]:
    data_str, valor = _get_sgs_last_n_values(code, 1)[-1]  # data: dd/mm/aaaa
    return valor, data_str


def get_selic_overnight_aa() -> Tuple[float, str]:
    return _get_sgs_last_value(SGS_SELIC_OVERNIGHT)  # % a.a.


def get_cdi_overnight_aa() -> Tuple[float, str]:
    return _get_sgs_last_value(SGS_CDI_OVERNIGHT)  # % a.a.


def get_selic_meta_aa() -> Tuple[float, str]:
    return _get_sgs_last_value(SGS_SELIC_META)  # % a.a.


def get_ipca_12m() -> Tuple[float, str]:
    """
    IPCA acumulado 12 meses: produto dos últimos 12 meses (1+ipca_m/100)-1.
    Retorna (ipca_aa em %, 'dd/mm/aaaa do último ponto').
    """
    ult_12 = _get_sgs_last_n_values(SGS_IPCA_MENSAL, 12)
    fator = 1.0
    for _, v_m in ult_12:
        fator *= (1.0 + v_m / 100.0)
    return (fator - 1.0) * 100.0, ult_12[-1][0]


def fetch_indices(fonte_juros: str = "meta") -> dict:
    """
    Fotografia dos indexadores no momento do cadastro do investimento,
    já nas unidades de InvestimentoInput (selic_atual e ipca_atual em % a.a.).
    fonte_juros: "meta" (Selic meta), "overnight" (Selic over) ou "cdi" (CDI over).
    """
    fontes = {"meta": get_selic_meta_aa, "overnight": get_selic_overnight_aa, "cdi": get_cdi_overnight_aa}
    if fonte_juros not in fontes:
        raise ValueError(f"Fonte de juros desconhecida: {fonte_juros!r}")
    selic_val, selic_data = fontes[fonte_juros]()
    selic_src = fonte_juros
    ipca_val, ipca_data = get_ipca_12m()
    out = {
        "selic_atual": round(selic_val, 4),
        "selic_data": selic_data,
        "selic_source": selic_src,
        "ipca_atual": round(ipca_val, 4),
        "ipca_data": ipca_data,
        "fetch_time": datetime.now().isoformat(timespec="seconds"),
    }
    logger.info("Indexadores SGS: Selic %.2f%% (%s), IPCA 12m %.2f%% (%s)",
                out["selic_atual"], selic_data, out["ipca_atual"], ipca_data)
    return out
