# finance/modelos.py
from __future__ import annotations
import unicodedata
from dataclasses import dataclass, asdict
from datetime import date
from enum import Enum
from typing import Optional, Union, Dict

from .erros import ErroCalculo, ModalidadeInvalidaError


def _normalizar(txt: str) -> str:
    sem_acento = unicodedata.normalize("NFKD", txt).encode("ascii", "ignore").decode("ascii")
    return "".join(ch for ch in sem_acento.lower() if ch.isalnum() or ch == "+")


class Modalidade(str, Enum):
    PRE_FIXADO = "Pré Fixado"
    POS_FIXADO = "Pós Fixado"
    IPCA = "IPCA+"

    @classmethod
    def from_str(cls, valor: Union[str, "Modalidade"]) -> "Modalidade":
        """
        Aceita o valor gravado ("Pré Fixado"), o nome do enum ("PRE_FIXADO")
        ou apelidos usuais ("prefixado", "cdi", "ipca"). Sem diferenciar
        maiúsculas nem acentos.
        """
        if isinstance(valor, Modalidade):
            return valor
        if not isinstance(valor, str) or not valor.strip():
            raise ModalidadeInvalidaError(f"Modalidade inválida: {valor!r}")
        chave = _normalizar(valor)
        if chave in _APELIDOS:
            return _APELIDOS[chave]
        raise ModalidadeInvalidaError(f"Modalidade inválida: {valor!r}")


_APELIDOS: Dict[str, Modalidade] = {}
for _m, _nomes in (
    (Modalidade.PRE_FIXADO, ("Pré Fixado", "PRE_FIXADO", "prefixado", "pre", "fixed", "fixedrate")),
    (Modalidade.POS_FIXADO, ("Pós Fixado", "POS_FIXADO", "posfixado", "pos", "cdi", "floatingrate")),
    (Modalidade.IPCA, ("IPCA+", "IPCA", "ipca+", "inflationlinked")),
):
    for _n in _nomes:
        _APELIDOS[_normalizar(_n)] = _m


@dataclass(frozen=True)
class InvestimentoInput:
    valor_aporte: float
    data_aporte: Union[date, str]
    data_vencimento: Union[date, str]
    modalidade: Union[Modalidade, str]
    taxa_pre_fixado: Optional[float] = None   # % a.a.
    taxa_pos_cdi: Optional[float] = None      # % do CDI (ex.: 110)
    taxa_ipca: Optional[float] = None         # spread % a.a. sobre o IPCA
    selic_atual: Optional[float] = None       # % a.a., fotografia na criação
    ipca_atual: Optional[float] = None        # % a.a., fotografia na criação
    # campos descritivos do cadastro
    id: Optional[str] = None
    cliente_id: Optional[str] = None
    cliente_nome: str = ""
    tipo_investimento: str = ""
    titulo: Optional[str] = None


@dataclass(frozen=True)
class CalculoRentabilidade:
    dias_corridos: int
    dias_uteis: int
    taxa_efetiva: float
    montante_bruto: float
    rendimento_bruto: float
    aliquota_ir: float      # % (22.5, 20.0, 17.5, 15.0)
    valor_ir: float
    valor_iof: float
    rendimento_liquido: float

    @classmethod
    def zerado(cls, valor_aporte: float = 0.0) -> "CalculoRentabilidade":
        """Resultado neutro usado quando o registro não pode ser calculado."""
        return cls(
            dias_corridos=0, dias_uteis=0, taxa_efetiva=0.0,
            montante_bruto=valor_aporte, rendimento_bruto=0.0,
            aliquota_ir=0.0, valor_ir=0.0, valor_iof=0.0, rendimento_liquido=0.0,
        )

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class Resultado:
    """
    Retorno explícito do cálculo: exatamente um de `calculo` ou `erro`.
    Permite distinguir "falhou" de "calculou rendimento zero".
    """
    calculo: Optional[CalculoRentabilidade] = None
    erro: Optional[ErroCalculo] = None

    @property
    def ok(self) -> bool:
        return self.erro is None

    def unwrap(self) -> CalculoRentabilidade:
        if self.erro is not None:
            raise self.erro
        return self.calculo
