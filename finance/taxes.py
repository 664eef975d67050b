# finance/taxes.py
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from .erros import ErroCalculo

CENTAVOS = Decimal("0.01")

# IOF regressivo (Decreto 6.306/2007, Anexo): % do rendimento por dia corrido, 1..29
TABELA_IOF = (
    96, 93, 90, 86, 83, 80, 76, 73, 70, 66,
    63, 60, 56, 53, 50, 46, 43, 40, 36, 33,
    30, 26, 23, 20, 16, 13, 10, 6, 3,
)
METODOS_IOF = ("tabela", "linear")


@dataclass(frozen=True)
class Impostos:
    aliquota_ir: float          # %
    valor_ir: float
    valor_iof: float
    rendimento_liquido: float


def centavos(valor: float) -> float:
    return float(Decimal(str(valor)).quantize(CENTAVOS, rounding=ROUND_HALF_UP))


def aliquota_ir_por_dias(dias: int) -> float:
    """
    Tabela regressiva (Lei 11.033/2004, art. 1º; IN RFB 1.585/2015):
    - até 180 dias: 22,5%
    - 181 a 360:    20,0%
    - 361 a 720:    17,5%
    - acima de 720: 15,0%
    Retorna percentual (ex.: 22.5).
    """
    if dias <= 180:
        return 22.5
    if dias <= 360:
        return 20.0
    if dias <= 720:
        return 17.5
    return 15.0


def fracao_iof(dias: int, metodo: str = "tabela") -> float:
    """
    Fração do rendimento retida pelo IOF no resgate em `dias` corridos.
    "tabela": tabela oficial dia a dia; "linear": 96% no dia 1 decaindo até 0% no dia 30.
    """
    if metodo not in METODOS_IOF:
        raise ErroCalculo(f"Método de IOF desconhecido: {metodo!r}")
    if dias >= 30:
        return 0.0
    dias = max(dias, 1)
    if metodo == "linear":
        return max(0.0, (30 - dias) / 30.0) * 0.96
    return TABELA_IOF[dias - 1] / 100.0


def aplicar_impostos(rendimento_bruto: float, dias_corridos: int, metodo_iof: str = "tabela") -> Impostos:
    """
    IOF sobre o rendimento bruto; IR sobre o rendimento já líquido de IOF.
    Valores em centavos; o líquido sai das parcelas arredondadas.
    """
    base = max(rendimento_bruto, 0.0)
    valor_iof = centavos(base * fracao_iof(dias_corridos, metodo_iof))
    aliquota = aliquota_ir_por_dias(dias_corridos)
    valor_ir = centavos((base - valor_iof) * aliquota / 100.0)
    liquido = centavos(rendimento_bruto - valor_iof - valor_ir)
    return Impostos(aliquota_ir=aliquota, valor_ir=valor_ir, valor_iof=valor_iof, rendimento_liquido=liquido)
