# finance/erros.py
from __future__ import annotations


class ErroCalculo(ValueError):
    """Base dos erros recuperáveis do cálculo de rentabilidade."""


class InvalidDateRangeError(ErroCalculo):
    """Vencimento não posterior ao aporte, ou data em formato inválido."""


class MissingRateFieldError(ErroCalculo):
    def __init__(self, modalidade, campo: str = ""):
        self.modalidade = modalidade
        self.campo = campo
        nome = getattr(modalidade, "value", modalidade)
        msg = f"Taxa obrigatória ausente para a modalidade {nome}"
        if campo:
            msg += f" ({campo})"
        super().__init__(msg)


class ModalidadeInvalidaError(ErroCalculo):
    pass


class ValorAporteInvalidoError(ErroCalculo):
    pass
