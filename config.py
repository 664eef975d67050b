# config.py
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "RENDA_FIXA_", "extra": "ignore"}

    # IOF: tabela oficial dia a dia ou aproximação linear 96% -> 0%
    metodo_iof: Literal["tabela", "linear"] = "tabela"

    # Dias corridos para a faixa de IR: até o vencimento (projeção) ou até hoje
    base_dias_ir: Literal["vencimento", "hoje"] = "vencimento"

    dias_uteis_ano: int = 252
    usar_feriados_nacionais: bool = True

    # SGS/BCB
    bcb_timeout: float = 10.0

    log_level: str = "INFO"


settings = Settings()
