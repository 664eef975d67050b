import os
import pytest
from services.bcb_api import fetch_indices, get_ipca_12m

pytestmark = pytest.mark.skipif(os.getenv("RUN_INTEGRATION") != "1",
                                reason="Defina RUN_INTEGRATION=1 para rodar testes de integração")

def test_fetch_indices_ok():
    m = fetch_indices("overnight")
    assert 0 < m["selic_atual"] < 100
    assert isinstance(m["selic_data"], str)
    assert -5 < m["ipca_atual"] < 100  # ampla margem

def test_ipca_12m_ok():
    ipca_aa, data = get_ipca_12m()
    assert -5 < ipca_aa < 100
    assert isinstance(data, str)
