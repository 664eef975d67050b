import pytest
from services import bcb_api

class _Resp:
    def __init__(self, data):
        self._data = data
    def raise_for_status(self):
        pass
    def json(self):
        return self._data

def _fake_get(series):
    def get(url, timeout=None):
        for code, data in series.items():
            if f"bcdata.sgs.{code}/" in url:
                return _Resp(data)
        raise AssertionError(url)
    return get

def test_fetch_indices(monkeypatch):
    ipca = [{"data": f"01/{m:02d}/2024", "valor": "0,5"} for m in range(1, 13)]
    monkeypatch.setattr(bcb_api.requests, "get", _fake_get({
        bcb_api.SGS_SELIC_META: [{"data": "10/06/2024", "valor": "10,50"}],
        bcb_api.SGS_IPCA_MENSAL: ipca,
    }))
    m = bcb_api.fetch_indices("meta")
    assert m["selic_atual"] == 10.5
    assert m["selic_source"] == "meta"
    assert abs(m["ipca_atual"] - ((1.005 ** 12 - 1) * 100)) < 1e-3
    assert m["ipca_data"] == "01/12/2024"

def test_serie_vazia(monkeypatch):
    monkeypatch.setattr(bcb_api.requests, "get", _fake_get({bcb_api.SGS_CDI_OVERNIGHT: []}))
    with pytest.raises(RuntimeError):
        bcb_api.get_cdi_overnight_aa()

def test_fetch_indices_cdi_over(monkeypatch):
    ipca = [{"data": f"01/{m:02d}/2024", "valor": "0,4"} for m in range(1, 13)]
    monkeypatch.setattr(bcb_api.requests, "get", _fake_get({
        bcb_api.SGS_CDI_OVERNIGHT: [{"data": "11/06/2024", "valor": "10,40"}],
        bcb_api.SGS_IPCA_MENSAL: ipca,
    }))
    m = bcb_api.fetch_indices("cdi")
    assert m["selic_atual"] == 10.4
    assert m["selic_source"] == "cdi"
    assert m["selic_data"] == "11/06/2024"

def test_fetch_indices_fonte_desconhecida():
    with pytest.raises(ValueError):
        bcb_api.fetch_indices("tr")
