import numpy as np
import requests

import wrakit as wra
from wrakit.wind import wind_energy_wtk, wind_energy_from_frame, WindEnergyAssessment
from wrakit.weather import wtk_source
from wrakit.util import WraConfigError, DataAcquisitionError
import pytest


class FakeResponse:
    def __init__(self, text="", content=b"", status=200):
        self.text = text
        self.content = content
        self.status_code = status

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError("%d Error" % self.status_code)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]


@pytest.fixture
def fake_services(monkeypatch):
    with open(wra.TEST_DATA["wtk_sample.csv"]) as f:
        text = f.read()
    with open(wra.TEST_DATA["power_curves_sample.zip"], "rb") as f:
        archive = f.read()

    requested = []

    def fake_get(url, params=None, stream=False, timeout=None):
        requested.append(url)
        if url.endswith(".zip"):
            return FakeResponse(content=archive)
        return FakeResponse(text=text)

    # both loaders share the requests module
    monkeypatch.setattr(wtk_source.requests, "get", fake_get)
    return requested


@pytest.fixture
def config():
    return wra.load_config(
        wtk={"api_key": "KEY"},
        power_curve_archive={
            "url": "https://example.com/power_curves.zip",
            "member": "turbines/sample_3mw.csv",
            "skip_lines": 4,
        },
    )


def test_wind_energy_from_frame(observations, sample_power_curve):
    result = wind_energy_from_frame(observations, sample_power_curve)

    assert isinstance(result, WindEnergyAssessment)
    assert result.power_curve is sample_power_curve
    assert len(result.monthly) == 2
    assert result.annual.energy_mwh == result.monthly.energy_mwh.sum()
    assert "power_kw" in result.observations.columns
    assert result.weibull.shape > 0 and result.weibull.scale > 0


def test_wind_energy_from_frame_constant_day(constant_day, pt_power_curve):
    with pytest.warns(UserWarning):
        result = wind_energy_from_frame(constant_day, pt_power_curve)

    assert np.allclose(result.observations.power_kw, 500)
    assert np.isclose(result.annual.energy_mwh, 0.5)
    assert np.isclose(result.annual.hours, 1.0)
    assert result.weibull is None  # constant wind speeds


def test_wind_energy_wtk(fake_services, config):
    result = wind_energy_wtk(39.74, -105.2, 2012, config=config, verbose=True)

    assert fake_services == ["https://example.com/power_curves.zip", config["wtk"]["url"]]
    assert result.power_curve.rated_power_mw == 3.0
    assert list(result.monthly.month) == [6, 7]
    assert np.allclose(result.monthly.hours, [2, 2])
    assert np.isclose(result.annual.hours, 4)
    assert 0 < result.annual.capacity_factor < 1


def test_wind_energy_wtk_with_power_curve_file(fake_services, config):
    result = wind_energy_wtk(39.74, -105.2, 2012, power_curve=wra.TEST_DATA["power_curve_sample.csv"], config=config)

    assert fake_services == [config["wtk"]["url"]]
    assert result.power_curve.capacity == 3000


def test_wind_energy_wtk_failures(monkeypatch, config):
    monkeypatch.delenv("NREL_API_KEY", raising=False)
    no_archive = wra.load_config(wtk={"api_key": "KEY"})
    with pytest.raises(WraConfigError):
        wind_energy_wtk(39.74, -105.2, 2012, config=no_archive)

    monkeypatch.setattr(wtk_source.requests, "get", lambda *a, **k: FakeResponse(status=500))
    with pytest.raises(DataAcquisitionError):
        wind_energy_wtk(39.74, -105.2, 2012, config=config)
