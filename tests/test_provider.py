"""
Tests for the Climatiq client.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from footprint_api.estimation import EmissionEstimator, ProviderError, RemoteProvider
from footprint_api.estimation.factors import COMMUTE_FACTOR_IDS, ELECTRICITY_FACTOR_ID
from footprint_api.estimation.sources import parse_co2e
from footprint_api.enums import TransportMode
from footprint_api.logging_config import estimator_logger

API_URL = "https://provider.test/estimate"


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def provider():
    return RemoteProvider(api_key="secret", api_url=API_URL, timeout=5)


class TestRemoteProvider:
    def test_commute_request(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.return_value = make_response(payload={"co2e": 18.2, "co2e_unit": "kg"})
            assert provider.commute(TransportMode.bus, 42) == 18.2

        post.assert_called_once_with(
            API_URL,
            json={
                "emission_factor": {"id": COMMUTE_FACTOR_IDS[TransportMode.bus]},
                "parameters": {"distance": 42, "distance_unit": "km"},
            },
            headers={"Authorization": "Bearer secret", "Content-Type": "application/json"},
            timeout=5,
        )

    def test_electricity_request(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.return_value = make_response(payload={"co2e": 3.9})
            assert provider.electricity(1000) == 3.9

        body = post.call_args.kwargs["json"]
        assert body["emission_factor"]["id"] == ELECTRICITY_FACTOR_ID
        assert body["parameters"] == {"energy": 1000, "energy_unit": "kWh"}

    def test_zero_emission_mode_makes_no_request(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            assert provider.commute(TransportMode.walking, 5) == 0.0
        post.assert_not_called()

    def test_error_status(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.return_value = make_response(status_code=401, payload={"error": "unauthorized"})
            with pytest.raises(ProviderError) as exc_info:
                provider.electricity(10)
        assert exc_info.value.status_code == 401

    def test_timeout(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.side_effect = requests.Timeout("timed out")
            with pytest.raises(ProviderError):
                provider.commute(TransportMode.car, 10)

    def test_failed_call_is_logged_and_reraised(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post, \
                patch.object(estimator_logger, "warning") as warning:
            post.side_effect = requests.ConnectionError("refused")
            with pytest.raises(ProviderError):
                provider.electricity(1)
        warning.assert_called_once()
        assert warning.call_args.kwargs["function"] == "_estimate"

    def test_invalid_json(self, provider):
        with patch("footprint_api.estimation.sources.requests.post") as post:
            response = make_response()
            response.json.side_effect = ValueError("not json")
            post.return_value = response
            with pytest.raises(ProviderError):
                provider.commute(TransportMode.car, 10)

    def test_estimator_falls_back_on_http_error(self, provider):
        estimator = EmissionEstimator(remote=provider)
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.return_value = make_response(status_code=500)
            assert estimator.estimate_commute(100, "car") == 21.0

    def test_estimator_falls_back_on_missing_co2e(self, provider):
        estimator = EmissionEstimator(remote=provider)
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.return_value = make_response(payload={"co2e_unit": "kg"})
            assert estimator.estimate_electricity(10) == 4.75

    def test_estimator_falls_back_on_connection_error(self, provider):
        estimator = EmissionEstimator(remote=provider)
        with patch("footprint_api.estimation.sources.requests.post") as post:
            post.side_effect = requests.ConnectionError("unreachable")
            assert estimator.estimate_electricity(1, "mwh") == 475.0


class TestParseCo2e:
    def test_explicit_zero_is_valid(self):
        assert parse_co2e({"co2e": 0}) == 0.0

    @pytest.mark.parametrize("payload", [
        {},
        {"co2e": None},
        {"co2e": "12"},
        {"co2e": True},
        {"co2e": -1},
        {"co2e": float("nan")},
        ["co2e"],
        None,
    ])
    def test_unusable_values(self, payload):
        with pytest.raises(ProviderError):
            parse_co2e(payload)
