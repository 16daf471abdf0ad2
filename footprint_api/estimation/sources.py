"""
Emission estimation sources.

RemoteProvider asks the Climatiq estimate endpoint; StaticTable multiplies by
local factors. Both take canonical quantities (km, kWh, kg).
"""
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from ..enums import FoodType, TransportMode
from ..logging_config import estimator_logger, timed
from .factors import (
    ELECTRICITY_FACTOR_ID,
    ELECTRICITY_FALLBACK_FACTOR,
    commute_factor_id,
    commute_fallback_factor,
    food_factor,
)


class ProviderError(Exception):
    """The remote provider could not produce a usable estimate."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class EstimationSource(ABC):
    """Something that turns canonical quantities into kg co2e."""

    @abstractmethod
    def commute(self, transport_mode: TransportMode, distance_km: float) -> float:
        pass

    @abstractmethod
    def electricity(self, kwh: float) -> float:
        pass


class StaticTable(EstimationSource):
    """Deterministic estimates from the built-in factor tables."""

    def commute(self, transport_mode: TransportMode, distance_km: float) -> float:
        return commute_fallback_factor(transport_mode) * distance_km

    def electricity(self, kwh: float) -> float:
        return ELECTRICITY_FALLBACK_FACTOR * kwh

    def food(self, food_type: FoodType, quantity_kg: float) -> float:
        return food_factor(food_type) * quantity_kg


def parse_co2e(payload: Any) -> float:
    """Pull a usable co2e value out of a provider response body.

    An explicit 0 is a valid answer. A missing, non-numeric, negative or
    non-finite value is not.
    """
    if not isinstance(payload, dict) or "co2e" not in payload:
        raise ProviderError("Provider response has no co2e field")

    value = payload["co2e"]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProviderError(f"Provider co2e is not numeric: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ProviderError(f"Provider co2e is out of range: {value!r}")
    return float(value)


class RemoteProvider(EstimationSource):
    """Client for the Climatiq ``/estimate`` endpoint.

    Every call makes a single attempt bounded by ``timeout``. Any failure is
    raised as ProviderError so the estimator can fall back.
    """

    def __init__(self, api_key: str, api_url: str, timeout: float = 8.0):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def commute(self, transport_mode: TransportMode, distance_km: float) -> float:
        factor_id = commute_factor_id(transport_mode)
        if factor_id is None:
            return 0.0
        return self._estimate(factor_id, {"distance": distance_km, "distance_unit": "km"})

    def electricity(self, kwh: float) -> float:
        return self._estimate(ELECTRICITY_FACTOR_ID, {"energy": kwh, "energy_unit": "kWh"})

    @timed(estimator_logger)
    def _estimate(self, factor_id: str, parameters: Dict[str, Any]) -> float:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "emission_factor": {"id": factor_id},
            "parameters": parameters,
        }

        try:
            response = requests.post(self.api_url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderError(f"Provider request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ProviderError(
                f"Provider returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Provider returned invalid JSON") from exc

        return parse_co2e(payload)
