"""
Launch Vehicle Flight Simulation - Anomaly Detection

Threshold checks of the current telemetry against the safety limits:
- Dynamic pressure above max-Q limit   -> WARNING
- |G-force| above the structural limit -> CRITICAL
- Thrust above the rated maximum       -> CRITICAL

All comparisons are strictly greater-than. Anomalies are reported, never
raised, and the detector never touches flight state; deciding whether a
CRITICAL anomaly warrants an abort is up to the caller.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import List

from .config import Limits
from .state import Telemetry


class Severity(Enum):
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class Anomaly:
    """A single limit violation."""
    parameter: str
    value: float
    limit: float
    severity: Severity
    message: str

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL

    def to_dict(self) -> dict:
        data = asdict(self)
        data['severity'] = self.severity.value
        return data


class AnomalyDetector:
    """Stateless limit checker."""

    def __init__(self, limits: Limits):
        self.limits = limits

    def check(self, telemetry: Telemetry) -> List[Anomaly]:
        anomalies = []

        if telemetry.dynamic_pressure > self.limits.max_q:
            anomalies.append(Anomaly(
                parameter='dynamic_pressure',
                value=telemetry.dynamic_pressure,
                limit=self.limits.max_q,
                severity=Severity.WARNING,
                message='Approaching max-Q limits',
            ))

        if abs(telemetry.g_force) > self.limits.max_g:
            anomalies.append(Anomaly(
                parameter='g_force',
                value=telemetry.g_force,
                limit=self.limits.max_g,
                severity=Severity.CRITICAL,
                message='Excessive G-forces detected',
            ))

        if telemetry.thrust > self.limits.max_thrust:
            anomalies.append(Anomaly(
                parameter='thrust',
                value=telemetry.thrust,
                limit=self.limits.max_thrust,
                severity=Severity.CRITICAL,
                message='Engine over-thrust condition',
            ))

        return anomalies
