"""
Motion Model
============
Time-driven rotation angles and oscillation offsets.

The pose is a pure function of elapsed time: nothing is integrated between
frames, so replaying the same elapsed time reproduces the same pose.
"""
from __future__ import annotations

from dataclasses import dataclass
import math

from wireframeprojector.config import MS_PER_MINUTE, OSCILLATION_FREQUENCY_HZ


@dataclass(frozen=True)
class MotionParameters:
    """Angular speeds (revolutions per minute) and oscillation amplitudes."""
    rpm_y: float = 0.0
    rpm_z: float = 0.0
    osc_amp_x: float = 0.0
    osc_amp_y: float = 0.0
    osc_amp_z: float = 0.0
    frequency_hz: float = OSCILLATION_FREQUENCY_HZ


@dataclass(frozen=True)
class MotionState:
    angle_y: float
    angle_z: float
    offset_x: float
    offset_y: float
    offset_z: float


def rpm_to_rad_per_ms(rpm: float) -> float:
    return rpm * 2 * math.pi / MS_PER_MINUTE


def compute_motion(elapsed_ms: float, params: MotionParameters) -> MotionState:
    """
    Derive the pose for a given elapsed animation time.

    Args:
        elapsed_ms: Milliseconds since the animation started.
        params: Angular speeds and oscillation amplitudes.

    Returns:
        Rotation angles in radians and oscillation offsets in world units.
    """
    elapsed_s = elapsed_ms / 1000
    wave = math.sin(2 * math.pi * params.frequency_hz * elapsed_s)
    return MotionState(
        angle_y=rpm_to_rad_per_ms(params.rpm_y) * elapsed_ms,
        angle_z=rpm_to_rad_per_ms(params.rpm_z) * elapsed_ms,
        offset_x=params.osc_amp_x * wave,
        offset_y=params.osc_amp_y * wave,
        offset_z=params.osc_amp_z * wave,
    )
