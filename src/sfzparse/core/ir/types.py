"""
Enumerated opcode value domains.
"""

from __future__ import annotations

from enum import StrEnum


class LoopMode(StrEnum):
    """Sample looping behaviour (``loop_mode``)."""

    NO_LOOP = "no_loop"
    ONE_SHOT = "one_shot"
    LOOP_CONTINUOUS = "loop_continuous"
    LOOP_SUSTAIN = "loop_sustain"


class Trigger(StrEnum):
    """Event that triggers a region (``trigger``)."""

    ATTACK = "attack"
    RELEASE = "release"
    FIRST = "first"
    LEGATO = "legato"


class FilterType(StrEnum):
    """Filter topology (``fil_type``)."""

    LPF_1P = "lpf_1p"
    HPF_1P = "hpf_1p"
    LPF_2P = "lpf_2p"
    HPF_2P = "hpf_2p"
    BPF_2P = "bpf_2p"
    BRF_2P = "brf_2p"


class OffMode(StrEnum):
    """How a region is silenced by ``off_by`` (``off_mode``)."""

    FAST = "fast"
    NORMAL = "normal"


class SwitchVelocity(StrEnum):
    """Velocity source for keyswitched regions (``sw_vel``)."""

    CURRENT = "current"
    PREVIOUS = "previous"


class CrossfadeCurve(StrEnum):
    """Crossfade curve (``xf_keycurve``, ``xf_velcurve``)."""

    GAIN = "gain"
    POWER = "power"
