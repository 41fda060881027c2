"""Transition presets between slides.

Each preset is a pair of keyframes: ``enter`` is where the incoming slide
starts before animating to rest, ``exit`` is where the outgoing slide ends.
The resting keyframe is always the identity ``Frame()``.
"""

import math
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Callable, Dict, Optional

DEFAULT_EFFECT = 'fade'
DEFAULT_SPEED = 'medium'

# Transition durations in seconds
SPEEDS = {
    'slow': 1.2,
    'medium': 0.8,
    'fast': 0.5,
}

SPIRAL_DURATION_FACTOR = 1.5
DEFAULT_EASING = 'easeInOut'


@dataclass(frozen=True)
class Frame:
    """Visual state of a slide at one end of a transition"""
    opacity: float = 1.0
    x: float = 0.0  # pixels
    y: float = 0.0
    scale: float = 1.0
    scale_y: float = 1.0
    rotate: float = 0.0  # degrees
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    blur: float = 0.0  # radius in pixels
    origin: str = 'center'  # center, top or bottom


REST = Frame()


def interpolate(start: Frame, end: Frame, t: float) -> Frame:
    """Interpolate every numeric property between two frames.

    Values of ``t`` outside 0..1 extrapolate, which spring overshoot relies on.
    """
    values = {}
    for f in fields(Frame):
        if f.name == 'origin':
            continue
        a = getattr(start, f.name)
        b = getattr(end, f.name)
        values[f.name] = a + (b - a) * t
    origin = end.origin if end.origin != 'center' else start.origin
    return replace(start, origin=origin, **values)


@dataclass(frozen=True)
class SpringParams:
    """Damped spring driving a transition from 0 to 1"""
    stiffness: float
    damping: float
    mass: float = 1.0

    @property
    def natural_frequency(self) -> float:
        return math.sqrt(self.stiffness / self.mass)

    @property
    def damping_ratio(self) -> float:
        return self.damping / (2 * math.sqrt(self.stiffness * self.mass))

    def value_at(self, t: float) -> float:
        """Position of the spring ``t`` seconds after release"""
        if t <= 0:
            return 0.0
        omega = self.natural_frequency
        zeta = self.damping_ratio
        if zeta < 1:
            damped = omega * math.sqrt(1 - zeta * zeta)
            envelope = math.exp(-zeta * omega * t)
            return 1 - envelope * (math.cos(damped * t) + zeta * omega / damped * math.sin(damped * t))
        # Critically damped or slower: never overshoots
        return 1 - math.exp(-omega * t) * (1 + omega * t)

    def settle_time(self, tolerance: float = 0.01) -> float:
        """Seconds until the oscillation stays within ``tolerance`` of rest"""
        decay = self.natural_frequency * min(self.damping_ratio, 1.0)
        return -math.log(tolerance) / decay


@dataclass(frozen=True)
class TransitionSpec:
    enter: Frame
    exit: Frame
    duration: float  # seconds
    easing: Optional[str] = DEFAULT_EASING
    spring: Optional[SpringParams] = None

    @property
    def animation_time(self) -> float:
        """Seconds one phase (exit or enter) takes to play"""
        if self.spring is not None:
            return self.spring.settle_time()
        return self.duration

    def curve(self, t: float) -> float:
        """Map elapsed phase time in seconds to animation progress"""
        if self.spring is not None:
            return self.spring.value_at(t)
        if self.duration <= 0:
            return 1.0
        return ease(self.easing, min(max(t / self.duration, 0.0), 1.0))

    def enter_frame(self, t: float) -> Frame:
        """Frame of the incoming slide ``t`` seconds into the enter phase"""
        return interpolate(self.enter, REST, self.curve(t))

    def exit_frame(self, t: float) -> Frame:
        """Frame of the outgoing slide ``t`` seconds into the exit phase"""
        return interpolate(REST, self.exit, self.curve(t))


def _cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """Build a CSS-style cubic-bezier timing function"""

    def sample(a1: float, a2: float, s: float) -> float:
        return 3 * a1 * s * (1 - s) ** 2 + 3 * a2 * s * s * (1 - s) + s ** 3

    def timing(t: float) -> float:
        if t <= 0:
            return 0.0
        if t >= 1:
            return 1.0
        # Solve x(s) = t by bisection; x is monotonic for 0 <= x1, x2 <= 1
        lo, hi = 0.0, 1.0
        s = t
        for _ in range(30):
            s = (lo + hi) / 2
            if sample(x1, x2, s) < t:
                lo = s
            else:
                hi = s
        return sample(y1, y2, s)

    return timing


EASINGS: Dict[str, Callable[[float], float]] = {
    'linear': lambda t: min(max(t, 0.0), 1.0),
    'easeIn': _cubic_bezier(0.42, 0.0, 1.0, 1.0),
    'easeOut': _cubic_bezier(0.0, 0.0, 0.58, 1.0),
    'easeInOut': _cubic_bezier(0.42, 0.0, 0.58, 1.0),
}


def ease(name: Optional[str], t: float) -> float:
    """Apply a named easing function, falling back to linear"""
    return EASINGS.get(name or 'linear', EASINGS['linear'])(t)


# Enter and exit keyframes for every effect
EFFECTS: Dict[str, tuple] = {
    'fade': (Frame(opacity=0), Frame(opacity=0)),
    'slide': (Frame(opacity=0, x=100), Frame(opacity=0, x=-100)),
    'slideUp': (Frame(opacity=0, y=100), Frame(opacity=0, y=-100)),
    'slideDown': (Frame(opacity=0, y=-100), Frame(opacity=0, y=100)),
    'zoom': (Frame(opacity=0, scale=0.8), Frame(opacity=0, scale=1.2)),
    'zoomOut': (Frame(opacity=0, scale=1.2), Frame(opacity=0, scale=0.8)),
    'flipHorizontal': (Frame(opacity=0, rotate_y=-90), Frame(opacity=0, rotate_y=90)),
    'flipVertical': (Frame(opacity=0, rotate_x=-90), Frame(opacity=0, rotate_x=90)),
    'rotate': (Frame(opacity=0, rotate=-180), Frame(opacity=0, rotate=180)),
    'spiral': (Frame(opacity=0, scale=0.5, rotate=-360), Frame(opacity=0, scale=0.5, rotate=360)),
    'blur': (Frame(opacity=0, blur=10), Frame(opacity=0, blur=10)),
    'bounce': (Frame(opacity=0, scale=0.3, y=50), Frame(opacity=0, scale=0.3, y=-50)),
    'elastic': (Frame(opacity=0, scale=0.5), Frame(opacity=0, scale=0.5)),
    'curtain': (Frame(opacity=0, scale_y=0, origin='top'), Frame(opacity=0, scale_y=0, origin='bottom')),
    'wave': (Frame(opacity=0, x=30, rotate=5), Frame(opacity=0, x=-30, rotate=-5)),
}

SPRINGS = {
    'bounce': SpringParams(stiffness=400, damping=25),
    'elastic': SpringParams(stiffness=300, damping=20),
}


@lru_cache(maxsize=None)
def _build_transition(effect: str, speed: str) -> TransitionSpec:
    duration = SPEEDS[speed]
    enter, exit_ = EFFECTS[effect]

    if effect in SPRINGS:
        return TransitionSpec(enter=enter, exit=exit_, duration=duration,
                              easing=None, spring=SPRINGS[effect])
    if effect == 'spiral':
        duration *= SPIRAL_DURATION_FACTOR
    return TransitionSpec(enter=enter, exit=exit_, duration=duration)


def get_transition_variants(effect: Optional[str], speed: Optional[str] = DEFAULT_SPEED) -> TransitionSpec:
    """Return the transition for an effect and speed.

    Unknown effects play as a fade and unknown speeds as medium. The same
    object is returned for every call that resolves to the same preset.
    """
    if not isinstance(effect, str) or effect not in EFFECTS:
        effect = DEFAULT_EFFECT
    if not isinstance(speed, str) or speed not in SPEEDS:
        speed = DEFAULT_SPEED
    return _build_transition(effect, speed)
