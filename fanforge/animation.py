"""
Per-frame animation of the fan.

The animation is a two-angle oscillator: the blades spin continuously and the
body swings back and forth between two limits. All state lives in `FanState`
and `advance` is a pure function, so frames can be stepped without a window.
"""
import math
from typing import NamedTuple

BLADE_STEP = 0.3
SWING_STEP = 0.005
SWING_LIMIT = 0.75

INCREASING, DECREASING = 1, -1

class FanState(NamedTuple):
    """Snapshot of the animated values. Angles are in radians."""
    blade_angle: float = 0.0
    swing_angle: float = 0.0
    swing_direction: int = INCREASING
    running: bool = False

def advance(state: FanState, blade_step: float = BLADE_STEP, swing_step: float = SWING_STEP, swing_limit: float = SWING_LIMIT) -> FanState:
    """
    Returns the state one frame later.

    Nothing changes while the fan is not running. While running, the blade
    angle grows by `blade_step` and the swing angle moves `swing_step` in the
    current direction. The swing is clamped to `swing_limit` and the direction
    flips on the frame the limit is reached, so the swing angle always stays
    inside [-swing_limit, swing_limit].
    """
    if not state.running:
        return state
    _check_steps(blade_step, swing_step, swing_limit)

    blade = state.blade_angle + blade_step
    swing = state.swing_angle
    direction = state.swing_direction
    bound = swing_limit * direction

    if _reached(swing, bound, direction):
        direction = -direction
    else:
        swing += swing_step * direction
        if _reached(swing, bound, direction):
            swing = bound
            direction = -direction

    return FanState(blade, swing, direction, running=True)

def _check_steps(blade_step, swing_step, swing_limit):
    if blade_step <= 0 or swing_step <= 0 or swing_limit <= 0:
        raise ValueError("blade_step, swing_step and swing_limit must be positive")

def _reached(angle: float, bound: float, direction: int) -> bool:
    # abs_tol absorbs the rounding of repeated float additions.
    return angle * direction >= bound * direction or math.isclose(angle, bound, abs_tol=1e-9)

def apply_state(fan, state: FanState):
    """Writes the animated angles onto the fan's pivots."""
    fan.blade_group.rotation[1] = fan.blade_group_rest[1] + state.blade_angle
    fan.body_pivot.rotation[2] = fan.body_pivot_rest[2] + state.swing_angle


class FanAnimator:
    """
    Drives a `Fan` frame by frame.

    The fan runs only while the run key is held. `press` and `release` are fed
    by the renderer's key callbacks; `tick` is called once per frame.
    """
    RUN_KEY = 'space'

    def __init__(self, fan, blade_step: float = BLADE_STEP, swing_step: float = SWING_STEP, swing_limit: float = SWING_LIMIT, run_key: str = None):
        _check_steps(blade_step, swing_step, swing_limit)
        self.fan = fan
        self.blade_step = blade_step
        self.swing_step = swing_step
        self.swing_limit = swing_limit
        self.run_key = run_key or self.RUN_KEY
        self.state = FanState()
        self.frame = 0

    @property
    def running(self) -> bool:
        return self.state.running

    def press(self, key: str):
        if key == self.run_key:
            self.state = self.state._replace(running=True)

    def release(self, key: str):
        # Releasing any key stops the fan.
        self.state = self.state._replace(running=False)

    def on_key(self, key: str, pressed: bool):
        if pressed:
            self.press(key)
        else:
            self.release(key)

    def tick(self) -> FanState:
        """Advances one frame and updates the scene graph."""
        self.state = advance(self.state, self.blade_step, self.swing_step, self.swing_limit)
        apply_state(self.fan, self.state)
        self.frame += 1
        return self.state

    def run_frames(self, count: int) -> FanState:
        for _ in range(count):
            self.tick()
        return self.state

    def reset(self):
        self.state = FanState()
        self.frame = 0
        apply_state(self.fan, self.state)
