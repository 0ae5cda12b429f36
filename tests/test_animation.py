import pytest
import numpy as np
from fanforge import FanState, FanAnimator, advance, apply_state, INCREASING, DECREASING
from fanforge.animation import BLADE_STEP, SWING_STEP, SWING_LIMIT

def _run(state, frames, **kwargs):
    states = []
    for _ in range(frames):
        state = advance(state, **kwargs)
        states.append(state)
    return states

def test_defaults():
    assert BLADE_STEP == 0.3
    assert SWING_STEP == 0.005
    assert SWING_LIMIT == 0.75
    s = FanState()
    assert (s.blade_angle, s.swing_angle, s.swing_direction, s.running) == (0.0, 0.0, INCREASING, False)

def test_idle_frames_change_nothing():
    state = FanState()
    for s in _run(state, 10):
        assert s == FanState()

def test_idle_state_is_returned_as_is():
    state = FanState(blade_angle=1.0, swing_angle=-0.2, swing_direction=DECREASING)
    assert advance(state) is state

def test_blade_angle_grows_by_fixed_step():
    states = _run(FanState(running=True), 50)
    blades = np.array([s.blade_angle for s in states])
    assert np.allclose(np.diff(blades), BLADE_STEP)
    assert np.all(np.diff(blades) > 0)
    assert blades[0] == pytest.approx(BLADE_STEP)

def test_swing_stays_within_limits():
    states = _run(FanState(running=True), 2000)
    swings = np.array([s.swing_angle for s in states])
    assert swings.max() <= SWING_LIMIT + 1e-12
    assert swings.min() >= -SWING_LIMIT - 1e-12

def test_swing_reaches_limit_after_150_frames():
    states = _run(FanState(running=True), 150)
    before, last = states[-2], states[-1]
    assert before.swing_direction == INCREASING
    assert before.swing_angle == pytest.approx(0.745)
    assert last.swing_angle == pytest.approx(0.75)
    assert last.swing_direction == DECREASING

def test_direction_flips_once_per_boundary():
    states = _run(FanState(running=True), 1000)
    flips = [i + 1 for i in range(1, len(states)) if states[i].swing_direction != states[i - 1].swing_direction]
    # 150 frames up to +0.75, then 300 frames per full sweep.
    assert flips == [150, 450, 750]
    assert states[149].swing_direction == DECREASING
    for frame in flips:
        assert abs(states[frame - 1].swing_angle) == pytest.approx(SWING_LIMIT)

def test_swing_turns_back_after_limit():
    states = _run(FanState(running=True), 151)
    assert states[-1].swing_angle == pytest.approx(0.745)
    assert states[-1].swing_direction == DECREASING

def test_state_at_limit_flips_without_moving():
    state = FanState(swing_angle=0.75, swing_direction=INCREASING, running=True)
    nxt = advance(state)
    assert nxt.swing_angle == 0.75
    assert nxt.swing_direction == DECREASING
    assert nxt.blade_angle == pytest.approx(BLADE_STEP)

def test_overshoot_is_clamped():
    state = FanState(swing_angle=0.748, running=True)
    nxt = advance(state, swing_step=0.005)
    assert nxt.swing_angle == 0.75
    assert nxt.swing_direction == DECREASING

def test_custom_steps():
    state = advance(FanState(running=True), blade_step=1.0, swing_step=0.1, swing_limit=0.2)
    assert state.blade_angle == 1.0
    assert state.swing_angle == pytest.approx(0.1)
    state = advance(state, blade_step=1.0, swing_step=0.1, swing_limit=0.2)
    assert state.swing_angle == pytest.approx(0.2)
    assert state.swing_direction == DECREASING

@pytest.mark.parametrize("kwargs", [{'swing_step': 0}, {'swing_limit': -0.75}, {'blade_step': -0.3}, {'blade_step': 0}])
def test_invalid_steps(kwargs):
    with pytest.raises(ValueError):
        advance(FanState(running=True), **kwargs)

# --- FanAnimator ---

def test_apply_state_writes_pivot_angles(fan):
    apply_state(fan, FanState(blade_angle=0.6, swing_angle=-0.25))
    assert fan.blade_group.rotation[1] == pytest.approx(np.pi / 2 + 0.6)
    assert fan.body_pivot.rotation[2] == pytest.approx(-0.25)
    assert fan.body_pivot.rotation[0] == pytest.approx(np.pi / 2)

def test_animator_runs_only_while_key_held(fan):
    animator = FanAnimator(fan)
    animator.run_frames(10)
    assert animator.state == FanState()

    animator.press('space')
    assert animator.running
    animator.tick()
    assert fan.blade_group.rotation[1] == pytest.approx(np.pi / 2 + BLADE_STEP)
    assert fan.body_pivot.rotation[2] == pytest.approx(SWING_STEP)

    animator.release('space')
    assert not animator.running
    frozen = animator.state
    animator.run_frames(5)
    assert animator.state == frozen
    assert animator.frame == 16

@pytest.mark.parametrize("kwargs", [{'swing_step': 0}, {'swing_limit': 0}, {'blade_step': -0.3}])
def test_animator_rejects_invalid_steps(fan, kwargs):
    with pytest.raises(ValueError):
        FanAnimator(fan, **kwargs)
    with pytest.raises(ValueError):
        fan.animator(**kwargs)

def test_animator_ignores_other_keys(fan):
    animator = FanAnimator(fan)
    animator.press('a')
    assert not animator.running
    animator.on_key('space', True)
    animator.on_key('a', False)
    assert not animator.running

def test_animator_150_frames_flips(fan):
    animator = fan.animator()
    animator.press('space')
    state = animator.run_frames(150)
    assert state.swing_angle == pytest.approx(0.75)
    assert state.swing_direction == DECREASING
    assert fan.body_pivot.rotation[2] == pytest.approx(0.75)

def test_animator_does_not_create_nodes(fan):
    before = [node for node, _ in fan.scene.root.traverse()]
    animator = fan.animator()
    animator.press('space')
    animator.run_frames(400)
    after = [node for node, _ in fan.scene.root.traverse()]
    assert before == after

def test_animator_reset(fan):
    animator = FanAnimator(fan, run_key='enter')
    animator.press('enter')
    animator.run_frames(20)
    animator.reset()
    assert animator.state == FanState()
    assert animator.frame == 0
    assert fan.blade_group.rotation[1] == pytest.approx(np.pi / 2)
    assert fan.body_pivot.rotation[2] == pytest.approx(0.0)
