import math
from typing import List, Sequence

from .common import EPSILON, clamp, sign, wrap_angle
from .geometry import end_of_circular_arc, end_of_clothoid, end_of_straight_line
from .errors import InvalidParameterError
from .state import Control, State


def integrate_step(state: State, control: Control, step: float) -> State:
    """Advance `state` by `step` metres along `control`, starting from the state's curvature."""
    d = sign(control.delta_s)
    if abs(control.sigma) > EPSILON:
        x, y, theta, kappa = end_of_clothoid(state.x, state.y, state.theta, state.kappa, control.sigma, d, step)
        return State(x, y, theta, kappa, d)
    if abs(state.kappa) > EPSILON:
        x, y, theta = end_of_circular_arc(state.x, state.y, state.theta, state.kappa, d, step)
        return State(x, y, theta, state.kappa, d)
    x, y = end_of_straight_line(state.x, state.y, state.theta, d, step)
    return State(x, y, wrap_angle(state.theta), state.kappa, d)


def _first_state(start: State, controls: Sequence[Control]) -> State:
    if not controls:
        return State(start.x, start.y, wrap_angle(start.theta), start.kappa, 0)
    first = controls[0]
    return State(start.x, start.y, wrap_angle(start.theta), first.kappa, first.direction)


def integrate(start: State, controls: Sequence[Control], discretization: float) -> List[State]:
    """Sample the path described by `controls` every `discretization` metres.

    Each control closes with a partial step so segment boundaries are always
    part of the output. A curvature jump (only allowed at cusps) is recorded as
    a repeated pose carrying the new curvature.
    """
    if discretization <= 0.0:
        raise InvalidParameterError("discretization must be > 0")
    state = _first_state(start, controls)
    path: List[State] = [state]
    for control in controls:
        abs_delta_s = control.length
        if abs(control.kappa - state.kappa) > EPSILON:
            state = State(state.x, state.y, state.theta, control.kappa, control.direction)
            path.append(state)
        n = int(math.ceil(abs_delta_s / discretization))
        s_seg = 0.0
        for _ in range(n):
            s_seg += discretization
            if s_seg > abs_delta_s:
                step = discretization - (s_seg - abs_delta_s)
                s_seg = abs_delta_s
            else:
                step = discretization
            state = integrate_step(state, control, step)
            path.append(state)
    return path


def end_state(start: State, controls: Sequence[Control]) -> State:
    """Final configuration reached by `controls`, without intermediate sampling."""
    state = _first_state(start, controls)
    for control in controls:
        if abs(control.kappa - state.kappa) > EPSILON:
            state = State(state.x, state.y, state.theta, control.kappa, control.direction)
        state = integrate_step(state, control, control.length)
    return state


def interpolate(start: State, controls: Sequence[Control], t: float) -> State:
    """State reached after the fraction `t` (clamped to [0, 1]) of the total path length."""
    state = _first_state(start, controls)
    s_path = sum(c.length for c in controls)
    t = clamp(float(t), 0.0, 1.0)
    if t <= 0.0 or s_path <= 0.0:
        return state
    s_inter = t * s_path
    s = 0.0
    for control in controls:
        if abs(control.kappa - state.kappa) > EPSILON:
            state = State(state.x, state.y, state.theta, control.kappa, control.direction)
        step = control.length
        s += step
        if s >= s_inter:
            step -= s - s_inter
            return integrate_step(state, control, step)
        state = integrate_step(state, control, step)
    return state
