"""
Fallback orbit / pan / zoom camera controller.

Input handlers only write the *desired* spherical offset (or the target).
update() is called once per rendered frame: it clamps the desired offset,
damps the current offset towards it and places the camera.

Gesture mode is an explicit state machine:

    IDLE -- left press / single touch --> ROTATING
    IDLE -- right press ----------------> PANNING
    any  -- two-finger touch -----------> PINCH_ZOOMING
    ROTATING / PANNING -- pointer up ---> IDLE
    PINCH_ZOOMING -- touches < 2 -------> IDLE
    any  -- no touches left ------------> IDLE

An abandoned gesture (pointer leaves the surface and no release ever
arrives) stays in its mode until a compensating event shows up.
"""
import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import glm

from camera import Spherical, basis_from_offset

logger = logging.getLogger(__name__)

BUTTON_LEFT = 0
BUTTON_RIGHT = 2

ZOOM_IN_KEYS = ('+', '=')
ZOOM_OUT_KEYS = ('-', '_')

# Pinch distances below this are treated as degenerate
MIN_PINCH_DISTANCE = 1e-6


class ConfigurationError(ValueError):
    """Raised when controller options are out of range."""


class GestureState(enum.Enum):
    IDLE = "idle"
    ROTATING = "rotating"
    PANNING = "panning"
    PINCH_ZOOMING = "pinch_zooming"


class GestureEvent(enum.Enum):
    PRIMARY_DOWN = "primary_down"
    SECONDARY_DOWN = "secondary_down"
    POINTER_UP = "pointer_up"
    SINGLE_TOUCH = "single_touch"
    PINCH_START = "pinch_start"
    PINCH_END = "pinch_end"
    TOUCHES_CLEARED = "touches_cleared"


_S = GestureState
_E = GestureEvent

# (state, event) -> next state. Pairs missing from the table keep the state.
TRANSITIONS = {
    (_S.IDLE, _E.PRIMARY_DOWN): _S.ROTATING,
    (_S.IDLE, _E.SECONDARY_DOWN): _S.PANNING,
    (_S.ROTATING, _E.POINTER_UP): _S.IDLE,
    (_S.PANNING, _E.POINTER_UP): _S.IDLE,

    (_S.IDLE, _E.SINGLE_TOUCH): _S.ROTATING,
    (_S.PINCH_ZOOMING, _E.SINGLE_TOUCH): _S.ROTATING,
    (_S.PANNING, _E.SINGLE_TOUCH): _S.ROTATING,

    (_S.IDLE, _E.PINCH_START): _S.PINCH_ZOOMING,
    (_S.ROTATING, _E.PINCH_START): _S.PINCH_ZOOMING,
    (_S.PANNING, _E.PINCH_START): _S.PINCH_ZOOMING,
    (_S.PINCH_ZOOMING, _E.PINCH_START): _S.PINCH_ZOOMING,

    (_S.PINCH_ZOOMING, _E.PINCH_END): _S.IDLE,

    (_S.ROTATING, _E.TOUCHES_CLEARED): _S.IDLE,
    (_S.PANNING, _E.TOUCHES_CLEARED): _S.IDLE,
    (_S.PINCH_ZOOMING, _E.TOUCHES_CLEARED): _S.IDLE,
}


def next_state(state: GestureState, event: GestureEvent) -> GestureState:
    return TRANSITIONS.get((state, event), state)


@dataclass
class ControlsOptions:
    target0: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    min_distance: float = 2.0
    max_distance: float = 500.0
    damping_factor: float = 0.08
    enable_damping: bool = True
    rotate_speed: float = 0.005
    zoom_scale: float = 1.1
    pan_sensitivity: float = 0.001
    pinch_threshold: float = 1.0
    pinch_sensitivity: float = 0.01

    def validate(self):
        try:
            components = tuple(self.target0)
        except TypeError:
            raise ConfigurationError(f"target0 must be a 3-component sequence, got {self.target0!r}") from None
        if len(components) != 3:
            raise ConfigurationError(f"target0 must have 3 components, got {self.target0!r}")
        if not self.min_distance > 0:
            raise ConfigurationError(f"min_distance must be > 0, got {self.min_distance}")
        if not self.max_distance > self.min_distance:
            raise ConfigurationError(
                f"max_distance ({self.max_distance}) must be greater than min_distance ({self.min_distance})")
        if not 0.0 < self.damping_factor <= 1.0:
            raise ConfigurationError(f"damping_factor must be in (0, 1], got {self.damping_factor}")
        if not self.rotate_speed > 0:
            raise ConfigurationError(f"rotate_speed must be > 0, got {self.rotate_speed}")
        if not self.zoom_scale > 1.0:
            raise ConfigurationError(f"zoom_scale must be > 1, got {self.zoom_scale}")
        if not self.pan_sensitivity > 0:
            raise ConfigurationError(f"pan_sensitivity must be > 0, got {self.pan_sensitivity}")
        if self.pinch_threshold < 0:
            raise ConfigurationError(f"pinch_threshold must be >= 0, got {self.pinch_threshold}")
        if not self.pinch_sensitivity > 0:
            raise ConfigurationError(f"pinch_sensitivity must be > 0, got {self.pinch_sensitivity}")
        return self


class GestureSession:
    """Per-gesture scratch data. Lives from gesture start to gesture end."""
    __slots__ = ('last_x', 'last_y', 'last_pinch_distance')

    def __init__(self, x=0.0, y=0.0, pinch_distance=0.0):
        self.last_x = x
        self.last_y = y
        self.last_pinch_distance = pinch_distance


def touch_distance(p0, p1):
    dx = p0[0] - p1[0]
    dy = p0[1] - p1[1]
    return math.sqrt(dx * dx + dy * dy)


class BasicControls:
    """
    Orbit controls driving a camera that exposes `position` and `look_at()`.

    If `dom_element` (a QWidget) is given, Qt input events are routed to the
    on_* handlers through an event filter. Without it the handlers can be
    called directly.
    """

    def __init__(self, camera, dom_element=None, options: Optional[ControlsOptions] = None):
        self.options = (options or ControlsOptions()).validate()
        self.camera = camera
        self.dom_element = dom_element

        self.target = glm.vec3(self.options.target0)
        self.min_distance = self.options.min_distance
        self.max_distance = self.options.max_distance
        self.damping_factor = self.options.damping_factor
        self.enable_damping = self.options.enable_damping
        self.rotate_speed = self.options.rotate_speed
        self.zoom_scale = self.options.zoom_scale

        self.spherical = Spherical()
        self.spherical_current = Spherical()
        self.state = GestureState.IDLE
        self.session: Optional[GestureSession] = None

        self._sync_from_camera()

        self._bridge = None
        if dom_element is not None:
            from widgets.input_bridge import QtInputBridge
            self._bridge = QtInputBridge(self, dom_element)

    # Flag views kept for readability at call sites
    @property
    def is_rotating(self):
        return self.state is GestureState.ROTATING

    @property
    def is_panning(self):
        return self.state is GestureState.PANNING

    @property
    def is_touch_zooming(self):
        return self.state is GestureState.PINCH_ZOOMING

    def _sync_from_camera(self):
        offset = glm.vec3(self.camera.position) - self.target
        self.spherical.set_from_vector(offset)
        self.spherical_current = self.spherical.copy()

    def _transition(self, event: GestureEvent):
        new_state = next_state(self.state, event)
        if new_state is not self.state:
            logger.debug(f"Gesture {self.state.value} -> {new_state.value} ({event.value})")
            self.state = new_state
            if new_state is GestureState.IDLE:
                self.session = None
        return new_state

    def update(self):
        s = self.spherical
        s.radius = max(self.min_distance, min(self.max_distance, s.radius))
        s.make_safe()

        d = self.damping_factor if self.enable_damping else 1.0
        c = self.spherical_current
        c.theta += (s.theta - c.theta) * d
        c.phi += (s.phi - c.phi) * d
        c.radius += (s.radius - c.radius) * d

        self.camera.position = self.target + c.to_vector()
        self.camera.look_at(self.target)

    def reset(self, position=None, target=None):
        """Re-seed the controller from a camera position and target."""
        if target is not None:
            self.target = glm.vec3(target)
        if position is not None:
            self.camera.position = glm.vec3(position)
        self.state = GestureState.IDLE
        self.session = None
        self._sync_from_camera()
        self.camera.look_at(self.target)

    def dispose(self):
        if self._bridge is not None:
            self._bridge.detach()
            self._bridge = None

    # Zoom helpers
    def dolly_out(self, scale=None):
        self.spherical.radius *= scale or self.zoom_scale

    def dolly_in(self, scale=None):
        self.spherical.radius /= scale or self.zoom_scale

    def rotate_by(self, dx, dy):
        self.spherical.theta -= dx * self.rotate_speed
        self.spherical.phi -= dy * self.rotate_speed

    def pan_by(self, dx, dy):
        """Move the target along the camera's right/up axes."""
        offset = self.spherical_current.to_vector()
        if glm.length(offset) == 0.0:
            return
        right, up = basis_from_offset(offset)
        scale = self.spherical_current.radius * self.options.pan_sensitivity
        self.target += right * (-dx * scale) + up * (dy * scale)

    # Pointer (mouse) handlers
    def on_pointer_down(self, button, x, y):
        if button == BUTTON_LEFT:
            event = GestureEvent.PRIMARY_DOWN
        elif button == BUTTON_RIGHT:
            event = GestureEvent.SECONDARY_DOWN
        else:
            return False
        before = self.state
        if self._transition(event) is not before:
            self.session = GestureSession(x, y)
            return True
        return False

    def on_pointer_move(self, x, y):
        if self.state not in (GestureState.ROTATING, GestureState.PANNING) or self.session is None:
            return False
        dx = x - self.session.last_x
        dy = y - self.session.last_y
        self.session.last_x = x
        self.session.last_y = y

        if self.state is GestureState.ROTATING:
            self.rotate_by(dx, dy)
        else:
            self.pan_by(dx, dy)
        return True

    def on_pointer_up(self, button=None):
        if self.state in (GestureState.ROTATING, GestureState.PANNING):
            self._transition(GestureEvent.POINTER_UP)
            return True
        return False

    def on_wheel(self, delta_y):
        """Returns True so the caller suppresses the surface's own scrolling."""
        if delta_y > 0:
            self.dolly_out()
        elif delta_y < 0:
            self.dolly_in()
        return True

    def on_key_down(self, key):
        if key in ZOOM_IN_KEYS:
            self.dolly_in()
            return True
        if key in ZOOM_OUT_KEYS:
            self.dolly_out()
            return True
        return False

    # Touch handlers. `touches` holds the (x, y) of every contact still down.
    def on_touch_start(self, touches: Sequence[Tuple[float, float]]):
        if len(touches) == 2:
            self._transition(GestureEvent.PINCH_START)
            self.session = GestureSession(pinch_distance=touch_distance(touches[0], touches[1]))
        elif len(touches) == 1:
            if self._transition(GestureEvent.SINGLE_TOUCH) is GestureState.ROTATING:
                self.session = GestureSession(touches[0][0], touches[0][1])
        return True

    def on_touch_move(self, touches: Sequence[Tuple[float, float]]):
        if len(touches) == 2 and self.state is GestureState.PINCH_ZOOMING:
            self._pinch(touch_distance(touches[0], touches[1]))
        elif len(touches) == 1 and self.state is GestureState.ROTATING and self.session is not None:
            x, y = touches[0]
            dx = x - self.session.last_x
            dy = y - self.session.last_y
            self.session.last_x = x
            self.session.last_y = y
            self.rotate_by(dx, dy)
        return True

    def on_touch_end(self, touches: Sequence[Tuple[float, float]]):
        if len(touches) < 2:
            self._transition(GestureEvent.PINCH_END)
        if len(touches) == 0:
            self._transition(GestureEvent.TOUCHES_CLEARED)
        return True

    def _pinch(self, distance):
        session = self.session
        if session is None:
            return
        baseline = session.last_pinch_distance
        if baseline < MIN_PINCH_DISTANCE or distance < MIN_PINCH_DISTANCE:
            session.last_pinch_distance = distance
            return

        delta = distance - baseline
        if abs(delta) <= self.options.pinch_threshold:
            return

        factor = 1.0 + delta * self.options.pinch_sensitivity
        if factor > 0.0:
            self.spherical.radius /= factor
        session.last_pinch_distance = distance
