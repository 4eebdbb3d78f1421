import logging
from PyQt6.QtCore import QObject, QEvent, Qt
from PyQt6.QtGui import QEventPoint
from PyQt6.QtWidgets import QApplication, QWidget

from controls import BUTTON_LEFT, BUTTON_RIGHT

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: BUTTON_LEFT,
    Qt.MouseButton.RightButton: BUTTON_RIGHT,
}


class QtInputBridge(QObject):
    """
    Event filter translating Qt input events into BasicControls handler calls.
    Pointer, touch, wheel and context menu events are taken from the surface.
    Key presses are taken application wide, once each, when they reach a
    top-level window (the main window or a floating dock).
    """

    def __init__(self, controls, surface, key_target=None):
        super().__init__(surface)
        self.controls = controls
        self.surface = surface
        if key_target is None:
            key_target = QApplication.instance() or surface.window()
        self.key_target = key_target

        surface.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        surface.setContextMenuPolicy(Qt.ContextMenuPolicy.PreventContextMenu)
        # An application filter already sees every event sent to the surface
        if isinstance(key_target, QApplication):
            self.filtered = [key_target]
        elif key_target is surface:
            self.filtered = [surface]
        else:
            self.filtered = [surface, key_target]
        for target in self.filtered:
            target.installEventFilter(self)

    def detach(self):
        for target in self.filtered:
            target.removeEventFilter(self)
        self.filtered = []
        logger.debug("Input bridge detached")

    def eventFilter(self, obj, event):
        etype = event.type()

        if etype == QEvent.Type.KeyPress and self._is_key_receiver(obj):
            if self.controls.on_key_down(event.text()):
                return True
            return False

        if obj is not self.surface:
            return False

        # The second press of a double click arrives as MouseButtonDblClick
        if etype in (QEvent.Type.MouseButtonPress, QEvent.Type.MouseButtonDblClick):
            button = _BUTTONS.get(event.button())
            if button is None:
                return False
            pos = event.position()
            if self.controls.on_pointer_down(button, pos.x(), pos.y()):
                self._capture()
            return False
        elif etype == QEvent.Type.MouseMove:
            pos = event.position()
            self.controls.on_pointer_move(pos.x(), pos.y())
            return False
        elif etype == QEvent.Type.MouseButtonRelease:
            if self.controls.on_pointer_up(_BUTTONS.get(event.button())):
                self._release()
            return False
        elif etype == QEvent.Type.Wheel:
            # Browser convention: positive delta_y scrolls away from the content
            delta_y = -event.angleDelta().y()
            if self.controls.on_wheel(delta_y):
                event.accept()
                return True
        elif etype in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate,
                       QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self._dispatch_touch(event)
            event.accept()
            return True
        elif etype == QEvent.Type.ContextMenu:
            return True

        return False

    def _is_key_receiver(self, obj):
        if obj is self.key_target:
            return True
        return isinstance(self.key_target, QApplication) and isinstance(obj, QWidget) and obj.isWindow()

    def _dispatch_touch(self, event):
        points = event.points()
        active = [(p.position().x(), p.position().y()) for p in points
                  if p.state() != QEventPoint.State.Released]
        states = {p.state() for p in points}
        etype = event.type()

        if etype in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self.controls.on_touch_end([])
        elif QEventPoint.State.Pressed in states:
            self.controls.on_touch_start(active)
        elif QEventPoint.State.Released in states:
            self.controls.on_touch_end(active)
        else:
            self.controls.on_touch_move(active)

    def _capture(self):
        grab = getattr(self.surface, 'grabMouse', None)
        if grab is None:
            return
        grab()

    def _release(self):
        release = getattr(self.surface, 'releaseMouse', None)
        if release is None:
            return
        release()
