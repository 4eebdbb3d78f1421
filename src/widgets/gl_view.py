import logging
from PyQt6.QtOpenGLWidgets import QOpenGLWidget
from PyQt6.QtCore import Qt, pyqtSignal, QTimer
from PyQt6.QtGui import QMouseEvent

from camera import Camera
from controls import BasicControls, ControlsOptions
from solar_system import HOME_POSITION

logger = logging.getLogger(__name__)

# Press/release pairs travelling less than this many pixels count as a click
CLICK_TOLERANCE = 4.0


class SolarSystemView(QOpenGLWidget):
    objectSelected = pyqtSignal(dict)
    selectionCleared = pyqtSignal()
    initFailed = pyqtSignal(str)

    def __init__(self, scene, fps=60, controls_options=None, parent=None):
        super().__init__(parent)
        self.scene = scene
        self.camera = Camera(position=HOME_POSITION)
        self.controls_options = controls_options or ControlsOptions()
        self.controls = None
        self.renderer = None

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.press_pos = None

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(max(1, int(1000 / max(1, fps))))
        self.frame_timer.timeout.connect(self.on_frame)

    def attach_controls(self):
        """Installs the camera controller. Call once the widget sits in its top-level window."""
        if self.controls is None:
            self.controls = BasicControls(self.camera, self, self.controls_options)
            logger.info("Camera controls attached")
        return self.controls

    def initializeGL(self):
        logger.info("Initializing GL view...")
        # Imported here so the widget module loads without a GL context
        from renderer import SceneRenderer
        try:
            self.renderer = SceneRenderer(self.scene)
        except Exception as e:
            logger.exception("Failed to initialize renderer")
            self.renderer = None
            self.initFailed.emit(str(e))
            return
        self.frame_timer.start()
        logger.info("Animation loop started")

    def resizeGL(self, w, h):
        self.camera.set_aspect(w, h)

    def paintGL(self):
        if self.renderer is None:
            return
        ratio = self.devicePixelRatio()
        self.renderer.render(self.camera, int(self.width() * ratio), int(self.height() * ratio))

    def on_frame(self):
        self.scene.advance()
        if self.controls is not None:
            self.controls.update()
        self.update()

    def reset_camera(self):
        self.scene.reset_camera(self.camera, self.controls)
        self.update()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self.press_pos = (event.position().x(), event.position().y())

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton or self.press_pos is None:
            return
        x, y = event.position().x(), event.position().y()
        px, py = self.press_pos
        self.press_pos = None
        if abs(x - px) <= CLICK_TOLERANCE and abs(y - py) <= CLICK_TOLERANCE:
            self.pick_at(x, y)

    def pick_at(self, x, y):
        ndc_x, ndc_y = self.to_ndc(x, y)
        data = self.scene.select_at(self.camera, ndc_x, ndc_y)
        if data is None:
            self.selectionCleared.emit()
        else:
            self.objectSelected.emit(data)

    def to_ndc(self, x, y):
        ndc_x = (x / max(1, self.width())) * 2.0 - 1.0
        ndc_y = 1.0 - (y / max(1, self.height())) * 2.0
        return max(-1.0, min(1.0, ndc_x)), max(-1.0, min(1.0, ndc_y))
