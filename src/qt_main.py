import sys
import argparse
import logging
import traceback
import numpy as np
from PyQt6.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QLabel, QSlider, QPushButton, QCheckBox, QFrame, QDockWidget,
                             QMessageBox)
from PyQt6.QtCore import Qt

from solar_system import SolarSystem, MAX_SPEED
from widgets.gl_view import SolarSystemView
from widgets.info_panel import InfoPanel

logger = logging.getLogger(__name__)

# Speed slider works in tenths
SPEED_STEPS = 10


class MainWindow(QMainWindow):
    def __init__(self, scene=None, fps=60):
        super().__init__()
        self.setWindowTitle("Solar System")
        self.resize(1600, 900)

        self.scene = scene if scene is not None else SolarSystem()
        self.fps = fps
        self.setup_ui()
        self.apply_stylesheet()
        self.view.attach_controls()

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.view = SolarSystemView(self.scene, fps=self.fps)
        self.view.objectSelected.connect(self.on_object_selected)
        self.view.selectionCleared.connect(self.on_selection_cleared)
        self.view.initFailed.connect(self.on_init_failed)
        main_layout.addWidget(self.view, 1)

        self.info_panel = InfoPanel()
        self.info_panel.closed.connect(self.scene.clear_selection)
        main_layout.addWidget(self.info_panel)

        self.create_control_panel()

    def create_control_panel(self):
        # A floating dock can be dragged around and collapsed
        dock = QDockWidget("CONTROLS", self)
        dock.setObjectName("ControlDock")
        dock.setFeatures(QDockWidget.DockWidgetFeature.DockWidgetMovable |
                         QDockWidget.DockWidgetFeature.DockWidgetFloatable)

        container = QFrame()
        container.setObjectName("SidePanel")
        vbox = QVBoxLayout(container)

        row = QHBoxLayout()
        row.addWidget(QLabel("Animation Speed"))
        self.label_speed = QLabel(self.scene.speed_label())
        self.label_speed.setAlignment(Qt.AlignmentFlag.AlignRight)
        row.addWidget(self.label_speed)
        vbox.addLayout(row)

        self.slider_speed = QSlider(Qt.Orientation.Horizontal)
        self.slider_speed.setRange(0, int(MAX_SPEED * SPEED_STEPS))
        self.slider_speed.setValue(int(round(self.scene.animation_speed * SPEED_STEPS)))
        self.slider_speed.valueChanged.connect(self.on_speed_changed)
        vbox.addWidget(self.slider_speed)

        self.check_pause = QCheckBox("Pause")
        self.check_pause.toggled.connect(self.on_pause_toggled)
        vbox.addWidget(self.check_pause)

        btn_orbits = QPushButton("Toggle Orbits")
        btn_orbits.clicked.connect(self.on_toggle_orbits)
        vbox.addWidget(btn_orbits)

        btn_reset = QPushButton("Reset Camera")
        btn_reset.setObjectName("PrimaryButton")
        btn_reset.clicked.connect(self.view.reset_camera)
        vbox.addWidget(btn_reset)

        hint = QLabel("Drag to orbit, right-drag to pan,\nwheel / pinch / +/- to zoom,\nclick a body for details.")
        hint.setObjectName("HintLabel")
        vbox.addWidget(hint)
        vbox.addStretch()

        dock.setWidget(container)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, dock)
        self.control_dock = dock

    def on_speed_changed(self, val):
        self.scene.set_animation_speed(val / SPEED_STEPS)
        self.label_speed.setText(self.scene.speed_label())

    def on_pause_toggled(self, checked):
        self.scene.paused = checked

    def on_toggle_orbits(self):
        shown = self.scene.toggle_orbits()
        logger.info(f"Orbital paths {'shown' if shown else 'hidden'}")
        self.view.update()

    def on_object_selected(self, data):
        self.info_panel.show_body(data)

    def on_selection_cleared(self):
        self.info_panel.hide()

    def on_init_failed(self, message):
        QMessageBox.critical(self, "Solar System", f"Error loading Solar System: {message}")

    def apply_stylesheet(self):
        self.setStyleSheet("""
            QMainWindow {
                background-color: #000011;
            }
            QLabel, QCheckBox {
                color: #E0E0E0;
                font-family: 'Segoe UI', sans-serif;
            }
            #PanelTitle {
                font-weight: bold;
                font-size: 14px;
                color: #FFFFFF;
                background-color: #2C3E50;
                padding: 5px;
                border-radius: 3px;
            }
            #SidePanel {
                background-color: #1E1E1E;
                border: 1px solid #333333;
                border-radius: 5px;
                padding: 10px;
            }
            #StatLabel {
                color: #88AAFF;
            }
            #HintLabel {
                color: #888888;
                font-size: 11px;
            }
            QDockWidget {
                color: #FFFFFF;
            }
            QPushButton {
                background-color: #3D3D3D;
                color: white;
                border: none;
                padding: 8px;
                border-radius: 4px;
            }
            QPushButton:hover {
                background-color: #4D4D4D;
            }
            #PrimaryButton {
                background-color: #E74C3C;
                font-weight: bold;
            }
            #PrimaryButton:hover {
                background-color: #C0392B;
            }
            QSlider::handle:horizontal {
                background: #3498DB;
                width: 14px;
                border-radius: 7px;
            }
        """)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive 3D Solar System viewer")
    parser.add_argument("--speed", type=float, default=1.0, help="initial animation speed (0-5)")
    parser.add_argument("--hide-orbits", action="store_true", help="start with orbital paths hidden")
    parser.add_argument("--seed", type=int, default=None, help="random seed for star field and planet layout")
    parser.add_argument("--fps", type=int, default=60, help="frame timer rate")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info("Starting Solar System viewer...")
    try:
        app = QApplication(sys.argv[:1])

        scene = SolarSystem(rng=np.random.default_rng(args.seed),
                            animation_speed=args.speed,
                            show_orbits=not args.hide_orbits)
        window = MainWindow(scene, fps=args.fps)
        window.show()
        logger.info("Application window shown.")

        res = app.exec()
        logger.info(f"app.exec() returned with code {res}")
        return res
    except Exception as e:
        logger.error(f"Crash during startup: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
