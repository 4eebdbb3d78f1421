from PyQt6.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton
from PyQt6.QtCore import Qt, pyqtSignal


class InfoPanel(QFrame):
    """
    Shows the name, description and stats of the selected body.
    Hidden until something is selected.
    """
    closed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("SidePanel")
        self.setMinimumWidth(260)

        vbox = QVBoxLayout(self)

        header = QHBoxLayout()
        self.title = QLabel("")
        self.title.setObjectName("PanelTitle")
        header.addWidget(self.title, 1)
        self.btn_close = QPushButton("×")
        self.btn_close.setFixedWidth(28)
        self.btn_close.clicked.connect(self.on_close)
        header.addWidget(self.btn_close)
        vbox.addLayout(header)

        self.description = QLabel("")
        self.description.setWordWrap(True)
        vbox.addWidget(self.description)

        self.stats_grid = QGridLayout()
        self.stats_grid.setColumnStretch(1, 1)
        vbox.addLayout(self.stats_grid)
        vbox.addStretch()

        self.stat_labels = []
        self.hide()

    def show_body(self, data: dict):
        self.title.setText(data["name"])
        self.description.setText(data["description"])

        for label in self.stat_labels:
            self.stats_grid.removeWidget(label)
            label.deleteLater()
        self.stat_labels = []

        for row, (key, value) in enumerate(data["stats"].items()):
            name = QLabel(f"{key}:")
            name.setObjectName("StatLabel")
            val = QLabel(str(value))
            val.setObjectName("StatValue")
            val.setAlignment(Qt.AlignmentFlag.AlignRight)
            self.stats_grid.addWidget(name, row, 0)
            self.stats_grid.addWidget(val, row, 1)
            self.stat_labels.extend((name, val))

        self.show()

    def on_close(self):
        self.hide()
        self.closed.emit()
