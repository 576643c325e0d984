import sys
import time
from contextlib import contextmanager
from PySide6.QtCore import Qt, QEvent, QRect, QTimer
from PySide6.QtGui import QFontDatabase, QGuiApplication
from PySide6.QtWidgets import QApplication, QMainWindow, QStyle, QSystemTrayIcon
from cdt.common.logger import log
from cdt.core.clock import CountdownClock
from cdt.core.duration import format_duration
from cdt.core.keys import KeyEdge, KeyboardState
from cdt.core.motion import Bouncer
from cdt.ui.widgets import TimerCanvas

# Default layout: text box inset this fraction of the window from the top-left, and this fraction of its size.
TEXT_PADDING = 0.1
TEXT_SIZE = 0.8
# Bounce layout: text box size as a fraction of the window.
DVD_FONT_SCALE = 0.25


class DisplayError(RuntimeError):
    """The window or font could not be set up. There is no fallback display."""


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# The countdown window. A QTimer drives one frame per tick: sample keys, toggle pause on the Space down edge,
# advance the clock by measured elapsed time, then redraw.
class TimerWindow(QMainWindow):

    def __init__(self, clock: CountdownClock, settings, font_family=None, monotonic=time.monotonic):
        super().__init__()
        self.setWindowTitle("timer")
        self.resize(settings["window_width"], settings["window_height"])
        if settings["always_on_top"]:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        self.clock = clock
        self.settings = settings
        self._monotonic = monotonic

        # -- Input --
        self._keys = KeyboardState()
        self._pause_edge = KeyEdge()
        self._quit_edge = KeyEdge()

        # -- Display --
        self._canvas = TimerCanvas(font_family or settings["font_family"], settings["background"])
        self.setCentralWidget(self._canvas)
        self._bouncer = Bouncer(settings["velocity"]) if settings["display_mode"] == "dvd" else None

        # -- Expiry bookkeeping --
        self._blink = 0.0
        self._alerted = False
        self._closing = False
        self._tray = None

        # -- Frame timer --
        self._last_frame = self._monotonic()
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._frame)
        self._timer.start(max(1, round(1000 / settings["fps"])))

        log.debug(f"Built timer window, mode '{settings['display_mode']}' at {settings['fps']} fps")

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #

    def keyPressEvent(self, event):
        if not event.isAutoRepeat():
            self._keys.press(event.key())
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if not event.isAutoRepeat():
            self._keys.release(event.key())
        super().keyReleaseEvent(event)

    # Releases never arrive for keys held while focus leaves, so forget them.
    def changeEvent(self, event):
        if event.type() == QEvent.ActivationChange and not self.isActiveWindow():
            self._keys.clear()
        super().changeEvent(event)

    # ------------------------------------------------------------------ #
    #  Frame                                                               #
    # ------------------------------------------------------------------ #

    def _frame(self):
        if self._closing:
            return

        space_down = self._keys.sample(Qt.Key_Space)
        escape_down = self._keys.sample(Qt.Key_Escape)
        self._keys.end_frame()

        if self._quit_edge.update(escape_down):
            log.info(f"Quit requested with {self.clock.remaining():.2f} seconds remaining")
            self.close()
            return

        if self._pause_edge.update(space_down):
            self.clock.toggle_pause()

        now = self._monotonic()
        elapsed = max(0.0, now - self._last_frame)
        self._last_frame = now
        just_expired = self.clock.tick(elapsed)

        if self.clock.expired:
            # Blink phase starts at the expiring frame, not partway through it.
            if just_expired:
                self._blink = 0.0
            else:
                self._blink += elapsed
            if not self._alerted:
                self._on_expired()

        self._render()

        if self.clock.expired and self.settings["exit_on_expiry"]:
            self._closing = True
            log.info("Countdown finished, exiting on expiry")
            QTimer.singleShot(0, self.close)

    def _render(self):
        text = format_duration(self.clock.remaining(), hundredths=self.settings["show_hundredths"])
        color = self.settings["paused_foreground"] if self.clock.paused else self.settings["foreground"]
        # Once expired, the digits flash on for the first half of every second.
        visible = not self.clock.expired or (self._blink % 1.0) < 0.5
        self._canvas.set_frame(text, color, visible, self._text_box())

    def _text_box(self):
        area_w = self._canvas.width()
        area_h = self._canvas.height()
        if self._bouncer is None:
            return QRect(int(area_w * TEXT_PADDING), int(area_h * TEXT_PADDING),
                         int(area_w * TEXT_SIZE), int(area_h * TEXT_SIZE))

        box_w = int(area_w * DVD_FONT_SCALE)
        box_h = int(area_h * DVD_FONT_SCALE)
        top_pad, baseline = self._canvas.vertical_extents()
        x, y = self._bouncer.step(area_w, area_h, box_w, box_h,
                                  top_pad=int(box_h * top_pad), bottom_extent=int(box_h * baseline))
        return QRect(x, y, box_w, box_h)

    # ------------------------------------------------------------------ #
    #  Expiry                                                              #
    # ------------------------------------------------------------------ #

    def _on_expired(self):
        self._alerted = True
        log.info(f"Timer of {format_duration(self.clock.duration)} finished")
        if self.settings["flash"]:
            QApplication.alert(self)
        if self.settings["notify"]:
            self._notify()

    def _notify(self):
        if not QSystemTrayIcon.isSystemTrayAvailable():
            log.info("No system tray available, skipping desktop notification")
            return
        if self._tray is None:
            self._tray = QSystemTrayIcon(self.style().standardIcon(QStyle.SP_MessageBoxInformation), self)
            self._tray.show()
        self._tray.showMessage("Timer", "Time's up!", QSystemTrayIcon.Information, 5000)

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self._timer.stop()
        if self._tray is not None:
            self._tray.hide()
        log.info(f"Timer window closed in state '{self.clock.state.value}'")
        event.accept()


# ---------------------------------------------------------------------------
# Display lifetime
# ---------------------------------------------------------------------------

# Owns the QApplication for the life of the program: created on entry, windows closed on exit.
@contextmanager
def display_session(argv=None):
    app = QApplication.instance() or QApplication(list(argv) if argv is not None else sys.argv[:1])
    if QGuiApplication.primaryScreen() is None:
        raise DisplayError("No screen available to open the timer window on.")
    log.debug(f"Display session started on platform '{QGuiApplication.platformName()}'")
    try:
        yield app
    finally:
        app.closeAllWindows()
        log.debug("Display session torn down")

# Loads a font file into the application's font database and returns its family name.
def load_font_file(path):
    font_id = QFontDatabase.addApplicationFont(str(path))
    if font_id == -1:
        raise DisplayError(f"Could not load font file '{path}'")
    families = QFontDatabase.applicationFontFamilies(font_id)
    if not families:
        raise DisplayError(f"Font file '{path}' does not contain any font families")
    log.info(f"Loaded font '{families[0]}' from '{path}'")
    return families[0]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(duration, settings):
    clock = CountdownClock(duration)
    with display_session() as app:
        font_family = load_font_file(settings["font_file"]) if settings["font_file"] else None
        window = TimerWindow(clock, settings, font_family=font_family)
        window.show()
        return app.exec()
