"""Time display widget.

TimerCanvas paints a single line of text stretched into a box, the way the
digits are blitted into a rect each frame. The owning window decides the
text, colour, visibility and box every frame; the canvas only draws.
"""

from PySide6.QtCore import QRect
from PySide6.QtGui import QColor, QFont, QFontMetrics, QPainter
from PySide6.QtWidgets import QWidget

# Glyphs are laid out at this pixel size and then scaled into the target box.
_RENDER_PX = 256


class TimerCanvas(QWidget):

    def __init__(self, font_family, background, parent=None):
        super().__init__(parent)
        self._font = QFont(font_family)
        self._font.setPixelSize(_RENDER_PX)
        self._metrics = QFontMetrics(self._font)
        self._background = QColor(background)

        self.text = ""
        self.color = QColor("#ffffff")
        self.text_visible = True
        self.box = QRect()

    def set_frame(self, text, color, visible, box):
        self.text = text
        self.color = QColor(color)
        self.text_visible = visible
        self.box = QRect(box)
        self.update()

    def vertical_extents(self):
        """Return (top_pad, baseline) as fractions of the line height.

        top_pad is the empty band above the digits, baseline is where they
        sit. Both let the bounce layout touch edges with the glyphs rather
        than the line box.
        """
        height = self._metrics.height()
        if height <= 0:
            return 0.0, 1.0
        top_pad = max(0, self._metrics.ascent() - self._metrics.capHeight()) / height
        return top_pad, self._metrics.ascent() / height

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)

        text_w = self._metrics.horizontalAdvance(self.text)
        text_h = self._metrics.height()
        if self.text_visible and self.text and text_w > 0 and not self.box.isEmpty():
            painter.setRenderHint(QPainter.TextAntialiasing)
            painter.setRenderHint(QPainter.SmoothPixmapTransform)
            painter.setFont(self._font)
            painter.setPen(self.color)
            painter.translate(self.box.x(), self.box.y())
            painter.scale(self.box.width() / text_w, self.box.height() / text_h)
            painter.drawText(0, self._metrics.ascent(), self.text)
        painter.end()
