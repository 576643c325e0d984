"""Keyboard sampling with explicit down-edge detection.

Qt delivers press/release events whenever they happen; the frame loop wants
a per-frame answer to "did this key just go down?". KeyboardState collects
the raw events between frames and KeyEdge compares each frame's sample with
the previous one.
"""


class KeyEdge:
    """Rising-edge detector for a single key."""

    def __init__(self):
        self._was_down = False

    def update(self, is_down):
        """Feed this frame's sample; True only on an up -> down transition."""
        edge = is_down and not self._was_down
        self._was_down = is_down
        return edge

    def reset(self):
        self._was_down = False


class KeyboardState:
    """Held keys plus keys tapped (pressed and released) within the current frame."""

    def __init__(self):
        self._held = set()
        self._tapped = set()

    def press(self, key):
        self._held.add(key)
        self._tapped.add(key)

    def release(self, key):
        self._held.discard(key)

    def sample(self, key):
        return key in self._held or key in self._tapped

    def end_frame(self):
        self._tapped.clear()

    def clear(self):
        self._held.clear()
        self._tapped.clear()
