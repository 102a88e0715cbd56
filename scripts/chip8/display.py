from .constants import SCREEN_HEIGHT, SCREEN_WIDTH


class DisplayBuffer:
    """
    monochrome frame buffer, pixels can only be toggled (XORed) or cleared

    the dirty flag tells the renderer a new frame is ready, the renderer
    resets it with mark_clean once the frame has been drawn
    """
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [False] * h * w
        self.dirty = False

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.rows())

    def __getitem__(self, coordinates):
        x, y = coordinates
        return self.read_pixel(x, y)

    def _offset(self, x, y):
        # coordinates wrap around the screen edges
        return (y % self.h) * self.w + (x % self.w)

    def read_pixel(self, x, y):
        """return True if pixel is ON, return False if pixel is OFF"""
        return self.buffer[self._offset(x, y)]

    def toggle_pixel(self, x, y):
        """
        flip the pixel at (x, y) and mark the buffer dirty
        return True when a pixel that was ON got erased (a sprite collision)
        """
        offset = self._offset(x, y)
        erased = self.buffer[offset]
        self.buffer[offset] = not erased
        self.dirty = True
        return erased

    def clear(self):
        self.buffer = [False] * self.h * self.w
        self.dirty = True

    def mark_clean(self):
        self.dirty = False

    def rows(self):
        """read-only view of the buffer, one tuple of booleans per screen line"""
        return tuple(tuple(self.buffer[y * self.w:(y + 1) * self.w]) for y in range(self.h))
