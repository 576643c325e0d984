from dataclasses import dataclass


@dataclass
class Velocity:
    x: int
    y: int


# Moves a box around an area, reflecting it off every edge it touches. Velocity is in pixels per frame.
class Bouncer:

    def __init__(self, speed=3):
        self.speed = int(speed)
        self.x = 0
        self.y = 0
        self.velocity = Velocity(self.speed, self.speed)

    # Advances one frame. `top_pad` is the empty space above the glyphs inside the box and `bottom_extent` is the
    # distance from the box top to the text baseline, so the text itself (not its line box) hits the edges.
    def step(self, area_w, area_h, box_w, box_h, top_pad=0, bottom_extent=None):
        if bottom_extent is None:
            bottom_extent = box_h

        self.x += self.velocity.x
        self.y += self.velocity.y

        if self.x <= 0:
            self.velocity.x = self.speed
        if self.x + box_w >= area_w:
            self.velocity.x = -self.speed
        if self.y + top_pad <= 0:
            self.velocity.y = self.speed
        if self.y + bottom_extent >= area_h:
            self.velocity.y = -self.speed
        return self.x, self.y
