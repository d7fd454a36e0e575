from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Tuple

from daybreak.render.canvas import Canvas, Color, Point
from daybreak.rng import random_in_range
from daybreak.state.scenery import HillLobe, HillProfile

SMALL_RANGE = (0.05, 0.15)
MED_RANGE = (0.2, 0.3)
LARGE_RANGE = (0.7, 0.85)
WIDTH_RANGE = (50.0, 70.0)
BASE_X_MIN = 20.0

TICK_OFFSET = 5.0
TICK_HALF_LENGTH = 4.0


def build_lobes(sky_height: float, segment_width: float, small: float, med: float, large: float) -> Tuple[HillLobe, ...]:
    """
    Five lobes: two climbing lobes up to the tall middle one, then two
    falling back to the baseline. `relative` is the baseline shift from the
    previous lobe, worked out so neighbouring lobes join without gaps.
    """
    s = sky_height
    half = segment_width / 2
    return (
        HillLobe(full=s * med, relative=-s * med),
        HillLobe(full=s * med + half, relative=0.0),
        HillLobe(full=s * large, relative=-(s * large - (s * med + segment_width))),
        HillLobe(full=s * large - half, relative=(s * large - half) - (s * small + half)),
        HillLobe(full=s * small, relative=s * small),
    )


def generate(rng: random.Random, width: float, sky_height: float) -> HillProfile:
    """Randomized profile; run once per scene."""
    segment_width = random_in_range(rng, *WIDTH_RANGE)
    base_x = random_in_range(rng, BASE_X_MIN, width / 2)
    small = random_in_range(rng, *SMALL_RANGE)
    med = random_in_range(rng, *MED_RANGE)
    large = random_in_range(rng, *LARGE_RANGE)
    return HillProfile(
        base_x=base_x,
        segment_width=segment_width,
        small=small,
        med=med,
        large=large,
        lobes=build_lobes(sky_height, segment_width, small, med, large),
    )


def fixed_profile(sky_height: float) -> HillProfile:
    """The hand-tuned profile used behind the growing tree."""
    small, med, large, segment_width = 0.15, 0.25, 0.7, 70.0
    return HillProfile(
        base_x=BASE_X_MIN,
        segment_width=segment_width,
        small=small,
        med=med,
        large=large,
        lobes=build_lobes(sky_height, segment_width, small, med, large),
    )


@dataclass
class LobeShape:
    """Draw-ready geometry for one lobe."""
    x: float
    y: float
    width: float
    full: float
    lines: List[Tuple[Point, Point]]


def layout(profile: HillProfile, sky_height: float) -> List[LobeShape]:
    """
    Walk the lobes left to right from (base_x, sky_height). Rising lobes step
    up half a width, the midpoint steps back down, falling lobes drop by
    their relative height at their right edge.
    """
    half = profile.half_width
    midway = profile.midway
    x = profile.base_x
    y = sky_height
    shapes: List[LobeShape] = []

    for i, lobe in enumerate(profile.lobes):
        lines: List[Tuple[Point, Point]] = []
        if i <= midway:
            top = y + lobe.relative
            lines.append(((x, y), (x, top)))
            y = top

        cx = x + half
        tick_y = y - half / 2
        for dx in (-TICK_OFFSET, TICK_OFFSET):
            lines.append(((cx + dx, tick_y - TICK_HALF_LENGTH), (cx + dx, tick_y + TICK_HALF_LENGTH)))

        shapes.append(LobeShape(x=x, y=y, width=profile.segment_width, full=lobe.full, lines=lines))

        x += half
        if i < midway:
            y -= half
        elif i == midway:
            y += half
        else:
            edge = x + half
            lines.append(((edge, y), (edge, y + lobe.relative)))
            y += lobe.relative + half

    return shapes


class HillSilhouette:
    """Holds one generated profile and redraws it unchanged every tick."""

    def __init__(
        self,
        profile: HillProfile,
        sky_height: float,
        *,
        color: Color = (6, 150, 17),
        outline: Color = (0, 0, 0),
    ) -> None:
        self.profile = profile
        self.sky_height = sky_height
        self.color = color
        self.outline = outline
        self.shapes = layout(profile, sky_height)

    @classmethod
    def random(cls, rng: random.Random, width: float, sky_height: float, **kwargs) -> "HillSilhouette":
        return cls(generate(rng, width, sky_height), sky_height, **kwargs)

    def render(self, canvas: Canvas) -> None:
        half = self.profile.half_width
        for shape in self.shapes:
            canvas.fill_arc(shape.x + half, shape.y, half, math.pi, 2 * math.pi, self.color)
            canvas.fill_rect(shape.x, shape.y - 1, shape.width, shape.full, self.color)
        # outlines go on top of every body so later lobes don't hide them
        for shape in self.shapes:
            canvas.stroke_arc(shape.x + half, shape.y, half, math.pi, 2 * math.pi, self.outline)
            for p1, p2 in shape.lines:
                canvas.line(p1, p2, self.outline)
