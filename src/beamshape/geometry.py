"""Cross-section profiles consumed by the section analysis engine.

A :class:`SectionProfile` is the 2-D concrete outline of one analysis
station.  Coordinates are in **metres**: ``x`` runs across the width and
``y`` runs up the depth of the beam.  The engine never builds beam solids
itself; it only asks a profile for

* gross area, centroid and second moment about the horizontal centroidal axis,
* the extreme fibre levels (``top`` / ``bottom``),
* the width at a given level (used by the web-width search), and
* the properties of the compression zone above (or below) a cutting line.

Any object exposing the same queries can stand in for the polygon
implementation below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from shapely.geometry import LineString, Polygon, box
from shapely.geometry.polygon import orient
from shapely.validation import explain_validity


# ---------------------------------------------------------------------------
# Polygon helpers
# ---------------------------------------------------------------------------

def _polygons(geom) -> list[Polygon]:
    """Polygonal parts of a shapely geometry; lines and points are dropped."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    parts = []
    for part in getattr(geom, "geoms", []):
        parts.extend(_polygons(part))
    return parts


def _ring_moment(coords) -> float:
    """Signed second moment of a closed ring about ``y = 0``."""
    xy = np.asarray(coords, dtype=float)
    x0, y0 = xy[:-1, 0], xy[:-1, 1]
    x1, y1 = xy[1:, 0], xy[1:, 1]
    cross = x0 * y1 - x1 * y0
    return float(((y0**2 + y0 * y1 + y1**2) * cross).sum() / 12.0)


def _second_moment_x(parts: list[Polygon]) -> float:
    """Second moment of polygons about ``y = 0``, holes subtracted."""
    total = 0.0
    for part in parts:
        part = orient(part, sign=1.0)
        total += _ring_moment(part.exterior.coords)
        for ring in part.interiors:
            total += _ring_moment(ring.coords)
    return total


def _area_and_centroid_y(parts: list[Polygon]) -> tuple[float, float]:
    area = sum(p.area for p in parts)
    if area <= 0:
        return 0.0, 0.0
    cy = sum(p.area * p.centroid.y for p in parts) / area
    return area, cy


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ZoneProperties:
    """Compression zone cut from a profile at a given depth.

    Attributes
    ----------
    depth : float
        Depth of the cut below the compression face, m.
    area : float
        Area of the zone, m².
    centroid_depth : float
        Distance from the compression face to the zone centroid, m.
    second_moment : float
        Second moment of the zone about the cutting line, m⁴.
    face_width : float
        Width of the section at the compression face, m.
    """

    depth: float
    area: float
    centroid_depth: float
    second_moment: float
    face_width: float


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class SectionProfile:
    """Closed polygonal concrete outline of one station.

    Parameters
    ----------
    vertices : iterable of (x, y)
        Outline vertices in metres, either winding.  The closing vertex
        may be repeated or omitted.

    Raises
    ------
    ValueError
        For fewer than 3 vertices, a zero-area outline or a
        self-intersecting outline.
    """

    def __init__(self, vertices: Iterable[Sequence[float]]):
        pts = [tuple(map(float, v)) for v in vertices]
        if any(len(p) != 2 for p in pts) or len(pts) < 3:
            raise ValueError("A section outline needs at least 3 (x, y) vertices")
        if np.allclose(pts[0], pts[-1]):
            pts = pts[:-1]
        if len(pts) < 3:
            raise ValueError("A section outline needs at least 3 (x, y) vertices")

        polygon = Polygon(pts)
        if polygon.area == 0.0:
            raise ValueError("Section outline must enclose a non-zero area")
        if not polygon.is_valid:
            raise ValueError(f"Section outline is not a simple polygon: {explain_validity(polygon)}")

        self._polygon = orient(polygon, sign=1.0)
        self.area = float(self._polygon.area)
        c = self._polygon.centroid
        self.centroid = (float(c.x), float(c.y))
        self.second_moment = _second_moment_x([self._polygon]) - self.area * c.y**2
        minx, miny, maxx, maxy = self._polygon.bounds
        self.top = float(maxy)
        self.bottom = float(miny)
        self._xlim = (minx - 1.0, maxx + 1.0)

    # -- factories -----------------------------------------------------------

    @classmethod
    def rectangle(cls, width: float, depth: float) -> "SectionProfile":
        """Rectangle ``width`` x ``depth`` (m) with its soffit at ``y = 0``."""
        hw = width / 2.0
        return cls([(-hw, 0.0), (hw, 0.0), (hw, depth), (-hw, depth)])

    @classmethod
    def tee(
        cls,
        flange_width: float,
        flange_depth: float,
        web_width: float,
        depth: float,
    ) -> "SectionProfile":
        """T-section with the flange on top, soffit at ``y = 0`` (m)."""
        bf, bw = flange_width / 2.0, web_width / 2.0
        yf = depth - flange_depth
        return cls([
            (-bw, 0.0), (bw, 0.0), (bw, yf), (bf, yf),
            (bf, depth), (-bf, depth), (-bf, yf), (-bw, yf),
        ])

    @classmethod
    def i_section(
        cls,
        flange_width: float,
        flange_depth: float,
        web_width: float,
        depth: float,
        bottom_flange_width: float | None = None,
        bottom_flange_depth: float | None = None,
    ) -> "SectionProfile":
        """I-section (m).  The bottom flange defaults to the top flange."""
        bt = flange_width / 2.0
        bb = (bottom_flange_width or flange_width) / 2.0
        tb = bottom_flange_depth or flange_depth
        bw = web_width / 2.0
        yt = depth - flange_depth
        return cls([
            (-bb, 0.0), (bb, 0.0), (bb, tb), (bw, tb), (bw, yt), (bt, yt),
            (bt, depth), (-bt, depth), (-bt, yt), (-bw, yt), (-bw, tb), (-bb, tb),
        ])

    # -- basic queries ---------------------------------------------------------

    @property
    def polygon(self) -> Polygon:
        return self._polygon

    @property
    def vertices(self) -> np.ndarray:
        return np.asarray(self._polygon.exterior.coords)[:-1]

    @property
    def depth(self) -> float:
        """Overall depth between the extreme fibres, m."""
        return self.top - self.bottom

    @property
    def distance_to_top(self) -> float:
        """Centroid to top fibre, m."""
        return self.top - self.centroid[1]

    @property
    def distance_to_bottom(self) -> float:
        """Centroid to bottom fibre, m."""
        return self.centroid[1] - self.bottom

    def width_at(self, y: float) -> float:
        """Total width of concrete cut by the horizontal line at level ``y``.

        A line lying along a horizontal edge counts that edge.  Levels
        outside the outline return 0.
        """
        if y < self.bottom or y > self.top:
            return 0.0
        line = LineString([(self._xlim[0], y), (self._xlim[1], y)])
        return float(self._polygon.intersection(line).length)

    def width_at_depth(self, depth: float, from_top: bool = True) -> float:
        """Width at ``depth`` below the top (or above the bottom) fibre."""
        y = self.top - depth if from_top else self.bottom + depth
        return self.width_at(y)

    def compression_zone(self, depth: float, from_top: bool = True) -> ZoneProperties:
        """Properties of the concrete between the compression face and a cut.

        Parameters
        ----------
        depth : float
            Distance from the compression face to the cutting line, m.
        from_top : bool
            ``True`` when the top fibre is in compression.
        """
        # Nudge into the section so the face width is not read on the boundary.
        face_probe = min(1e-9, self.depth / 2.0)
        face_width = self.width_at_depth(face_probe, from_top)
        if depth <= 0:
            return ZoneProperties(0.0, 0.0, 0.0, 0.0, face_width)

        x0, x1 = self._xlim
        if from_top:
            y_cut = self.top - depth
            window = box(x0, y_cut, x1, self.top + 1.0)
        else:
            y_cut = self.bottom + depth
            window = box(x0, self.bottom - 1.0, x1, y_cut)

        parts = _polygons(self._polygon.intersection(window))
        area, cy = _area_and_centroid_y(parts)
        if area <= 0:
            return ZoneProperties(depth, 0.0, 0.0, 0.0, face_width)
        i_centroid = _second_moment_x(parts) - area * cy**2
        i_cut = i_centroid + area * (cy - y_cut) ** 2
        centroid_depth = self.top - cy if from_top else cy - self.bottom
        return ZoneProperties(
            depth=depth,
            area=area,
            centroid_depth=centroid_depth,
            second_moment=i_cut,
            face_width=face_width,
        )

    def __repr__(self) -> str:
        return (
            f"SectionProfile(area={self.area:.4g} m², depth={self.depth:.4g} m, "
            f"vertices={len(self.vertices)})"
        )
