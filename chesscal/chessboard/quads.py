"""Quadrangles detected on a chessboard image and the links between them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

FLT_MAX = 3.4028234663852886e38

Point = tuple[float, float]


@dataclass(eq=False)
class ChessboardCorner:
    """A corner shared by one or two quads, with its board row and column."""

    pt: Point = (0.0, 0.0)
    row: int = 0
    column: int = 0
    needs_neighbor: bool = False


def _new_corners() -> list[ChessboardCorner]:
    return [ChessboardCorner() for _ in range(4)]


@dataclass(eq=False)
class ChessboardQuad:
    """A four-sided blob; ``neighbors[i]`` is the quad linked at ``corners[i]``."""

    corners: list[ChessboardCorner] = field(default_factory=_new_corners)
    neighbors: list[Optional["ChessboardQuad"]] = field(default_factory=lambda: [None] * 4)
    count: int = 0
    group_idx: int = -1
    labeled: bool = False
    edge_len: float = FLT_MAX

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> ChessboardQuad:
        """Build a quad from its four vertices; ``edge_len`` is the shortest squared edge."""
        pts = [(float(x), float(y)) for x, y in points]
        if len(pts) != 4:
            raise ValueError("a quad needs exactly 4 points")
        quad = cls(corners=[ChessboardCorner(pt=p) for p in pts])
        for a, b in zip(pts, pts[1:] + pts[:1]):
            quad.edge_len = min(quad.edge_len, _dist2(a, b))
        return quad


def _dist2(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def _mid(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def _side(direction: Point, origin: Point, p: Point) -> float:
    """Cross product telling on which side of a line ``p`` lies."""
    return direction[0] * (p[1] - origin[1]) - (p[0] - origin[0]) * direction[1]


def _line(a: Point, b: Point) -> tuple[Point, Point]:
    """Line through ``b`` with direction ``a - b``."""
    return (a[0] - b[0], a[1] - b[1]), b


def _same(s1: float, s2: float) -> bool:
    return (s1 < 0 and s2 < 0) or (s1 > 0 and s2 > 0)


def _opposite(s1: float, s2: float) -> bool:
    return (s1 < 0 < s2) or (s1 > 0 > s2)


def match_corners(
    quad1: ChessboardQuad, corner1: int, quad2: ChessboardQuad, corner2: int
) -> bool:
    """Whether ``corner2`` of ``quad2`` may be linked to ``corner1`` of ``quad1``."""
    a = [quad1.corners[(corner1 + k) % 4].pt for k in range(4)]
    b = [quad2.corners[(corner2 + k) % 4].pt for k in range(4)]

    # Lines through the midpoints of opposite sides of quad1.
    d1, o1 = _line(_mid(a[0], a[1]), _mid(a[2], a[3]))
    d2, o2 = _line(_mid(a[0], a[3]), _mid(a[1], a[2]))
    sign11, sign12, sign13 = (_side(d1, o1, p) for p in (a[0], b[0], b[2]))
    sign21, sign22, sign23 = (_side(d2, o2, p) for p in (a[0], b[0], b[2]))

    # The same from the candidate quad's point of view.
    d3, o3 = _line(_mid(b[0], b[1]), _mid(b[2], b[3]))
    d4, o4 = _line(_mid(b[0], b[3]), _mid(b[1], b[2]))
    sign31, sign32, sign33 = (_side(d3, o3, p) for p in (a[0], b[0], a[2]))
    sign41, sign42, sign43 = (_side(d4, o4, p) for p in (a[0], b[0], a[2]))

    # The candidate must lie outside quad1's edges meeting at the corner...
    d5, o5 = _line(a[1], a[0])
    d6, o6 = _line(a[3], a[0])
    sign51, sign52 = _side(d5, o5, a[2]), _side(d5, o5, b[0])
    sign61, sign62 = _side(d6, o6, a[2]), _side(d6, o6, b[0])

    # ...and the current corner outside the candidate's edges.
    d7, o7 = _line(b[1], b[0])
    d8, o8 = _line(b[3], b[0])
    sign71, sign72 = _side(d7, o7, a[0]), _side(d7, o7, b[2])
    sign81, sign82 = _side(d8, o8, a[0]), _side(d8, o8, b[2])

    return (
        _same(sign11, sign12)
        and _same(sign21, sign22)
        and _same(sign31, sign32)
        and _same(sign41, sign42)
        and _same(sign11, sign13)
        and _same(sign21, sign23)
        and _same(sign31, sign33)
        and _same(sign41, sign43)
        and _opposite(sign51, sign52)
        and _opposite(sign61, sign62)
        and _opposite(sign71, sign72)
        and _opposite(sign81, sign82)
    )


def find_quad_neighbors(quads: Sequence[ChessboardQuad], dilation: int) -> None:
    """Link every quad corner to the closest matching free corner of another quad."""
    # Squared distance slack for the dilation and the initial corner mismatch.
    thresh_dilation = float((2 * dilation + 3) * (2 * dilation + 3) * 2)

    for cur in quads:
        for i in range(4):
            if cur.neighbors[i] is not None:
                continue

            pt = cur.corners[i].pt
            min_dist = FLT_MAX
            closest: Optional[ChessboardQuad] = None
            closest_idx = -1

            for quad in quads:
                if quad is cur:
                    continue
                for j in range(4):
                    if quad.neighbors[j] is not None:
                        continue
                    dist = _dist2(pt, quad.corners[j].pt)
                    if (
                        dist < min_dist
                        and dist <= cur.edge_len + thresh_dilation
                        and dist <= quad.edge_len + thresh_dilation
                        and match_corners(cur, i, quad, j)
                    ):
                        closest, closest_idx, min_dist = quad, j, dist

            if closest is None or min_dist >= FLT_MAX:
                continue
            if any(n is cur for n in closest.neighbors):
                continue

            corner = closest.corners[closest_idx]
            corner.pt = _mid(pt, corner.pt)

            cur.count += 1
            cur.neighbors[i] = closest
            cur.corners[i] = corner

            closest.count += 1
            closest.neighbors[closest_idx] = cur
            closest.corners[closest_idx] = corner


def find_connected_quads(
    quads: Sequence[ChessboardQuad], group_idx: int
) -> list[ChessboardQuad]:
    """Collect the next group of connected, not yet grouped quads and tag them."""
    seed = next((q for q in quads if q.count > 0 and q.group_idx < 0), None)
    if seed is None:
        return []

    seed.group_idx = group_idx
    group = [seed]
    stack = [seed]
    while stack:
        q = stack.pop()
        for neighbor in q.neighbors:
            if neighbor is not None and neighbor.count > 0 and neighbor.group_idx < 0:
                neighbor.group_idx = group_idx
                stack.append(neighbor)
                group.append(neighbor)
    return group


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _hull_area(points: Sequence[Point]) -> float:
    pts = sorted(set(points))
    if len(pts) < 3:
        return 0.0

    def half(seq: Sequence[Point]) -> list[Point]:
        chain: list[Point] = []
        for p in seq:
            while len(chain) >= 2 and _cross(chain[-2], chain[-1], p) <= 0:
                chain.pop()
            chain.append(p)
        return chain

    hull = half(pts)[:-1] + half(pts[::-1])[:-1]
    area = sum(
        p[0] * q[1] - q[0] * p[1] for p, q in zip(hull, hull[1:] + hull[:1])
    )
    return abs(area) / 2


def clean_found_connected_quads(
    quad_group: list[ChessboardQuad], pattern_size: tuple[int, int]
) -> None:
    """Drop surplus quads from ``quad_group`` in place.

    While the group holds more quads than a ``(width, height)`` pattern can,
    the quad whose removal shrinks the convex hull of quad centres the most
    is removed and unlinked from its neighbours.
    """
    width, height = pattern_size
    count = ((width + 1) * (height + 1) + 1) // 2
    if len(quad_group) <= count:
        return

    centers: list[Point] = []
    for q in quad_group:
        cx = sum(c.pt[0] for c in q.corners) * 0.25
        cy = sum(c.pt[1] for c in q.corners) * 0.25
        centers.append((cx, cy))
    center = (
        sum(c[0] for c in centers) / len(quad_group),
        sum(c[1] for c in centers) / len(quad_group),
    )

    while len(quad_group) > count:
        min_area = FLT_MAX
        min_index = -1
        for skip in range(len(quad_group)):
            trial = centers[:skip] + [center] + centers[skip + 1 :]
            area = _hull_area(trial)
            if area < min_area:
                min_area = area
                min_index = skip

        removed = quad_group[min_index]
        for q in quad_group:
            for j in range(4):
                if q.neighbors[j] is removed:
                    q.neighbors[j] = None
                    q.count -= 1
                    for k in range(4):
                        if removed.neighbors[k] is q:
                            removed.neighbors[k] = None
                            removed.count -= 1
                            break
                    break

        quad_group[min_index] = quad_group[-1]
        centers[min_index] = centers[-1]
        quad_group.pop()
        centers.pop()


def augment_best_run(
    candidate_quads: Sequence[ChessboardQuad],
    candidate_dilation: int,
    existing_quads: list[ChessboardQuad],
    existing_dilation: int,
) -> bool:
    """Attach one unlabeled candidate quad to a corner that still needs a neighbour.

    Returns ``True`` when a quad was appended to ``existing_quads`` (call again
    to continue), ``False`` when nothing more could be linked.
    """
    thresh_dilation = float(
        (2 * candidate_dilation + 3) * (2 * existing_dilation + 3) * 2
    )

    for cur in existing_quads:
        for i in range(4):
            if not cur.corners[i].needs_neighbor:
                continue

            pt = cur.corners[i].pt
            min_dist = FLT_MAX
            closest: Optional[ChessboardQuad] = None
            closest_idx = -1

            for candidate in candidate_quads:
                if candidate.labeled:
                    continue
                for j in range(4):
                    dist = _dist2(pt, candidate.corners[j].pt)
                    if (
                        dist < min_dist
                        and dist <= cur.edge_len + thresh_dilation
                        and dist <= candidate.edge_len + thresh_dilation
                        and match_corners(cur, i, candidate, j)
                    ):
                        closest, closest_idx, min_dist = candidate, j, dist

            if closest is None or min_dist >= FLT_MAX:
                continue

            closest_corner = closest.corners[closest_idx]
            closest_corner.pt = _mid(pt, closest_corner.pt)
            # Only the position is copied so row/column labels stay intact.
            cur.corners[i].pt = closest_corner.pt
            closest.labeled = True

            new_quad = ChessboardQuad(
                count=1,
                edge_len=closest.edge_len,
                group_idx=cur.group_idx,
                labeled=False,
                corners=[ChessboardCorner(pt=c.pt) for c in closest.corners],
            )
            new_quad.neighbors[closest_idx] = cur
            cur.neighbors[i] = new_quad

            existing_quads.append(new_quad)
            return True

    return False