"""
Ring and path assembly

Relations deliver their outline as loose member ways, each an open or
closed fragment in arbitrary order and orientation. These helpers splice
fragments together by matching endpoints.
"""

from typing import List, Sequence

from loguru import logger


Coordinate = Sequence[float]
Path = List[Coordinate]


def _same(a: Coordinate, b: Coordinate) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def distinct_positions(coordinates: Sequence[Coordinate]) -> int:
    return len({(p[0], p[1]) for p in coordinates})


def is_closed_ring(coordinates: Sequence[Coordinate]) -> bool:
    """A ring is closed when it has at least 4 positions and ends where it starts"""
    if len(coordinates) < 4:
        return False
    return _same(coordinates[0], coordinates[-1])


def close_ring(coordinates: Sequence[Coordinate]) -> Path:
    """Append the first position if the ring is not closed yet"""
    ring = list(coordinates)
    if len(ring) < 3:
        return ring
    if not is_closed_ring(ring):
        ring.append(ring[0])
    return ring


def _extend(path: Path, pool: List[Path], stop_when_closed: bool) -> Path:
    """
    Greedily append pool fragments to the end of path

    The first fragment in pool order touching the path's last position wins.
    Matched fragments are removed from the pool.
    """
    while pool:
        if stop_when_closed and is_closed_ring(path):
            break

        last = path[-1]
        for i, fragment in enumerate(pool):
            if len(fragment) < 2:
                continue
            if _same(fragment[0], last):
                path = path + fragment[1:]
                del pool[i]
                break
            if _same(fragment[-1], last):
                path = path + fragment[::-1][1:]
                del pool[i]
                break
        else:
            break

    return path


def connect_and_close(segments: Sequence[Sequence[Coordinate]]) -> List[Path]:
    """
    Join disconnected fragments into closed rings

    One ring is produced per connected chain of fragments, in encounter
    order. Chains with fewer than 3 distinct positions enclose no area
    and are discarded.

    Args:
        segments: Fragments as lists of [lon, lat] positions

    Returns:
        List of closed rings
    """
    pool: List[Path] = [list(s) for s in segments]
    rings: List[Path] = []

    while pool:
        ring = pool.pop(0)
        if len(ring) < 2:
            continue

        ring = _extend(ring, pool, stop_when_closed=True)

        distinct = distinct_positions(ring)
        if distinct >= 3:
            rings.append(close_ring(ring))
        else:
            logger.debug(f"Discarding malformed ring with {distinct} distinct positions")

    return rings


def connect_paths(segments: Sequence[Sequence[Coordinate]]) -> List[Path]:
    """
    Join fragments end to end into as few open paths as possible

    Same greedy matching as connect_and_close, without forcing closure.
    """
    pool: List[Path] = [list(s) for s in segments]
    paths: List[Path] = []

    while pool:
        path = pool.pop(0)
        if not path:
            continue
        if len(path) >= 2:
            path = _extend(path, pool, stop_when_closed=False)
        paths.append(path)

    return paths
