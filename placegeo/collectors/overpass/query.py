"""
Overpass QL query builders
"""

from typing import Dict, List, Sequence

from ...records import BoundingBox


def _value_pattern(values: Sequence[str]) -> str:
    return f"^({'|'.join(values)})$"


def build_area_query(
    bbox: BoundingBox,
    supported_tags: Dict[str, List[str]],
    timeout: int = 180
) -> str:
    """
    Query every node, way and relation carrying a supported tag in a bbox

    'out center geom' returns centers for ways/relations and full member
    geometry, which is all the geometry engine needs.
    """
    lines = []
    for key, values in supported_tags.items():
        if not values:
            continue
        pattern = _value_pattern(values)
        for kind in ("node", "way", "relation"):
            lines.append(f'  {kind}[{key}~"{pattern}"];')

    body = "\n".join(lines)
    return (
        f"[out:json][timeout:{timeout}][bbox:{bbox.to_overpass()}];\n"
        f"(\n{body}\n);\n"
        f"out center geom;"
    )


def build_id_query(ids: Sequence[int], timeout: int = 180) -> str:
    """Query elements by id; the type is unknown so all three are asked for"""
    id_list = ",".join(str(int(i)) for i in ids)
    return (
        f"[out:json][timeout:{timeout}];\n"
        f"(\n"
        f"  relation(id:{id_list});\n"
        f"  way(id:{id_list});\n"
        f"  node(id:{id_list});\n"
        f");\n"
        f"out geom;"
    )


def build_name_query(
    name: str,
    bbox: BoundingBox,
    supported_tags: Dict[str, List[str]],
    timeout: int = 60
) -> str:
    """Case-insensitive name search restricted to supported tags"""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    lines = []
    for key, values in supported_tags.items():
        if not values:
            continue
        pattern = _value_pattern(values)
        for kind in ("node", "way", "relation"):
            lines.append(f'  {kind}[{key}~"{pattern}"]["name"~"{escaped}",i];')

    body = "\n".join(lines)
    return (
        f"[out:json][timeout:{timeout}][bbox:{bbox.to_overpass()}];\n"
        f"(\n{body}\n);\n"
        f"out center geom;"
    )
