def latlon(coords):
    """[(lon, lat), ...] -> Overpass geometry list"""
    return [{"lat": lat, "lon": lon} for lon, lat in coords]


def square(x0, y0, size):
    """Closed square ring of [lon, lat] positions"""
    return [
        [x0, y0],
        [x0 + size, y0],
        [x0 + size, y0 + size],
        [x0, y0 + size],
        [x0, y0],
    ]
