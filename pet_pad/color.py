def rgb_to_hsv(R, G, B):
    # R, G, B (0-255) -> h (도), s (%), v (%)
    r, g, b = R / 255, G / 255, B / 255
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    d = c_max - c_min

    # 무채색이면 hue는 정의되지 않으므로 0
    h = 0.0
    if d != 0:
        if c_max == r:
            h = ((g - b) / d) % 6
        elif c_max == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h *= 60
        if h < 0:
            h += 360

    s = 0.0 if c_max == 0 else d / c_max
    return h, s * 100, c_max * 100
