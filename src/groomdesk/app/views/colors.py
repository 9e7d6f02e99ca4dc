# Define a static color class for consistent use across the app


class Colors:
    # Brand (warm orange)
    brand = "#f97316"
    light_brand = "#fed7aa"

    gray = "#4b5563"


# Daily revenue bars: today stands out, other days stay muted
BAR_COLOR_TODAY = Colors.brand
BAR_COLOR_DEFAULT = Colors.light_brand
