"""Global configuration for seamcarve."""


class Config:
    """Global configuration."""

    # Energy
    MAX_ENERGY = 1e9  # protected pixels
    MIN_ENERGY = -1e9  # pixels marked for removal
    ENERGY_CEILING = 255.0
    LUMA_WEIGHTS = (0.299, 0.587, 0.114)

    # 5-tap Sobel: derivative along one axis, smoothing along the other
    SOBEL_SMOOTH = (1.0, 4.0, 6.0, 4.0, 1.0)
    SOBEL_DERIVATIVE = (-1.0, -2.0, 0.0, 2.0, 1.0)

    # Masks: any value above this counts as active
    MASK_THRESHOLD = 0.0

    # Face detection
    CASCADE_FILENAME = "haarcascade_frontalface_default.xml"
    FACE_EXPAND = 0.2  # grow each side by 20% of the face size
    FACE_SCALE_FACTOR = 1.1
    FACE_MIN_NEIGHBORS = 3
    FACE_MIN_SIZE = (30, 30)

    # Comparison figure
    COMPARISON_TITLE = "Seam Carving Comparison: Face Protection Impact"
    COMPARISON_DPI = 150

    LOG_LEVEL = "INFO"
