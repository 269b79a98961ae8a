import numpy as np
from scipy.interpolate import interp1d


def apply_gamma_correction(colors: np.ndarray, gamma: float = 0.8) -> np.ndarray:
    """
    Gamma-correct an (N, 3) array of RGB values in 0-255.
    gamma < 1 brightens, gamma > 1 darkens.
    """
    arr = np.asarray(colors, dtype=np.float32) / 255.0
    return np.clip(255.0 * arr ** gamma, 0, 255)


def create_cyclic_gradient(colors, resolution=12, interpolation='quadratic',
                           gamma=None) -> np.ndarray:
    """
    Interpolates a closed loop through the given RGB colors, so the last
    entry blends back into the first. Escape bands wrap around the palette,
    which is why the loop is closed.

    Parameters:
        colors (list of tuple): RGB tuples (0-255), at least two.
        resolution (int): Number of entries in the resulting palette.
        interpolation (str): Any interp1d kind ('linear', 'quadratic', ...).
        gamma (float, optional): Gamma correction applied after interpolation.

    Returns:
        np.ndarray: (resolution, 3) uint8 palette.
    """
    if len(colors) < 2:
        raise ValueError("Palette must contain at least two colors for interpolation.")

    loop = np.array(list(colors) + [colors[0]], dtype=np.float32)
    knots = np.arange(len(loop))
    interp_func = interp1d(knots, loop, kind=interpolation, axis=0)
    samples = interp_func(np.linspace(0, len(loop) - 1, num=resolution, endpoint=False))
    if gamma is not None:
        samples = apply_gamma_correction(samples, gamma)
    return np.clip(samples, 0, 255).astype(np.uint8)


# Six hard bands: red, yellow, spring green, teal, blue, purple
BANDS = np.array([
    (255, 0, 0),
    (255, 255, 0),
    (0, 255, 127),
    (0, 127, 127),
    (0, 0, 255),
    (127, 0, 127),
], dtype=np.uint8)

base_palettes = {
    "Bands": BANDS,

    "SmoothBands": create_cyclic_gradient(BANDS.tolist(), resolution=18),

    "Fire": create_cyclic_gradient([
        (255, 0, 0), (255, 85, 0), (255, 170, 0),
        (255, 255, 0), (255, 255, 170)], resolution=16, gamma=0.8),

    "Ocean": create_cyclic_gradient([
        (0, 32, 64), (0, 64, 128), (0, 128, 255),
        (64, 160, 255), (128, 192, 255)], resolution=16),

    "Grayscale": create_cyclic_gradient([
        (64, 64, 64), (128, 128, 128),
        (192, 192, 192), (255, 255, 255)], interpolation='linear', resolution=8),
}

# Export palettes dictionary
palettes = {name: base_palettes[name] for name in sorted(base_palettes)}
DEFAULT_PALETTE = "Bands"
