import numpy as np

from utils.data_structures import CompositionConfig, Pixel


def watermark_contributes(watermark: Pixel, config: CompositionConfig) -> bool:
    # fully transparent pixels and the chroma-key color never reach the output
    if config.use_alpha and watermark.is_transparent:
        return False
    if config.transparency_color is not None and watermark.same_color(config.transparency_color):
        return False
    return True


def mix_channel(base: int, watermark: int, transparency: int) -> int:
    return int(base * (1 - transparency / 100.0) + watermark * transparency / 100.0)


def blend(base: Pixel, watermark: Pixel, config: CompositionConfig) -> Pixel:
    """Blend one watermark pixel over one base pixel.

    Returns the base pixel untouched when the watermark pixel is
    transparent (alpha in use and zero) or matches the transparency color,
    otherwise an opaque pixel mixed channel by channel with the configured
    transparency percentage. Mixed channels are truncated, not rounded.
    """
    if not watermark_contributes(watermark, config):
        return base
    t = config.transparency
    return Pixel(
        mix_channel(base.red, watermark.red, t),
        mix_channel(base.green, watermark.green, t),
        mix_channel(base.blue, watermark.blue, t),
    )


def contribution_mask(watermark: np.ndarray, config: CompositionConfig) -> np.ndarray:
    mask = np.ones(watermark.shape[:-1], dtype=bool)
    if config.use_alpha and watermark.shape[-1] == 4:
        mask &= watermark[..., 3] != 0
    if config.transparency_color is not None:
        key = np.array(config.transparency_color.rgb, dtype=np.uint8)
        mask &= ~np.all(watermark[..., :3] == key, axis=-1)
    return mask


def blend_pixels(base: np.ndarray, watermark: np.ndarray, config: CompositionConfig) -> np.ndarray:
    """Array form of :func:`blend`.

    ``base`` is ``(..., 3)`` and ``watermark`` is ``(..., 3)`` or ``(..., 4)``
    with the same leading shape. The arithmetic follows :func:`mix_channel`
    operation by operation so both forms give identical results.
    """
    t = config.transparency
    base_rgb = base[..., :3]
    mixed = base_rgb.astype(np.float64) * (1 - t / 100.0) + watermark[..., :3].astype(np.int64) * t / 100.0
    mixed = np.trunc(mixed).astype(np.uint8)
    return np.where(contribution_mask(watermark, config)[..., None], mixed, base_rgb)
