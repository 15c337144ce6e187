import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
from tqdm import tqdm

from components.image_processing.blending import blend_pixels
from components.image_processing.raster import Raster
from utils.data_structures import CompositionConfig

logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(message)s')
logger = logging.getLogger(__name__)

ROWS_PER_BAND = 64


def composite_row(base: Raster, watermark: Raster, config: CompositionConfig, y: int) -> np.ndarray:
    row = base.pixels[y, :, :3].copy()
    mapping = config.placement.map_row(y, base.width, watermark.size)
    if mapping is None:
        return row
    columns, watermark_columns, watermark_y = mapping
    row[columns] = blend_pixels(row[columns], watermark.pixels[watermark_y, watermark_columns], config)
    return row


def composite_band(base: Raster, watermark: Raster, config: CompositionConfig, start: int, stop: int) -> np.ndarray:
    return np.stack([composite_row(base, watermark, config, y) for y in range(start, stop)])


def composite(
    base: Raster,
    watermark: Raster,
    config: CompositionConfig,
    workers: int = 1,
    progress: bool = False,
) -> Raster:
    """
    Watermark ``base`` and return a new opaque raster of the same size.

    Args:
        base: image being watermarked, never modified.
        watermark: watermark image, never modified.
        config: validated composition settings.
        workers: number of threads; rows are split into bands that are
            computed independently, so the result does not depend on it.
        progress: show a tqdm bar over the bands.

    Inputs must have passed validation first; on validated inputs this
    function cannot fail.
    """
    output = np.empty((base.height, base.width, 3), dtype=np.uint8)
    bands = [(start, min(start + ROWS_PER_BAND, base.height)) for start in range(0, base.height, ROWS_PER_BAND)]
    logger.debug(f"Compositing {base.width}x{base.height} with {config.placement.type.value} placement")

    if workers is None or workers < 1:
        workers = max(1, (os.cpu_count() or 1) - 2)

    if workers == 1:
        for start, stop in tqdm(bands, desc="Compositing", disable=not progress):
            output[start:stop] = composite_band(base, watermark, config, start, stop)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(composite_band, base, watermark, config, start, stop): (start, stop)
                for start, stop in bands
            }
            for future in tqdm(as_completed(futures), total=len(futures), desc="Compositing", disable=not progress):
                start, stop = futures[future]
                output[start:stop] = future.result()

    return Raster(output)
