from PySide6.QtGui import QPixmap
import numpy as np
import qimage2ndarray


def pixmapFromNumpy(img_np: np.ndarray, device_pixel_ratio: float = 1.0) -> QPixmap:
    """Converts a grayscale, RGB or RGBA image to a pixmap.

    The image is assumed to be rendered at `device_pixel_ratio` times the
    logical resolution (e.g. the preview surface on high-dpi screens).
    """
    if img_np.ndim == 3 and img_np.shape[2] not in [1, 3, 4]:
        raise ValueError(f'Cannot display a {img_np.shape[2]}-channel image.')
    qimage = qimage2ndarray.array2qimage(np.ascontiguousarray(img_np))
    if qimage.isNull():
        raise ValueError('Invalid image received, cannot convert it to QImage')
    pixmap = QPixmap.fromImage(qimage)
    pixmap.setDevicePixelRatio(device_pixel_ratio)
    return pixmap
