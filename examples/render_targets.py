import asyncio
import os
from vito import imvis

from calibtarget import patterns


def demo_render(cfg_file):
    params = patterns.PatternParameters.load_toml(cfg_file)
    print(patterns.config_string(params))

    coordinator = patterns.RenderCoordinator(params)
    surface, size, _ = asyncio.run(coordinator.render_export())
    imvis.imshow(surface.to_ndarray(), title=f'{params.kind.value} @ {size.label}', wait_ms=-1)


if __name__ == '__main__':
    data_dir = os.path.join(os.path.dirname(__file__), 'data')
    for cfg in ['checkerboard.toml', 'dots.toml', 'charuco.toml', 'apriltag.toml']:
        demo_render(os.path.join(data_dir, cfg))
