import numpy as np
from PIL import Image, ImageDraw, ImageFilter


def make_scene(width=720, height=1280, channels=3, seed=0):
    """Smooth synthetic RGB(A) scene: gradients, low-frequency waves and a blurred disc.

    Content varies slowly so bilinear samplers that agree on geometry agree
    on values to within a couple of 8-bit units.
    """
    yy, xx = np.mgrid[0:height, 0:width].astype(float)
    r = 255.0 * xx / max(1, width - 1)
    g = 255.0 * yy / max(1, height - 1)
    b = 127.5 + 100.0 * np.sin(xx / 37.0) * np.cos(yy / 53.0)
    rgb = np.stack([r, g, b], axis=-1).clip(0, 255).astype(np.uint8)

    img = Image.fromarray(rgb)
    draw = ImageDraw.Draw(img)
    rng = np.random.default_rng(seed)
    cx = int(rng.integers(width // 4, 3 * width // 4))
    cy = int(rng.integers(height // 4, 3 * height // 4))
    rad = min(width, height) // 6
    draw.ellipse((cx - rad, cy - rad, cx + rad, cy + rad), fill=(240, 30, 60))
    img = img.filter(ImageFilter.GaussianBlur(radius=6))

    out = np.asarray(img, dtype=np.uint8)
    if channels == 4:
        alpha = np.full((height, width, 1), 200, dtype=np.uint8)
        out = np.concatenate([out, alpha], axis=-1)
    return np.ascontiguousarray(out)


def make_checker(width=8, height=6, channels=3):
    """Tiny raster with distinct per-pixel values, handy for exact checks."""
    yy, xx = np.mgrid[0:height, 0:width]
    base = (xx * 17 + yy * 29) % 256
    chans = [base, (base + 85) % 256, (base + 170) % 256]
    if channels == 4:
        chans.append(np.full_like(base, 255))
    return np.stack(chans, axis=-1).astype(np.uint8)


def region_quad(region, src_width, src_height, out_width, out_height, keep_aspect):
    """Continuous source corners (top-left, bottom-left, bottom-right, top-right) of the crop.

    Worked out directly from the region: with `keep_aspect` the window grows
    along one axis until it has the output's aspect ratio.
    """
    cx = region.center_x * src_width
    cy = region.center_y * src_height
    rw = region.width * src_width
    rh = region.height * src_height
    if keep_aspect:
        if rw * out_height < rh * out_width:
            rw = rh * out_width / out_height
        else:
            rh = rw * out_height / out_width
    cos_t, sin_t = np.cos(region.rotation), np.sin(region.rotation)
    corners = []
    for ux, uy in ((-0.5, -0.5), (-0.5, 0.5), (0.5, 0.5), (0.5, -0.5)):
        dx, dy = ux * rw, uy * rh
        corners.append((cx + cos_t * dx - sin_t * dy, cy + sin_t * dx + cos_t * dy))
    return np.array(corners)


def reference_crop(pixels, region, out_width, out_height, keep_aspect):
    """Render the crop independently with Pillow's affine transform.

    Pillow fills outside the image, so the source is edge-padded first to
    reproduce replicate borders.
    """
    rgb = np.asarray(pixels)[..., :3]
    height, width = rgb.shape[:2]
    quad = region_quad(region, width, height, out_width, out_height, keep_aspect)
    overshoot = max(0.0, -quad[:, 0].min(), quad[:, 0].max() - width,
                    -quad[:, 1].min(), quad[:, 1].max() - height)
    pad = int(np.ceil(overshoot)) + 2
    padded = np.pad(rgb, ((pad, pad), (pad, pad), (0, 0)), mode='edge')
    img = Image.fromarray(np.ascontiguousarray(padded))
    nw, sw, _, ne = quad + pad
    # output continuous (u, v) -> nw + u * (ne - nw) / out_width + v * (sw - nw) / out_height
    data = ((ne[0] - nw[0]) / out_width, (sw[0] - nw[0]) / out_height, nw[0],
            (ne[1] - nw[1]) / out_width, (sw[1] - nw[1]) / out_height, nw[1])
    out = img.transform((out_width, out_height), Image.Transform.AFFINE,
                        data=data, resample=Image.Resampling.BILINEAR)
    return np.asarray(out, dtype=np.uint8)
