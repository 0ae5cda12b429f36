import numpy as np

def to_rgb(color) -> tuple:
    """
    Normalizes a color to an (r, g, b) tuple with values from 0.0 to 1.0.

    Accepts a 0xRRGGBB integer, a '#rrggbb' string or an (r, g, b) sequence
    already in the 0..1 range.
    """
    if isinstance(color, str):
        value = color.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Invalid hex color '{color}'")
        color = int(value, 16)
    if isinstance(color, (int, np.integer)) and not isinstance(color, bool):
        if not 0 <= color <= 0xFFFFFF:
            raise ValueError(f"Hex color out of range: {color:#x}")
        return ((color >> 16 & 0xFF) / 255.0, (color >> 8 & 0xFF) / 255.0, (color & 0xFF) / 255.0)
    rgb = tuple(float(c) for c in color)
    if len(rgb) != 3:
        raise ValueError(f"Expected an (r, g, b) color, got {color!r}")
    return rgb


class PhongMaterial:
    """
    A shaded surface color using the Blinn-Phong model.
    """
    def __init__(self, color=0xffffff, specular=0x111111, shininess: float = 30.0):
        """
        Args:
            color: Base (diffuse) color. Hex int, '#rrggbb' or (r, g, b).
            specular: Color of the specular highlight. Defaults to a dim grey.
            shininess (float, optional): Highlight exponent. Higher is sharper.
                                         Defaults to 30.0.
        """
        self.rgb = to_rgb(color)
        self.specular = to_rgb(specular)
        self.shininess = float(shininess)

    def __hash__(self):
        return hash((self.rgb, self.specular, self.shininess))

    def __eq__(self, other):
        return (isinstance(other, PhongMaterial) and self.rgb == other.rgb
                and self.specular == other.specular and self.shininess == other.shininess)

    def __repr__(self):
        return f"PhongMaterial(rgb={self.rgb}, shininess={self.shininess})"
