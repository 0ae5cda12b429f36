import sys
from fanforge import *

def main():
    """
    Demonstrates overriding the fan's constants.

    This example shows how to:
    - Pass a `FanParams` with a different blade count, colors and light.
    - Slow the swing down by giving the animator a smaller step.
    - Save a single frame to an image with `save_frame` (requires Pillow).
    """
    params = FanParams(
        blade_count=5,
        colors={'red': '#ff8800', 'green': (0.9, 0.9, 0.2)},
        directional_light={'intensity': 0.8, 'position': (2.0, 3.0, 1.0)},
        renderer={'clear_color': 0x202830},
    )
    return build_fan(params)

if __name__ == "__main__":
    fan = main()
    if len(sys.argv) > 1:
        fan.scene.render(save_frame=sys.argv[1])
    else:
        fan.render(animator=fan.animator(swing_step=0.002, swing_limit=1.0))
