from fanforge import *

def main():
    """
    Builds the electric fan scene.

    Controls:
    - Hold SPACE to run the fan: the blades spin and the body swings.
    - Left drag orbits the camera, right drag pans, scroll zooms.
    - ESC closes the window.
    """
    return build_fan()

if __name__ == "__main__":
    fan = main()
    fan.render()
