# main.py
import argparse
import math
import sys

from loguru import logger

from camera.camera import Camera
from core.vector import Vector3
from geometry.plane import Plane
from geometry.scene import Scene
from geometry.sphere import Sphere
from renderer.config import ReflectionMode, RenderConfig, ShadowMode
from renderer.framebuffer import Framebuffer
from renderer.raytracer import BACKENDS, Renderer

EYE = Vector3(0.0, 180.0, 110.0)
IMG_SIZE = 800
EYE_PITCH_DEGREES = -45.0

def create_scene() -> Scene:
    """
    Two white planes (floor and back wall) and three colored spheres.
    """
    white = Vector3(255, 255, 255)
    return Scene([
        Plane(Vector3(0, 0, 1), -300.0, white, reflectivity=0.1),
        Plane(Vector3(0, 1, 0), -50.0, white, reflectivity=0.1),
        Sphere(Vector3(-20, 0, -150), 50.0, Vector3(255, 0, 0), reflectivity=0.3),
        Sphere(Vector3(50, 0, -40), 50.0, Vector3(0, 255, 0), reflectivity=0.0),
        Sphere(Vector3(-75, 0, -50), 50.0, Vector3(0, 0, 255), reflectivity=0.3),
    ])

def show(fb: Framebuffer):
    """Displays the finished image in a pygame window until it is closed."""
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((fb.width, fb.height))
        pygame.display.set_caption("Ray Tracer")
        # surfarray is indexed [x, y].
        surface = pygame.surfarray.make_surface(fb.pixels.swapaxes(0, 1))
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render the demo scene with a Whitted-style ray tracer.")
    parser.add_argument("-o", "--output", default="render.png", help="output image path")
    parser.add_argument("--width", type=int, default=IMG_SIZE)
    parser.add_argument("--height", type=int, default=IMG_SIZE)
    parser.add_argument("--pitch", type=float, default=EYE_PITCH_DEGREES,
                        help="eye rotation about the horizontal axis, in degrees")
    parser.add_argument("--backend", choices=BACKENDS, default="numba")
    parser.add_argument("--workers", type=int, default=1,
                        help="worker processes for the python backend")
    parser.add_argument("--shadows", choices=[m.value for m in ShadowMode], default=ShadowMode.HARD.value)
    parser.add_argument("--samples", type=int, default=9, help="shadow rays per hit for soft shadows")
    parser.add_argument("--shininess", type=float, default=10.0)
    parser.add_argument("--specular-weight", type=float, default=0.5)
    parser.add_argument("--attenuation", action="store_true",
                        help="scale light by the inverse distance to the light")
    parser.add_argument("--light-power", type=float, default=1.0)
    parser.add_argument("--reflection", choices=[m.value for m in ReflectionMode],
                        default=ReflectionMode.VIEW.value)
    parser.add_argument("--max-depth", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--show", action="store_true", help="open the result in a window")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        config = RenderConfig(
            light_power=args.light_power,
            attenuation=args.attenuation,
            shadow_mode=args.shadows,
            shadow_samples=args.samples,
            shininess=args.shininess,
            specular_weight=args.specular_weight,
            max_depth=args.max_depth,
            reflection_mode=args.reflection,
            seed=args.seed,
        )
        camera = Camera(EYE, args.width, args.height, pitch=math.radians(args.pitch))
        renderer = Renderer(config, backend=args.backend, workers=args.workers)
    except ValueError as e:
        logger.error(str(e))
        return 2

    fb = renderer.render(create_scene(), camera)
    fb.save(args.output)
    logger.info(f"Saved {args.output}")

    if args.show:
        show(fb)
    return 0

if __name__ == "__main__":
    sys.exit(main())
