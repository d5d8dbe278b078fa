#!/usr/bin/env python3
"""
PrismTrace - A Python Whitted-style Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
import time

from prismtrace.errors import PrismTraceError
from prismtrace.renderer import Renderer, RenderSettings
from prismtrace.scene_parser import load_scene
from prismtrace.scenes import SCENES, get_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='PrismTrace - A Python Whitted-style Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene cornell --output render.png
  python main.py --width 1920 --depth 6 --output hd_render.png
  python main.py --scene-file scenes/box.yaml --output box.png
        '''
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--scene', type=str, default='cornell', choices=sorted(SCENES),
                        help='Built-in scene to render (default: cornell)')
    source.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description to render')

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 960)')
    parser.add_argument('--aspect', type=float, default=None, help='Aspect ratio (default: 16/9)')
    parser.add_argument('--focal-length', type=float, default=None, help='Focal length (default: 2.0)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 10)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Replace settings with the values given on the command line."""
    overrides = {
        'image_width': args.width,
        'aspect_ratio': args.aspect,
        'focal_length': args.focal_length,
        'max_depth': args.depth,
        'num_threads': args.threads,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(settings, **overrides)


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("PrismTrace Ray Tracer")
    print("=" * 60)

    try:
        if args.scene_file:
            print(f"\nLoading scene: {args.scene_file}")
            scene, settings = load_scene(args.scene_file)
        else:
            print(f"\nCreating scene: {args.scene}")
            scene, settings = get_scene(args.scene), RenderSettings()
        settings = apply_overrides(settings, args)
        camera = settings.camera()
    except (PrismTraceError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(scene.objects)}")
    print(f"  Lights in scene: {len(scene.lights)}")

    print(f"\nRender Settings:")
    print(f"  Resolution: {camera.image_width}x{camera.image_height}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(scene, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Primary rays per second: {(camera.image_width * camera.image_height) / elapsed:.0f}")

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, args.output)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
