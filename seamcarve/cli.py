"""
Command-line interface.

    seamcarve resize -i input.jpg -o output.jpg -w 500 -H 300
    seamcarve resize -i face.jpg -o shrunk.jpg -w 400 --protect face_mask.png
    seamcarve resize -i scene.jpg -o removed.jpg -w 500 --remove object_mask.png
    seamcarve face-mask input.jpg face_mask.png
    seamcarve compare input.jpg 300 300 result
"""

import argparse
import logging
import sys

from .carver import SeamCarver
from .carving import resize_image
from .config import Config
from .exceptions import SeamCarveError
from .image_io import load_image, save_image, save_mask
from .logging_config import setup_logging

logger = logging.getLogger("seamcarve.cli")

KEEP = -1


def _target(value: int):
    return None if value == KEEP else value


def cmd_resize(args) -> int:
    carver = SeamCarver.from_files(args.input, args.protect, args.remove)
    carver.resize(_target(args.width), _target(args.height))
    carver.save(args.output)
    if args.show:
        carver.show()
    return 0


def cmd_face_mask(args) -> int:
    from .faces import create_face_mask

    image = load_image(args.input)
    mask = create_face_mask(image)
    save_mask(mask, args.output)
    logger.info("Now run: seamcarve resize -i %s -o output.jpg -w <width> -H <height> "
                "--protect %s", args.input, args.output)
    return 0


def cmd_compare(args) -> int:
    from .faces import create_face_mask
    from .visualize import save_comparison

    prefix = args.prefix
    width, height = _target(args.width), _target(args.height)

    logger.info("[1/4] Detecting faces and creating protection mask...")
    image = load_image(args.input)
    mask = create_face_mask(image)
    save_mask(mask, f"{prefix}_face_mask.png")

    logger.info("[2/4] Resizing WITHOUT face protection...")
    unprotected = resize_image(image, width, height)
    save_image(unprotected, f"{prefix}_no_protection.jpg")

    logger.info("[3/4] Resizing WITH face protection...")
    protected = resize_image(image, width, height, protect_mask=mask)
    save_image(protected, f"{prefix}_with_protection.jpg")

    logger.info("[4/4] Creating side-by-side visual comparison...")
    save_comparison(image, unprotected, protected, f"{prefix}_side_by_side.jpg")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description='Content-aware image resizing with seam carving')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        help='DEBUG, INFO, WARNING or ERROR (default: %(default)s)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    resize = subparsers.add_parser('resize', help='Resize an image')
    resize.add_argument('-i', '--input', required=True, help='Path to input image')
    resize.add_argument('-o', '--output', required=True, help='Path to output image')
    resize.add_argument('-w', '--width', type=int, default=KEEP,
                        help='Target width (default: original width)')
    resize.add_argument('-H', '--height', type=int, default=KEEP,
                        help='Target height (default: original height)')
    resize.add_argument('-p', '--protect', help='Path to protection mask')
    resize.add_argument('-r', '--remove', help='Path to removal mask')
    resize.add_argument('-s', '--show', action='store_true',
                        help='Show final image in a window')
    resize.set_defaults(func=cmd_resize)

    face_mask = subparsers.add_parser('face-mask',
                                      help='Detect faces and write a protection mask')
    face_mask.add_argument('input', help='Path to input image')
    face_mask.add_argument('output', help='Path to output mask')
    face_mask.set_defaults(func=cmd_face_mask)

    compare = subparsers.add_parser(
        'compare', help='Resize with and without face protection, side by side')
    compare.add_argument('input', help='Path to input image')
    compare.add_argument('width', type=int, help='Target width')
    compare.add_argument('height', type=int, help='Target height')
    compare.add_argument('prefix', help='Prefix for all output files')
    compare.set_defaults(func=cmd_compare)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        return args.func(args)
    except SeamCarveError as e:
        logger.error("An error occurred: %s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
