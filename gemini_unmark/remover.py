import argparse
import logging
import os
import sys

from PIL import Image

from .batch import parallel_map
from .engine import Engine, describe_watermark
from .errors import InitializationFailure, InvalidRectangle, WatermarkError
from .position import Rectangle


def default_output_path(image_path):
    base, ext = os.path.splitext(image_path)
    return f"{base}_clean{ext}"


def process_image(engine, image_path, output_path=None, override=None):
    print(f"Processing: {image_path}")

    try:
        with Image.open(image_path) as src:
            img = src.convert('RGB') if src.mode == 'RGB' else src.convert('RGBA')
    except OSError as e:
        print(f"Cannot open image {image_path}: {e}")
        return None

    iw, ih = img.size
    info = engine.describe(iw, ih)
    rect = Rectangle.coerce(override) if override is not None else info.rectangle
    print(f"Image Size: {iw}x{ih}, watermark size={info.logo_size}, "
          f"position=({rect.x}, {rect.y}), box={rect.width}x{rect.height}")

    try:
        result_img = engine.remove_from_image(img, override=override)
    except WatermarkError as e:
        print(f"Error processing {image_path}: {e}")
        return None

    if not output_path:
        output_path = default_output_path(image_path)

    try:
        # Replace, never append to, an earlier result
        if os.path.exists(output_path):
            os.remove(output_path)
            print(f"Removed existing output file: {output_path}")
        if os.path.splitext(output_path)[1].lower() in ('.jpg', '.jpeg') and result_img.mode == 'RGBA':
            result_img = result_img.convert('RGB')
        result_img.save(output_path)
    except (OSError, ValueError) as e:
        print(f"Cannot save {output_path}: {e}")
        return None
    print(f"Done. Saved to {output_path}")
    return output_path


def parse_position(value):
    try:
        return Rectangle.coerce(int(p) for p in value.split(','))
    except (ValueError, InvalidRectangle) as e:
        raise argparse.ArgumentTypeError(f"expected X,Y,WIDTH,HEIGHT, got {value!r}") from e


def print_info(image_path):
    try:
        with Image.open(image_path) as img:
            info = describe_watermark(*img.size)
    except OSError as e:
        print(f"Cannot open image {image_path}: {e}")
        return False
    r = info.rectangle
    print(f"{image_path}: size={info.logo_size}, position=({r.x}, {r.y}), "
          f"margins=({info.tier.margin_right}, {info.tier.margin_bottom})")
    return True


def build_parser():
    parser = argparse.ArgumentParser(prog="gemini-unmark", description="Remove Gemini watermark")
    parser.add_argument("image_paths", nargs="+", metavar="image_path", help="Path to input image(s)")
    parser.add_argument("-o", "--output", help="Output path (single input only)")
    parser.add_argument("--position", type=parse_position,
                        help="Explicit watermark box X,Y,WIDTH,HEIGHT instead of the detected one")
    parser.add_argument("--mask-dir", help="Directory with bg_48.png / bg_96.png")
    parser.add_argument("--no-download", action="store_true", help="Fail instead of downloading missing masks")
    parser.add_argument("--workers", type=int, default=None, help="Images processed in parallel")
    parser.add_argument("--info", action="store_true", help="Only print the detected watermark box")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.output and len(args.image_paths) > 1:
        parser.error("--output can only be used with a single input image")
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.info:
        ok = [print_info(path) for path in args.image_paths]
        return 0 if all(ok) else 1

    try:
        engine = Engine.create(args.mask_dir, download=not args.no_download)
    except InitializationFailure as e:
        print(f"Error loading masks: {e}")
        return 1

    outputs = parallel_map(
        lambda path: process_image(engine, path, args.output, args.position),
        args.image_paths,
        args.workers,
    )
    return 0 if all(outputs) else 1


if __name__ == "__main__":
    sys.exit(main())
