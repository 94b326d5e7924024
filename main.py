# GetImg - command line client for the GetImg image generation API
# Copyright (C) 2025 brokechubb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from config import GETIMG_API_KEY, DEFAULT_MODEL, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
from getimg import __version__
from getimg.clients.async_client import (
    AsyncGetImgClient,
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    DEFAULT_LCM_STEPS,
    DEFAULT_SD_STEPS,
    DEFAULT_GUIDANCE,
    DEFAULT_IMAGE_GUIDANCE,
    DEFAULT_OUTPUT_FORMAT,
)
from getimg.exceptions.getimg_exceptions import GetImgError
from utils.error_handler import handle_error
from utils.image_io import load_and_encode_image, save_image
from utils.logging_config import setup_logging
import argparse
import asyncio
import sys
import logging

logger = logging.getLogger(__name__)

EXAMPLES = """
examples:
  getimg edit -p "A man riding a horse on Mars." -i image.jpg -s 25 -g 7.5 -e 25 -y 1.5 -o png -n "Disfigured, cartoon, blurry" -c ddim
  getimg paint -p "An image of a cityscape with neon lights." -i image.png -m mask.png -w 512 -a 512 -e 50 -s 5 -g 10.0 -o jpeg -c euler -f 1 -n "Disfigured, cartoon, blurry"
  getimg t2i -p "A colorful sunset over the ocean." -w 512 -a 512 -s 5 -e 42 -o png -n "Disfigured, cartoon, blurry"
  getimg i2i -p "Add a forest in the background." -i t2i.png -s 6 -e 512 -o jpeg -f 0.5 -n "Disfigured, cartoon, blurry"
  getimg cnet -p "A painting of a landscape." -i t2i.png -f 1.0 -w 512 -a 512 -s 25 -g 7.5 -e 512 -c lms -o png -r canny-1.1 -n "Disfigured, cartoon, blurry"
"""


def positive_int(value):
    """argparse type for dimensions and step counts"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return number


def non_negative_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _add_prompt_args(parser):
    parser.add_argument("-p", "--prompt", required=True, help="Text prompt describing the image")
    parser.add_argument("-n", "--negative-prompt", help="Text describing what the image should not contain")


def _add_output_args(parser):
    parser.add_argument("-e", "--seed", type=non_negative_int, help="Seed for reproducible results")
    parser.add_argument("-o", "--output-format", default=DEFAULT_OUTPUT_FORMAT,
                        help=f"Output image format (default: {DEFAULT_OUTPUT_FORMAT})")
    parser.add_argument("--out", help="Where to write the image (default: <command name>.<output format>)")


def _add_dimension_args(parser):
    parser.add_argument("-w", "--width", type=positive_int, default=DEFAULT_WIDTH,
                        help=f"Width of the image (default: {DEFAULT_WIDTH})")
    parser.add_argument("-a", "--height", type=positive_int, default=DEFAULT_HEIGHT,
                        help=f"Height of the image (default: {DEFAULT_HEIGHT})")


def _add_sampling_args(parser, scheduler):
    parser.add_argument("-s", "--steps", type=positive_int, default=DEFAULT_SD_STEPS,
                        help=f"Number of denoising steps (default: {DEFAULT_SD_STEPS})")
    parser.add_argument("-g", "--guidance", type=float, default=DEFAULT_GUIDANCE,
                        help=f"How closely to follow the prompt (default: {DEFAULT_GUIDANCE})")
    parser.add_argument("-c", "--scheduler", default=scheduler,
                        help=f"Scheduler name, passed through to the API (default: {scheduler})")


def _edit(client, args, images):
    return client.generate_edited_image(
        prompt=args.prompt,
        image=images["image"],
        negative_prompt=args.negative_prompt,
        image_guidance=args.image_guidance,
        steps=args.steps,
        guidance=args.guidance,
        seed=args.seed,
        scheduler=args.scheduler,
        output_format=args.output_format,
    )


def _paint(client, args, images):
    return client.generate_repainted_image(
        prompt=args.prompt,
        image=images["image"],
        mask_image=images["mask_image"],
        negative_prompt=args.negative_prompt,
        strength=args.strength,
        width=args.width,
        height=args.height,
        steps=args.steps,
        guidance=args.guidance,
        seed=args.seed,
        scheduler=args.scheduler,
        output_format=args.output_format,
    )


def _t2i(client, args, images):
    return client.generate_image_from_text(
        prompt=args.prompt,
        width=args.width,
        height=args.height,
        steps=args.steps,
        output_format=args.output_format,
        negative_prompt=args.negative_prompt,
        seed=args.seed,
    )


def _i2i(client, args, images):
    return client.generate_image_from_image(
        prompt=args.prompt,
        image=images["image"],
        steps=args.steps,
        seed=args.seed,
        output_format=args.output_format,
        negative_prompt=args.negative_prompt,
        strength=args.strength,
    )


def _cnet(client, args, images):
    return client.generate_image_using_controlnet(
        controlnet=args.net,
        prompt=args.prompt,
        image=images["image"],
        negative_prompt=args.negative_prompt,
        strength=args.strength,
        width=args.width,
        height=args.height,
        steps=args.steps,
        guidance=args.guidance,
        seed=args.seed,
        scheduler=args.scheduler,
        output_format=args.output_format,
    )


def build_parser():
    """Build the getimg argument parser with one subcommand per endpoint"""
    parser = argparse.ArgumentParser(
        prog="getimg",
        description="📸 GetImg: a command-line tool for the GetImg AI API.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-a", "--api-key", help="API key (default: $GETIMG_API_KEY)")
    parser.add_argument("-m", "--model", help=f"Model for t2i and i2i (default: $GETIMG_MODEL or {DEFAULT_MODEL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    edit = subparsers.add_parser("edit", help="Edit an image following an instruction")
    _add_prompt_args(edit)
    edit.add_argument("-i", "--image", required=True, help="Path to the input image file")
    edit.add_argument("-y", "--image-guidance", type=float, default=DEFAULT_IMAGE_GUIDANCE,
                      help=f"Higher values stay closer to the source image (default: {DEFAULT_IMAGE_GUIDANCE})")
    _add_sampling_args(edit, scheduler="euler_a")
    _add_output_args(edit)
    edit.set_defaults(handler=_edit, image_args=("image",), stem="edited_image",
                      banner="Generating edited image...")

    paint = subparsers.add_parser("paint", help="Repaint the masked area of an image")
    _add_prompt_args(paint)
    paint.add_argument("-i", "--image", required=True, help="Path to the input image file")
    paint.add_argument("-m", "--mask-image", required=True, help="Path to the mask image file")
    paint.add_argument("-f", "--strength", type=float, help="How much to change the masked area (0-1)")
    _add_dimension_args(paint)
    _add_sampling_args(paint, scheduler="ddim")
    _add_output_args(paint)
    paint.set_defaults(handler=_paint, image_args=("image", "mask_image"), stem="repainted_image",
                       banner="Repainting image...")

    t2i = subparsers.add_parser("t2i", help="Generate an image from text")
    _add_prompt_args(t2i)
    _add_dimension_args(t2i)
    t2i.add_argument("-s", "--steps", type=positive_int, default=DEFAULT_LCM_STEPS,
                     help=f"Number of denoising steps (default: {DEFAULT_LCM_STEPS})")
    _add_output_args(t2i)
    t2i.set_defaults(handler=_t2i, image_args=(), stem="t2i",
                     banner="Generating image from text...")

    i2i = subparsers.add_parser("i2i", help="Generate an image from another image")
    _add_prompt_args(i2i)
    i2i.add_argument("-i", "--image", required=True, help="Path to the input image file")
    i2i.add_argument("-f", "--strength", type=float, help="How much to transform the source image (0-1)")
    i2i.add_argument("-s", "--steps", type=positive_int, default=DEFAULT_LCM_STEPS,
                     help=f"Number of denoising steps (default: {DEFAULT_LCM_STEPS})")
    _add_output_args(i2i)
    i2i.set_defaults(handler=_i2i, image_args=("image",), stem="i2i",
                     banner="Generating image from image...")

    cnet = subparsers.add_parser("cnet", help="Generate an image with ControlNet conditioning")
    cnet.add_argument("-r", "--net", required=True, help="ControlNet conditioning type, e.g. canny-1.1")
    _add_prompt_args(cnet)
    cnet.add_argument("-i", "--image", required=True, help="Path to the control image file")
    cnet.add_argument("-f", "--strength", type=float, default=1.0,
                      help="Conditioning scale (default: 1.0)")
    _add_dimension_args(cnet)
    _add_sampling_args(cnet, scheduler="euler")
    _add_output_args(cnet)
    cnet.set_defaults(handler=_cnet, image_args=("image",), stem="cnet",
                      banner="Generating image using ControlNet...")

    return parser


async def run(args, api_key, model):
    """Run one parsed subcommand and write its image; returns the saved path"""
    # Read inputs before opening a connection
    images = {name: load_and_encode_image(getattr(args, name)) for name in args.image_args}
    out = args.out or f"{args.stem}.{args.output_format}"

    logger.info(f"🎨 {args.banner}")
    async with AsyncGetImgClient(api_key=api_key, model=model) as client:
        result = await args.handler(client, args, images)

    path = save_image(result.image_bytes, out)
    details = f"seed {result.seed}" if result.seed is not None else "no seed reported"
    if result.cost is not None:
        details += f", cost {result.cost}"
    print(f"{path} ({details})")
    return path


def main(argv=None):
    """Entry point for the getimg command"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else LOG_LEVEL, log_to_file=LOG_TO_FILE, log_file_path=LOG_FILE_PATH)

    api_key = args.api_key or GETIMG_API_KEY
    if not api_key:
        logger.error("❌ No API key. Pass --api-key or set GETIMG_API_KEY in your environment or .env file.")
        return 1
    model = args.model or DEFAULT_MODEL

    try:
        asyncio.run(run(args, api_key, model))
    except GetImgError as e:
        print(f"Error: {handle_error(e, secret=api_key)}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("🛑 Interrupted")
        return 130

    logger.info("✅ Image generated and stored successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
