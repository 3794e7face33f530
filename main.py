#!/usr/bin/env python3
"""
Fiber End-Face Geometry

Usage:
    python main.py IMAGE
    python main.py IMAGE --output annotated.png
    python main.py IMAGE --show --debug
    python main.py IMAGE --json
"""

import argparse
import json
import logging
import sys
import cv2

from fiber_geometry.config import GeometryConfig
from fiber_geometry.detection import InvalidImage
from fiber_geometry.image_io import load_image, describe_image
from fiber_geometry.logs import setup_logging
from fiber_geometry.pipeline import GeometryPipeline

EXIT_OK = 0
EXIT_INVALID_IMAGE = 1
EXIT_NOT_FOUND = 2
EXIT_INVALID_CONFIG = 3


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Measure core and fiber circles on an optical-fiber end-face image")
    parser.add_argument('image', type=str, help='Path to the end-face image')
    parser.add_argument('--output', type=str, help='Write the annotated image to this path')
    parser.add_argument('--show', action='store_true', help='Display the annotated image in a window')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    parser.add_argument('--sequential', action='store_true', help='Run the two detection passes one after another')
    parser.add_argument('--no-failure-annotation', action='store_true',
                        help='Leave the image unannotated when a feature is not found')
    parser.add_argument('--log-dir', type=str, help='Directory for log files')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def create_config_from_args(args) -> GeometryConfig:
    config = GeometryConfig()
    if args.sequential: config.parallel_detection = False
    if args.no_failure_annotation: config.annotate_on_failure = False
    if args.log_dir: config.log_dir = args.log_dir
    if args.debug: config.logging_level = "DEBUG"
    return config


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        config = create_config_from_args(args).validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return EXIT_INVALID_CONFIG

    setup_logging(config, console=args.debug)
    logger = logging.getLogger("fiber_geometry.main")

    try:
        image = load_image(args.image)
        outcome = GeometryPipeline(config).process(image)
    except InvalidImage as e:
        logger.error(f"Invalid image: {e}")
        print(f"ERROR: {e}")
        return EXIT_INVALID_IMAGE

    print(describe_image(args.image, outcome.image))
    if args.json:
        print(json.dumps({"found": outcome.succeeded, **outcome.result.to_dict()}, indent=4))
    else:
        for line in outcome.result.summary_lines():
            print(line)

    if args.output:
        if cv2.imwrite(args.output, outcome.image):
            logger.info(f"Annotated image written to {args.output}")
        else:
            logger.error(f"Failed to write annotated image to {args.output}")

    if args.show:
        cv2.imshow("Fiber geometry", outcome.image)
        cv2.waitKey(0)
        cv2.destroyAllWindows()

    return EXIT_OK if outcome.succeeded else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
