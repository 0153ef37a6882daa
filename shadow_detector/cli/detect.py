#!/usr/bin/env python3
"""
Command-line front end: detect shadows in one photo and write the mask.

    shadow-detect data/flickr-4159721472_c55deb37d6_b.jpg 10 10 10
"""
import argparse
import logging
import sys
from typing import List, Optional

from ..models.color_bin import BinSteps
from ..models.errors import ShadowDetectionError
from ..pipeline.bin_worker_pool import SCHEDULING_MODES
from ..pipeline.detect_shadows import DEFAULT_STEPS, OUTPUT_DIR, detect_shadows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shadow-detect",
        description="Classify pixels of a photo as shadow / non-shadow in Lab space.",
    )
    ap.add_argument("image", help="input image path")
    ap.add_argument("steps", nargs="*", type=int, metavar="STEP",
                    help="lStep aStep bStep (all positive); defaults from env")
    ap.add_argument("--workers", type=int, default=None,
                    help="worker threads (default: SHADOW_WORKERS or CPU count)")
    ap.add_argument("--scheduling", choices=SCHEDULING_MODES, default=None,
                    help="continuous refill or barrier waves")
    ap.add_argument("--output-dir", default=OUTPUT_DIR,
                    help="where masks are written")
    ap.add_argument("--save-intermediates", action="store_true",
                    help="also write Lab planes, filtered planes and mask_step_one")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="per-bin diagnostics")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.steps and len(args.steps) != 3:
        ap.error("expected exactly three steps: lStep aStep bStep")
    steps = BinSteps(*args.steps) if args.steps else DEFAULT_STEPS

    try:
        result = detect_shadows(
            args.image,
            steps,
            workers=args.workers,
            scheduling=args.scheduling,
            output_dir=args.output_dir,
            save_intermediates=args.save_intermediates,
        )
    except (ShadowDetectionError, FileNotFoundError, ValueError) as err:
        logger.error(f"Wrong argument! {err}")
        return 1

    logger.info(f"{result.shadow_pixels} shadow pixels → {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
