from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import cv2
import yaml

from dryfire.api.config import DetectionConfig
from dryfire.api.errors import InvalidInput
from dryfire.api.frame_data import Roi
from dryfire.app.loader import load_detection_config
from dryfire.detect.debug_pixels import DebugPixelCollector
from dryfire.detect.laser_detector import LaserDetector
from dryfire.render.overlay import draw_debug_overlay

log = logging.getLogger(__name__)


def parse_roi(text: str) -> Roi:
    try:
        min_x, max_x, min_y, max_y = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"ROI must be MINX,MAXX,MINY,MAXY, got {text!r}") from None
    return Roi(min_x, max_x, min_y, max_y)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dryfire-detect", description="Find red/green laser hits in saved frames")
    parser.add_argument("images", nargs="*", help="Frame image files (anything cv2.imread reads)")
    parser.add_argument("--background", help="Image of the static scene for background subtraction")
    parser.add_argument("--config", help="YAML detection profile")
    parser.add_argument("--roi", type=parse_roi, help="Scan window MINX,MAXX,MINY,MAXY (max exclusive)")
    parser.add_argument("--debug", action="store_true", help="Report every qualifying pixel")
    parser.add_argument("--overlay-dir", help="Write annotated copies of each frame here")
    parser.add_argument("--print-config", action="store_true", help="Print the effective profile and exit")
    parser.add_argument("--verbose", action="store_true", help="Log clusters as they are found")
    return parser


def _read_image(path: str):
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"could not read image {path}")
    return img


def run(args: argparse.Namespace) -> int:
    cfg = load_detection_config(args.config) if args.config else DetectionConfig()
    if args.print_config:
        print(yaml.safe_dump(cfg.to_dict(), sort_keys=False), end="")
        return 0

    collector = DebugPixelCollector() if (args.debug or args.overlay_dir) else None
    detector = LaserDetector(cfg, debug_sink=collector)
    if args.background:
        detector.set_background_bgr(_read_image(args.background))

    overlay_dir = Path(args.overlay_dir) if args.overlay_dir else None
    if overlay_dir is not None:
        overlay_dir.mkdir(parents=True, exist_ok=True)

    for path in args.images:
        frame = _read_image(path)
        if collector is not None:
            collector.clear()
        hits = detector.detect_bgr(frame, roi=args.roi)

        for hit in hits:
            print(f"{path} {hit.color.value} {hit.x} {hit.y}")
        if args.debug:
            for p in collector.pixels:
                rule = "strict" if p.matched else "dominant"
                print(f"{path} pixel {p.x} {p.y} rgb=({p.r},{p.g},{p.b}) {p.color.value} {rule}",
                      file=sys.stderr)
        if overlay_dir is not None:
            out = draw_debug_overlay(frame, collector.pixels, hits, args.roi)
            cv2.imwrite(str(overlay_dir / f"{Path(path).stem}_overlay.png"), out)
        log.info("%s: %d hit(s)", path, len(hits))

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.images and not args.print_config:
        parser.error("at least one image is required")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (InvalidInput, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
