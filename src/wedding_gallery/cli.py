"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

import wedding_gallery.config as wg_config
import wedding_gallery.random_utils as wg_random
from wedding_gallery.gallery.manifest import load_manifest
from wedding_gallery.gallery.session import GallerySession
from wedding_gallery.layouts.collage import COLLAGE_TEMPLATES
from wedding_gallery.logging_utils import logger, set_log_level
from wedding_gallery.runtime.version import resolve_project_version
from wedding_gallery.tiers import TIER_INFO, TierPolicy, format_price
from wedding_gallery.type_defs import LayoutKind, Tier

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from wedding_gallery.type_defs import LayoutResult

EXIT_OK = 0
EXIT_LOCKED = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="wedding-gallery",
        description="Compute tier-gated wedding gallery layouts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "wedding-gallery layout gallery.toml --layout masonry\n"
            "wedding-gallery layout gallery.toml --layout collage "
            "--template circle --width 700\n"
            "wedding-gallery tiers --tier silver"
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to gallery.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit")
    cfg.add_argument(
        "--log-level", type=str, default=argparse.SUPPRESS,
        help="Logging level (DEBUG, INFO, WARNING, ...)")

    sub = p.add_subparsers(dest="command")

    layout = sub.add_parser(
        "layout", help="Lay out a manifest and print the result as JSON")
    layout.add_argument("manifest", type=str, help="Path to manifest TOML")
    layout.add_argument(
        "--layout", type=str, default=None,
        choices=[kind.value for kind in LayoutKind],
        help="Layout to apply (default: from config)")
    layout.add_argument(
        "--category", type=str, default="all",
        help="Category tag to show (default: all)")
    layout.add_argument(
        "--tier", type=str, default=None,
        choices=[tier.label for tier in Tier],
        help="Override the manifest's account tier")
    layout.add_argument(
        "--width", type=int, help="Container width in pixels",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--height", type=int, help="Container height in pixels",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--gap", type=int, help="Gap between items in pixels",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--template", type=str, choices=sorted(COLLAGE_TEMPLATES),
        help="Collage template", default=argparse.SUPPRESS)
    layout.add_argument(
        "--seed", type=int, help="Random seed for artistic layouts",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--regenerate", type=int, default=0,
        help="Number of regenerate passes before laying out")
    layout.add_argument(
        "--expand", type=str, default=None, metavar="SECTION_ID",
        help="Timeline section to show in full (default: all collapsed)")
    layout.add_argument(
        "--output", type=Path, default=None,
        help="Write JSON here instead of stdout")

    tiers = sub.add_parser("tiers", help="List tiers and their layouts")
    tiers.add_argument(
        "--tier", type=str, default=None,
        choices=[tier.label for tier in Tier],
        help="Only show availability for this tier")

    return p


def log_parameters(
    cfg: wg_config.GalleryConfig,
    args: argparse.Namespace,
) -> None:
    """Log the effective layout parameters."""
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Manifest: %s", args.manifest)
    logger.info("Container: %dx%d", cfg.layout.container_width,
                cfg.layout.container_height)
    logger.info("Gap: %d", cfg.layout.gap)
    logger.info("Collage Template: %s", cfg.layout.collage_template)
    logger.info("Random Seed: %d", cfg.random.seed)


def layout_to_dict(result: LayoutResult) -> dict[str, Any]:
    """JSON-ready view of a layout result."""
    data = asdict(result)
    data["kind"] = result.kind.value
    for section in data["sections"]:
        if section["date"] is not None:
            section["date"] = section["date"].isoformat()
    return data


def tiers_to_dict(tier: Tier | None = None) -> dict[str, Any]:
    """JSON-ready tier table, optionally with one tier's availability."""
    policy = TierPolicy()
    data: dict[str, Any] = {
        "tiers": [
            {
                "tier": t.label,
                "name": info.name,
                "price": format_price(info.price, info.currency),
                "max_styles": info.max_styles,
                "layouts": [k.value for k in policy.by_tier(t)],
                "default_layout": policy.default_layout(t).value,
            }
            for t, info in TIER_INFO.items()
        ],
    }
    if tier is not None:
        data["available"] = [k.value for k in policy.available(tier)]
        data["locked"] = [k.value for k in policy.locked(tier)]
        upgrade = policy.next_locked_tier(tier)
        if upgrade is not None:
            data["upgrade"] = {
                "tier": upgrade.label,
                "message": policy.upgrade_message(upgrade),
            }
    return data


def _emit(payload: dict[str, Any], output: Path | None = None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Layout written to %s", output)


def run_layout(
    args: argparse.Namespace,
    cfg: wg_config.GalleryConfig,
) -> int:
    """Execute the ``layout`` subcommand."""
    manifest = load_manifest(args.manifest)
    tier = Tier.parse(args.tier) if args.tier else manifest.account_tier
    log_parameters(cfg, args)
    wg_random.seed_numpy_rng(cfg.random.seed)

    def _upgrade(target: Tier) -> None:
        logger.warning("%s", TierPolicy.upgrade_message(target))

    with GallerySession(
        manifest.gallery_images(),
        tier,
        config=cfg,
        events=manifest.gallery_events(),
        on_upgrade=_upgrade,
    ) as session:
        if args.layout and not session.select_layout(args.layout):
            return EXIT_LOCKED
        session.select_category(args.category)
        for _ in range(args.regenerate):
            session.regenerate()
        session.expand_section(args.expand)
        result = session.layout()
        if result.overflow:
            logger.info(
                "%d images did not fit the %s template",
                result.overflow_count, session.template,
            )
        payload = {
            "tier": session.tier.label,
            "category": session.category,
            "breakpoint": session.breakpoint.value,
            "layout": layout_to_dict(result),
        }
    _emit(payload, args.output)
    return EXIT_OK


def run_from_args(args: argparse.Namespace) -> int:
    """Run the selected subcommand and return an exit status."""
    base_cfg: wg_config.GalleryConfig | None = None
    if args.config:
        base_cfg = wg_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return EXIT_OK

    cfg = wg_config.build_config_from_cli(vars(args), base_config=base_cfg)
    set_log_level(cfg.logging.level)

    if args.command == "tiers":
        tier = Tier.parse(args.tier) if args.tier else None
        _emit(tiers_to_dict(tier))
        return EXIT_OK
    return run_layout(args, cfg)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and args.command is None:
        arg_parser.error("a command is required: layout or tiers")

    status = run_from_args(args)
    if status != EXIT_OK:
        sys.exit(status)


if __name__ == "__main__":  # pragma: no cover
    main()
