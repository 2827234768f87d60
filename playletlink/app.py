import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .config import RunConfig
from .dataset import read_dataset
from .env import load_env
from .errors import PlayletLinkError
from .logger import get_logger, set_level
from .matcher import match_rankings, match_title
from .normalize import extract_playlet_names
from .ranking import fetch_hot_ranking
from .schema import NOT_FOUND, MatchResult
from .storage import is_found, load_report, save_report, summarize

logger = get_logger()


def _config_from_args(args: argparse.Namespace) -> RunConfig:
    overrides: Dict[str, Any] = {
        "base_url": getattr(args, "base_url", None),
        "page_id": getattr(args, "page_id", None),
        "page_size": getattr(args, "page_size", None),
        "month": getattr(args, "month", None),
        "dataset_path": getattr(args, "dataset", None),
        "output_path": getattr(args, "output", None),
    }
    return RunConfig.from_env(overrides)


def run_matching(config: RunConfig, save: bool = True) -> List[MatchResult]:
    """
    Run one full match: dataset, ranking, matching, report.

    The dataset is read before the network call so a missing file fails fast.
    Nothing is written unless both inputs loaded.
    """
    records = read_dataset(config.dataset_path)
    items = fetch_hot_ranking(config)

    results = match_rankings(items, records)
    for r in results:
        logger.record_match(r.kind.value)
        logger.debug("Matched title", rank=r.rank, title=r.title, kind=r.kind.value, link=r.link)

    if save:
        save_report(config.output_path, results)
        logger.info("Report saved", path=str(config.output_path), entries=len(results))
    return results


def _print_summary(stats: Dict[str, Any]) -> None:
    print("Summary:")
    print(f"  Titles checked: {stats['total']}")
    print(f"  Links found:    {stats['found']}")
    print(f"  Match rate:     {stats['match_rate']:.1f}%")


def cmd_match(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    logger.info(
        "Starting match run",
        page_id=config.page_id,
        page_size=config.page_size,
        month=config.month,
        dataset=str(config.dataset_path),
    )
    results = run_matching(config, save=not args.no_save)

    print(f"Matched {len(results)} ranking entries:\n")
    for r in results:
        status = "found" if r.found else "missing"
        print(f"[{status}] #{r.rank} {r.title}")
        print(f"    {r.link if r.found else NOT_FOUND}")
    print()
    _print_summary(summarize(results))
    if not args.no_save:
        print(f"\nResults saved to: {config.output_path}")
    logger.log_metrics_summary()


def cmd_extract(args: argparse.Namespace) -> None:
    names = extract_playlet_names(args.label)
    if not names:
        print("No names extracted.")
        return
    for name in names:
        print(name)


def cmd_lookup(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    records = read_dataset(config.dataset_path)
    link, kind = match_title(args.title, records)
    if link is None:
        print(f"Not found: {args.title}")
        raise SystemExit(1)
    print(f"Link: {link}")
    print(f"Match: {kind.value}")


def cmd_show(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    path = config.output_path
    if not path.exists():
        print(f"Report not found: {path}")
        return
    entries = load_report(path)
    if not entries:
        print("Report is empty.")
        return
    found = sum(1 for e in entries if is_found(e))
    print(f"Found {len(entries)} entries in {path}:\n")
    for entry in entries:
        print(f"#{entry.get('ranking')} {entry.get('playletName')}")
        print(f"    {entry.get('quarkUrl')}")
    print(f"\n{found}/{len(entries)} with links ({found / len(entries) * 100:.1f}%)")


def _add_dataset_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dataset", type=Path, help="CSV dataset path (default: ./短剧.csv, env PLAYLET_DATASET)")


def _add_output_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", type=Path, help="Report path (default: matching_results.json, env PLAYLET_OUTPUT)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="playletlink", description="Find share links for hot-ranking playlets")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Console log level")

    subparsers = parser.add_subparsers(dest="command")

    mat = subparsers.add_parser("match", help="Fetch the hot ranking and match every title against the dataset")
    mat.add_argument("--base-url", help="Ranking endpoint (env PLAYLET_RANKING_URL)")
    mat.add_argument("--page-id", type=int, help="Ranking page number (default: 1)")
    mat.add_argument("--page-size", type=int, help="Entries per page (default: 30)")
    mat.add_argument("--month", help="Ranking month, YYYY-MM (default: 2025-01)")
    _add_dataset_arg(mat)
    _add_output_arg(mat)
    mat.add_argument("--no-save", action="store_true", help="Print results without writing the report")
    mat.set_defaults(func=cmd_match)

    ext = subparsers.add_parser("extract", help="Show the candidate names parsed from one dataset label")
    ext.add_argument("--label", required=True, help="Composite label, e.g. \"32019-Title（71集）&Cast\"")
    ext.set_defaults(func=cmd_extract)

    lkp = subparsers.add_parser("lookup", help="Match a single title against the dataset (no network)")
    lkp.add_argument("--title", required=True, help="Playlet title to look for")
    _add_dataset_arg(lkp)
    lkp.set_defaults(func=cmd_lookup)

    shw = subparsers.add_parser("show", help="List a saved report")
    _add_output_arg(shw)
    shw.set_defaults(func=cmd_show)

    return parser


def main(argv: Optional[List[str]] = None):
    # Load .env if present (PLAYLET_* settings)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    set_level(args.log_level)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    except PlayletLinkError as e:
        logger.record_error(type(e).__name__)
        logger.error("Run failed", error=str(e))
        raise SystemExit(f"Error: {e}")


if __name__ == "__main__":
    main()
