"""CLI entry point for the IPv4/IPv6 connectivity probe."""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pydantic import ValidationError

from ipv6perftest.config import (
    ConfigurationError,
    ProbeSettings,
    RunConfig,
    resolve,
    sink_configs,
)
from ipv6perftest.engine import ConnectivityEngine
from ipv6perftest.metadata import detect_test_point_metadata
from ipv6perftest.models.record import ResultRecord, TestPointMetadata
from ipv6perftest.models.result import ProbeOutcome, RunSummary
from ipv6perftest.models.target import DEFAULT_TARGETS, Target
from ipv6perftest.probe import SiteProbe
from ipv6perftest.report import assemble, connectivity_verdict, record_json
from ipv6perftest.scoring import MAX_SCORE
from ipv6perftest.sinks.base import SubmissionResult
from ipv6perftest.sinks.loading import SelectedSink, SinkNotFoundError, select_sinks
from ipv6perftest.submissions import submit_record
from ipv6perftest.target_loader import load_targets

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
}


def log_test_point_info(
    log: logging.Logger,
    metadata: TestPointMetadata,
    selected: Sequence[SelectedSink],
) -> None:
    """Log detected test point information and the enabled sinks."""
    log.info("Test Point: %s", metadata.test_point_id)
    if metadata.ipv4_prefix:
        log.info("IPv4: %s/24 (redacted)", metadata.ipv4_prefix)
    else:
        log.info("IPv4: Not detected")
    if metadata.ipv6_prefix:
        log.info("IPv6: %s/48 (redacted)", metadata.ipv6_prefix)
    else:
        log.info("IPv6: Not detected")
    log.info("ASN: %s", metadata.asn or "Not detected")
    log.info("Location: %s", metadata.location)

    if selected:
        log.info("Submission enabled: %s", ", ".join(entry.key for entry in selected))


def outcome_cell(outcome: ProbeOutcome) -> str:
    """Table cell for one probe outcome."""
    if outcome.success:
        return f"{STATUS_SYMBOLS['success']} {outcome.latency_ms}ms"
    return STATUS_SYMBOLS["failure"]


def family_status(successes: int, total: int) -> str:
    """Describe reachability over one family."""
    if successes == 0:
        return "No connectivity"
    return f"{successes}/{total} sites reachable"


def log_results_summary(
    log: logging.Logger,
    summary: RunSummary,
    record: ResultRecord,
    *,
    verbose: bool = False,
) -> None:
    """Log a formatted summary of the run, with per-site results if verbose."""
    log.info("=" * 60)
    log.info("Test Results:")
    log.info("=" * 60)
    log.info("Score:        %d / %d", record.score, MAX_SCORE)
    total = summary.site_count
    log.info("IPv4:         %s", family_status(summary.ipv4_successes, total))
    log.info("IPv6:         %s", family_status(summary.ipv6_successes, total))
    log.info("Sites tested: %d", summary.site_count)
    log.info("Timestamp:    %s", record.to_json_dict()["timestamp"])

    if verbose:
        log.info("-" * 60)
        log.info("%-20s %-12s %-12s", "Site", "IPv4", "IPv6")
        for site in summary.sites:
            log.info(
                "%-20s %-12s %-12s",
                site.target.name,
                outcome_cell(site.ipv4),
                outcome_cell(site.ipv6),
            )
            for outcome in (site.ipv4, site.ipv6):
                if outcome.error:
                    log.info("  IPv%d error: %s", outcome.family, outcome.error)

    log.info("=" * 60)

    verdict = connectivity_verdict(summary.ipv4_successes, summary.ipv6_successes)
    if verdict is not None:
        healthy, message = verdict
        log.log(logging.INFO if healthy else logging.WARNING, message)


def log_submission_results(
    log: logging.Logger, results: Sequence[SubmissionResult]
) -> None:
    """Log one line per submission attempt."""
    for result in results:
        symbol = STATUS_SYMBOLS[result.status]
        log.info("%s %s: %s", symbol, result.sink, result.status)
        if result.url:
            log.info("  URL: %s", result.url)
        if result.message:
            log.info("  Message: %s", result.message)


async def run(config: RunConfig) -> int:
    """Run the connectivity tests and return the exit code."""
    log = logging.getLogger("ipv6perftest")

    try:
        selected = select_sinks(config.sinks)
        targets: Sequence[Target] = (
            await load_targets(config.targets_file)
            if config.targets_file
            else DEFAULT_TARGETS
        )
    except (ConfigurationError, SinkNotFoundError, ValidationError) as e:
        log.error("Invalid configuration: %s", e)
        return 1
    except (FileNotFoundError, ValueError) as e:
        log.error("Invalid target file: %s", e)
        return 1

    log.info("Detecting test point information...")
    metadata = await detect_test_point_metadata(
        test_point_id=config.test_point_id,
        location=config.location,
    )
    log_test_point_info(log, metadata, selected)

    settings = config.probe
    engine = ConnectivityEngine(
        probe=SiteProbe(max_redirects=settings.max_redirects),
        policy=settings.scoring,
        concurrency=settings.concurrency,
    )
    summary = await engine.run(targets, settings.timeout, deadline=settings.deadline)

    record = assemble(summary, metadata)
    log_results_summary(log, summary, record, verbose=config.verbose)
    print(record_json(record))

    if selected:
        results = await submit_record(selected, record)
        log_submission_results(log, results)

    return 0


def build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> RunConfig:
    """Resolve parsed arguments and environment into a run configuration."""
    probe_settings: dict[str, object] = {
        "timeout": args.timeout,
        "concurrency": args.concurrency,
    }
    if args.deadline is not None:
        probe_settings["deadline"] = args.deadline

    return RunConfig(
        test_point_id=resolve(args.test_point_id, "TEST_POINT_ID", environ),
        location=resolve(args.location, "LOCATION", environ),
        targets_file=args.targets,
        verbose=args.verbose,
        probe=ProbeSettings.model_validate(probe_settings),
        sinks=sink_configs(
            submit_collector=args.submit_collector,
            submit_gh=args.submit_gh,
            submit_git=args.submit_git,
            submit_api=args.submit_api,
            collector_url=args.collector_url,
            collector_token=args.collector_token,
            gh_repo=args.gh_repo,
            gh_method=args.gh_method,
            gh_token=args.gh_token,
            git_repo=args.git_repo,
            git_branch=args.git_branch,
            environ=environ,
        ),
    )


def package_version() -> str:
    """Installed version of the package."""
    try:
        return version("ipv6perftest")
    except PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ipv6perftest",
        description="Test IPv4 and IPv6 connectivity to well-known sites",
        epilog=(
            "Environment variables: IPV6_ARMY_TOKEN, API_URL, LOCATION, "
            "TEST_POINT_ID, GITHUB_TOKEN, GH_REPO, GH_METHOD, GIT_REPO, GIT_BRANCH"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {package_version()}"
    )

    probing = parser.add_argument_group("probing")
    probing.add_argument(
        "--targets",
        type=Path,
        help="YAML file with the sites to probe (defaults to the built-in list)",
    )
    probing.add_argument(
        "--timeout", type=float, default=10.0, help="Per-probe timeout in seconds"
    )
    probing.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Bound for the whole run in seconds",
    )
    probing.add_argument(
        "--concurrency", type=int, default=16, help="Maximum concurrent probes"
    )
    probing.add_argument("--test-point-id", help="Custom test point identifier")
    probing.add_argument("--location", help="Geographic location")
    probing.add_argument(
        "--verbose", "-v", action="store_true", help="Show per-site results"
    )

    submission = parser.add_argument_group("submission")
    submission.add_argument(
        "--submit-collector",
        action="store_true",
        help="Submit results to the remote collector",
    )
    submission.add_argument("--collector-url", help="Collector endpoint")
    submission.add_argument("--collector-token", help="Collector bearer token")
    submission.add_argument(
        "--submit-gh", action="store_true", help="Submit results via GitHub CLI (gh)"
    )
    submission.add_argument(
        "--submit-git", action="store_true", help="Submit results via direct git push"
    )
    submission.add_argument(
        "--submit-api", action="store_true", help="Submit results via GitHub REST API"
    )
    submission.add_argument("--gh-repo", help="Target GitHub repo (owner/repo)")
    submission.add_argument(
        "--gh-method", choices=["issue", "pr"], help="GitHub CLI method"
    )
    submission.add_argument("--gh-token", help="GitHub PAT for API submission")
    submission.add_argument("--git-repo", help="Git repository URL for direct push")
    submission.add_argument("--git-branch", help="Git branch to push to")

    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if args.verbose:
        logging.getLogger("ipv6perftest").setLevel(logging.DEBUG)

    try:
        config = build_config(args, os.environ)
    except ValidationError as e:
        logging.getLogger("ipv6perftest").error("Invalid configuration: %s", e)
        sys.exit(1)

    exit_code = asyncio.run(run(config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
