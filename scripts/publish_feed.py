"""Run one feed publish cycle from the command line.

Usage:
    python scripts/publish_feed.py --backend file --output cctray.xml
    python scripts/publish_feed.py --bucket my-bucket --key cctray.xml --granularity pipeline
"""

from __future__ import annotations

import argparse
import sys

from ccfeed.core.config import AppSettings
from ccfeed.core.exceptions import CCFeedError
from ccfeed.core.log import configure_logging
from ccfeed.handler import build_publisher


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Publish a CCTray feed of CodePipeline state")
    parser.add_argument("--backend", choices=["s3", "file"], help="Feed destination type")
    parser.add_argument("--granularity", choices=["pipeline", "stage"],
                        help="One feed entry per pipeline or per stage")
    parser.add_argument("--output", help="Target file (file backend)")
    parser.add_argument("--bucket", help="Target bucket (S3 backend)")
    parser.add_argument("--key", help="Target key (S3 backend)")
    parser.add_argument("--region", help="AWS region for CodePipeline and S3")
    parser.add_argument("--endpoint-url", help="AWS endpoint override, e.g. LocalStack")
    parser.add_argument("--log-level", help="Logging level")
    return parser.parse_args(argv)


def apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    """Return a copy of ``settings`` with command-line values applied."""
    s3 = settings.s3.model_copy(update={
        k: v for k, v in {
            "bucket": args.bucket,
            "key": args.key,
            "region": args.region,
            "endpoint_url": args.endpoint_url,
        }.items() if v
    })
    codepipeline = settings.codepipeline.model_copy(update={
        k: v for k, v in {"region": args.region, "endpoint_url": args.endpoint_url}.items() if v
    })
    file = settings.file.model_copy(update={"path": args.output} if args.output else {})

    update: dict = {"s3": s3, "codepipeline": codepipeline, "file": file}
    if args.backend:
        update["backend"] = args.backend
    elif args.output and not args.bucket:
        update["backend"] = "file"
    if args.granularity:
        update["granularity"] = args.granularity
    if args.log_level:
        update["log_level"] = args.log_level
    return settings.model_copy(update=update)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = apply_overrides(AppSettings(), args)
    configure_logging(settings.log_level)

    try:
        report = build_publisher(settings).run_cycle()
    except CCFeedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Published {report.project_count} projects from {report.pipeline_count} "
          f"pipelines to {report.target} in {report.duration_ms} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
