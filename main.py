import sys
import argparse
import logging

from crawler.core import MAX_WORKERS, setup_logger
from crawler.session import ProfileCrawlSession, run_batch, summarize

USAGE = "Usage: python main.py [profile_name]"

def build_parser():
    parser = argparse.ArgumentParser(description="Profile page crawler CLI")
    parser.add_argument("identifiers", nargs="*", metavar="profile_name", help="Profile identifier(s) to crawl")
    parser.add_argument("--workers", type=int, default=MAX_WORKERS, help="Worker pool size when several profiles are given")
    parser.add_argument("--output-dir", default=".", help="Directory for the JSON result and profile image")
    parser.add_argument("--log-file", default=None, help="Also write log lines to this file")
    parser.add_argument("--verbose", action="store_true", help="Log extraction details")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)

    if not args.identifiers:
        print(USAGE)
        return 0

    setup_logger(log_file=args.log_file, level=logging.DEBUG if args.verbose else None)

    # Every reported failure ends the run normally
    if len(args.identifiers) == 1:
        ProfileCrawlSession(args.output_dir).run(args.identifiers[0])
    else:
        reports = run_batch(args.identifiers, output_dir=args.output_dir, max_workers=args.workers)
        summarize(reports)
    return 0

if __name__ == "__main__":
    sys.exit(main())
