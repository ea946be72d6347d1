#!/usr/bin/env python3
"""Coverage validation script for CI pipelines.

Runs pytest with coverage measurement over the tarantool_channels package
and fails when the threshold is not met.

Usage:
    python scripts/run_coverage.py [OPTIONS]

Options:
    --threshold PERCENT    Minimum coverage percentage (default: 95)
    --html                 Generate HTML coverage report
    --xml                  Generate XML coverage report for CI tools
    --verbose              Show missing lines
    --no-integration       Skip the loopback integration tests

Exit Codes:
    0 - Success, coverage threshold met
    1 - Tests failed or coverage below threshold (pytest-cov reports both as 1)
    3 - Configuration or runtime error
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_THRESHOLD = 95
DEFAULT_MODULE = "tarantool_channels"


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run pytest with coverage validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Minimum coverage percentage (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("--html", action="store_true", help="Generate HTML report in htmlcov/")
    parser.add_argument("--xml", action="store_true", help="Generate coverage.xml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show missing lines")
    parser.add_argument(
        "--no-integration",
        action="store_true",
        help="Skip the loopback integration tests",
    )
    parser.add_argument(
        "--tests",
        default="tests/",
        help="Test directory or file pattern (default: tests/)",
    )
    return parser.parse_args()


def build_pytest_command(args: argparse.Namespace) -> list:
    """Build the pytest command with coverage options."""
    cmd = [
        sys.executable, "-m", "pytest",
        f"--cov={DEFAULT_MODULE}",
        f"--cov-fail-under={args.threshold}",
        "--timeout=60",
    ]

    if args.verbose:
        cmd.append("--cov-report=term-missing")
    else:
        cmd.append("--cov-report=term")

    if args.html:
        cmd.append("--cov-report=html:htmlcov")

    if args.xml:
        cmd.append("--cov-report=xml:coverage.xml")

    cmd.append(args.tests)
    return cmd


def run_coverage(args: argparse.Namespace) -> int:
    """Run coverage measurement and validation.

    Returns:
        Exit code (0=success, 1=test failure, 2=coverage failure, 3=error)
    """
    env = dict(os.environ)
    if args.no_integration:
        env["SKIP_INTEGRATION_TESTS"] = "true"

    cmd = build_pytest_command(args)

    print("=" * 70)
    print("TARANTOOL CHANNELS - COVERAGE VALIDATION")
    print("=" * 70)
    print(f"Threshold: {args.threshold}%")
    print(f"Command:   {' '.join(cmd)}")
    print("=" * 70)

    result = subprocess.run(cmd, cwd=PROJECT_ROOT, env=env)

    if result.returncode == 0:
        print(f"SUCCESS: Coverage meets or exceeds {args.threshold}% threshold")
        return 0
    if result.returncode == 1:
        print("FAILURE: Tests failed or coverage below threshold")
        return 1
    print(f"ERROR: Unexpected exit code {result.returncode}")
    return 3


def main() -> int:
    return run_coverage(parse_args())


if __name__ == "__main__":
    sys.exit(main())
