#!/usr/bin/env python3
"""
Run the nameutils CI checks locally using the ACTIVE virtual environment.

Order:
  1) uv sync --all-extras --dev [--frozen if uv.lock exists]  (skipped with --no-sync)
  2) black --check on nameutils/ and scripts/ (line length 120)
  3) mypy on nameutils/ and scripts/
  4) pytest tests/ with coverage and PYTHONPATH=.
  5) optional timing run of `python -m nameutils.names` (--perf)

All commands run from the repo root (the directory holding pyproject.toml).
"""

import argparse
import os
import sys
import shutil
import subprocess
from pathlib import Path

BLACK_SPEC = "black==24.8.0"
LINE_LENGTH = "120"
PACKAGE = "nameutils"
COVERAGE_FLOOR = "90"


def uv_exe() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path:
        return [uv_path]
    try:
        import uv  # noqa: F401
    except ImportError:
        print("ERROR: 'uv' not found. Install uv first.", file=sys.stderr)
        sys.exit(2)
    return [sys.executable, "-m", "uv"]


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here


REPO = repo_root()


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def script_paths() -> list[str]:
    return [str(p.relative_to(REPO)) for p in sorted((REPO / "scripts").glob("*.py"))]


def check_formatting(paths: list[str]) -> None:
    uvx = shutil.which("uvx")
    if uvx:
        run([uvx, "--from", BLACK_SPEC, "black", *paths, "--check", "--line-length", LINE_LENGTH])
    else:
        run(uv_exe() + ["run", "--active", "black", *paths, "--check", "--line-length", LINE_LENGTH])


def check_types(paths: list[str]) -> None:
    run(uv_exe() + ["run", "--active", "mypy", *paths, "--ignore-missing-imports"])


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--no-sync", action="store_true", help="use the active environment as is")
    parser.add_argument("--perf", action="store_true", help="finish with the casing/splitting timing run")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if not args.no_sync:
        sync_args = ["sync", "--active", "--all-extras", "--dev"]
        if (REPO / "uv.lock").exists():
            sync_args.append("--frozen")
        run(uv_exe() + sync_args)

    targets = [PACKAGE] + script_paths()
    check_formatting(targets)
    check_types(targets)

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv_exe()
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            f"--cov={PACKAGE}",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ],
        env=env,
    )

    if args.perf:
        run(uv_exe() + ["run", "--active", "python", "-m", f"{PACKAGE}.names"], env=env)

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
