"""
run_all.py
----------
Runs the full document build in order: fetch, clean, static chart,
panel cognostics, interactive grid.
Execute from the project root:

    python run_all.py

Optional flags:
    python run_all.py --from 03 # start from script 03 onwards
    python run_all.py --only 04 05 # run only scripts 04 and 05
"""

import argparse
import os
import subprocess
import sys
import time

SCRIPTS = [
    ("01", "processing/01_fetch_crime_rates.py"),
    ("02", "processing/02_clean_aggregate.py"),
    ("03", "processing/03_small_multiples.py"),
    ("04", "processing/04_panel_summaries.py"),
    ("05", "processing/05_publish_grid.py"),
]


def select_scripts(from_script: str | None = None,
                   only_scripts: list | None = None) -> list:
    """
    Return the (number, path) pairs to run.

    Raises ValueError for a --from number that does not exist.
    Unknown --only numbers are reported and ignored.
    """
    if only_scripts:
        selected = [(n, p) for n, p in SCRIPTS if n in only_scripts]
        not_found = set(only_scripts) - {n for n, _ in selected}
        if not_found:
            print(f"Warning: script numbers not found: {', '.join(sorted(not_found))}")
        return selected

    if from_script:
        numbers = [n for n, _ in SCRIPTS]
        if from_script not in numbers:
            raise ValueError(
                f"script '{from_script}' not found. Valid numbers: {', '.join(numbers)}"
            )
        return SCRIPTS[numbers.index(from_script):]

    return list(SCRIPTS)


def run_script(number: str, path: str) -> bool:
    """Run a single script. Returns True on success, False on failure."""
    print(f"\n{'='*60}")
    print(f"  [{number}] {path}")
    print(f"{'='*60}")
    start = time.time()

    # Scripts import from utils/, so the project root must be importable
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (os.getcwd(), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run([sys.executable, path], env=env)

    elapsed = round(time.time() - start, 1)

    if result.returncode == 0:
        print(f"\n  ✓ Completed in {elapsed}s")
        return True
    else:
        print(f"\n  ✗ FAILED (exit code {result.returncode}) after {elapsed}s")
        return False


def main():
    parser = argparse.ArgumentParser(description="Build the London borough crime article")
    parser.add_argument(
        "--from", dest="from_script", metavar="N",
        help="Start from script N (e.g. --from 03 skips 01 and 02)"
    )
    parser.add_argument(
        "--only", dest="only_scripts", metavar="N", nargs="+",
        help="Run only the specified script numbers (e.g. --only 04 05)"
    )
    args = parser.parse_args()

    try:
        scripts_to_run = select_scripts(args.from_script, args.only_scripts)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not scripts_to_run:
        print("No scripts to run.")
        sys.exit(0)

    # Run
    overall_start = time.time()
    results = {}

    for number, path in scripts_to_run:
        success = run_script(number, path)
        results[number] = success
        if not success:
            print(f"\nBuild stopped at script {number}.")
            print(f"Fix the error above and rerun with:  python run_all.py --from {number}")
            break

    # Summary
    total = round(time.time() - overall_start, 1)
    passed = sum(results.values())
    failed = len(results) - passed

    print(f"\n{'='*60}")
    print(f"  Build summary  ({total}s total)")
    print(f"{'='*60}")
    for number, path in scripts_to_run:
        if number in results:
            icon = "✓" if results[number] else "✗"
            print(f"  {icon} [{number}] {path}")
        else:
            print(f"  - [{number}] {path}  (skipped)")

    print()
    if failed == 0 and len(results) == len(scripts_to_run):
        print(f"  All {passed} scripts passed.")
        print("\n  Open the article with:  streamlit run app.py")
    else:
        print(f"  {passed} passed, {failed} failed.")
        sys.exit(1)


if __name__ == "__main__":
    main()
