#!/usr/bin/env python3
"""
Project check script.

Runs, in order:
1. Python lint (ruff)
2. Test suite (pytest)

Stops immediately on first failure and returns all errors for that section.
"""

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass
class CheckResult:
    """Result of a check."""
    name: str
    success: bool
    output: str
    return_code: int


def run_command(cmd: list[str], cwd: Path | None = None) -> tuple[int, str, str]:
    """Run a command and return (return_code, stdout, stderr)."""
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=300,
        )
        return result.returncode, result.stdout, result.stderr
    except FileNotFoundError:
        return -1, "", f"Command not found: {cmd[0]}"
    except subprocess.TimeoutExpired:
        return -1, "", f"Command timed out: {' '.join(cmd)}"


def run_check(name: str, cmd: list[str], cwd: Path) -> CheckResult:
    """Run one check command and report its outcome."""
    print("\n" + "=" * 60)
    print(f"🔍 Running {name}")
    print("=" * 60)

    code, stdout, stderr = run_command(cmd, cwd=cwd)
    output = stdout + stderr
    success = code == 0

    if success:
        print(f"✅ {name} passed")
    else:
        print(f"❌ {name} failed")
        print(output)

    return CheckResult(
        name=name,
        success=success,
        output=output if not success else "No errors",
        return_code=code,
    )


def main() -> int:
    """Run all checks in order."""
    print("🚀 Starting Project Checks")
    print("=" * 60)

    project_root = Path(__file__).parent
    checks = [
        ("Python Linter (ruff)", [sys.executable, "-m", "ruff", "check", "."]),
        ("Tests (pytest)", [sys.executable, "-m", "pytest", "-q"]),
    ]

    results: list[CheckResult] = []
    for name, cmd in checks:
        result = run_check(name, cmd, project_root)
        results.append(result)
        if not result.success:
            break

    print_summary(results)
    return 0 if all(result.success for result in results) else 1


def print_summary(results: list[CheckResult]) -> None:
    """Print summary of all check results."""
    print("\n" + "=" * 60)
    print("📊 CHECK SUMMARY")
    print("=" * 60)

    for result in results:
        status = "✅ PASS" if result.success else "❌ FAIL"
        print(f"  {result.name}: {status}")

    print("=" * 60)

    failed = [result for result in results if not result.success]
    if not failed:
        print("🎉 All checks passed!")
    else:
        print("💥 Checks failed! Fix the errors above.")
        print(f"\n--- {failed[0].name} Errors ---")
        print(failed[0].output)


if __name__ == "__main__":
    sys.exit(main())
