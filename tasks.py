#!/usr/bin/env python3
"""Invoke tasks for frame-lut project automation."""

import shutil
import sys
from pathlib import Path

from invoke.context import Context
from invoke.tasks import task

# Ensure UTF-8 encoding for Windows console (for emoji support)
if sys.platform == "win32":
    if sys.stdout.encoding != "utf-8":
        sys.stdout.reconfigure(encoding="utf-8")
    if sys.stderr.encoding != "utf-8":
        sys.stderr.reconfigure(encoding="utf-8")


@task
def clean(_: Context) -> None:
    """Clean build artifacts, cache files, and temporary files."""
    print("🧹 Cleaning build artifacts and cache files...")

    patterns = [
        "build",
        "dist",
        "*.egg-info",
        ".pytest_cache",
        ".ruff_cache",
        ".coverage",
        "coverage.xml",
        "htmlcov",
        "__pycache__",
    ]

    for pattern in patterns:
        for path in Path(".").glob(f"**/{pattern}"):
            if path.is_dir():
                print(f"  Removing directory: {path}")
                shutil.rmtree(path, ignore_errors=True)
            elif path.is_file():
                print(f"  Removing file: {path}")
                path.unlink(missing_ok=True)

    print("✅ Clean completed")


@task
def format(ctx: Context) -> None:
    """Format code with ruff."""
    print("🎨 Formatting code with ruff...")
    ctx.run("ruff format src tests docs")
    print("✅ Code formatting completed")


@task
def lint(ctx: Context, fix: bool = False) -> None:
    """Run linting with ruff.

    Args:
        fix: Automatically fix fixable issues (default: False)
    """
    print("🔍 Linting code with ruff...")
    cmd = "ruff check src tests docs"
    if fix:
        cmd += " --fix"
        print("  Auto-fixing enabled")
    ctx.run(cmd)
    print("✅ Linting completed")


@task
def typecheck(ctx: Context) -> None:
    """Run type checking with pyright."""
    print("🔬 Type checking with pyright...")
    ctx.run("pyright src/frame_lut")
    print("✅ Type checking completed")


@task
def test(ctx: Context, coverage: bool = True, verbose: bool = False) -> None:
    """Run tests with pytest.

    Args:
        coverage: Generate coverage report (default: True)
        verbose: Run with verbose output (default: False)
    """
    print("🧪 Running tests with pytest...")

    cmd = "pytest"

    if coverage:
        cmd += " --cov=frame_lut --cov-report=term-missing --cov-report=html --cov-report=xml"

    if verbose:
        cmd += " -v"

    cmd += " tests"

    ctx.run(cmd)
    print("✅ Tests completed")


@task(pre=[format, lint, typecheck])
def quality(_: Context) -> None:
    """Run code quality checks: format, lint and typecheck.

    Does NOT run tests - use 'invoke test' separately for functional testing.
    """
    print("🎯 Quality checks completed successfully!")


@task(pre=[clean])
def build(ctx: Context) -> None:
    """Build the package for distribution."""
    print("🔨 Building package...")
    ctx.run("uv build")

    print("\n📦 Built files:")
    dist_path = Path("dist")
    if dist_path.exists():
        for file in sorted(dist_path.glob("*")):
            print(f"  {file.name} ({file.stat().st_size / 1024:.1f}K)")

    print("✅ Build completed")


@task
def install(ctx: Context, dev: bool = False, editable: bool = True) -> None:
    """Install the package.

    Args:
        dev: Install with development dependencies (default: False)
        editable: Install in editable mode (default: True)
    """
    print("📥 Installing package...")

    if dev:
        ctx.run("uv pip install -e '.[dev]'")
    elif editable:
        ctx.run("uv pip install -e .")
    else:
        ctx.run("uv pip install .")
    print("✅ Installation completed")


@task
def release(ctx: Context, version: str = "") -> None:
    """Prepare a release.

    Args:
        version: Version number to release (e.g., "1.0.0")
    """
    if not version:
        print("❌ Version number required. Usage: invoke release --version=1.0.0")
        return

    print(f"🚀 Preparing release {version}...")

    for version_file in (Path("src/frame_lut/__init__.py"), Path("pyproject.toml")):
        content = version_file.read_text()
        marker = '__version__ = "' if version_file.suffix == ".py" else 'version = "'
        start = content.find(marker) + len(marker)
        end = content.find('"', start)
        current_version = content[start:end]
        version_file.write_text(
            content.replace(f'{marker}{current_version}"', f'{marker}{version}"', 1)
        )
        print(f"  Updated version from {current_version} to {version} in {version_file}")

    print("  Running quality checks...")
    quality(ctx)

    print("  Building package...")
    build(ctx)

    print(f"✅ Release {version} prepared. Review and then run:")
    print("   git add .")
    print(f"   git commit -m 'Release {version}'")
    print(f"   git tag v{version}")
    print("   git push origin main --tags")


@task
def demo(ctx: Context) -> None:
    """Generate a LUT, inspect it and apply it to a test frame."""
    print("🎬 Running package demo...")

    demo_dir = Path("build/demo")
    demo_dir.mkdir(parents=True, exist_ok=True)
    lut_file = demo_dir / "warm.cube"

    ctx.run(f"frame-lut generate {lut_file} --size 17 --gamma 1.2 --saturation 1.3")
    ctx.run(f"frame-lut info {lut_file}")
    ctx.run("python docs/examples/basic_usage.py")

    print("✅ Demo completed")


@task
def all(ctx: Context) -> None:
    """Run complete CI/CD pipeline: clean, quality checks, tests, and build."""
    print("🎯 Running complete CI/CD pipeline...")
    clean(ctx)
    quality(ctx)
    test(ctx)
    build(ctx)
    print("🎉 Complete pipeline finished successfully!")

