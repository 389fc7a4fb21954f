#!/usr/bin/env python3
"""
Build script for the CRUD Lambda functions.

Every entry-point directory under src/ (a directory holding lambda_function.py)
becomes build/<name>.zip, bundling the entry point, the shared tvapi package and
the dependencies listed in the entry point's requirements.txt.
"""
import argparse
import shutil
import subprocess
import sys
import zipfile
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"
SHARED_PACKAGE = "tvapi"
IGNORED = shutil.ignore_patterns("__pycache__", "*.pyc", "test_*.py")


def discover_functions() -> List[str]:
    return sorted(d.name for d in SRC_DIR.iterdir() if (d / "lambda_function.py").is_file())


def package_function(name: str, build_dir: Path, install_deps: bool = True) -> Path:
    """
    Stage and zip one Lambda function.

    Args:
        name: Entry-point directory name under src/
        build_dir: Directory receiving the staging area and the zip
        install_deps: Whether to pip install requirements.txt into the bundle

    Returns:
        Path of the created zip archive
    """
    function_dir = SRC_DIR / name
    staging_dir = build_dir / f"staging_{name}"
    if staging_dir.exists():
        shutil.rmtree(staging_dir)

    shutil.copytree(function_dir, staging_dir, ignore=IGNORED)
    shutil.copytree(SRC_DIR / SHARED_PACKAGE, staging_dir / SHARED_PACKAGE, ignore=IGNORED)

    requirements_file = function_dir / "requirements.txt"
    if install_deps and requirements_file.exists():
        print(f"  installing {requirements_file.relative_to(PROJECT_ROOT)}")
        subprocess.run(
            [sys.executable, "-m", "pip", "install", "--quiet", "-r", str(requirements_file), "-t", str(staging_dir)],
            check=True,
        )

    zip_path = build_dir / f"{name}.zip"
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as archive:
        for file_path in sorted(staging_dir.rglob("*")):
            if file_path.is_file():
                archive.write(file_path, file_path.relative_to(staging_dir))

    shutil.rmtree(staging_dir)
    return zip_path


def main():
    """Main build function"""
    available = discover_functions()

    parser = argparse.ArgumentParser(description="Package the CRUD Lambda functions as zip archives")
    parser.add_argument(
        "--function",
        choices=available,
        action="append",
        help="Function to build; repeat for several (default: all)"
    )
    parser.add_argument(
        "--build-dir",
        default=str(PROJECT_ROOT / "build"),
        help="Output directory (default: build/)"
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Do not install requirements.txt, e.g. when a Powertools layer provides them"
    )
    args = parser.parse_args()

    build_dir = Path(args.build_dir)
    build_dir.mkdir(parents=True, exist_ok=True)

    for name in args.function or available:
        print(f"Building {name}...")
        zip_path = package_function(name, build_dir, install_deps=not args.skip_deps)
        print(f"  {zip_path} ({zip_path.stat().st_size} bytes)")

    print("Build complete!")


if __name__ == "__main__":
    main()
