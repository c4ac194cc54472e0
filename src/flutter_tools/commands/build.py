from __future__ import annotations

from enum import StrEnum

import typer

from flutter_tools.artifacts import Artifacts
from flutter_tools.logger import Logger
from flutter_tools.package_map import PackageMap
from flutter_tools.runtime import context

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Flutter build commands.",
)


class BuildMode(StrEnum):
    DEBUG = "debug"
    PROFILE = "profile"
    RELEASE = "release"


def resolve_build_mode(*, debug: bool, profile: bool, release: bool) -> BuildMode:
    selected = [
        mode
        for mode, enabled in (
            (BuildMode.DEBUG, debug),
            (BuildMode.PROFILE, profile),
            (BuildMode.RELEASE, release),
        )
        if enabled
    ]
    if len(selected) > 1:
        raise typer.BadParameter(
            "Only one of --debug, --profile, or --release can be specified.",
            param_hint="--debug/--profile/--release",
        )
    return selected[0] if selected else BuildMode.RELEASE


def _report_build(target: str, artifact: str, mode: BuildMode) -> None:
    logger = context.get(Logger)
    artifacts = context.get(Artifacts)
    source = "local engine" if artifacts.is_local_engine else "cached engine"
    logger.print_status(f"Building {target} in {mode} mode.", emphasis=True)
    logger.print_trace(f"Packages file: {context.get(PackageMap).packages_path}")
    logger.print_status(
        f"Using {source} artifact {artifacts.get_artifact_path(artifact)}"
    )


@app.command("apk", help="Build an Android APK file from your app.")
def build_apk(
    debug: bool = typer.Option(False, "--debug", help="Build a debug version of your app."),
    profile: bool = typer.Option(False, "--profile", help="Build a version of your app specialized for performance profiling."),
    release: bool = typer.Option(False, "--release", help="Build a release version of your app (default mode)."),
) -> None:
    mode = resolve_build_mode(debug=debug, profile=profile, release=release)
    _report_build("APK", "flutter.jar", mode)


@app.command("ios", help="Build an iOS application bundle (Mac OS X host only).")
def build_ios(
    debug: bool = typer.Option(False, "--debug", help="Build a debug version of your app."),
    profile: bool = typer.Option(False, "--profile", help="Build a version of your app specialized for performance profiling."),
    release: bool = typer.Option(False, "--release", help="Build a release version of your app (default mode)."),
    codesign: bool = typer.Option(True, "--codesign/--no-codesign", help="Codesign the application bundle."),
) -> None:
    mode = resolve_build_mode(debug=debug, profile=profile, release=release)
    _report_build("iOS app", "Flutter.framework", mode)
    if not codesign:
        context.get(Logger).print_warning(
            "Not codesigning; you will have to manually codesign before deploying to device."
        )


@app.command("bundle", help="Build the Flutter assets directory from your app.")
def build_bundle(
    asset_dir: str = typer.Option("build/flutter_assets", "--asset-dir", help="The output directory for the assets."),
) -> None:
    logger = context.get(Logger)
    logger.print_status(f"Building asset bundle into {asset_dir}.", emphasis=True)
    logger.print_trace(f"Packages file: {context.get(PackageMap).packages_path}")
