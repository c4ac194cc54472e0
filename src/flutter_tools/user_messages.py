"""User-facing diagnostics raised by the command runner."""

from __future__ import annotations


def runner_wrap_column_invalid(value: object) -> str:
    return (
        "Argument to --wrap-column must be a positive integer. "
        f"You supplied {value}."
    )


def runner_wrap_column_parse_error(value: object) -> str:
    return f"Unable to parse argument --wrap-column={value}. Must be a positive integer."


def version_file_write_failed(error: object) -> str:
    return f'Failed to write the version file to the artifact cache: "{error}".'


VERSION_FILE_PERMISSION_HINT = (
    "Please ensure you have permissions in the artifact cache directory."
)
VERSION_FILE_TOOL_EXIT = "Failed to write the version file"
MACHINE_FLAG_REQUIRES_VERSION = "The --machine flag is only valid with the --version flag."
CACHE_LOCK_WAITING = "Waiting for another flutter command to release the startup lock..."
LOCAL_ENGINE_REQUIRED = (
    "You must specify --local-engine if you are using a locally built engine."
)
LOCAL_ENGINE_SRC_UNDETECTED = (
    "Unable to detect local Flutter engine src directory.\n"
    "Either specify a dependency_override for the sky_engine package in your "
    "pubspec.yaml and ensure --packages points to it, or set "
    "--local-engine-src-path (or $FLUTTER_ENGINE) to the engine src directory."
)
USAGE_FOOTER = (
    'Run "flutter help -v" for verbose help output, including less commonly used options.'
)


def local_engine_src_conflict(explicit: str, environment: str) -> str:
    return (
        f"--local-engine-src-path={explicit} conflicts with "
        f"$FLUTTER_ENGINE={environment}. Unset one of them or make them agree."
    )


def local_engine_build_missing(path: object) -> str:
    return f"No Flutter engine build found at {path}."


def version_outdated(age_days: int) -> str:
    return (
        f"WARNING: your installation of Flutter is {age_days} days old.\n"
        'To update to the latest version, run "flutter upgrade".'
    )
