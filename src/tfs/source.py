"""Obtain change-set JSON for a plan file via `terraform show -json`."""

from __future__ import annotations

import os
import subprocess

from tfs.exceptions import PlanSourceError

DEFAULT_TERRAFORM_BIN = "terraform"


def read_plan_json(path: str, terraform_bin: str = DEFAULT_TERRAFORM_BIN) -> str:
    """Return the plan's JSON text.

    Binary plans are converted with `<terraform_bin> show -json <path>`. If the
    tool is missing or fails, the file is assumed to already hold JSON and is
    read directly.
    """
    if not os.path.exists(path):
        raise PlanSourceError(f"File does not exist: {path}")

    try:
        result = subprocess.run(
            [terraform_bin, "show", "-json", path],
            capture_output=True, text=True, check=True,
        )
        return result.stdout
    except (OSError, subprocess.CalledProcessError) as e:
        tool_error = _describe(e)

    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PlanSourceError(
            f"Failed to run '{terraform_bin} show -json' ({tool_error}) "
            f"and failed to read {path} as JSON ({e})"
        )


def _describe(error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError):
        stderr = (error.stderr or "").strip()
        return stderr.splitlines()[-1] if stderr else f"exit code {error.returncode}"
    return str(error)
