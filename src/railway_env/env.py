"""Railway-provided environment variables as a typed, immutable record.

Railway injects a fixed set of variables into every deployment. This module
reads them into a RailwayEnv, converting integer variables and applying
defaults. The sentinel RAILWAY_PROJECT_ID is read at call time, so tests
can vary the environment between calls.

Example usage:
    # Recoverable: decide what to do off-platform
    try:
        env = load()
    except NotRailwayError:
        env = None

    # At process start, when there is no fallback
    env = must_load()
"""

from __future__ import annotations

__all__ = [
    "RailwayEnv",
    "is_railway",
    "load",
    "must_load",
]

import os
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from railway_env.constants import INT64_MAX, INT64_MIN, PROJECT_ID_ENV_VAR
from railway_env.exceptions import (
    MalformedVariableError,
    NotRailwayError,
    RailwayEnvError,
    RailwayEnvFatalError,
    VariableError,
)
from railway_env.parsing import parse_int64
from railway_env.telemetry.system_logger import get_system_logger

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class RailwayEnv(BaseModel):
    """The Railway-provided environment variables.

    Each field's alias is the environment variable it is read from. Text
    fields default to "" and integer fields to 0 when the variable is unset
    or empty. Field order is the order variables are validated in.

    See https://docs.railway.com/reference/variables#railway-provided-variables
    """

    # Networking
    public_domain: str = Field(
        default="",
        alias="RAILWAY_PUBLIC_DOMAIN",
        description="Public service or customer domain, e.g. example.up.railway.app",
    )
    private_domain: str = Field(
        default="",
        alias="RAILWAY_PRIVATE_DOMAIN",
        description="Private DNS name of the service",
    )
    tcp_proxy_domain: str = Field(
        default="",
        alias="RAILWAY_TCP_PROXY_DOMAIN",
        description="Public TCP proxy domain, e.g. roundhouse.proxy.rlwy.net",
    )
    tcp_proxy_port: Int64 = Field(
        default=0,
        alias="RAILWAY_TCP_PROXY_PORT",
        description="External port of the TCP proxy, e.g. 11105",
    )
    tcp_application_port: Int64 = Field(
        default=0,
        alias="RAILWAY_TCP_APPLICATION_PORT",
        description="Internal port of the TCP proxy, e.g. 25565",
    )

    # Project / environment / service
    project_name: str = Field(default="", alias="RAILWAY_PROJECT_NAME")
    project_id: str = Field(default="", alias="RAILWAY_PROJECT_ID")
    environment_name: str = Field(default="", alias="RAILWAY_ENVIRONMENT_NAME")
    environment_id: str = Field(default="", alias="RAILWAY_ENVIRONMENT_ID")
    service_name: str = Field(default="", alias="RAILWAY_SERVICE_NAME")
    service_id: str = Field(default="", alias="RAILWAY_SERVICE_ID")

    # Deployment
    replica_id: str = Field(default="", alias="RAILWAY_REPLICA_ID")
    replica_region: str = Field(
        default="",
        alias="RAILWAY_REPLICA_REGION",
        description="Region the replica is deployed in, e.g. us-west2",
    )
    deployment_id: str = Field(default="", alias="RAILWAY_DEPLOYMENT_ID")
    snapshot_id: str = Field(default="", alias="RAILWAY_SNAPSHOT_ID")

    # Volume
    volume_name: str = Field(default="", alias="RAILWAY_VOLUME_NAME")
    volume_mount_path: str = Field(
        default="",
        alias="RAILWAY_VOLUME_MOUNT_PATH",
        description="Mount path of the attached volume, e.g. /data",
    )

    # Git
    git_commit_sha: str = Field(default="", alias="RAILWAY_GIT_COMMIT_SHA")
    git_author: str = Field(default="", alias="RAILWAY_GIT_AUTHOR")
    git_branch: str = Field(default="", alias="RAILWAY_GIT_BRANCH")
    git_repo_name: str = Field(default="", alias="RAILWAY_GIT_REPO_NAME")
    git_repo_owner: str = Field(default="", alias="RAILWAY_GIT_REPO_OWNER")
    git_commit_message: str = Field(default="", alias="RAILWAY_GIT_COMMIT_MESSAGE")

    # Build and runtime settings
    deployment_overlap_seconds: Int64 = Field(
        default=0,
        alias="RAILWAY_DEPLOYMENT_OVERLAP_SECONDS",
        description="How long the old deploy overlaps the new one",
    )
    dockerfile_path: str = Field(default="", alias="RAILWAY_DOCKERFILE_PATH")
    nixpacks_config_file: str = Field(default="", alias="NIXPACKS_CONFIG_FILE")
    nixpacks_version: str = Field(default="", alias="NIXPACKS_VERSION")
    healthcheck_timeout_sec: Int64 = Field(
        default=0,
        alias="RAILWAY_HEALTHCHECK_TIMEOUT_SEC",
        description="Healthcheck timeout in seconds",
    )
    deployment_draining_seconds: Int64 = Field(
        default=0,
        alias="RAILWAY_DEPLOYMENT_DRAINING_SECONDS",
        description="SIGTERM to SIGKILL buffer time in seconds",
    )
    run_uid: Int64 = Field(
        default=0,
        alias="RAILWAY_RUN_UID",
        description="UID of the main process; 0 explicitly runs as root",
    )
    shm_size_bytes: Int64 = Field(
        default=0,
        alias="RAILWAY_SHM_SIZE_BYTES",
        description="Shared memory size in bytes",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def is_railway(environ: Mapping[str, str] | None = None) -> bool:
    """Check whether the process is running on Railway.

    Args:
        environ: Environment to inspect. Defaults to os.environ at call time.

    Returns:
        True if RAILWAY_PROJECT_ID is set to a non-empty value.
    """
    return _environ(environ).get(PROJECT_ID_ENV_VAR, "") != ""


def load(environ: Mapping[str, str] | None = None) -> RailwayEnv:
    """Load the Railway-provided environment variables.

    Integer variables that are set must be strict base-10 integers within
    the signed 64-bit range. All integer variables are checked before
    failing, so a single error reports every malformed variable.

    Args:
        environ: Environment to read. Defaults to os.environ at call time.

    Returns:
        RailwayEnv: Fully populated, immutable record.

    Raises:
        NotRailwayError: If RAILWAY_PROJECT_ID is unset or empty.
        MalformedVariableError: If any integer variable is set but malformed.
    """
    env = _environ(environ)
    logger = get_system_logger()

    if not is_railway(env):
        logger.info(
            {
                "event": "railway_env_not_present",
                "message": f"{PROJECT_ID_ENV_VAR} is not set, not running on Railway",
            }
        )
        raise NotRailwayError()

    values: dict[str, Any] = {}
    errors: list[VariableError] = []
    first_cause: ValueError | None = None

    for field in RailwayEnv.model_fields.values():
        variable = field.alias
        assert variable is not None  # every field declares its variable
        raw = env.get(variable, "")

        if field.annotation is not int:
            values[variable] = raw
            continue

        if raw == "":
            values[variable] = field.default
            continue

        try:
            values[variable] = parse_int64(raw)
        except ValueError as e:
            errors.append(VariableError(variable=variable, value=raw, reason=str(e)))
            if first_cause is None:
                first_cause = e

    if errors:
        error = MalformedVariableError(errors)
        logger.warning(
            {
                "event": "railway_env_malformed",
                "message": f"Malformed Railway environment: {error}",
                "variables": list(error.variables),
            }
        )
        raise error from first_cause

    railway_env = RailwayEnv.model_validate(values)
    logger.debug(
        {
            "event": "railway_env_loaded",
            "message": f"Loaded Railway environment for service {railway_env.service_name!r}",
            "project_id": railway_env.project_id,
            "environment_id": railway_env.environment_id,
            "service_id": railway_env.service_id,
            "deployment_id": railway_env.deployment_id,
        }
    )
    return railway_env


def must_load(environ: Mapping[str, str] | None = None) -> RailwayEnv:
    """Load the Railway environment or fail fatally.

    Intended for process start, where there is no recovery strategy.

    Args:
        environ: Environment to read. Defaults to os.environ at call time.

    Returns:
        RailwayEnv: Fully populated, immutable record.

    Raises:
        RailwayEnvFatalError: If load() fails. The load() error is chained
            as __cause__.
    """
    try:
        return load(environ)
    except RailwayEnvError as e:
        get_system_logger().critical(
            {
                "event": "railway_env_fatal",
                "message": f"Cannot continue without Railway environment: {e}",
                "error_type": type(e).__name__,
                "exit_code": RailwayEnvFatalError.exit_code,
            }
        )
        raise RailwayEnvFatalError(f"failed to load Railway environment: {e}") from e
