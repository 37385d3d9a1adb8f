"""Package names and repository locations for MariaDB."""

import secrets

from mariadb_deploy.core.errors import UnsupportedPlatformError
from mariadb_deploy.core.logging import get_logger
from mariadb_deploy.core.platform_paths import PlatformContext, PlatformFamily

logger = get_logger(__name__)


def server_pkg_name(ctx: PlatformContext, version: str) -> str:
    if ctx.family == PlatformFamily.DEBIAN:
        return f"mariadb-server-{version}"
    return "MariaDB-server"


def client_pkg_name(ctx: PlatformContext, version: str) -> str:
    if ctx.family == PlatformFamily.DEBIAN:
        return f"mariadb-client-{version}"
    return "MariaDB-client"


def yum_releasever(ctx: PlatformContext) -> str:
    # Amazon Linux uses the RHEL 6 packages
    if ctx.platform == "amazon":
        return "6"
    return "$releasever"


def yum_repo_platform_string(ctx: PlatformContext) -> str:
    arch = "amd64" if ctx.machine == "x86_64" else "$basearch"
    return f"{ctx.platform}{yum_releasever(ctx)}-{arch}"


def yum_repo_url(base_url: str, version: str, ctx: PlatformContext) -> str:
    """Complete baseurl of the yum repository, e.g. http://yum.mariadb.org/10.3/centos$releasever-amd64"""
    return f"{base_url}/{version}/{yum_repo_platform_string(ctx)}"


def apt_repo_line(base_url: str, version: str, ctx: PlatformContext) -> str:
    if not ctx.codename:
        raise UnsupportedPlatformError(ctx.family.value, f"{ctx.platform} {ctx.release} reports no release codename")
    return f"deb [arch=amd64] {base_url}-{version}/repo/{ctx.platform} {ctx.codename} main"


def secure_random() -> str:
    """Random 32 character hex string, used for generated passwords."""
    value = secrets.token_hex(16)
    logger.debug("Generated password", password=value)
    return value
