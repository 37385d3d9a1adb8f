"""Install MariaDB client deployment for mariadb-deploy."""

from typing import Optional

from pyinfra import host

from mariadb_deploy.core.config import settings
from mariadb_deploy.core.packages import client_pkg_name
from mariadb_deploy.core.platform_paths import PlatformContext
from mariadb_deploy.deploys import repo
from mariadb_deploy.deploys.host_platform import platform_context


def install_client(
    version: Optional[str] = None,
    setup_repo: bool = True,
    ctx: Optional[PlatformContext] = None,
):
    """Install the MariaDB client."""

    version = version or settings.MARIADB_VERSION
    ctx = ctx or platform_context(host)

    if setup_repo:
        repo.setup_repo(ctx, version)

    repo.install_packages(ctx, name="Install MariaDB client", packages=[client_pkg_name(ctx, version)])
