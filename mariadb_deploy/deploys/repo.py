"""MariaDB package repository setup for mariadb-deploy."""

from pyinfra.operations import apt, dnf, yum

from mariadb_deploy.core.config import settings
from mariadb_deploy.core.packages import apt_repo_line, yum_repo_url
from mariadb_deploy.core.platform_paths import PlatformContext, PlatformFamily


def setup_repo(ctx: PlatformContext, version: str):
    """Add the upstream MariaDB repository for ``version``."""

    if ctx.family == PlatformFamily.DEBIAN:
        apt.key(
            name="Add MariaDB signing key",
            src=settings.MARIADB_GPG_KEY_URL,
        )
        apt.repo(
            name=f"Add MariaDB {version} apt repository",
            src=apt_repo_line(settings.MARIADB_APT_BASE_URL, version, ctx),
            filename="mariadb",
        )
        return

    repo_ops = dnf if ctx.family == PlatformFamily.FEDORA else yum
    repo_ops.repo(
        name=f"Add MariaDB {version} yum repository",
        src="MariaDB",
        description=f"MariaDB {version}",
        baseurl=yum_repo_url(settings.MARIADB_YUM_BASE_URL, version, ctx),
        gpgkey=settings.MARIADB_GPG_KEY_URL,
        gpgcheck=True,
    )


def install_packages(ctx: PlatformContext, name: str, packages):
    """Install packages with the package manager of the platform family."""

    if ctx.family == PlatformFamily.DEBIAN:
        apt.packages(name=name, packages=packages, present=True, update=True)
    elif ctx.family == PlatformFamily.FEDORA:
        dnf.packages(name=name, packages=packages, present=True)
    else:
        yum.packages(name=name, packages=packages, present=True)
