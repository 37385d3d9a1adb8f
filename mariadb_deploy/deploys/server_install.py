"""Install MariaDB server deployment for mariadb-deploy."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel
from pyinfra import host
from pyinfra.operations import files

from mariadb_deploy.core.config import settings
from mariadb_deploy.core.logging import get_logger
from mariadb_deploy.core.packages import server_pkg_name
from mariadb_deploy.core.platform_paths import PlatformContext, default_instance
from mariadb_deploy.core.platform_paths import mycnf_file as instance_mycnf_file
from mariadb_deploy.deploys import repo
from mariadb_deploy.deploys.client_install import install_client
from mariadb_deploy.deploys.host_platform import platform_context

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Values shared with later deploys of the same run
run_state: dict = {}


class ServerInstallProperties(BaseModel):
    version: str
    instance: str
    setup_repo: bool
    mycnf_file: str
    extconf_directory: str
    data_directory: str
    external_pid_file: str


def install_server(
    version: Optional[str] = None,
    instance: Optional[str] = None,
    setup_repo: bool = True,
    mycnf_file: Optional[str] = None,
    extconf_directory: Optional[str] = None,
    data_directory: Optional[str] = None,
    external_pid_file: Optional[str] = None,
    ctx: Optional[PlatformContext] = None,
) -> ServerInstallProperties:
    """Install MariaDB server and the systemd unit template for its instances."""

    ctx = ctx or platform_context(host)
    version = version or settings.MARIADB_VERSION
    instance = instance if instance is not None else default_instance()
    paths = ctx.paths(instance)

    props = ServerInstallProperties(
        version=version,
        instance=instance,
        setup_repo=setup_repo,
        mycnf_file=mycnf_file or paths.mycnf_file,
        extconf_directory=extconf_directory or paths.ext_conf_dir,
        data_directory=data_directory or paths.data_dir,
        external_pid_file=external_pid_file or f"/var/run/mysql/{version}-main.pid",
    )
    logger.info("Installing MariaDB server", platform=ctx.platform, **props.model_dump())

    run_state.setdefault("mariadb", {})["version"] = version

    install_client(version=version, setup_repo=setup_repo, ctx=ctx)

    repo.install_packages(ctx, name="Install MariaDB server", packages=[server_pkg_name(ctx, version)])

    # One unit file serves every mariadb@<instance>; systemd expands %I to the instance name.
    # The packaged unit reads /etc/mysql/conf.d/my%I.cnf, ours reads the instance's own my.cnf
    unit_cnf_file = mycnf_file or instance_mycnf_file(ctx.family, "%I")
    files.template(
        name="Install MariaDB systemd unit template",
        src=str(TEMPLATES_DIR / "systemd" / "mariadb@.service.j2"),
        dest=settings.MARIADB_SYSTEMD_UNIT_PATH,
        user="root",
        group="root",
        mode="644",
        cnf_file=unit_cnf_file,
    )

    # mysql_install_db looks for resolveip in /usr/sbin (MDEV-18563)
    if ctx.platform == "ubuntu":
        files.link(
            name="Link resolveip into /usr/sbin",
            path="/usr/sbin/resolveip",
            target="/usr/bin/resolveip",
        )

    return props
