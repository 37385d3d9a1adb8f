import shlex

import jinja2
import pytest
from unittest.mock import MagicMock, call, patch

from pyinfra.facts.files import File
from pyinfra.facts.server import Arch, LinuxDistribution

from mariadb_deploy.core.errors import UnsupportedPlatformError
from mariadb_deploy.core.executor import CommandResult
from mariadb_deploy.core.platform_paths import PlatformContext, PlatformFamily, PlatformPaths
from mariadb_deploy.deploys import server_install
from mariadb_deploy.deploys.client_install import install_client
from mariadb_deploy.deploys.host_platform import is_initialized, is_replica, platform_context
from mariadb_deploy.deploys.host_runner import HostRunner
from mariadb_deploy.deploys.repo import install_packages, setup_repo
from mariadb_deploy.deploys.server_install import install_server
from mariadb_deploy.deploys.sql import sql


def fake_host(distro=None, arch="x86_64", existing=()):
    host = MagicMock()

    def get_fact(fact, **kwargs):
        if fact is LinuxDistribution:
            return distro
        if fact is Arch:
            return arch
        if fact is File:
            return {"mode": 644} if kwargs["path"] in existing else None
        raise AssertionError(f"unexpected fact {fact}")

    host.get_fact.side_effect = get_fact
    return host


@pytest.fixture
def ubuntu():
    return PlatformContext(family="debian", platform="ubuntu", release="22", codename="jammy")


@pytest.fixture
def centos():
    return PlatformContext(family="rhel", platform="centos", release="7")


@pytest.fixture
def mock_ops():
    with patch("mariadb_deploy.deploys.repo.apt") as apt, \
            patch("mariadb_deploy.deploys.repo.yum") as yum, \
            patch("mariadb_deploy.deploys.repo.dnf") as dnf, \
            patch("mariadb_deploy.deploys.server_install.files") as files:
        yield {"apt": apt, "yum": yum, "dnf": dnf, "files": files}


# Test platform detection
def test_platform_context_ubuntu():
    host = fake_host(
        distro={
            "name": "Ubuntu",
            "major": 22,
            "minor": 4,
            "release_meta": {"ID": "ubuntu", "ID_LIKE": "debian", "VERSION_CODENAME": "jammy"},
        }
    )
    ctx = platform_context(host)
    assert ctx.family == PlatformFamily.DEBIAN
    assert ctx.platform == "ubuntu"
    assert ctx.release == "22"
    assert ctx.machine == "x86_64"
    assert ctx.codename == "jammy"


def test_platform_context_amazon():
    host = fake_host(distro={"name": "Amazon Linux", "major": 2, "release_meta": {"ID": "amzn"}}, arch="aarch64")
    ctx = platform_context(host)
    assert ctx.family == PlatformFamily.AMAZON
    assert ctx.platform == "amazon"
    assert ctx.machine == "aarch64"


def test_platform_context_id_like_fallback():
    host = fake_host(distro={"name": "Pop!_OS", "major": 22, "release_meta": {"ID": "pop", "ID_LIKE": "ubuntu debian"}})
    assert platform_context(host).family == PlatformFamily.DEBIAN


def test_platform_context_unsupported():
    host = fake_host(distro={"name": "openSUSE", "major": 15, "release_meta": {"ID": "opensuse-leap", "ID_LIKE": "suse"}})
    with pytest.raises(UnsupportedPlatformError):
        platform_context(host)


def test_initialized_and_replica_facts():
    paths = PlatformPaths.resolve("debian", "replica1")
    host = fake_host(existing={"/etc/mysql-replica1/my.cnf"})
    assert is_initialized(host, paths) is True
    assert is_replica(host, paths) is False

    host = fake_host(existing={"/var/lib/mysql-replica1/recovery.conf"})
    assert is_initialized(host, paths) is False
    assert is_replica(host, paths) is True


# Test repositories and packages
def test_setup_repo_debian(mock_ops, ubuntu):
    setup_repo(ubuntu, "10.3")
    mock_ops["apt"].key.assert_called_once()
    repo_kwargs = mock_ops["apt"].repo.call_args.kwargs
    assert repo_kwargs["src"].endswith("mariadb-10.3/repo/ubuntu jammy main")
    mock_ops["yum"].repo.assert_not_called()


def test_setup_repo_rhel(mock_ops, centos):
    setup_repo(centos, "10.4")
    repo_kwargs = mock_ops["yum"].repo.call_args.kwargs
    assert repo_kwargs["src"] == "MariaDB"
    assert repo_kwargs["baseurl"].endswith("/10.4/centos$releasever-amd64")
    assert repo_kwargs["gpgcheck"] is True
    mock_ops["apt"].repo.assert_not_called()


def test_setup_repo_fedora_uses_dnf(mock_ops):
    setup_repo(PlatformContext(family="fedora", platform="fedora", release="39"), "10.3")
    mock_ops["dnf"].repo.assert_called_once()
    mock_ops["yum"].repo.assert_not_called()


def test_install_packages_by_family(mock_ops, ubuntu, centos):
    install_packages(ubuntu, name="x", packages=["a"])
    install_packages(centos, name="y", packages=["b"])
    mock_ops["apt"].packages.assert_called_once_with(name="x", packages=["a"], present=True, update=True)
    mock_ops["yum"].packages.assert_called_once_with(name="y", packages=["b"], present=True)


def test_install_client_without_repo(mock_ops, ubuntu):
    install_client(version="10.5", setup_repo=False, ctx=ubuntu)
    mock_ops["apt"].repo.assert_not_called()
    assert mock_ops["apt"].packages.call_args.kwargs["packages"] == ["mariadb-client-10.5"]


# Test server install
def test_install_server_defaults(mock_ops, ubuntu):
    props = install_server(version="10.3", ctx=ubuntu)

    assert props.instance == ""
    assert props.mycnf_file == "/etc/mysql/my.cnf"
    assert props.extconf_directory == "/etc/mysql/conf.d"
    assert props.data_directory == "/var/lib/mysql"
    assert props.external_pid_file == "/var/run/mysql/10.3-main.pid"
    assert server_install.run_state["mariadb"]["version"] == "10.3"

    installed = [c.kwargs["packages"] for c in mock_ops["apt"].packages.call_args_list]
    assert installed == [["mariadb-client-10.3"], ["mariadb-server-10.3"]]

    template_kwargs = mock_ops["files"].template.call_args.kwargs
    assert template_kwargs["src"].endswith("templates/systemd/mariadb@.service.j2")
    assert template_kwargs["dest"] == "/etc/systemd/system/mariadb@.service"
    assert template_kwargs["user"] == "root"
    assert template_kwargs["group"] == "root"
    assert template_kwargs["mode"] == "644"
    assert template_kwargs["cnf_file"] == "/etc/mysql-%I/my.cnf"

    mock_ops["files"].link.assert_called_once_with(
        name="Link resolveip into /usr/sbin",
        path="/usr/sbin/resolveip",
        target="/usr/bin/resolveip",
    )


def test_install_server_named_instance_rhel(mock_ops, centos):
    props = install_server(version="10.4", instance="replica1", setup_repo=False, ctx=centos)

    assert props.mycnf_file == "/etc/my.cnf"
    assert props.extconf_directory == "/etc/my.cnf.d"
    assert props.data_directory == "/var/lib/mysql-replica1"
    mock_ops["yum"].repo.assert_not_called()
    assert mock_ops["yum"].packages.call_args_list[-1].kwargs["packages"] == ["MariaDB-server"]
    assert mock_ops["files"].template.call_args.kwargs["cnf_file"] == "/etc/my.cnf"
    mock_ops["files"].link.assert_not_called()


def test_install_server_explicit_properties(mock_ops, ubuntu):
    props = install_server(
        version="10.3",
        instance="a",
        mycnf_file="/srv/a/my.cnf",
        extconf_directory="/srv/a/conf.d",
        data_directory="/srv/a/data",
        external_pid_file="/srv/a/mysqld.pid",
        ctx=ubuntu,
    )
    assert props.mycnf_file == "/srv/a/my.cnf"
    assert props.extconf_directory == "/srv/a/conf.d"
    assert props.data_directory == "/srv/a/data"
    assert props.external_pid_file == "/srv/a/mysqld.pid"
    assert mock_ops["files"].template.call_args.kwargs["cnf_file"] == "/srv/a/my.cnf"


def render_unit(**template_kwargs):
    src = template_kwargs["src"]
    with open(src) as f:
        return jinja2.Template(f.read()).render(**template_kwargs)


def test_unit_template_uses_instance_specifier(mock_ops, ubuntu):
    # The instance name also occurs inside "/etc/mysql" and "my.cnf"
    install_server(version="10.3", instance="m", ctx=ubuntu)

    unit = render_unit(**mock_ops["files"].template.call_args.kwargs)
    assert '--defaults-file=/etc/mysql-%I/my.cnf"' in unit
    assert "/etc/mysql-m" not in unit


def test_unit_template_default_instance_is_per_instance(mock_ops, ubuntu):
    install_server(version="10.3", ctx=ubuntu)

    unit = render_unit(**mock_ops["files"].template.call_args.kwargs)
    assert '--defaults-file=/etc/mysql-%I/my.cnf"' in unit


def test_unit_template_explicit_cnf_file(mock_ops, centos):
    install_server(version="10.4", instance="m", mycnf_file="/srv/m/my.cnf", setup_repo=False, ctx=centos)

    unit = render_unit(**mock_ops["files"].template.call_args.kwargs)
    assert '--defaults-file=/srv/m/my.cnf"' in unit


# Test SQL execution on hosts
def test_sql_operation_yields_command():
    commands = list(sql._inner(["DROP TABLE t", "CREATE TABLE t(id INT)"], "app", {"host": "localhost", "port": 3306}))
    assert len(commands) == 1
    rendered = str(commands[0])
    assert "DROP TABLE t;\nCREATE TABLE t(id INT)" in rendered
    assert "-P" not in shlex.split(rendered)
    assert rendered.endswith(" app")


def test_host_runner():
    host = MagicMock()
    host.run_shell_command.return_value = (True, MagicMock(stdout="a\n1", stderr=""))
    result = HostRunner(host).run(["/usr/bin/mysql", "-B", "-e", "SELECT 1 AS a"])

    assert result == CommandResult(exit_status=0, stdout="a\n1", stderr="")
    assert host.run_shell_command.call_args == call(
        "/usr/bin/mysql -B -e 'SELECT 1 AS a'", _sudo=True, _sudo_user="root", print_output=False
    )


def test_host_runner_failure():
    host = MagicMock()
    host.run_shell_command.return_value = (False, MagicMock(stdout="", stderr="ERROR 1045"))
    result = HostRunner(host).run(["/usr/bin/mysql"])
    assert result.exit_status == 1
    assert result.stderr == "ERROR 1045"
