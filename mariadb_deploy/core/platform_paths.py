"""
Platform specific file locations and service names for MariaDB instances.

An instance is a named server installation living next to others on the same
host. The default instance is the empty string and gets the canonical paths;
named instances get their own directories, socket and systemd unit.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from mariadb_deploy.core.errors import UnsupportedPlatformError


class PlatformFamily(str, Enum):
    RHEL = "rhel"
    FEDORA = "fedora"
    AMAZON = "amazon"
    DEBIAN = "debian"


RPM_FAMILIES = (PlatformFamily.RHEL, PlatformFamily.FEDORA, PlatformFamily.AMAZON)


def default_instance() -> str:
    return ""


def _family(family) -> PlatformFamily:
    try:
        return PlatformFamily(family)
    except ValueError:
        raise UnsupportedPlatformError(family) from None


def _named(instance: Optional[str]) -> bool:
    return bool(instance)


def conf_dir(family, instance: Optional[str] = None) -> str:
    if _family(family) in RPM_FAMILIES:
        return "/etc"
    if _named(instance):
        return f"/etc/mysql-{instance}"
    return "/etc/mysql"


def ext_conf_dir(family, instance: Optional[str] = None) -> str:
    if _family(family) in RPM_FAMILIES:
        return f"{conf_dir(family, instance)}/my.cnf.d"
    return f"{conf_dir(family, instance)}/conf.d"


def mycnf_file(family, instance: Optional[str] = None) -> str:
    return f"{conf_dir(family, instance)}/my.cnf"


def data_dir(family, instance: Optional[str] = None) -> str:
    _family(family)
    if _named(instance):
        return f"/var/lib/mysql-{instance}"
    return "/var/lib/mysql"


def log_dir(family, instance: Optional[str] = None) -> str:
    _family(family)
    if _named(instance):
        return f"/var/log/mysql-{instance}"
    return "/var/log/mysql"


def platform_service_name(family, instance: Optional[str] = None) -> str:
    """The systemd unit serving the instance."""
    _family(family)
    if _named(instance):
        return f"mariadb@{instance}"
    return "mariadb"


def default_socket(family, instance: Optional[str] = None) -> str:
    # RPM packages always use the same socket, instance or not
    if _family(family) in RPM_FAMILIES:
        return "/var/lib/mysql/mysql.sock"
    if _named(instance):
        return f"/var/run/mysqld/mysqld-{instance}.sock"
    return "/var/run/mysqld/mysqld.sock"


def default_pid_file(family, instance: Optional[str] = None) -> Optional[str]:
    if _family(family) in RPM_FAMILIES:
        return None
    if _named(instance):
        return f"/var/run/mysqld/mysqld-{instance}.pid"
    return "/var/run/mysqld/mysqld.pid"


class PlatformPaths(BaseModel):
    family: PlatformFamily
    instance: str
    conf_dir: str
    ext_conf_dir: str
    mycnf_file: str
    data_dir: str
    log_dir: str
    socket: str
    pid_file: Optional[str]
    service_name: str

    @classmethod
    def resolve(cls, family, instance: Optional[str] = None) -> "PlatformPaths":
        instance = instance or default_instance()
        return cls(
            family=_family(family),
            instance=instance,
            conf_dir=conf_dir(family, instance),
            ext_conf_dir=ext_conf_dir(family, instance),
            mycnf_file=mycnf_file(family, instance),
            data_dir=data_dir(family, instance),
            log_dir=log_dir(family, instance),
            socket=default_socket(family, instance),
            pid_file=default_pid_file(family, instance),
            service_name=platform_service_name(family, instance),
        )


class PlatformContext(BaseModel):
    """What the deploy knows about the target host, passed around explicitly."""

    family: PlatformFamily
    platform: str
    release: str = ""
    machine: str = "x86_64"
    codename: Optional[str] = None

    def paths(self, instance: Optional[str] = None) -> PlatformPaths:
        return PlatformPaths.resolve(self.family, instance)
