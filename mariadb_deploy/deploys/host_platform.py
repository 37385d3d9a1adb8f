"""Detect the target host platform from pyinfra facts."""

from pyinfra.facts.files import File
from pyinfra.facts.server import Arch, LinuxDistribution

from mariadb_deploy.core.errors import UnsupportedPlatformError
from mariadb_deploy.core.platform_paths import PlatformContext, PlatformPaths

# os-release ID -> platform family
DISTRO_FAMILIES = {
    "debian": "debian",
    "ubuntu": "debian",
    "linuxmint": "debian",
    "rhel": "rhel",
    "centos": "rhel",
    "rocky": "rhel",
    "almalinux": "rhel",
    "ol": "rhel",
    "fedora": "fedora",
    "amzn": "amazon",
}

# os-release ID -> platform name used in repository paths
PLATFORM_NAMES = {
    "amzn": "amazon",
    "rhel": "redhat",
}


def _family_for(distro_id: str, id_like: str) -> str:
    if distro_id in DISTRO_FAMILIES:
        return DISTRO_FAMILIES[distro_id]
    for like in id_like.split():
        if like in DISTRO_FAMILIES:
            return DISTRO_FAMILIES[like]
    raise UnsupportedPlatformError(distro_id or None)


def platform_context(host) -> PlatformContext:
    distro = host.get_fact(LinuxDistribution) or {}
    meta = distro.get("release_meta") or {}
    distro_id = (meta.get("ID") or distro.get("name") or "").lower()

    return PlatformContext(
        family=_family_for(distro_id, meta.get("ID_LIKE", "").lower()),
        platform=PLATFORM_NAMES.get(distro_id, distro_id),
        release=str(distro.get("major") or ""),
        machine=host.get_fact(Arch) or "",
        codename=meta.get("VERSION_CODENAME"),
    )


def is_initialized(host, paths: PlatformPaths) -> bool:
    """Whether the instance already has its my.cnf."""
    return bool(host.get_fact(File, path=paths.mycnf_file))


def is_replica(host, paths: PlatformPaths) -> bool:
    return bool(host.get_fact(File, path=f"{paths.data_dir}/recovery.conf"))
