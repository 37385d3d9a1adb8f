"""
PyInfra deployment entry point for mariadb-deploy.

This module provides packaged deploys that can be run individually:
    pyinfra @docker/ubuntu:22.04 deploy.install_client
    pyinfra @docker/ubuntu:22.04 deploy.install_server
    etc.

Each deployment operation is implemented as a separate module under
the mariadb_deploy.deploys package.
"""

from mariadb_deploy.core.logging import configure_logging
from mariadb_deploy.deploys.client_install import install_client
from mariadb_deploy.deploys.server_install import install_server
from mariadb_deploy.deploys.sql import sql

configure_logging()

# Export all deploy functions for direct access
__all__ = [
    "install_client",
    "install_server",
    "sql",
]
