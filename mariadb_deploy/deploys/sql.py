"""Run SQL statements as a pyinfra operation."""

from pyinfra.api import StringCommand, operation

from mariadb_deploy.core.sql_command import build_command


@operation()
def sql(query, database=None, ctrl=None):
    """
    Execute SQL statements with the mysql client.

    + query: a statement or a list of statements, run in order
    + database: database to run the statements in
    + ctrl: connection parameters (user, password, host, port, socket)

    **Example:**

    .. code:: python

        sql(
            name="Create application database",
            query="CREATE DATABASE IF NOT EXISTS app",
            ctrl={"user": "root", "socket": "/var/run/mysqld/mysqld.sock"},
            _sudo=True,
        )
    """
    yield StringCommand(build_command(query, database, ctrl))
