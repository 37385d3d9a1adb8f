"""Build mysql client invocations for running SQL statements."""

import shlex
from typing import List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from mariadb_deploy.core.config import settings
from mariadb_deploy.core.logging import get_logger

logger = get_logger(__name__)

Query = Union[str, Sequence[str]]


class ConnectionControl(BaseModel):
    """Connection parameters addressing one server instance. Every field is optional."""

    user: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[Union[int, str]] = None
    socket: Optional[str] = None


def _as_control(ctrl: Union[ConnectionControl, Mapping, None]) -> Optional[ConnectionControl]:
    if ctrl is None or isinstance(ctrl, ConnectionControl):
        return ctrl
    return ConnectionControl.model_validate(dict(ctrl))


def serialize_query(query: Query) -> str:
    """Join a sequence of statements with ';\\n', keeping their order."""
    if isinstance(query, str):
        return query
    return ";\n".join(query)


def _connection_args(ctrl: Optional[ConnectionControl]) -> List[str]:
    if ctrl is None:
        return []

    args = []
    if ctrl.user is not None:
        args.append(f"--user={ctrl.user}")
    if ctrl.password is not None:
        args.append(f"-p{ctrl.password}")
    # A localhost target means the local socket; network flags are dropped
    if ctrl.host is not None and ctrl.host != "localhost":
        args += ["-h", ctrl.host]
    if ctrl.port is not None and ctrl.host != "localhost":
        args += ["-P", str(ctrl.port)]
    if ctrl.socket is not None:
        args += ["-S", ctrl.socket]
    return args


def _build_args(
    query: Query,
    database: Optional[str],
    ctrl: Optional[ConnectionControl],
) -> List[str]:
    args = [settings.MYSQL_BIN, "-B", "-e", serialize_query(query)]
    args += _connection_args(ctrl)
    if database is not None:
        args.append(database)
    return args


def _render(args: List[str], grep_for: Optional[str]) -> str:
    cmd = shlex.join(args)
    if grep_for is not None:
        cmd += f" | grep {shlex.quote(grep_for)}"
    return cmd


def _log_command(ctrl: Optional[ConnectionControl], args: List[str], grep_for: Optional[str] = None):
    command = list(args)
    if grep_for is not None:
        command += ["|", "grep", grep_for]
    logger.debug(
        "Built mysql command",
        ctrl=ctrl.model_dump() if ctrl is not None else None,
        command=command,
    )


def build_command_args(
    query: Query,
    database: Optional[str] = None,
    ctrl: Union[ConnectionControl, Mapping, None] = None,
) -> List[str]:
    """
    Build the argument vector for running ``query`` with the mysql client in batch mode.

    The vector is meant for a process-spawn API that does not go through a shell.
    """
    ctrl = _as_control(ctrl)
    args = _build_args(query, database, ctrl)
    _log_command(ctrl, args)
    return args


def build_command(
    query: Query,
    database: Optional[str] = None,
    ctrl: Union[ConnectionControl, Mapping, None] = None,
    grep_for: Optional[str] = None,
) -> str:
    """
    Build a shell command line running ``query`` with the mysql client.

    Args:
        query: A single statement or an ordered sequence of statements
        database: Database to run the statements in, None for no database
        ctrl: Connection parameters (user, password, host, port, socket)
        grep_for: Optional term the output is filtered on with ``grep``

    Returns:
        The command line. Nothing is executed.
    """
    ctrl = _as_control(ctrl)
    args = _build_args(query, database, ctrl)
    _log_command(ctrl, args, grep_for)
    return _render(args, grep_for)
