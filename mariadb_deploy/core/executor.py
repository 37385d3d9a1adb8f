"""Run SQL statements through the mysql client."""

import subprocess
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Union

from mariadb_deploy.core.batch_result import parse_batch_result
from mariadb_deploy.core.errors import SqlExecutionError
from mariadb_deploy.core.logging import get_logger
from mariadb_deploy.core.sql_command import ConnectionControl, Query, build_command_args, serialize_query

logger = get_logger(__name__)

EXEC_USER = "root"


@dataclass
class CommandResult:
    exit_status: int
    stdout: str
    stderr: str


class Runner(Protocol):
    def run(self, args: List[str]) -> CommandResult: ...


class LocalRunner:
    """Runs commands on this machine as root, without a shell."""

    def __init__(self, user: str = EXEC_USER):
        self.user = user

    def run(self, args: List[str]) -> CommandResult:
        proc = subprocess.run(args, capture_output=True, text=True, user=self.user)
        return CommandResult(exit_status=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def execute_sql(
    query: Query,
    database: Optional[str] = None,
    ctrl: Union[ConnectionControl, Mapping, None] = None,
    runner: Optional[Runner] = None,
) -> str:
    """
    Execute ``query`` and return the raw batch-mode output.

    Raises:
        SqlExecutionError: If the client exits with a nonzero status.
    """
    if runner is None:
        runner = LocalRunner()

    result = runner.run(build_command_args(query, database, ctrl))
    if result.exit_status != 0:
        statement = serialize_query(query)
        logger.error("mysql failed executing this SQL statement", statement=statement)
        logger.error("mysql stderr", stderr=result.stderr, exit_status=result.exit_status)
        raise SqlExecutionError(statement, result.stderr)
    return result.stdout


def query_rows(
    query: Query,
    database: Optional[str] = None,
    ctrl: Union[ConnectionControl, Mapping, None] = None,
    runner: Optional[Runner] = None,
) -> List[Dict[str, str]]:
    return parse_batch_result(execute_sql(query, database, ctrl, runner))
