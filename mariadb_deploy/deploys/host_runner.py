"""Run mysql client commands on a pyinfra host."""

import shlex
from typing import List

from mariadb_deploy.core.executor import EXEC_USER, CommandResult


class HostRunner:
    """
    Executes client commands on a pyinfra host through sudo.

    pyinfra only reports success or failure, so a failure is mapped to exit status 1.

    Usage:
        rows = query_rows("SELECT user FROM mysql.user", runner=HostRunner(host))
    """

    def __init__(self, host, user: str = EXEC_USER):
        self.host = host
        self.user = user

    def run(self, args: List[str]) -> CommandResult:
        status, output = self.host.run_shell_command(
            shlex.join(args),
            _sudo=True,
            _sudo_user=self.user,
            print_output=False,
        )
        return CommandResult(exit_status=0 if status else 1, stdout=output.stdout, stderr=output.stderr)
