"""Application entrypoint for SaveJobs."""

from __future__ import annotations

import json
import sys

from savejobs.config.settings import Settings, get_settings
from savejobs.core.manager import BackupManager
from savejobs.core.models import BackupJob, BackupType, SaveJobsError

USAGE = """SaveJobs command line usage:
  help                                          Show this help message
  list                                          List all backup jobs
  create <name> <source> <target> <type>        Create a new backup job
  update <name> <source> <target> <type> [new]  Update a job, optionally renaming it
  delete <name>                                 Delete a backup job
  execute <indices>                             Run jobs by position (e.g. 1-3 or 1;2;4)
  <indices>                                     Same as execute
  logs                                          Print today's transfer log
  state                                         Print the current job states
"""


def parse_indices(arg: str) -> list[int]:
    """Parse a job selection such as ``1-3``, ``1;2;4`` or ``1-2;5``.

    Malformed tokens are ignored; order and duplicates are kept.
    """
    indices: list[int] = []
    for token in arg.split(";"):
        token = token.strip()
        if not token:
            continue
        if "-" in token:
            start, _, end = token.partition("-")
            try:
                first, last = int(start), int(end)
            except ValueError:
                continue
            indices.extend(range(first, last + 1))
        else:
            try:
                indices.append(int(token))
            except ValueError:
                continue
    return indices


def _looks_like_indices(arg: str) -> bool:
    return bool(arg) and all(c.isdigit() or c in "-;" for c in arg)


def _not_found(manager: BackupManager, name: str) -> int:
    print(f"Backup '{name}' not found.")
    suggestion = manager.suggest_job(name)
    if suggestion:
        print(f"Did you mean '{suggestion}'?")
    return 1


def _list_jobs(manager: BackupManager) -> int:
    print("=== Backup Jobs ===")
    for i, job in enumerate(manager.jobs, start=1):
        print(f"{i}. {job}")
    return 0


def _execute(manager: BackupManager, arg: str) -> int:
    reports = manager.execute(parse_indices(arg))
    if not reports:
        print("No backup job matched the selection.")
        return 1
    for report in reports:
        if report.aborted:
            print(f"{report.job_name}: aborted ({report.errors[0][1]})")
        else:
            print(
                f"{report.job_name}: {report.copied}/{report.total_files} files copied, "
                f"{report.failed} failed"
            )
    return 0 if all(r.failed == 0 and not r.aborted for r in reports) else 1


def run_command(manager: BackupManager, args: list[str]) -> int:
    """Dispatch one command line to the manager."""
    command = args[0].lower()

    if command == "help":
        print(USAGE)
        return 0

    if command == "list":
        return _list_jobs(manager)

    if command == "execute" and len(args) > 1:
        return _execute(manager, args[1])

    if _looks_like_indices(args[0]):
        return _execute(manager, args[0])

    if command == "create" and len(args) >= 5:
        job = BackupJob(args[1], args[2], args[3], BackupType.parse(args[4]))
        manager.add_job(job)
        print(f"Backup '{job.name}' created successfully.")
        return 0

    if command == "update" and len(args) >= 5:
        name = args[1]
        if manager.get_job(name) is None:
            return _not_found(manager, name)
        new_name = args[5] if len(args) > 5 else name
        manager.update_job(name, BackupJob(new_name, args[2], args[3], BackupType.parse(args[4])))
        print(f"Backup '{name}' updated successfully.")
        return 0

    if command == "delete" and len(args) >= 2:
        if manager.get_job(args[1]) is None:
            return _not_found(manager, args[1])
        manager.remove_job(args[1])
        print(f"Backup '{args[1]}' deleted successfully.")
        return 0

    if command == "logs":
        print(json.dumps([r.to_dict() for r in manager.read_logs()], indent=2, ensure_ascii=False))
        return 0

    if command == "state":
        states = {name: s.to_dict() for name, s in manager.states().items()}
        print(json.dumps(states, indent=2, ensure_ascii=False))
        return 0

    print(f"Unknown or incomplete command: {' '.join(args)}")
    print(USAGE)
    return 2


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Main application entrypoint."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 0

    manager = BackupManager(settings or get_settings())
    try:
        return run_command(manager, args)
    except SaveJobsError as e:
        print(f"Error: {e}")
        return 1
    finally:
        manager.close()


if __name__ == "__main__":
    sys.exit(main())
