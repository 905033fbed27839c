#!/usr/bin/env python3
"""CLI for job_deck. Usage: jdk <command> [args]"""

import asyncio
import sys

from job_deck.errors import JobDeckError
from job_deck.logging_config import configure_logging
from job_deck.models import STATUSES, Activity, Job
from job_deck.tracker import Tracker


def _parse_flags(args: list[str], flags: dict[str, type]) -> tuple[dict, list[str]]:
    """Parse --flag=value args. Returns (parsed_flags, remaining_args)."""
    parsed = {}
    remaining = []
    for arg in args:
        if arg.startswith("--") and "=" in arg:
            key, val = arg.split("=", 1)
            key = key[2:]  # strip --
            if key in flags:
                parsed[key] = flags[key](val)
            else:
                remaining.append(arg)
        elif arg.startswith("--"):
            key = arg[2:]
            if key in flags and flags[key] is bool:
                parsed[key] = True
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)
    return parsed, remaining


# --- Terse Output Formatters ---


def _sanitize(s) -> str:
    """Replace pipe delimiters in source data."""
    return (s or "").replace("|", "-")


def _fmt_job(j: Job) -> str:
    return "|".join([
        j.id,
        _sanitize(j.title),
        _sanitize(j.company),
        j.status or "-",
        _sanitize(j.source) or "-",
        _sanitize(j.location) or "-",
    ])


def _fmt_activity(a: Activity) -> str:
    return "|".join([
        a.id,
        (a.date or "-")[:10],
        a.type,
        _sanitize(a.title),
    ])


HELP = """Usage: jdk <command> [args]

Jobs:
  list [--status=] [--source=] [--search=]   List jobs
  add <title> <company> [--status=] [--source=] [--location=] [--url=]
  show <id>                 Show job with activities
  move <id> <status>        Move job to saved|applied|assessment|interview|offer|rejected
  rm <id> [...]             Delete jobs and their activities

Activities:
  note <id> <type> <title> [--description=] [--date=]
                            Log applied|follow_up|interview|offer|note
  rm-activity <id> <activity_id>

Views:
  pipeline                  Jobs by stage
  dashboard                 Counts and upcoming activities
"""


async def _run(cmd: str, rest: list[str], tracker: Tracker) -> int:
    if cmd == "list":
        flags, _ = _parse_flags(rest, {"status": str, "source": str, "search": str})
        tracker.set_filters(**flags)
        await tracker.load()
        jobs = tracker.filtered()
        for job in jobs:
            print(_fmt_job(job))
        print(f"{len(jobs)} jobs")

    elif cmd == "add":
        flags, args = _parse_flags(rest, {"status": str, "source": str, "location": str, "url": str})
        if len(args) < 2:
            print("Usage: jdk add <title> <company> [--status=] [--source=] [--location=] [--url=]")
            return 1
        job = await tracker.add_job(title=args[0], company=args[1], **flags)
        print(_fmt_job(job))

    elif cmd == "show":
        if not rest:
            print("Usage: jdk show <id>")
            return 1
        job = await tracker.jobs.get(rest[0])
        print(_fmt_job(job))
        if job.url:
            print(job.url)
        for activity in await tracker.open_job(job.id):
            print("  " + _fmt_activity(activity))

    elif cmd == "move":
        if len(rest) < 2:
            print(f"Usage: jdk move <id> <{'|'.join(STATUSES)}>")
            return 1
        job = await tracker.move_job(rest[0], rest[1])
        print(_fmt_job(job))

    elif cmd == "rm":
        if not rest:
            print("Usage: jdk rm <id> [...]")
            return 1
        for job_id in rest:
            await tracker.delete_job(job_id)
        print(f"Removed {len(rest)}")

    elif cmd == "note":
        flags, args = _parse_flags(rest, {"description": str, "date": str})
        if len(args) < 3:
            print("Usage: jdk note <id> <type> <title> [--description=] [--date=]")
            return 1
        activity = await tracker.add_activity(args[0], type=args[1], title=" ".join(args[2:]), **flags)
        print(_fmt_activity(activity))

    elif cmd == "rm-activity":
        if len(rest) < 2:
            print("Usage: jdk rm-activity <id> <activity_id>")
            return 1
        await tracker.delete_activity(rest[0], rest[1])
        print("Removed 1")

    elif cmd == "pipeline":
        await tracker.load()
        for status, jobs in tracker.pipeline().items():
            print(f"{status} ({len(jobs)})")
            for job in jobs:
                print("  " + _fmt_job(job))

    elif cmd == "dashboard":
        jobs = await tracker.load()
        # Per-job fetches are independent and can run side by side
        await asyncio.gather(*(tracker.open_job(job.id) for job in jobs))
        stats = tracker.dashboard()
        print(f"total: {stats.total_jobs} | this week: {stats.this_week_count}")
        print(" | ".join(f"{s}: {n}" for s, n in stats.status_counts.items()))
        print(" | ".join(f"{s}: {n}" for s, n in stats.source_counts.items()) or "no sources")
        if stats.upcoming_activities:
            print("upcoming:")
            for activity in stats.upcoming_activities:
                print("  " + _fmt_activity(activity))

    else:
        print(f"Unknown command: {cmd}")
        print(HELP.strip())
        return 1

    return 0


def main():
    args = sys.argv[1:]
    if not args or args[0] in ("-h", "--help", "help"):
        print(HELP.strip())
        return

    configure_logging()
    with Tracker.from_settings() as tracker:
        try:
            code = asyncio.run(_run(args[0], args[1:], tracker))
        except JobDeckError as e:
            print(f"ERROR: {e}")
            code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
