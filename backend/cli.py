#!/usr/bin/env python3
"""
Hot Streak CLI - Terminal client for the habit API
"""
import sys
from typing import Any, Dict, List, Optional

import requests

from hotstreak.core.config import settings

API_BASE = settings.API_BASE_URL.rstrip("/")

HELP = """Commands:
  list                          show today's habits and your streak
  add <icon> <target> <name>    add a habit, e.g. add 🔥 3 Push-ups
  done <n>                      count one completion for habit number n
  rm <n>                        delete habit number n
  streak                        show your current streak
  quit                          leave"""


def _headers() -> Dict[str, str]:
    if not settings.HOTSTREAK_ACCESS_TOKEN:
        return {}
    return {"Authorization": f"Bearer {settings.HOTSTREAK_ACCESS_TOKEN}"}


def _request(method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    response = requests.request(method, f"{API_BASE}{path}", json=payload, headers=_headers(), timeout=15)
    if response.status_code >= 400:
        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        raise RuntimeError(f"{response.status_code}: {detail}")
    return response.json()


def format_overview(data: Dict[str, Any]) -> str:
    """Render the habit list the way the web page shows it"""
    lines = [f"Daily Habits ({data['date']})"]
    if not data["habits"]:
        lines.append("  No habits yet. Add one with: add <icon> <target> <name>")
    for number, entry in enumerate(data["habits"], start=1):
        habit = entry["habit"]
        mark = "✔" if entry["done"] else " "
        lines.append(
            f"  {number}. [{mark}] {habit['icon']} {habit['name']}  "
            f"Progress: {entry['count']} / {entry['target_count']}"
        )
    lines.append(format_streak(data["streak"]))
    return "\n".join(lines)


def format_streak(streak: int) -> str:
    if streak == 0:
        return "No streak yet. Finish every habit today to start one."
    return f"Congratulations! You have a {streak}-day streak."


def _habit_id(habits: List[Dict[str, Any]], number: str) -> str:
    try:
        index = int(number) - 1
    except ValueError:
        raise RuntimeError(f"'{number}' is not a habit number")
    if not 0 <= index < len(habits):
        raise RuntimeError(f"No habit number {number}")
    return habits[index]["habit"]["id"]


def run_command(line: str) -> str:
    """Run one command line and return the text to print"""
    command, _, rest = line.partition(" ")
    command = command.lower()

    if command == "list":
        return format_overview(_request("GET", "/habits"))

    if command == "streak":
        return format_streak(_request("GET", "/habits/streak")["streak"])

    if command == "add":
        parts = rest.split(" ", 2)
        if len(parts) < 3:
            return "Usage: add <icon> <target> <name>"
        icon, target, name = parts
        try:
            target_count = int(target)
        except ValueError:
            return f"Target must be a number, got '{target}'"
        habit = _request("POST", "/habits", {"name": name, "icon": icon, "target_count": target_count})
        return f"Added {habit['icon']} {habit['name']} (target {habit['target_count']} a day)"

    if command in ("done", "rm"):
        habits = _request("GET", "/habits")["habits"]
        habit_id = _habit_id(habits, rest.strip())
        if command == "rm":
            _request("DELETE", f"/habits/{habit_id}")
            return "Habit deleted"
        result = _request("POST", f"/habits/{habit_id}/complete")
        progress = result["progress"]
        return f"{progress['habit']['name']}: {progress['count']} / {progress['target_count']}"

    return HELP


def main():
    """Main CLI loop"""
    print("🔥 Hot Streak CLI")
    print(f"Connected to: {API_BASE}")
    print("Type 'help' for commands, 'quit' to leave\n")

    while True:
        try:
            user_input = input("> ").strip()

            if not user_input:
                continue

            if user_input.lower() in ("quit", "exit", "q"):
                break

            print(run_command(user_input))
            print()

        except (KeyboardInterrupt, EOFError):
            print()
            break
        except (RuntimeError, requests.RequestException) as e:
            print(f"❌ {e}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
