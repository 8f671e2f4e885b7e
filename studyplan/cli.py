"""
Command-Line Interface for the study planner.

This module provides the interactive CLI. It reads commands, hands them to
the StudyPlanner and prints the re-validated plan after every change.

COMMANDS:
---------
    show                                  print the plan
    move CODE FROM FROM_IDX TO TO_IDX     e.g. move CS2040S requirement 0 planner:1 0
    close CODE                            send a placed module back to the pools
    select SLOT CODE                      bind a basket slot, e.g. select ^GEA1000 GEA1000
    options SLOT                          list modules a basket slot can take
    info CODE                             catalog entry for a module
    refresh                               drop cached module data and re-validate
    quit

NOTE: Don't run this file directly. Run from the project root:
    python3 -m studyplan [plan.json]
"""

import logging
import sys

from .config import LOG_LEVEL, SAMPLE_PLAN_PATH
from .errors import PlannerError
from .planner import StudyPlanner
from .ui import TerminalDisplay


def _run_command(planner: StudyPlanner, words: list) -> bool:
    """Execute one command. Returns False when the session should end."""
    command, args = words[0].lower(), words[1:]

    if command in ("quit", "exit", "q"):
        return False

    if command == "show":
        planner.show()
    elif command == "move" and len(args) == 5:
        code, source, source_index, destination, dest_index = args
        planner.move_module(code, source, int(source_index), destination, int(dest_index))
        planner.show()
    elif command == "close" and len(args) == 1:
        planner.close_module(args[0])
        planner.show()
    elif command == "select" and len(args) == 2:
        planner.select_underlying_module(args[0], args[1].upper())
        planner.show()
    elif command == "options" and len(args) == 1:
        TerminalDisplay.print_basket_options(planner.plan.get_module(args[0]),
                                             planner.basket_options(args[0]))
    elif command == "info" and len(args) == 1:
        info = planner.module_info(args[0].upper())
        if info is None:
            TerminalDisplay.print_error(f"Unknown module {args[0]}")
        else:
            TerminalDisplay.print_module_info(info)
    elif command == "refresh":
        planner.refresh()
        planner.show()
    else:
        TerminalDisplay.print_error(f"Unrecognised command: {' '.join(words)}")
        print(f"  {TerminalDisplay.DIM}{__doc__.split('COMMANDS:')[1].split('NOTE:')[0].strip()}{TerminalDisplay.RESET}")
    return True


def main(argv=None):
    """
    Interactive study planner session.

    Loads the plan given on the command line (or the bundled sample plan),
    validates it, then reads commands until "quit" or end of input.
    """
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    plan_path = argv[0] if argv else SAMPLE_PLAN_PATH
    planner = StudyPlanner()

    print(f"\n{TerminalDisplay.BOLD}{TerminalDisplay.CYAN}")
    print("╔══════════════════════════════════════════════════════════════════╗")
    print("║         STUDY PLANNER                                            ║")
    print("║         Prerequisite and corequisite checking by term            ║")
    print("╚══════════════════════════════════════════════════════════════════╝")
    print(f"{TerminalDisplay.RESET}")

    try:
        planner.load(plan_path)
    except (PlannerError, OSError, ValueError) as exc:
        TerminalDisplay.print_error(f"Could not load {plan_path}: {exc}")
        return 1
    planner.show()

    while True:
        try:
            line = input(f"\n{TerminalDisplay.BOLD}plan> {TerminalDisplay.RESET}").strip()
        except EOFError:
            break
        if not line:
            continue
        try:
            if not _run_command(planner, line.split()):
                break
        except ValueError:
            TerminalDisplay.print_error("Indexes must be whole numbers")
        except PlannerError as exc:
            # The planner keeps its previous plan, so the session continues
            TerminalDisplay.print_error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())
