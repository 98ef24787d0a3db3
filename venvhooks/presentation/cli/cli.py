"""
CLI Module

Architectural Intent:
- Command-line interface for venvhooks, meant to be called from a shellHook
- Delegates to the hooks and the checksum gate via the composition root
- Exit status mirrors the failing work unit, so an enclosing shell aborts the same way
- Supports --verbose/--debug flags for log level control
"""

import argparse
import logging
import shlex
import sys
import traceback
from typing import Optional, Sequence

from venvhooks.application.hooks import HOOK_NAMES, VenvHook
from venvhooks.domain.errors import VenvHooksError
from venvhooks.domain.value_objects.ensure_outcome import EnsureOutcome
from venvhooks.infrastructure.config import load_config
from venvhooks.infrastructure.logging import configure_logging, level_from_name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="venvhooks",
        description="venvhooks: checksum-gated development shell hooks",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as JSON lines"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to JSON config (default: venvhooks.json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    hook_help = {
        "uv-sync": "Sync the venv with uv.lock",
        "patch-venv": "Apply patches to site-packages",
        "auto-patchelf": "Patch ELF files in the venv for Nix libraries",
        "maturin-import": "Install the maturin import hook",
    }
    for name in HOOK_NAMES:
        subparsers.add_parser(name, help=hook_help[name])

    subparsers.add_parser("all", help="Run every enabled hook in order")

    ensure_parser = subparsers.add_parser(
        "ensure", help="Run a command unless its inputs are unchanged"
    )
    ensure_parser.add_argument(
        "--input", "-i", dest="inputs", action="append", required=True,
        help="File or directory to fingerprint (repeatable)",
    )
    ensure_parser.add_argument(
        "--checksum", required=True, help="Checksum record location"
    )
    ensure_parser.add_argument(
        "--extra", default="", help="Extra parameters folded into the fingerprint"
    )
    ensure_parser.add_argument(
        "--filter", dest="filters", action="append", default=[],
        help="Drop output lines containing this text (repeatable)",
    )
    ensure_parser.add_argument(
        "work_command", nargs=argparse.REMAINDER, help="Command to run, after --"
    )

    status_parser = subparsers.add_parser(
        "status", help="Show whether each hook is up to date"
    )
    status_parser.add_argument(
        "--check", action="store_true", help="Exit 1 unless every hook is fresh"
    )

    subparsers.add_parser(
        "activate", help="Print the venv activation line, for eval in a shellHook"
    )

    subparsers.add_parser("dash", help="Launch the hook status dashboard")

    return parser


def _report(name: str, outcome: EnsureOutcome) -> None:
    if outcome.ran:
        print(f"[+] {name}: done ({outcome.current.short})")
    else:
        print(f"[*] {name}: up to date")


def _run_hooks(hooks: Sequence[VenvHook]) -> None:
    for hook in hooks:
        print(hook.banner)
        _report(hook.name, hook.run())


def _run_ensure(container, args, parser) -> None:
    command = list(args.work_command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        parser.error("ensure: a command to run is required after --")

    def work() -> int:
        return container.runner.run(command, output_filters=args.filters)

    extra = "\n".join(filter(None, [shlex.join(command), args.extra]))
    outcome = container.executor.ensure(
        args.inputs, args.checksum, work, extra=extra, name=command[0]
    )
    _report(command[0], outcome)


def _run_status(container, check: bool) -> bool:
    all_fresh = True
    for hook in container.hooks.values():
        status = hook.status()
        stored = status.stored.short if status.stored else "-"
        current = status.current.short if status.current else "-"
        print(f"{status.name:<16} {status.state:<10} {stored:<12} {current:<12} "
              f"{status.error or status.checksum_path}")
        all_fresh = all_fresh and status.fresh
    return all_fresh or not check


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    try:
        config = load_config(args.config)
    except VenvHooksError as e:
        print(f"[-] Error: {e}")
        sys.exit(e.exit_code)

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = level_from_name(config.log_level)
    configure_logging(level=level, json_format=args.json_logs)

    verbose = args.verbose or args.debug

    from venvhooks import composition_root

    container = None
    try:
        container = composition_root.create_container(config)

        if args.command in HOOK_NAMES:
            _run_hooks([container.hooks[args.command]])
        elif args.command == "all":
            hooks = container.enabled_hooks()
            if not hooks:
                print("[*] No hooks enabled.")
            _run_hooks(hooks)
        elif args.command == "ensure":
            _run_ensure(container, args, parser)
        elif args.command == "status":
            if not _run_status(container, args.check):
                sys.exit(1)
        elif args.command == "activate":
            # no banner: stdout is evaluated by the calling shell
            print(container.hooks["uv-sync"].activation())
        elif args.command == "dash":
            from venvhooks.presentation.tui.dashboard import Dashboard

            Dashboard(list(container.hooks.values())).run()
    except VenvHooksError as e:
        print(f"[-] Error: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("\n[*] Interrupted.")
        sys.exit(130)
    except Exception as e:
        print(f"[-] {args.command} failed: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(1)
    finally:
        if container is not None:
            container.telemetry.shutdown()


if __name__ == "__main__":
    main()
