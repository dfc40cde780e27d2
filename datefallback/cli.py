#!/usr/bin/env python3
"""
Date Fallback CLI

Inspect which date provider a machine ends up with and format dates
through it.

Usage:
    datefallback status                     # Probe providers, show the winner
    datefallback format 2023-10-15          # "October 15, 2023"
    datefallback format 2023-10-15 --style uid
    datefallback parse 10-15-2023           # Validate and parse a daily note UID
    datefallback offset 1 --base 2023-10-15
    datefallback range -3 3                 # A week around today
    datefallback doctor --json              # Full diagnostics
    datefallback benchmark --iterations 500

Providers can be disabled for a single run with --disable NAME (repeatable)
or through the DATEFALLBACK_DISABLE environment variable.
"""
import argparse
import json
import os
import sys

from datefallback import __version__
from datefallback.colors import bold, dim, error, header, hint, info, outcome, success, warning
from datefallback.config import DISABLE_ENV_VAR, FallbackConfig, parse_name_list
from datefallback.diagnostics import benchmark, sample_all_strategies, snapshot
from datefallback.facade import INVALID_DATE, DateFacade
from datefallback.runtime import FallbackRuntime


FORMAT_STYLES = ('title', 'uid', 'display', 'compact', 'locale')


def build_runtime(args) -> FallbackRuntime:
    """Runtime for one CLI invocation, honoring --project-dir and --disable."""
    environ = dict(os.environ)
    disabled = parse_name_list(environ.get(DISABLE_ENV_VAR))
    for name in getattr(args, 'disable', None) or []:
        if name not in disabled:
            disabled.append(name)
    if disabled:
        environ[DISABLE_ENV_VAR] = ",".join(disabled)

    config = FallbackConfig(project_dir=getattr(args, 'project_dir', None), environ=environ)
    return FallbackRuntime(config)


def cmd_status(args) -> int:
    """
    Probe every provider and report the selection.

    Returns:
        Exit code (0 even when degraded; the fallback still works)
    """
    runtime = build_runtime(args)
    active = runtime.initialize()

    print(header("📋 Date providers"))
    for result in runtime.probe_results:
        provider = runtime.registry.get(result.strategy_name)
        line = f"{result.strategy_name} (priority {provider.priority})"
        if result.succeeded:
            print(f"  {outcome(True, line)} {dim(f'{result.elapsed_ms:.2f}ms')}")
        else:
            print(f"  {outcome(False, line)} {dim(result.error or '')}")

    print()
    if active.degraded:
        print(warning(f"⚠️  Degraded: no provider initialized, using {active.name}"))
    else:
        print(success(f"✅ Active provider: {bold(active.name)}"))

    shim = runtime.shim_result
    if shim and shim.installed:
        ops = ", ".join(shim.shimmed_operations)
        print(info(f"ℹ️  Installed {shim.global_name} shim for: {ops}"))

    for problem in runtime.config.get_validation_errors():
        print(warning(f"⚠️  Config: {problem}"))
    return 0


def cmd_format(args) -> int:
    """Format a date in the requested style."""
    dates = DateFacade(build_runtime(args))

    if args.style == 'uid':
        text = dates.format_uid(args.date)
    elif args.style == 'display':
        text = dates.format_display(args.date)
    elif args.style == 'compact':
        text = dates.format_compact(args.date)
    elif args.style == 'locale':
        text = dates.format_locale(args.date, args.locale)
    else:
        text = dates.format_date(args.date)

    if text == INVALID_DATE:
        print(error(f"❌ Not a date: {args.date}"), file=sys.stderr)
        return 1
    print(text)
    return 0


def cmd_parse(args) -> int:
    """Validate a daily note UID and show the date it names."""
    dates = DateFacade(build_runtime(args))
    parsed = dates.parse_uid(args.uid)
    if parsed is None:
        print(error(f"❌ Not a daily note UID: {args.uid}"), file=sys.stderr)
        print(hint("💡 Expected MM-DD-YYYY, e.g. 10-15-2023"), file=sys.stderr)
        return 1
    print(f"{dates.format_date(parsed)}  {dim(parsed.date().isoformat())}")
    return 0


def cmd_offset(args) -> int:
    dates = DateFacade(build_runtime(args))
    day = dates.get_day_with_offset(args.days, args.base)
    if day is None:
        print(error(f"❌ Not a date: {args.base}"), file=sys.stderr)
        return 1
    print(f"{day.uid}  {day.title}")
    return 0


def cmd_range(args) -> int:
    dates = DateFacade(build_runtime(args))
    if args.start > args.end:
        print(error("❌ start must not be after end"), file=sys.stderr)
        return 1
    days = dates.get_date_range(args.start, args.end, args.base)
    if not days:
        print(error(f"❌ Not a date: {args.base}"), file=sys.stderr)
        return 1
    for day in days:
        print(f"{day.uid}  {day.title}")
    return 0


def cmd_doctor(args) -> int:
    """
    Run diagnostics over a freshly initialized runtime.

    Args:
        args: Parsed arguments with --json flag

    Returns:
        Exit code (1 if the runtime is degraded or config had errors)
    """
    runtime = build_runtime(args)
    runtime.initialize()

    report = snapshot(runtime)
    report['strategies'] = sample_all_strategies(runtime.registry)
    report['config'] = {
        'sources': list(runtime.config.sources),
        'validation_errors': runtime.config.get_validation_errors(),
    }
    healthy = not report['degraded'] and not report['config']['validation_errors']

    if args.json:
        print(json.dumps(report, indent=2, default=str))
        return 0 if healthy else 1

    print(header("🩺 datefallback doctor"))
    env = report['environment']
    print(f"  Python {env['python_version']} on {env['platform']}")
    for flag in ('has_babel', 'has_tzlocal', 'has_zoneinfo'):
        print(f"  {outcome(env[flag], flag.replace('has_', ''))}")

    print()
    print(header("📋 Strategies"))
    for name, result in report['strategies'].items():
        if result['success']:
            print(f"  {outcome(True, name)}  {result['title']}  {dim(result['uid'])}")
        else:
            print(f"  {outcome(False, name)}  {dim(str(result['error']))}")

    print()
    print(f"Active: {bold(str(report['active']))}")
    if report['config']['sources']:
        print(dim("Config: " + ", ".join(report['config']['sources'])))
    for problem in report['config']['validation_errors']:
        print(warning(f"⚠️  {problem}"))

    if healthy:
        print(success("✅ All checks passed"))
        return 0
    print(warning("⚠️  Issues found"))
    return 1


def cmd_benchmark(args) -> int:
    runtime = build_runtime(args)
    timings = benchmark(runtime.registry, iterations=args.iterations)

    print(header(f"⏱️  {args.iterations} titles per provider"))
    for name, elapsed in sorted(timings.items(), key=lambda item: item[1]):
        print(f"  {name:<10} {elapsed:10.2f}ms")
    skipped = [name for name in runtime.registry.names if name not in timings]
    if skipped:
        print(dim(f"  skipped: {', '.join(skipped)}"))
    return 0


def main(argv=None) -> int:
    """
    CLI entry point.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='datefallback',
        description='Date Fallback CLI - probe date providers and format dates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    datefallback status
    datefallback format "October 15, 2023" --style uid
    datefallback format 2023-10-15 --style locale --locale fr-FR
    datefallback --disable cldr --disable tzlocal status

Environment Variables:
    DATEFALLBACK_DISABLE=cldr,tzlocal   # Skip providers
    NO_COLOR=1                          # Plain output
'''
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--disable', action='append', metavar='NAME',
                        help='Disable a provider for this run (repeatable)')
    parser.add_argument('--project-dir', metavar='DIR',
                        help='Directory holding .datefallback.yaml (default: cwd)')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    subparsers.add_parser('status', help='Probe providers and show the active one')

    format_parser = subparsers.add_parser('format', help='Format a date')
    format_parser.add_argument('date', help='ISO date or title, e.g. 2023-10-15')
    format_parser.add_argument('--style', '-s', choices=FORMAT_STYLES, default='title')
    format_parser.add_argument('--locale', '-l', default='en-US', help='Locale tag for --style locale')

    parse_parser = subparsers.add_parser('parse', help='Parse a daily note UID (MM-DD-YYYY)')
    parse_parser.add_argument('uid')

    offset_parser = subparsers.add_parser('offset', help='Day N days away from base')
    offset_parser.add_argument('days', type=int)
    offset_parser.add_argument('--base', '-b', help='Base date (default: today)')

    range_parser = subparsers.add_parser('range', help='Days between two offsets, inclusive')
    range_parser.add_argument('start', type=int)
    range_parser.add_argument('end', type=int)
    range_parser.add_argument('--base', '-b', help='Base date (default: today)')

    doctor_parser = subparsers.add_parser('doctor', help='Run provider diagnostics')
    doctor_parser.add_argument('--json', action='store_true', help='Output results in JSON format')

    benchmark_parser = subparsers.add_parser('benchmark', help='Time title formatting per provider')
    benchmark_parser.add_argument('--iterations', '-n', type=int, default=1000)

    args = parser.parse_args(argv)

    if not args.command:
        args.command = 'status'

    commands = {
        'status': cmd_status,
        'format': cmd_format,
        'parse': cmd_parse,
        'offset': cmd_offset,
        'range': cmd_range,
        'doctor': cmd_doctor,
        'benchmark': cmd_benchmark,
    }

    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
