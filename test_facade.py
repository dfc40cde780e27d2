#!/usr/bin/env python3
"""
Date Fallback Facade and Tooling Test Suite

Run with: python3 test_facade.py   (or: pytest)

Tests the outer layers:
- Unified date facade (sentinels, offsets, ranges, locale fallback)
- Configuration cascade and validation
- JSON logger
- Diagnostics
- CLI commands
- Terminal colors
"""
import io
import json
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from unittest import mock

# Run from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from datefallback import colors
from datefallback.base_provider import DateProvider, InitResult, ProviderKind
from datefallback.cli import main as cli_main
from datefallback.config import (
    DEFAULT_CONFIG, DISABLE_ENV_VAR, FallbackConfig, deep_merge, load_yaml_or_json, parse_name_list,
)
from datefallback.diagnostics import benchmark, detect_environment, sample_all_strategies, snapshot
from datefallback.events import EventKind
from datefallback.facade import (
    INVALID_DATE, INVALID_TIMESTAMP, UNKNOWN_TIMESTAMP, DateFacade, get_facade,
)
from datefallback.fallback_provider import PureFallbackProvider
from datefallback.logger import (
    FileHandler, Handler, JsonLogger, StderrHandler, StdoutHandler, get_logger,
)
from datefallback.provider_registry import ProviderRegistry
from datefallback.runtime import FallbackRuntime, configure_runtime, get_runtime
from datefallback.shim import ensure_shim


class TestRunner:
    """Simple test runner with assertions."""

    def __init__(self):
        self.passed = 0
        self.failed = 0
        self.errors = []

    def test(self, name: str, condition: bool, msg: str = ""):
        """Run a single test assertion."""
        if condition:
            print(f"  ✅ {name}")
            self.passed += 1
        else:
            print(f"  ❌ {name}: {msg}")
            self.failed += 1
            self.errors.append(f"{name}: {msg}")

    def summary(self) -> int:
        """Print summary and return exit code."""
        total = self.passed + self.failed
        print()
        print(f"{'='*50}")
        print(f"Results: {self.passed}/{total} tests passed")
        if self.errors:
            print("\nFailures:")
            for err in self.errors:
                print(f"  - {err}")
        return 0 if self.failed == 0 else 1


class ExplodingProvider(DateProvider):
    """Initializes fine, then fails every formatting call."""

    name = "exploding"
    kind = ProviderKind.THIRD_PARTY
    default_priority = 1

    def __init__(self, available=True):
        super().__init__()
        self.available = available

    def is_available(self):
        return self.available

    def initialize(self):
        return InitResult.ok()

    def format_date(self, instant):
        raise RuntimeError("format_date exploded")

    def format_uid(self, instant):
        raise RuntimeError("format_uid exploded")

    def format_locale(self, instant, locale_tag):
        raise LookupError(f"no data for {locale_tag}")


class ListHandler(Handler):
    def __init__(self):
        self.records = []

    def emit(self, record):
        self.records.append(record)


class BrokenHandler(Handler):
    def emit(self, record):
        raise OSError("disk full")


class AmbiguousValue:
    """Array-like value whose equality test raises."""

    def __eq__(self, other):
        raise ValueError("truth value of comparison is ambiguous")

    __hash__ = object.__hash__


def quiet_config(overrides=None) -> FallbackConfig:
    merged = {"logging": {"destinations": []}}
    merged.update(overrides or {})
    return FallbackConfig.from_dict(merged)


def quiet_project(tmpdir: str) -> str:
    """Write a project config that keeps CLI runs from logging to disk."""
    Path(tmpdir, ".datefallback.yaml").write_text("logging:\n  destinations: []\n")
    return tmpdir


def run_cli(argv):
    """Run the CLI, returning (exit_code, stdout, stderr)."""
    with mock.patch('sys.stdout', new_callable=io.StringIO) as out, \
            mock.patch('sys.stderr', new_callable=io.StringIO) as err:
        code = cli_main(argv)
    return code, out.getvalue(), err.getvalue()


def test_facade_formatting(runner: TestRunner):
    """Test facade formatting over whichever provider is active."""
    print("\n📦 Testing facade formatting...")

    dates = DateFacade(FallbackRuntime(quiet_config()))

    runner.test("format_date title", dates.format_date("2023-10-15") == "October 15, 2023",
                dates.format_date("2023-10-15"))
    runner.test("format_title alias", dates.format_title(datetime(2023, 10, 15)) == "October 15, 2023")
    runner.test("format_uid", dates.format_uid("2023-10-15") == "10-15-2023")
    runner.test("format_us_date", dates.format_us_date("2023-10-15") == "10-15-2023")
    runner.test("format_uid from title text", dates.format_uid("October 15, 2023") == "10-15-2023")
    runner.test("format_display",
                dates.format_display(datetime(2023, 10, 15, 15, 45)) == "October 15, 2023 3:45pm",
                dates.format_display(datetime(2023, 10, 15, 15, 45)))
    with mock.patch.object(dates.provider, "format_date", return_value="Provider Title"):
        runner.test("format_display uses provider title",
                    dates.format_display(datetime(2023, 10, 15, 15, 45)) == "Provider Title 3:45pm")
    runner.test("format_compact", dates.format_compact("2023-10-15") == "Oct 15, 23")
    runner.test("format_locale default is English long date",
                dates.format_locale("2023-10-15") == "October 15, 2023",
                dates.format_locale("2023-10-15"))
    runner.test("format_locale invalid input", dates.format_locale("not-a-date", "fr-FR") == INVALID_DATE)

    runner.test("format_timestamp None", dates.format_timestamp(None) == UNKNOWN_TIMESTAMP)
    runner.test("format_timestamp empty", dates.format_timestamp("") == UNKNOWN_TIMESTAMP)
    runner.test("format_timestamp blank", dates.format_timestamp("   ") == UNKNOWN_TIMESTAMP)
    runner.test("format_timestamp garbage", dates.format_timestamp("garbage") == INVALID_TIMESTAMP)
    runner.test("format_timestamp datetime",
                dates.format_timestamp(datetime(2023, 10, 15, 9, 5)) == "October 15, 2023 9:05am")

    runner.test("parse_title", dates.parse_title("October 15, 2023") == datetime(2023, 10, 15))
    runner.test("parse_title ISO", dates.parse_title("2023-10-15") == datetime(2023, 10, 15))
    runner.test("parse_title garbage", dates.parse_title("nope") is None)
    runner.test("parse_title non-string", dates.parse_title(5) is None)
    runner.test("get_today returns datetime", isinstance(dates.get_today(), datetime))


def test_facade_sentinels(runner: TestRunner):
    """Test that no facade operation raises on bad input."""
    print("\n📦 Testing facade sentinels...")

    runtime = FallbackRuntime(quiet_config())
    dates = DateFacade(runtime)

    runner.test("format_date invalid", dates.format_date("not-a-date") == INVALID_DATE)
    runner.test("format_uid invalid", dates.format_uid("not-a-date") == INVALID_DATE)
    runner.test("format_display invalid", dates.format_display("not-a-date") == INVALID_DATE)
    runner.test("format_compact invalid", dates.format_compact(None) == INVALID_DATE)
    runner.test("parse_uid invalid", dates.parse_uid("not-a-date") is None)
    runner.test("is_daily_note_uid invalid", dates.is_daily_note_uid("not-a-date") is False)
    runner.test("is_valid_date invalid", dates.is_valid_date("not-a-date") is False)
    runner.test("is_valid_date None", dates.is_valid_date(None) is False)
    runner.test("is_valid_date valid", dates.is_valid_date("2023-10-15") is True)
    runner.test("get_day_with_offset invalid base", dates.get_day_with_offset(1, "not-a-date") is None)
    runner.test("get_date_range invalid base", dates.get_date_range(0, 2, "not-a-date") == [])
    runner.test("Facade errors recorded",
                len(runtime.events.of_kind(EventKind.FACADE_ERROR)) >= 5)

    raised = []
    operations = [
        dates.format_date, dates.format_title, dates.format_uid, dates.format_us_date,
        dates.format_display, dates.format_compact, dates.format_locale, dates.format_timestamp,
        dates.parse_uid, dates.parse_title, dates.is_daily_note_uid, dates.is_valid_date,
        lambda v: dates.get_day_with_offset(1, v), lambda v: dates.get_date_range(-1, 1, v),
    ]
    for value in ["not-a-date", None, object(), float("nan"), 10 ** 30, [], {}, True,
                  AmbiguousValue()]:
        for operation in operations:
            try:
                operation(value)
            except Exception as e:
                raised.append(f"{value!r}: {e}")
    runner.test("No facade operation raises", not raised, str(raised[:3]))

    try:
        ambiguous_result = dates.format_timestamp(AmbiguousValue())
    except Exception as e:
        ambiguous_result = f"raised {type(e).__name__}"
    runner.test("format_timestamp tolerates raising __eq__",
                ambiguous_result == INVALID_TIMESTAMP, ambiguous_result)

    runtime.logger = mock.Mock()
    dates.format_date("still-not-a-date")
    runner.test("Facade error logged at warning", runtime.logger.warning.called)


def test_facade_provider_faults(runner: TestRunner):
    """Test a provider that initializes but cannot format."""
    print("\n📦 Testing facade with a faulty provider...")

    runtime = FallbackRuntime(quiet_config(),
                              registry=ProviderRegistry([ExplodingProvider(), PureFallbackProvider()]))
    dates = DateFacade(runtime)

    runner.test("Faulty provider is active", runtime.initialize().name == "exploding")
    runner.test("format_date falls to sentinel", dates.format_date("2023-10-15") == INVALID_DATE)
    runner.test("format_uid falls to sentinel", dates.format_uid("2023-10-15") == INVALID_DATE)
    runner.test("format_locale falls back to English title",
                dates.format_locale("2023-10-15", "xx-XX") == "October 15, 2023")
    runner.test("format_timestamp error sentinel",
                dates.format_timestamp(datetime(2023, 10, 15)) == "(error formatting date)")
    runner.test("Offset falls to None", dates.get_day_with_offset(1, "2023-10-15") is None)

    errors = runtime.events.of_kind(EventKind.FACADE_ERROR)
    runner.test("Errors name the strategy", all(e.payload["strategy"] == "exploding" for e in errors))
    runner.test("Errors name the operation", errors[0].payload["operation"] == "format_date")


def test_facade_scenarios(runner: TestRunner):
    """Test day arithmetic and UID scenarios."""
    print("\n📦 Testing facade scenarios...")

    dates = DateFacade(FallbackRuntime(quiet_config()))

    day = dates.get_day_with_offset(1, "2023-10-15")
    runner.test("Next day UID", day is not None and day.uid == "10-16-2023", str(day))
    runner.test("Next day title", day is not None and day.title == "October 16, 2023", str(day))
    runner.test("Next day instant", day is not None and day.instant == datetime(2023, 10, 16))
    runner.test("Timestamp matches instant",
                day is not None and day.timestamp == datetime(2023, 10, 16).timestamp())
    runner.test("DayInfo serializes",
                day is not None and day.as_dict()["instant"] == "2023-10-16T00:00:00")

    back = dates.get_day_with_offset(-15, "2023-10-15")
    runner.test("Offset crosses month boundary", back is not None and back.uid == "09-30-2023")

    year_end = dates.get_day_with_offset(1, "2023-12-31")
    runner.test("Offset crosses year boundary",
                year_end is not None and year_end.title == "January 1, 2024")

    today = dates.get_day_with_offset()
    runner.test("Default offset is today", today is not None and dates.is_daily_note_uid(today.uid))

    days = dates.get_date_range(-1, 1, "2023-10-15")
    runner.test("Range is inclusive",
                [d.uid for d in days] == ["10-14-2023", "10-15-2023", "10-16-2023"],
                str([d.uid for d in days]))
    runner.test("Empty range", dates.get_date_range(2, 1, "2023-10-15") == [])

    runner.test("US date scenario", dates.format_us_date("2023-10-15") == "10-15-2023")
    runner.test("Invalid month rejected", dates.parse_uid("13-01-2023") is None)
    runner.test("February overflow rejected", dates.parse_uid("02-30-2023") is None)

    mismatches = [uid for uid in ["01-01-1900", "02-29-2024", "10-15-2023", "12-31-3000"]
                  if dates.format_uid(dates.parse_uid(uid)) != uid]
    runner.test("parse then format round trip", not mismatches, str(mismatches))


def test_process_wide_defaults(runner: TestRunner):
    """Test configure_runtime/get_runtime/get_facade wiring."""
    print("\n📦 Testing process-wide runtime...")

    first = configure_runtime(quiet_config())
    runner.test("configure_runtime installs runtime", get_runtime() is first)
    runner.test("get_facade uses runtime", get_facade().runtime is first)
    runner.test("get_facade is cached", get_facade() is get_facade())

    second = configure_runtime(quiet_config())
    runner.test("get_facade follows reconfiguration", get_facade().runtime is second)
    runner.test("Default facade formats", get_facade().format_uid("2023-10-15") == "10-15-2023")


def test_config_cascade(runner: TestRunner):
    """Test config file cascade and environment override."""
    print("\n📦 Testing config cascade...")

    with tempfile.TemporaryDirectory() as tmpdir:
        global_file = Path(tmpdir) / "global.yaml"
        global_file.write_text("timezone: UTC\nlogging:\n  level: debug\n")
        Path(tmpdir, ".datefallback.yaml").write_text(
            "locale: fr-FR\nproviders:\n  disabled: [cldr]\n"
        )

        config = FallbackConfig(project_dir=tmpdir, global_file=global_file, environ={})
        runner.test("Global value applied", config.get_timezone() == "UTC")
        runner.test("Project value applied", config.get_locale() == "fr-FR")
        runner.test("Nested merge keeps defaults",
                    config.get_logging_config() == {"level": "debug", "destinations": ["file"]},
                    str(config.get_logging_config()))
        runner.test("Disabled list loaded", config.get_disabled_providers() == ["cldr"])
        runner.test("Sources tracked", len(config.sources) == 2, str(config.sources))

        Path(tmpdir, ".datefallback.local.yaml").write_text("locale: de-DE\n")
        config = FallbackConfig(project_dir=tmpdir, global_file=global_file,
                                environ={DISABLE_ENV_VAR: "tzlocal, stdlib"})
        runner.test("Local override wins", config.get_locale() == "de-DE")
        runner.test("Environment disables appended",
                    config.get_disabled_providers() == ["cldr", "tzlocal", "stdlib"],
                    str(config.get_disabled_providers()))

    with tempfile.TemporaryDirectory() as tmpdir:
        global_file = Path(tmpdir) / "global.yaml"
        global_file.write_text("timezone: UTC\n")
        Path(tmpdir, ".datefallback.yaml").write_text("inherit: false\nlocale: es-ES\n")

        config = FallbackConfig(project_dir=tmpdir, global_file=global_file, environ={})
        runner.test("inherit: false drops global layer", config.get_timezone() is None)
        runner.test("inherit: false keeps project", config.get_locale() == "es-ES")
        runner.test("inherit key not kept", "inherit" not in config.get_raw_config())

    with tempfile.TemporaryDirectory() as tmpdir:
        config = FallbackConfig(project_dir=tmpdir, global_file=Path(tmpdir) / "missing.yaml",
                                environ={})
        runner.test("No files means defaults", config.get_raw_config() == DEFAULT_CONFIG)
        runner.test("No sources", config.sources == [])


def test_config_validation(runner: TestRunner):
    """Test fail-safe config validation and file parsing."""
    print("\n📦 Testing config validation...")

    with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
        bad_level = FallbackConfig.from_dict({"logging": {"level": "loud"}})
        bad_priority = FallbackConfig.from_dict({"providers": {"priorities": {"cldr": "high"}}})
        bad_locale = FallbackConfig.from_dict({"locale": 5})
        bad_shim = FallbackConfig.from_dict({"shim": {"global_name": ""}})

    runner.test("Bad level recorded", len(bad_level.get_validation_errors()) == 1)
    runner.test("Bad level reset", bad_level.get_logging_config()["level"] == "error")
    runner.test("Bad priority reset", bad_priority.get_priorities() == {})
    runner.test("Bad locale reset", bad_locale.get_locale() == "en-US")
    runner.test("Bad shim reset", bad_shim.get_shim_global_name() == "Cldr")
    runner.test("Warnings printed", "⚠️" in err.getvalue())

    good = FallbackConfig.from_dict({"probing": {"parallel": True}, "monitoring": {"echo": True}},
                                    environ={DISABLE_ENV_VAR: "cldr"})
    runner.test("Valid config has no errors", good.get_validation_errors() == [])
    runner.test("Parallel probing flag", good.is_parallel_probing())
    runner.test("Echo flag", good.echo_events())
    runner.test("from_dict honors environment", good.get_disabled_providers() == ["cldr"])
    runner.test("Shim operations default", good.get_shim_operations() == ["load", "get"])

    raw = good.get_raw_config()
    raw["locale"] = "changed"
    runner.test("Raw config is a copy", good.get_locale() == "en-US")

    with tempfile.TemporaryDirectory() as tmpdir, \
            mock.patch('sys.stderr', new_callable=io.StringIO) as err:
        broken = Path(tmpdir) / "broken.yaml"
        broken.write_text("locale: [unclosed\n")
        runner.test("Malformed YAML yields empty", load_yaml_or_json(broken) == {})

        listing = Path(tmpdir) / "list.yaml"
        listing.write_text("- a\n- b\n")
        runner.test("Non-mapping YAML yields empty", load_yaml_or_json(listing) == {})

        as_json = Path(tmpdir) / "config.json"
        as_json.write_text('{"locale": "ja-JP"}')
        runner.test("JSON config parsed", load_yaml_or_json(as_json) == {"locale": "ja-JP"})

        runner.test("Missing file yields empty", load_yaml_or_json(Path(tmpdir) / "nope.yaml") == {})
    runner.test("Parse problems reported", "Parse error" in err.getvalue())

    runner.test("deep_merge nested",
                deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}}) == {"a": {"b": 1, "c": 3}})
    runner.test("parse_name_list", parse_name_list("a, b,,c") == ["a", "b", "c"])
    runner.test("parse_name_list empty", parse_name_list(None) == [])


def test_logger(runner: TestRunner):
    """Test the structured JSON logger."""
    print("\n📦 Testing logger...")

    handler = ListHandler()
    logger = JsonLogger("info", [handler], {"component": "datefallback"})
    logger.debug("hidden")
    logger.info("Provider selected", strategy="cldr", ignored=None)
    runner.test("Level filters debug", len(handler.records) == 1)
    record = handler.records[0]
    runner.test("Record has message", record["message"] == "Provider selected")
    runner.test("Record has level", record["level"] == "info")
    runner.test("Record timestamp is UTC", record["timestamp"].endswith("Z"))
    runner.test("Context included", record["component"] == "datefallback")
    runner.test("Fields included", record["strategy"] == "cldr")
    runner.test("None fields dropped", "ignored" not in record)

    bound = logger.bind(run="abc")
    bound.warning("bound")
    runner.test("bind adds context", handler.records[-1]["run"] == "abc")
    runner.test("bind leaves original", "run" not in logger.context)

    stream = io.StringIO()
    JsonLogger("debug", [StdoutHandler(stream)]).error("to stream", code=3)
    parsed = json.loads(stream.getvalue().strip())
    runner.test("Stream handler writes JSON lines", parsed["code"] == 3)

    JsonLogger("debug", [BrokenHandler()]).error("survives")
    runner.test("Broken handler does not raise", True)

    with tempfile.TemporaryDirectory() as tmpdir:
        log_file = Path(tmpdir) / "nested" / "date.log"
        file_logger = get_logger({"level": "warning", "destinations": "file", "file": str(log_file)})
        file_logger.warning("written", strategy="stdlib")
        file_logger.info("skipped")
        lines = log_file.read_text().splitlines()
        runner.test("File handler creates parents and appends", len(lines) == 1)
        runner.test("File record parses", json.loads(lines[0])["strategy"] == "stdlib")
        runner.test("File handler built", isinstance(file_logger.handlers[0], FileHandler))

        small = FileHandler(Path(tmpdir) / "small.log", max_bytes=10)
        small.emit({"message": "first record"})
        small.emit({"message": "second record"})
        rotated = Path(tmpdir) / "small.log.1"
        runner.test("Full file rotated", rotated.exists() and "first" in rotated.read_text())
        runner.test("Fresh file after rotation",
                    (Path(tmpdir) / "small.log").read_text().count("\n") == 1)

    stderr_logger = get_logger({"level": "warning", "destinations": ["stderr"]})
    runner.test("stderr destination", isinstance(stderr_logger.handlers[0], StderrHandler))
    runner.test("Unknown level falls back to error", JsonLogger("loud").level == 40)


def test_diagnostics(runner: TestRunner):
    """Test diagnostics snapshot, sampling and benchmark."""
    print("\n📦 Testing diagnostics...")

    runtime = FallbackRuntime(quiet_config())
    before = snapshot(runtime)
    runner.test("Snapshot does not initialize", before["active"] is None and runtime.passes == 0)
    runner.test("Snapshot state unprobed", before["state"] == "unprobed")
    runner.test("Snapshot lists providers",
                [p["name"] for p in before["providers"]] == ["cldr", "tzlocal", "stdlib", "fallback"])

    runtime.initialize()
    after = snapshot(runtime)
    runner.test("Snapshot after init names active", after["active"] == runtime.active.name)
    runner.test("Snapshot has probe results", len(after["probe_results"]) == 4)
    runner.test("Snapshot has events", len(after["events"]) > 0)
    runner.test("Snapshot is JSON serializable", bool(json.dumps(after, default=str)))

    env = detect_environment({})
    runner.test("Environment flags present",
                {"has_babel", "has_tzlocal", "has_zoneinfo", "python_version"} <= set(env))
    runner.test("No Cldr global in empty namespace", not env["has_cldr_global"])
    namespace = {}
    ensure_shim(namespace, "Cldr", ["load", "get"])
    runner.test("Shimmed Cldr detected", detect_environment(namespace)["cldr_global_shimmed"])

    registry = ProviderRegistry([ExplodingProvider(), PureFallbackProvider()])
    sampled = sample_all_strategies(registry)
    runner.test("Fallback sampled",
                sampled["fallback"] == {"success": True, "title": "October 15, 2023", "uid": "10-15-2023"},
                str(sampled["fallback"]))
    runner.test("Formatting fault reported", sampled["exploding"]["success"] is False)

    timings = benchmark(registry, iterations=5)
    runner.test("Benchmark times fallback", timings.get("fallback", -1) >= 0)
    runner.test("Benchmark skips faulty provider", "exploding" not in timings)

    unavailable = ProviderRegistry([ExplodingProvider(available=False), PureFallbackProvider()])
    runner.test("Unavailable provider sampled as unavailable",
                sample_all_strategies(unavailable)["exploding"]["error"] == "unavailable")


def test_cli(runner: TestRunner):
    """Test CLI commands."""
    print("\n📦 Testing CLI...")

    colors.set_colors_enabled(False)
    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            base = ["--project-dir", quiet_project(tmpdir)]

            code, out, _ = run_cli(base + ["format", "2023-10-15"])
            runner.test("format title", code == 0 and out.strip() == "October 15, 2023", out)

            code, out, _ = run_cli(base + ["format", "2023-10-15", "--style", "uid"])
            runner.test("format uid", code == 0 and out.strip() == "10-15-2023", out)

            code, out, _ = run_cli(base + ["format", "2023-10-15", "--style", "compact"])
            runner.test("format compact", out.strip() == "Oct 15, 23", out)

            code, _, err = run_cli(base + ["format", "not-a-date"])
            runner.test("format invalid exits 1", code == 1 and "Not a date" in err, err)

            code, out, _ = run_cli(base + ["parse", "10-15-2023"])
            runner.test("parse valid UID", code == 0 and "October 15, 2023" in out and "2023-10-15" in out, out)

            code, _, err = run_cli(base + ["parse", "02-30-2023"])
            runner.test("parse invalid UID", code == 1 and "MM-DD-YYYY" in err, err)

            code, out, _ = run_cli(base + ["offset", "1", "--base", "2023-10-15"])
            runner.test("offset", code == 0 and out.strip() == "10-16-2023  October 16, 2023", out)

            code, out, _ = run_cli(base + ["range", "-1", "1", "--base", "2023-10-15"])
            runner.test("range", code == 0 and len(out.strip().splitlines()) == 3, out)

            code, _, _ = run_cli(base + ["range", "2", "1"])
            runner.test("range reversed exits 1", code == 1)

            code, out, _ = run_cli(base + ["status"])
            runner.test("status", code == 0 and ("Active provider" in out or "Degraded" in out), out)

            code, out, _ = run_cli(base)
            runner.test("No command defaults to status", code == 0 and "Date providers" in out, out)

            code, out, _ = run_cli(base + ["doctor", "--json"])
            report = json.loads(out)
            runner.test("doctor --json parses", {"active", "strategies", "config", "environment"} <= set(report))
            runner.test("doctor exit code", code in (0, 1))

            code, out, _ = run_cli(base + ["--disable", "cldr", "--disable", "tzlocal",
                                           "--disable", "stdlib", "doctor", "--json"])
            report = json.loads(out)
            runner.test("--disable leaves only fallback", report["active"] == "fallback", str(report["active"]))
            runner.test("Degraded doctor exits 1", code == 1 and report["degraded"] is True)

            code, out, _ = run_cli(base + ["doctor"])
            runner.test("doctor text output", "Strategies" in out and "fallback" in out, out)

            code, out, _ = run_cli(base + ["benchmark", "--iterations", "3"])
            runner.test("benchmark", code == 0 and "fallback" in out, out)
    finally:
        colors.set_colors_enabled(None)


def test_colors(runner: TestRunner):
    """Test color detection and wrapping."""
    print("\n📦 Testing colors...")

    try:
        colors.set_colors_enabled(True)
        runner.test("Colors applied when enabled", colors.success("ok") == "\033[92mok\033[0m")
        runner.test("Header is bold blue", colors.header("h").startswith("\033[1m\033[34m"))
        colors.set_colors_enabled(False)
        runner.test("Plain when disabled", colors.error("bad") == "bad")
        runner.test("Outcome marks", colors.outcome(True, "a") == "✅ a" and colors.outcome(False, "b") == "❌ b")
    finally:
        colors.set_colors_enabled(None)

    runner.test("Non-TTY stream has no color", not colors.stream_supports_color(io.StringIO(), {}))
    runner.test("FORCE_COLOR enables", colors.stream_supports_color(io.StringIO(), {"FORCE_COLOR": "1"}))
    runner.test("NO_COLOR wins", not colors.stream_supports_color(
        io.StringIO(), {"NO_COLOR": "1", "FORCE_COLOR": "1"}))


def main():
    """Run all tests."""
    print("🧪 Date Fallback Facade & Tooling Test Suite")
    print("=" * 50)

    runner = TestRunner()

    test_facade_formatting(runner)
    test_facade_sentinels(runner)
    test_facade_provider_faults(runner)
    test_facade_scenarios(runner)
    test_process_wide_defaults(runner)
    test_config_cascade(runner)
    test_config_validation(runner)
    test_logger(runner)
    test_diagnostics(runner)
    test_cli(runner)
    test_colors(runner)

    return runner.summary()


if __name__ == '__main__':
    sys.exit(main())
