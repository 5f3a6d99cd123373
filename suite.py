"""
a small decorator-driven test runner for the linqy test modules.

tests register themselves with @test("description") and stay plain callables,
so pytest can collect the same functions. running a module as a script calls
suite.main(title), which prints a report and exits non-zero on failure.
"""
import logging
import sys
import time
import traceback
from dataclasses import dataclass, field
from functools import wraps
from typing import List, Any, Callable, Optional, Type

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    """a tiny, silent class for holding color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class SuiteAssertionError(AssertionError):
    """raised by assert_that, reported as an assertion failure rather than a crash."""
    pass


@dataclass
class _Case:
    description: str
    func: Callable[[], Any]


@dataclass
class _Result:
    description: str
    passed: bool
    duration_ms: float
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


_registered: List[_Case] = []


class _WarningCollector(logging.Handler):
    """collects linqy warnings raised while a single case runs"""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


# --- public api ---

def test(description: str) -> Callable:
    """decorator to register a function as a test case. the function stays directly callable."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        _registered.append(_Case(description, wrapper))
        return wrapper

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise SuiteAssertionError(message)


def assert_raises(error_type: Type[BaseException], func: Callable[[], Any],
                  message: str = "expected an exception") -> BaseException:
    """run func and require it to raise error_type. returns the caught exception."""
    try:
        func()
    except error_type as e:
        return e
    raise SuiteAssertionError(f"{message} ({error_type.__name__} not raised)")


def _run_case(case: _Case, verbose_errors: bool) -> _Result:
    collector = _WarningCollector()
    package_logger = logging.getLogger('linqy')
    package_logger.addHandler(collector)
    start = time.perf_counter()
    error = None
    try:
        case.func()
    except SuiteAssertionError as e:
        error = f"assertion failed: {e}"
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
        if verbose_errors:
            traceback.print_exc()
    finally:
        package_logger.removeHandler(collector)
    duration = (time.perf_counter() - start) * 1000
    return _Result(case.description, error is None, duration, error, collector.messages)


def run(title: str = "test run", only: Optional[str] = None, verbose_errors: bool = False) -> bool:
    """
    run every registered case (or those whose description contains `only`),
    print a report and return whether all of them passed.
    registrations are cleared afterwards so one script can hold several runs.
    """
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    start_time = time.perf_counter()

    cases = [c for c in _registered if only is None or only in c.description]
    results = []
    for case in cases:
        result = _run_case(case, verbose_errors)
        results.append(result)

        if result.passed:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_FACE}  {result.description} "
                  f"{_c.grey}({result.duration_ms:.1f}ms){_c.reset}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_FACE}  {result.description}")
            print(f"    {_c.grey}└─> {result.error}{_c.reset}")
        for message in result.warnings:
            print(f"    {_c.warn}! {message}{_c.reset}")

    _registered.clear()
    return _print_summary(results, start_time)


def main(title: str) -> None:
    """script entry point: an optional first argument filters cases by description."""
    only = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(0 if run(title=title, only=only) else 1)


def _print_summary(results: List[_Result], start_time: float) -> bool:
    duration = (time.perf_counter() - start_time) * 1000
    total = len(results)
    failed_count = sum(1 for r in results if not r.passed)
    warned_count = sum(1 for r in results if r.warnings)

    summary_color = _c.ok if failed_count == 0 else _c.fail

    print(f"\n{summary_color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_FACE}  ran {_c.info}{total}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {total - failed_count}{_c.reset}, {_c.fail}failed: {failed_count}{_c.reset}"
          f", {_c.warn}with warnings: {warned_count}{_c.reset}")
    print(f"{summary_color}---------------{_c.reset}\n")
    return failed_count == 0
