#!/usr/bin/env python3
from __future__ import annotations

import ast
import sys
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SETTINGS_PATH = ROOT / "hotelsite" / "settings.py"
ENV_EXAMPLE_PATH = ROOT / ".env.example"

SETTINGS_ENV_HELPERS = frozenset({"_env_bool", "_env_float", "_env_str", "os.getenv"})
# Consumed by deployment tooling and tests rather than hotelsite/settings.py.
ALLOWED_ENV_EXAMPLE_EXTRAS = frozenset(
    {
        "POSTGRES_DB",
        "POSTGRES_USER",
        "POSTGRES_PASSWORD",
        "TEST_DATABASE_URL",
        "APP_HOST",
        "APP_PORT",
    }
)


@dataclass(frozen=True)
class ContractReport:
    missing: tuple[str, ...]
    unknown: tuple[str, ...]
    duplicates: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not (self.missing or self.unknown or self.duplicates)


def settings_env_names(source: str) -> set[str]:
    names: set[str] = set()
    for node in ast.walk(ast.parse(source)):
        if not isinstance(node, ast.Call) or not node.args:
            continue
        func = node.func
        if isinstance(func, ast.Name):
            call_name = func.id
        elif isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
            call_name = f"{func.value.id}.{func.attr}"
        else:
            continue
        first = node.args[0]
        if call_name in SETTINGS_ENV_HELPERS and isinstance(first, ast.Constant):
            if isinstance(first.value, str) and first.value:
                names.add(first.value)
    return names


def env_example_names(source: str) -> tuple[set[str], set[str]]:
    names: set[str] = set()
    duplicates: set[str] = set()
    for raw_line in source.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key = line.split("=", 1)[0].strip()
        if not key:
            continue
        if key in names:
            duplicates.add(key)
        names.add(key)
    return names, duplicates


def check_contract(settings_source: str, env_example_source: str) -> ContractReport:
    settings_names = settings_env_names(settings_source)
    env_names, duplicates = env_example_names(env_example_source)
    return ContractReport(
        missing=tuple(sorted(settings_names - env_names)),
        unknown=tuple(sorted(env_names - settings_names - ALLOWED_ENV_EXAMPLE_EXTRAS)),
        duplicates=tuple(sorted(duplicates)),
    )


def main() -> int:
    report = check_contract(
        SETTINGS_PATH.read_text(encoding="utf-8"),
        ENV_EXAMPLE_PATH.read_text(encoding="utf-8"),
    )
    if report.ok:
        print("Environment contract check passed.")
        return 0

    print("Environment contract check failed.")
    for title, names in (
        ("Missing from .env.example (referenced in hotelsite/settings.py):", report.missing),
        ("Unknown keys in .env.example (not in hotelsite/settings.py or allowlist):", report.unknown),
        ("Duplicate keys in .env.example:", report.duplicates),
    ):
        if names:
            print(title)
            for name in names:
                print(f"- {name}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
