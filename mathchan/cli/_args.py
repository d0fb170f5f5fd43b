"""Shared argument parsing helpers for the CLIs."""

from __future__ import annotations


def parse_assignments(items: list[str], *, option: str) -> dict[str, str]:
    """Parse ``NAME=VALUE`` pairs; later assignments win."""

    out: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"{option} expects NAME=VALUE, got {item!r}")
        out[name] = value.strip()
    return out
