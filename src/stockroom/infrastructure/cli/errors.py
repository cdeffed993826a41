"""Turns domain errors into click errors at the CLI edge."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import click

from stockroom.domain.exceptions import DomainException


@contextmanager
def domain_errors() -> Iterator[None]:
    """Re-raise any DomainException as ``ClickException("<code>: <msg>")``."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(f"{exc.code}: {exc}") from exc
