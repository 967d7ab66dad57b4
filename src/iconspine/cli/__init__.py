"""iconspine command-line interface."""

from iconspine.cli.app import app

__all__ = ["app"]
