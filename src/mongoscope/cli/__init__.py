"""Command line extensions for mongoscope."""

from mongoscope.cli.stats import MongoscopeCLIPlugin, mongo_group

__all__ = ["MongoscopeCLIPlugin", "mongo_group"]
