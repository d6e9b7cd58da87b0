"""Main CLI entry point for tenantviews.

Subcommands are imported only when invoked so ``tenantviews --help`` stays
fast.
"""

import importlib
import sys

import click

from tenantviews import __version__


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    commands_map = {
        "manifest": "tenantviews.cli.manifest_cmd",
        "registry": "tenantviews.cli.registry_cmd",
        "resolve": "tenantviews.cli.resolve_cmd",
    }

    def get_command(self, ctx, cmd_name):
        if cmd_name not in self.commands_map:
            return None
        mod = importlib.import_module(self.commands_map[cmd_name])
        # Convention: command function is named after the command
        return getattr(mod, cmd_name)

    def list_commands(self, ctx):
        return sorted(self.commands_map)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="tenantviews")
def cli():
    """Tenant views CLI - inspect and build tenant-scoped view registries.

    Use 'tenantviews COMMAND --help' for more information on a specific command.

    Examples:

    \b
      tenantviews manifest companies/ -o views.yml   Generate the view manifest
      tenantviews registry --tenant acme             Show registered views
      tenantviews resolve acme assets --kind detail  Explain a resolution
    """


def main():
    """Entry point for the tenantviews CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
