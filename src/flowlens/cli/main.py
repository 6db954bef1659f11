"""
flowlens CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import check, inspect, legend, path, render


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="flowlens")
def main(verbose: bool):
    """flowlens: Attack Path Explorer.

    Lays out a security data-flow graph and traces every upstream
    contributor of a vulnerable node.

    \b
    Quick Start:
      flowlens check analysis.json
      flowlens path analysis.json sink_innerHTML
      flowlens render analysis.json -o explorer.html
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(path.path)
main.add_command(inspect.inspect)
main.add_command(render.render)
main.add_command(check.check)
main.add_command(legend.legend)

if __name__ == "__main__":
    main()
