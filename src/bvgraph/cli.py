"""Click CLI entry point with lazy-loaded subcommands."""

import logging

import click

# Lazy-loading command group: imports command modules only when invoked.
_COMMANDS = {
    "info":      ("bvgraph.commands.cmd_info",      "info"),
    "rank":      ("bvgraph.commands.cmd_rank",      "rank"),
    "structure": ("bvgraph.commands.cmd_structure", "structure"),
    "cycles":    ("bvgraph.commands.cmd_cycles",    "cycles"),
    "schedule":  ("bvgraph.commands.cmd_schedule",  "schedule"),
    "cover":     ("bvgraph.commands.cmd_cover",     "cover"),
    "cone":      ("bvgraph.commands.cmd_cone",      "cone"),
    "whatif":    ("bvgraph.commands.cmd_whatif",    "whatif"),
    "metrics":   ("bvgraph.commands.cmd_metrics",   "metrics"),
    "config":    ("bvgraph.commands.cmd_config",    "config"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


@click.group(cls=LazyGroup)
@click.version_option(package_name="bvgraph")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('--verbose', '-v', is_flag=True, help='Log algorithm progress to stderr')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), default=None,
              help='Path to a .bvgraph.json config file')
@click.pass_context
def cli(ctx, json_mode, verbose, config_path):
    """bvgraph: dependency-graph analytics for issue trackers."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    from bvgraph.config import load_config

    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    ctx.obj['config'] = load_config(config_path)


if __name__ == "__main__":
    cli()
