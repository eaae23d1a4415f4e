"""Show the effective analysis settings or write them to .bvgraph.json."""

from __future__ import annotations

from pathlib import Path

import click

from bvgraph.commands.resolve import analysis_config, is_json
from bvgraph.output.formatter import format_table, json_envelope, to_json


@click.command("config")
@click.option("--init", "init", is_flag=True,
              help="Write the effective settings to .bvgraph.json in the current directory")
@click.option("--force", is_flag=True, help="Overwrite an existing .bvgraph.json with --init")
@click.pass_context
def config(ctx, init, force):
    """Print the analysis settings in effect, after config file discovery.

    With --init, the same settings are saved as ``.bvgraph.json`` in the
    current directory so later runs pick them up.
    """
    from bvgraph.config import CONFIG_NAME, save_config
    from bvgraph.exit_codes import ConfigError

    settings = analysis_config(ctx)
    values = settings.to_dict()
    json_mode = is_json(ctx)

    if init:
        root = Path.cwd()
        if (root / CONFIG_NAME).exists() and not force:
            raise ConfigError(f"{root / CONFIG_NAME} already exists (use --force to overwrite)")
        config_path = save_config(root, settings)
        if json_mode:
            click.echo(
                to_json(
                    json_envelope(
                        "config",
                        summary={"verdict": "saved"},
                        config_path=str(config_path),
                        config=values,
                    )
                )
            )
            return
        click.echo("VERDICT: saved")
        click.echo(f"Config written to {config_path}")
        return

    if json_mode:
        click.echo(to_json(json_envelope("config", summary={"verdict": "current settings"}, config=values)))
        return
    click.echo("VERDICT: current settings")
    click.echo("")
    click.echo(format_table(["key", "value"], [[k, "null" if v is None else v] for k, v in sorted(values.items())]))
