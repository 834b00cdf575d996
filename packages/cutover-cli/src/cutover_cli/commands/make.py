"""cutover make command - Generate the upgrade descriptor of an application."""

from __future__ import annotations

from pathlib import Path

import click

from cutover_cli.output import info, print_descriptor, success

CONFIG_ENV_VAR = "CUTOVER_CONFIG"


@click.command("make")
@click.argument("name")
@click.argument("v1")
@click.argument("v2")
@click.argument("v1_dir", type=click.Path(file_okay=False))
@click.argument("v2_dir", type=click.Path(file_okay=False))
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    envvar=CONFIG_ENV_VAR,
    help=f"Path to cutover.yaml [env: {CONFIG_ENV_VAR}]",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["appup", "json"]),
    default=None,
    help="Descriptor format [default: appup]",
)
@click.option(
    "-o",
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Application directory to write into [default: V2_DIR]",
)
@click.option(
    "-w",
    "--workers",
    "max_workers",
    type=click.IntRange(1, 64),
    default=None,
    help="Worker threads for per-unit analysis [default: 1]",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the instructions without writing the descriptor.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Minimum log level [default: INFO]",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Emit logs as JSON lines.",
)
def make(
    name: str,
    v1: str,
    v2: str,
    v1_dir: str,
    v2_dir: str,
    config_path: str | None,
    output_format: str | None,
    output_dir: str | None,
    max_workers: int | None,
    dry_run: bool,
    log_level: str,
    json_logs: bool,
) -> None:
    """Generate the upgrade descriptor from V1 to V2.

    V1_DIR is the start version's application directory
    (e.g. rel/shop/lib/shop-0.0.1); V2_DIR is the target version's
    (e.g. _build/prod/lib/shop). Both must hold an ebin/ directory whose
    NAME.app declares the given version.

    Examples:

        cutover make shop 0.0.1 0.0.2 rel/shop/lib/shop-0.0.1 _build/prod/lib/shop

        cutover make shop 0.0.1 0.0.2 old/ new/ --dry-run

        cutover make shop 0.0.1 0.0.2 old/ new/ --format json --workers 4
    """
    # Import here to avoid heavy imports at CLI startup
    from cutover_cli.errors import handle_cutover_error
    from cutover_core import CutoverConfig, CutoverError, DescriptorGenerator, write_descriptor
    from cutover_core.observability import configure_logging

    configure_logging(log_level=log_level, json_format=json_logs)

    try:
        config = CutoverConfig.from_yaml(config_path) if config_path else CutoverConfig()
        config = config.merged(output_format=output_format, max_workers=max_workers)

        generator = DescriptorGenerator(config)
        descriptor = generator.generate(name, v1, v2, Path(v1_dir), Path(v2_dir))

        if dry_run:
            print_descriptor(descriptor)
            info("Dry run: descriptor not written")
            return

        path = write_descriptor(
            descriptor,
            Path(output_dir) if output_dir else Path(v2_dir),
            name,
            config.output_format,
        )
    except CutoverError as e:
        handle_cutover_error(e)

    success(
        f"Wrote {path} ({len(descriptor.upgrade_instructions)} upgrade, "
        f"{len(descriptor.downgrade_instructions)} downgrade instructions)"
    )
