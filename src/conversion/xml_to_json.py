from pathlib import Path
from typing import Optional

import click
from loguru import logger
from rich import print_json

from conversion.modules.converter import XmlToJsonConverter
from conversion.modules.translation_registry import TranslationRegistry
from shared_modules.config import Config
from shared_modules.errors import ConversionError


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("mapping_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o", "output_file", type=click.Path(dir_okay=False, path_type=Path),
    help="Zieldatei für das JSON (Standard: stdout)",
)
@click.option(
    "--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML-Konfiguration (logging, conversion)",
)
@click.option("--indent", type=int, default=None, help="Einrückung des JSON, ohne Angabe kompakt")
@click.option("--pretty", is_flag=True, help="Farbige Ausgabe auf der Konsole (nur ohne --output)")
def main(
    input_file: Path,
    mapping_file: Path,
    output_file: Optional[Path],
    config_file: Optional[Path],
    indent: Optional[int],
    pretty: bool,
) -> None:
    """
    Konvertiert INPUT_FILE (XML) anhand von MAPPING_FILE (JSON/YAML) nach JSON.
    """
    config = Config(config_file)
    registry = TranslationRegistry.with_defaults(config.conversion)
    converter = XmlToJsonConverter(registry)

    try:
        result = converter.convert_files(input_file, mapping_file, indent=indent)
    except ConversionError as e:
        raise click.ClickException(str(e)) from e

    if output_file:
        output_file.write_text(result, encoding="utf-8")
        logger.info(f"JSON geschrieben nach {output_file}")
    elif pretty:
        print_json(result)
    else:
        click.echo(result)


if __name__ == "__main__":
    main()
