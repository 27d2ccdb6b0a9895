#!/usr/bin/env python3
"""apidoc - Entry point."""
import sys
import os
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import click
from colorama import Fore, Style, init

from config import AnalysisConfig, app_config
from apidoc.api.endpoint_scanner import EndpointScanner
from apidoc.api.executor import ApidocExecutor
from apidoc.cli.console import print_banner, print_header, print_member, print_operation, print_summary
from apidoc.exporter.json_exporter import JsonExporter

# Initialize colorama
init(autoreset=True)


def _analysis_config(include_prefix, snake_case) -> AnalysisConfig:
    """CLI options override the environment configuration."""
    prefixes = set(app_config.analysis.include_name_prefixes) | set(include_prefix)
    return AnalysisConfig.of(prefixes, snake_case or app_config.analysis.enable_name_case_conversion)


def _scan(targets, paths, exclude):
    for path in paths:
        sys.path.insert(0, os.path.abspath(path))

    scanner = EndpointScanner(set(app_config.exclude_classes) | set(exclude))
    endpoints = []
    for target in targets:
        try:
            endpoints.extend(scanner.scan(target))
        except ValueError as e:
            raise click.ClickException(str(e))
    return endpoints


def _common_options(function):
    """Opções compartilhadas por build e inspect."""
    options = [
        click.argument("targets", nargs=-1, required=True),
        click.option("--path", "paths", multiple=True, type=click.Path(exists=True, file_okay=False),
                     help="Directory added to the import path"),
        click.option("--include-prefix", multiple=True,
                     help="Module prefix whose parameter classes are expanded"),
        click.option("--snake-case", is_flag=True, help="Convert member names to snake_case"),
        click.option("--exclude", multiple=True, help="Controller class to skip"),
        click.option("--workers", type=int, default=None, help="Parallel analysis workers"),
    ]
    for option in reversed(options):
        function = option(function)
    return function


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """apidoc - Analyze API operations into JSON schema trees."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_common_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Output JSON file")
def build(targets, paths, include_prefix, snake_case, exclude, workers, output):
    """Analyze the controllers of TARGETS and export a JSON document."""
    print_banner()

    endpoints = _scan(targets, paths, exclude)
    if not endpoints:
        click.echo(f"{Fore.YELLOW}No operations found in {', '.join(targets)}")
        return

    click.echo(f"{Fore.CYAN}Analyzing {len(endpoints)} operations...")
    executor = ApidocExecutor(_analysis_config(include_prefix, snake_case), workers or app_config.workers)
    report = executor.execute(endpoints)

    for operation in report.operations:
        print_operation(operation)

    output_file = Path(output or app_config.output)
    JsonExporter().export(output_file, report)
    print_summary(report)
    click.echo(f"{Fore.GREEN}✅ Exported to {output_file}{Style.RESET_ALL}")


@cli.command()
@_common_options
def inspect(targets, paths, include_prefix, snake_case, exclude, workers):
    """Print the schema trees of the controllers of TARGETS."""
    print_banner()

    endpoints = _scan(targets, paths, exclude)
    executor = ApidocExecutor(_analysis_config(include_prefix, snake_case), workers or app_config.workers)
    report = executor.execute(endpoints)

    for operation in report.operations:
        print_header(f"{operation.group} - {operation.name}")
        print_operation(operation)
        click.echo(f"   {operation.header}")
        for parameter in operation.parameters:
            print_member(parameter)
        if operation.returned is not None:
            click.echo(f"{Fore.CYAN}   returns:")
            print_member(operation.returned)

    print_summary(report)


if __name__ == "__main__":
    cli()
