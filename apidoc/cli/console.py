"""Saída colorida do terminal."""
from typing import Optional

import click
from colorama import Fore, Style

from apidoc.schema.models import AnalysisReport, Member, OperationSchema


def print_banner():
    """Print application banner."""
    print(f"{Fore.CYAN}{'=' * 44}")
    print(f"{Fore.CYAN}║   {Fore.WHITE}apidoc{Fore.CYAN}                               ║")
    print(f"{Fore.CYAN}║   {Fore.WHITE}API Operation Schema Analyzer{Fore.CYAN}        ║")
    print(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    print()


def print_header(title: str):
    """Print a section header."""
    print(f"\n{Fore.CYAN}{'━' * 45}")
    print(f"{Fore.CYAN}{title}")
    print(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")


def print_operation(operation: OperationSchema):
    """Uma linha por operação."""
    icon = f"{Fore.YELLOW}⚠" if operation.deprecated else f"{Fore.GREEN}✓"
    methods = " | ".join(operation.methods)
    click.echo(f"{icon} {Fore.WHITE}{operation.url} {Fore.CYAN}{{{methods}}} {Style.RESET_ALL}{operation.name}")


def print_member(member: Member, indent: int = 1, parent: Optional[str] = None):
    """Print a member and its children as a tree."""
    name = f"{parent}.{member.name}" if parent else member.name
    kind = member.kind.value + ("[]" if member.multiple else "")
    required = f" {Fore.RED}*" if member.required else ""
    size = f" {member.size_label}" if member.size_label else ""
    click.echo(f"{'  ' * indent}{Fore.WHITE}{name}{required} {Fore.CYAN}{kind}{size}{Style.RESET_ALL}")
    for child in member.children or ():
        print_member(child, indent, name)


def print_summary(report: AnalysisReport):
    """Print the run summary."""
    print_header("Summary")
    click.echo(f"{Fore.GREEN}   Operations: {len(report.operations)}")
    if report.failures:
        click.echo(f"{Fore.RED}   Failures: {len(report.failures)}")
        for failure in report.failures:
            click.echo(f"{Fore.RED}   ✗ {failure.key}: {failure.error}")
