"""
IPOwner command line interface.
"""

import click
from rich.console import Console
from rich.markup import escape

from ipowner import __version__
from ipowner.config import get_config
from ipowner.errors import DataSourceError, InvalidAddressError
from ipowner.logging_config import setup_logging
from ipowner.resolve.core import OwnerResolver, ResolutionContext, ResolutionResult


PLACEHOLDER = "-"


def _or_placeholder(value: str | None) -> str:
    return value if value else PLACEHOLDER


def format_result(result: ResolutionResult) -> str:
    """Render a result as one tab-separated line.

    Columns: address, CC:ASN:CIDR, geo country, domain, lat,lon,
    host/alt, "country, region, city".
    """
    asn = result.asn
    geo = result.geo

    asn_field = ":".join(
        _or_placeholder(v) for v in (asn.country_code, asn.number, asn.cidr)
    )
    if geo.latitude is not None and geo.longitude is not None:
        coords = f"{geo.latitude:.4f},{geo.longitude:.4f}"
    else:
        coords = PLACEHOLDER
    names = f"{result.name.host}/{_or_placeholder(result.name.alt)}"
    location = ", ".join(
        _or_placeholder(v) for v in (geo.country_name, geo.region, geo.city)
    )

    return "\t".join([
        result.ip_address,
        asn_field,
        _or_placeholder(geo.country_code),
        result.name.domain,
        coords,
        names,
        location,
    ])


@click.command()
@click.argument("addresses", nargs=-1, required=True)
@click.version_option(__version__, prog_name="ipowner")
def main(addresses: tuple[str, ...]):
    """Show who owns IP addresses and what they are called.

    Examples:
        ipowner 8.8.8.8
        ipowner 1.1.1.1 10.1.2.3 2001:4860:4860::8888
    """
    err_console = Console(stderr=True, soft_wrap=True)

    try:
        config = get_config()
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    setup_logging(level=config.log_level, log_file=config.log_file)

    try:
        context = ResolutionContext.from_config(config)
    except DataSourceError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    resolver = OwnerResolver(context)
    rejected = 0
    try:
        for text, outcome in resolver.resolve_many(addresses):
            if isinstance(outcome, InvalidAddressError):
                rejected += 1
                err_console.print(f"[red]Error:[/red] {escape(str(outcome))}")
                continue
            click.echo(format_result(outcome))
    finally:
        context.close()

    if rejected:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
