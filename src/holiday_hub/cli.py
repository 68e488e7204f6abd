"""
CLI to browse holidays and subdivisions.

Holidays are printed grouped by month, substitute days flagged.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import datetime
from typing import Iterable, List, Optional

import click

from . import CountryInfo, Holiday, HolidayHub, HolidayResult
from .config import settings
from .summary import group_by_month, upcoming_holidays


MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]


def render_holidays(holidays: List[Holiday], title: str) -> str:
    """
    Render holidays grouped by month.

    Args:
        holidays: Holidays to render
        title: First line of the output

    Returns:
        String representation of the list
    """
    lines = [title]
    if not holidays:
        lines.append('  No holidays found.')
        return '\n'.join(lines)

    for month, entries in group_by_month(holidays).items():
        lines.append('')
        lines.append(MONTHS[month - 1])
        for h in entries:
            flag = ' (substitute)' if h.substitute else ''
            lines.append(f'  {h.date.isoformat()}  {h.name}  [{h.type.value}]{flag}')
    return '\n'.join(lines)


def render_entries(entries: Iterable) -> str:
    return '\n'.join(f'{e.code:<6} {e.name}' for e in entries)


def _scope(country: str, state: Optional[str], region: Optional[str]) -> CountryInfo:
    try:
        return CountryInfo(country, state, region)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None


def _report_failures(result: HolidayResult) -> None:
    for f in result.failures:
        click.echo(f'[{f.source}] {f.error}: {f.message}', err=True)


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """
    Browse public holidays, all holiday types, states and regions.

    Examples:

        # French public holidays for 2026
        holiday-hub holidays FR 2026

        # Every holiday type in Bavaria
        holiday-hub holidays DE 2026 --state BY --all

        # India (Calendarific, needs CALENDARIFIC_API_KEY)
        holiday-hub holidays IN 2026

        # States of the United States
        holiday-hub states US
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    ctx.ensure_object(dict)
    if 'hub' not in ctx.obj:
        ctx.obj['hub'] = HolidayHub.default()


@main.command()
@click.argument('country')
@click.argument('year', type=int, required=False)
@click.option('-s', '--state', help='State / subdivision code (e.g., BY, CA)')
@click.option('-r', '--region', help='Region code within the state')
@click.option('-a', '--all', 'all_types', is_flag=True, help='Include bank, school, optional holidays and observances')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--show-failures', is_flag=True, help='Print source failures to stderr')
@click.pass_obj
def holidays(obj: dict, country: str, year: Optional[int], state: Optional[str], region: Optional[str],
             all_types: bool, as_json: bool, show_failures: bool):
    """List holidays of COUNTRY for YEAR (default: current year)."""
    hub: HolidayHub = obj['hub']
    scope = _scope(country, state, region)
    year = year or datetime.now().year

    result = asyncio.run(hub.fetch(year, scope, all_types=all_types))
    if show_failures:
        _report_failures(result)

    if as_json:
        click.echo(json.dumps([h.to_dict() for h in result.holidays], indent=2, ensure_ascii=False))
        return

    names = [b.name for b in hub.geo.breadcrumbs(scope)]
    click.echo(render_holidays(list(result.holidays), f'Holidays in {", ".join(reversed(names))} - {year}'))


@main.command()
@click.argument('country')
@click.option('-s', '--state', help='State / subdivision code')
@click.option('-r', '--region', help='Region code within the state')
@click.option('-n', '--limit', type=int, default=3, show_default=True, help='Number of holidays to show')
@click.pass_obj
def upcoming(obj: dict, country: str, state: Optional[str], region: Optional[str], limit: int):
    """Show the next public holidays of COUNTRY."""
    hub: HolidayHub = obj['hub']
    scope = _scope(country, state, region)
    today = datetime.now().date()

    current = asyncio.run(hub.get_public_holidays(today.year, scope))
    found = upcoming_holidays(current, today=today, limit=limit)
    if len(found) < limit:
        following = asyncio.run(hub.get_public_holidays(today.year + 1, scope))
        found += upcoming_holidays(following, today=today, limit=limit - len(found))

    if not found:
        click.echo('No upcoming holidays found.')
        return
    for h in found:
        days = (h.date - today).days
        click.echo(f'{h.date.isoformat()}  {h.name}  (in {days} days)')


@main.command()
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_obj
def countries(obj: dict, as_json: bool):
    """List available countries, sorted by name."""
    entries = asyncio.run(obj['hub'].list_available_countries())
    if as_json:
        click.echo(json.dumps([c.to_dict() for c in entries], indent=2, ensure_ascii=False))
    else:
        click.echo(render_entries(entries))


@main.command()
@click.argument('country')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_obj
def states(obj: dict, country: str, as_json: bool):
    """List states of COUNTRY."""
    entries = asyncio.run(obj['hub'].list_states(country))
    _echo_subdivisions(entries, as_json, f'No states modeled for {country.upper()}')


@main.command()
@click.argument('country')
@click.argument('state')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_obj
def regions(obj: dict, country: str, state: str, as_json: bool):
    """List regions of STATE in COUNTRY."""
    entries = asyncio.run(obj['hub'].list_regions(country, state))
    _echo_subdivisions(entries, as_json, f'No regions modeled for {country.upper()}-{state.upper()}')


def _echo_subdivisions(entries, as_json: bool, empty_message: str) -> None:
    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
    elif not entries:
        click.echo(empty_message, err=True)
        sys.exit(1)
    else:
        click.echo(render_entries(entries))


if __name__ == '__main__':
    main()
