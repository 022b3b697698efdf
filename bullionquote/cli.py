import click
from flask.cli import with_appcontext

from bullionquote.errors import ValidationError
from bullionquote.services import ExpiryService, SettingsService


@click.command('expire-quotes')
@click.option('--days', type=click.IntRange(min=0), default=None,
              help='Retention window in days (defaults to QUOTE_RETENTION_DAYS).')
@with_appcontext
def expire_quotes(days):
    """Expire active quotes older than the retention window."""
    try:
        count = ExpiryService.expire_stale_quotes(retention_days=days)
    except Exception as e:
        raise click.ClickException(f'Expiry sweep failed: {e}')
    click.echo(f'Expired {count} quotes.')


@click.group('settings')
def settings_group():
    """Pricing settings."""


@settings_group.command('set-offset')
@click.argument('percent')
@with_appcontext
def set_offset(percent):
    """Set the spot normalisation offset (0-100)."""
    try:
        offset = SettingsService.update_spot_normalisation_offset(percent)
    except ValidationError as e:
        raise click.ClickException(e.message)
    click.echo(f'Spot normalisation offset set to {offset}%')


@settings_group.command('show')
@with_appcontext
def show_settings():
    for key, entry in SettingsService.all_settings().items():
        click.echo(f"{key}={entry['value']}")


def register_cli(app):
    app.cli.add_command(expire_quotes)
    app.cli.add_command(settings_group)
