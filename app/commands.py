import click
from flask import Blueprint, current_app

from app import db

commands = Blueprint('command', __name__, cli_group=None)


@commands.cli.command('create-tables')
def create_tables():
    """Create any missing tables.  Schema changes beyond that are managed outside this service."""
    db.create_all()
    current_app.logger.info('Tables created')
    click.echo('Tables created')
